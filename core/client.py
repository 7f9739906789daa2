"""HTTP client for the Quiz Portal API.

:class:`QuizApiClient` is the question source and result sink used by
:class:`~core.session.QuizSession`, and the admin client used by the CLI.
Admin calls take an explicit :class:`AdminContext` instead of reading a
stored credential.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx

from core.errors import TransientStoreFailure, Unauthorized
from core.models import Question, Result

logger = logging.getLogger(__name__)

DEFAULT_API_URL = os.environ.get("QUIZ_API_URL", "http://localhost:8080/api")


@dataclass(frozen=True)
class AdminContext:
    """Admin bearer credential and the moment it stops being valid."""

    token: str
    expires_at: datetime

    @classmethod
    def from_login(cls, token: str, expires_in: int, now: datetime | None = None) -> "AdminContext":
        now = now or datetime.now(timezone.utc)
        return cls(token=token, expires_at=now + timedelta(seconds=expires_in))

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(timezone.utc)) >= self.expires_at

    def headers(self) -> dict[str, str]:
        """Authorization header. Raises Unauthorized once expired."""
        if self.is_expired():
            raise Unauthorized("Admin session expired. Please log in again.")
        return {"Authorization": f"Bearer {self.token}"}


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("detail") or body)
    return str(body)


class QuizApiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        client: httpx.Client | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(base_url=self.base_url)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "QuizApiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        admin: AdminContext | None = None,
        **kwargs: Any,
    ) -> Any:
        headers = admin.headers() if admin is not None else {}
        try:
            response = self._client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TransientStoreFailure(f"Could not reach the quiz server: {exc}") from exc

        if response.status_code in (401, 403):
            raise Unauthorized(_error_message(response))
        if response.is_error:
            message = _error_message(response)
            logger.warning("%s %s -> %s %s", method, path, response.status_code, message)
            raise TransientStoreFailure(message, status_code=response.status_code)
        if not response.content:
            return None
        return response.json()

    # -- public endpoints ------------------------------------------------

    def get_categories(self) -> list[str]:
        return list(self._request("GET", "/categories"))

    def dashboard_categories(self) -> list[str]:
        """Categories for the dashboard; an unreachable store gives ``[]``."""
        try:
            return self.get_categories()
        except TransientStoreFailure as exc:
            logger.error("Error fetching categories: %s", exc)
            return []

    def get_questions(self, category: str) -> list[Question]:
        data = self._request("GET", f"/questions/{category}")
        return [Question.from_payload(item) for item in data]

    def save_result(self, result: Result) -> None:
        self._request("POST", "/results", json=result.to_payload())

    # -- admin endpoints -------------------------------------------------

    def login(self, username: str, password: str) -> AdminContext:
        data = self._request(
            "POST", "/admin/login", json={"username": username, "password": password}
        )
        return AdminContext.from_login(data["token"], int(data.get("expires_in", 3600)))

    def get_results(self, admin: AdminContext) -> list[Result]:
        data = self._request("GET", "/results", admin=admin)
        return [Result.from_payload(item) for item in data]

    def delete_result(self, admin: AdminContext, result_id: int) -> None:
        self._request("DELETE", f"/results/{result_id}", admin=admin)

    def delete_all_results(self, admin: AdminContext) -> None:
        self._request("DELETE", "/results", admin=admin)

    def create_question(self, admin: AdminContext, question: Question) -> Question:
        if not question.category:
            raise ValueError("A new question needs a category")
        data = self._request("POST", "/questions", admin=admin, json=question.to_payload())
        return Question.from_payload(data)

    def update_question(
        self,
        admin: AdminContext,
        question_id: str,
        text: str | None = None,
        options: dict[str, str] | None = None,
        answer: str | None = None,
    ) -> Question:
        changes = {"text": text, "options": options, "answer": answer}
        body = {key: value for key, value in changes.items() if value is not None}
        data = self._request("PUT", f"/questions/{question_id}", admin=admin, json=body)
        return Question.from_payload(data)

    def delete_question(self, admin: AdminContext, question_id: str) -> None:
        self._request("DELETE", f"/questions/{question_id}", admin=admin)
