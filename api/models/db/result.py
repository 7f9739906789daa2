"""Submitted quiz result database model."""
from __future__ import annotations

import json
from typing import Any

import sqlalchemy as sa
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from api.database import Base


class UserResult(Base):
    """
    One submitted quiz attempt.
    Written once by the candidate, afterwards only read or deleted by an admin.
    """

    __tablename__ = "user_results"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # Candidate identity
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    roll_number: Mapped[str] = mapped_column(String(100), nullable=False)

    # Quiz reference
    quiz_title: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)

    # Answered questions only (stored as JSON string)
    answers_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")

    score: Mapped[int] = mapped_column(default=0, nullable=False)
    total_questions: Mapped[int] = mapped_column(default=0, nullable=False)

    # Milliseconds since epoch, assigned by the client at submission
    timestamp: Mapped[int] = mapped_column(sa.BigInteger, index=True, nullable=False)

    @property
    def answers(self) -> list[dict[str, Any]]:
        """Parse answers from JSON."""
        if not self.answers_json:
            return []
        try:
            raw = json.loads(self.answers_json)
        except (json.JSONDecodeError, TypeError):
            return []
        return raw if isinstance(raw, list) else []

    @answers.setter
    def answers(self, value: list[dict[str, Any]] | None) -> None:
        """Serialize answers to JSON."""
        self.answers_json = json.dumps(value or [], ensure_ascii=False)

    def __repr__(self) -> str:
        return f"<UserResult(id={self.id}, name='{self.name}', score={self.score})>"
