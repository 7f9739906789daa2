import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from core.client import AdminContext, QuizApiClient
from core.errors import TransientStoreFailure, Unauthorized
from core.models import Answer, Question, Result
from core.session import QuizSession


def _client(handler) -> QuizApiClient:
    transport = httpx.MockTransport(handler)
    base_url = "http://quiz.test/api"
    return QuizApiClient(base_url, client=httpx.Client(base_url=base_url, transport=transport))


def _admin() -> AdminContext:
    return AdminContext("tok", datetime.now(timezone.utc) + timedelta(minutes=5))


def test_get_questions_builds_models() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/questions/python"
        return httpx.Response(
            200,
            json=[{"id": "q1", "category": "python", "text": "?", "options": {"b": "y", "a": "x"}, "answer": "a"}],
        )

    questions = _client(handler).get_questions("python")
    assert questions == [Question("q1", "?", {"a": "x", "b": "y"}, "a", "python")]
    assert list(questions[0].options) == ["a", "b"]


def test_save_result_posts_camel_case() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"message": "Result saved successfully"})

    result = Result("Ada", "42", "Python Developer Test", [Answer("q1", "a", True)], 1, 3, 99, "python")
    _client(handler).save_result(result)
    assert seen["path"] == "/api/results"
    assert seen["body"]["rollNumber"] == "42"
    assert seen["body"]["totalQuestions"] == 3
    assert seen["body"]["answers"] == [{"questionId": "q1", "selectedOption": "a", "isCorrect": True}]


def test_server_error_is_transient() -> None:
    client = _client(lambda request: httpx.Response(500, json={"message": "Error saving result"}))
    result = Result("Ada", "42", "T", [], 0, 1, 1)
    with pytest.raises(TransientStoreFailure) as info:
        client.save_result(result)
    assert info.value.status_code == 500
    assert "Error saving result" in str(info.value)


def test_network_error_is_transient() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(TransientStoreFailure):
        _client(handler).get_categories()


def test_dashboard_categories_swallow_store_failure() -> None:
    client = _client(lambda request: httpx.Response(503))
    assert client.dashboard_categories() == []


def test_admin_calls_send_bearer_token() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == "Bearer tok"
        return httpx.Response(
            200,
            json=[{
                "id": 7, "name": "Ada", "rollNumber": "42", "quizTitle": "T",
                "category": None, "answers": [], "score": 0, "totalQuestions": 2,
                "timestamp": 5,
            }],
        )

    results = _client(handler).get_results(_admin())
    assert results[0].id == 7
    assert results[0].roll_number == "42"


def test_rejected_credential_is_unauthorized() -> None:
    client = _client(lambda request: httpx.Response(403, json={"message": "Not authorized"}))
    with pytest.raises(Unauthorized):
        client.delete_all_results(_admin())


def test_expired_context_never_sends() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    expired = AdminContext("tok", datetime.now(timezone.utc) - timedelta(seconds=1))
    with pytest.raises(Unauthorized):
        _client(handler).delete_result(expired, 1)
    assert calls == []


def test_login_builds_context() -> None:
    client = _client(lambda request: httpx.Response(200, json={"token": "abc", "expires_in": 3600}))
    admin = client.login("admin", "pw")
    assert admin.token == "abc"
    assert not admin.is_expired()
    assert admin.is_expired(datetime.now(timezone.utc) + timedelta(hours=2))


def test_session_over_http_submits_once() -> None:
    posted = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(
                200,
                json=[{"id": "q1", "text": "?", "options": {"a": "x", "b": "y"}, "answer": "b"}],
            )
        posted.append(json.loads(request.content))
        return httpx.Response(201, json={"message": "ok"})

    client = _client(handler)
    session = QuizSession.load("python", client)
    session.select_current("b")
    session.set_candidate("Ada", "42")
    result = session.submit(client)
    assert result.score == 1
    assert len(posted) == 1
    assert posted[0]["category"] == "python"


def test_update_question_sends_only_given_fields() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={"id": "q1", "category": "python", "text": "New?", "options": {"a": "x", "b": "y"}, "answer": "a"},
        )

    question = _client(handler).update_question(_admin(), "q1", text="New?")
    assert seen["method"] == "PUT"
    assert seen["path"] == "/api/questions/q1"
    assert seen["body"] == {"text": "New?"}
    assert question.text == "New?"
