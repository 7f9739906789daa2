from fastapi.testclient import TestClient
from sqlalchemy.orm import Session as DbSession

from api.services import question_service


def _seed(db: DbSession) -> None:
    question_service.create_question(
        db, "python_2", "python", "What is len([])?", {"b": "1", "a": "0"}, "a"
    )
    question_service.create_question(
        db, "python_1", "python", "Keyword for functions?", {"a": "def", "b": "fun"}, "a"
    )
    question_service.create_question(
        db, "java_1", "java", "Entry point?", {"a": "main", "b": "start"}, "a"
    )


def test_categories_are_sorted_and_unique(client: TestClient, db: DbSession) -> None:
    _seed(db)
    response = client.get("/api/categories")
    assert response.status_code == 200
    assert response.json() == ["java", "python"]


def test_questions_by_category_ordered_by_id(client: TestClient, db: DbSession) -> None:
    _seed(db)
    response = client.get("/api/questions/python")
    assert response.status_code == 200
    data = response.json()
    assert [q["id"] for q in data] == ["python_1", "python_2"]
    assert list(data[1]["options"]) == ["a", "b"]
    assert data[1]["answer"] == "a"


def test_unknown_category_returns_empty_list(client: TestClient, db: DbSession) -> None:
    response = client.get("/api/questions/cobol")
    assert response.status_code == 200
    assert response.json() == []


def test_create_question_requires_token(client: TestClient) -> None:
    payload = {
        "id": "frontend_1",
        "category": "frontend",
        "text": "HTML stands for?",
        "options": {"a": "HyperText Markup Language", "b": "Home Tool"},
        "answer": "a",
    }
    response = client.post("/api/questions", json=payload)
    assert response.status_code == 401
    assert response.json()["detail"] == "No token provided"


def test_create_update_delete_question(
    client: TestClient, admin_headers: dict[str, str]
) -> None:
    payload = {
        "id": "frontend_1",
        "category": "frontend",
        "text": "HTML stands for?",
        "options": {"a": "HyperText Markup Language", "b": "Home Tool"},
        "answer": "a",
    }
    created = client.post("/api/questions", json=payload, headers=admin_headers)
    assert created.status_code == 201
    assert created.json()["category"] == "frontend"

    duplicate = client.post("/api/questions", json=payload, headers=admin_headers)
    assert duplicate.status_code == 409

    updated = client.put(
        "/api/questions/frontend_1",
        json={"text": "What does HTML stand for?"},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["text"] == "What does HTML stand for?"
    assert updated.json()["answer"] == "a"

    deleted = client.delete("/api/questions/frontend_1", headers=admin_headers)
    assert deleted.status_code == 200
    assert client.get("/api/questions/frontend").json() == []


def test_answer_must_be_an_option(
    client: TestClient, admin_headers: dict[str, str]
) -> None:
    payload = {
        "id": "frontend_1",
        "category": "frontend",
        "text": "CSS?",
        "options": {"a": "Style", "b": "Script"},
        "answer": "c",
    }
    response = client.post("/api/questions", json=payload, headers=admin_headers)
    assert response.status_code == 422


def test_update_rejects_answer_outside_options(
    client: TestClient, db: DbSession, admin_headers: dict[str, str]
) -> None:
    _seed(db)
    response = client.put(
        "/api/questions/java_1", json={"answer": "d"}, headers=admin_headers
    )
    assert response.status_code == 422
    assert client.get("/api/questions/java").json()[0]["answer"] == "a"


def test_update_missing_question(
    client: TestClient, admin_headers: dict[str, str]
) -> None:
    response = client.put(
        "/api/questions/nope", json={"text": "x"}, headers=admin_headers
    )
    assert response.status_code == 404
