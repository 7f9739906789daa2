from fastapi.testclient import TestClient


def _result(name: str, timestamp: int, score: int = 1) -> dict[str, object]:
    return {
        "name": name,
        "rollNumber": f"R-{name}",
        "quizTitle": "Python Developer Test",
        "category": "python",
        "answers": [
            {"questionId": "python_1", "selectedOption": "a", "isCorrect": True},
            {"questionId": "python_2", "selectedOption": "b", "isCorrect": False},
        ],
        "score": score,
        "totalQuestions": 3,
        "timestamp": timestamp,
    }


def test_submit_result_is_public(client: TestClient) -> None:
    response = client.post("/api/results", json=_result("ada", 1000))
    assert response.status_code == 201
    assert response.json() == {"message": "Result saved successfully"}


def test_submit_result_requires_identity(client: TestClient) -> None:
    payload = _result("ada", 1000)
    payload["rollNumber"] = ""
    response = client.post("/api/results", json=payload)
    assert response.status_code == 422


def test_submit_result_score_must_match_answers(client: TestClient) -> None:
    payload = _result("ada", 1000, score=2)
    response = client.post("/api/results", json=payload)
    assert response.status_code == 422


def test_submit_result_rejects_more_answers_than_questions(client: TestClient) -> None:
    payload = _result("ada", 1000, score=0)
    payload["answers"] = [
        {"questionId": "python_1", "selectedOption": "b", "isCorrect": False},
        {"questionId": "python_2", "selectedOption": "b", "isCorrect": False},
    ]
    payload["totalQuestions"] = 1
    response = client.post("/api/results", json=payload)
    assert response.status_code == 422


def test_submit_result_rejects_duplicate_questions(
    client: TestClient, admin_headers: dict[str, str]
) -> None:
    payload = _result("ada", 1000, score=0)
    payload["answers"] = [
        {"questionId": "python_1", "selectedOption": "b", "isCorrect": False},
        {"questionId": "python_1", "selectedOption": "c", "isCorrect": False},
    ]
    response = client.post("/api/results", json=payload)
    assert response.status_code == 422
    assert client.get("/api/results", headers=admin_headers).json() == []


def test_list_results_newest_first_in_camel_case(
    client: TestClient, admin_headers: dict[str, str]
) -> None:
    client.post("/api/results", json=_result("old", 1000))
    client.post("/api/results", json=_result("new", 5000))

    response = client.get("/api/results", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert [item["name"] for item in data] == ["new", "old"]
    first = data[0]
    assert first["rollNumber"] == "R-new"
    assert first["totalQuestions"] == 3
    assert first["answers"][0] == {
        "questionId": "python_1",
        "selectedOption": "a",
        "isCorrect": True,
    }
    assert isinstance(first["id"], int)


def test_list_results_requires_admin(client: TestClient) -> None:
    assert client.get("/api/results").status_code == 401
    bad = client.get("/api/results", headers={"Authorization": "Bearer garbage"})
    assert bad.status_code == 401
    assert bad.json()["detail"] == "Invalid token"


def test_delete_single_result(
    client: TestClient, admin_headers: dict[str, str]
) -> None:
    client.post("/api/results", json=_result("ada", 1000))
    client.post("/api/results", json=_result("bob", 2000))
    results = client.get("/api/results", headers=admin_headers).json()

    response = client.delete(f"/api/results/{results[0]['id']}", headers=admin_headers)
    assert response.status_code == 200

    remaining = client.get("/api/results", headers=admin_headers).json()
    assert [item["name"] for item in remaining] == ["ada"]

    missing = client.delete(f"/api/results/{results[0]['id']}", headers=admin_headers)
    assert missing.status_code == 404


def test_delete_all_then_list_is_empty(
    client: TestClient, admin_headers: dict[str, str]
) -> None:
    for index in range(3):
        client.post("/api/results", json=_result(f"c{index}", 1000 + index))

    response = client.delete("/api/results", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "All results deleted successfully"}
    assert client.get("/api/results", headers=admin_headers).json() == []
