"""Service layer for submitted quiz results."""
from sqlalchemy import delete, select
from sqlalchemy.orm import Session as DBSession

from api.models.db.result import UserResult
from api.models.results import ResultCreate


def result_to_payload(result: UserResult) -> dict[str, object]:
    """Transform a stored row (snake_case) into the client shape (camelCase)."""
    return {
        "id": result.id,
        "name": result.name,
        "rollNumber": result.roll_number,
        "quizTitle": result.quiz_title,
        "category": result.category,
        "answers": result.answers,
        "score": result.score,
        "totalQuestions": result.total_questions,
        "timestamp": result.timestamp,
    }


def save_result(db: DBSession, payload: ResultCreate) -> UserResult:
    """Insert a submitted result."""
    result = UserResult(
        name=payload.name,
        roll_number=payload.rollNumber,
        quiz_title=payload.quizTitle,
        category=payload.category,
        score=payload.score,
        total_questions=payload.totalQuestions,
        timestamp=payload.timestamp,
    )
    result.answers = [answer.model_dump() for answer in payload.answers]

    db.add(result)
    db.commit()
    db.refresh(result)
    return result


def list_results(db: DBSession) -> list[UserResult]:
    """Get all results, newest first."""
    return list(
        db.execute(
            select(UserResult).order_by(
                UserResult.timestamp.desc(), UserResult.id.desc()
            )
        ).scalars().all()
    )


def delete_result(db: DBSession, result_id: int) -> bool:
    """Delete one result. Returns False if it did not exist."""
    result = db.get(UserResult, result_id)
    if result is None:
        return False

    db.delete(result)
    db.commit()
    return True


def delete_all_results(db: DBSession) -> int:
    """Delete every result. Returns the number of deleted rows."""
    deleted = db.execute(delete(UserResult)).rowcount
    db.commit()
    return deleted or 0
