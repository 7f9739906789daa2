"""Service layer for the question bank."""
from typing import Any

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session as DBSession

from api.models.db.question import Question


def list_categories(db: DBSession) -> list[str]:
    """Get all distinct categories in alphabetical order."""
    return list(
        db.execute(
            select(Question.category).distinct().order_by(Question.category)
        ).scalars().all()
    )


def get_questions_by_category(db: DBSession, category: str) -> list[Question]:
    """Get all questions of a category, ordered by id."""
    return list(
        db.execute(
            select(Question)
            .where(Question.category == category)
            .order_by(Question.id)
        ).scalars().all()
    )


def get_question(db: DBSession, question_id: str) -> Question | None:
    """Get question by ID."""
    return db.get(Question, question_id)


def create_question(
    db: DBSession,
    question_id: str,
    category: str,
    text: str,
    options: dict[str, str],
    answer: str,
) -> Question:
    """Create a new question. Raises 409 if the id is taken."""
    if db.get(Question, question_id) is not None:
        raise HTTPException(status_code=409, detail="Question already exists")

    question = Question(
        id=question_id,
        category=category,
        text=text,
        answer=answer,
    )
    question.options = options

    db.add(question)
    db.commit()
    db.refresh(question)
    return question


def update_question(
    db: DBSession,
    question_id: str,
    changes: dict[str, Any],
) -> Question:
    """
    Update text, options and/or answer of a question.
    Keys missing from ``changes`` are left unchanged.
    """
    question = db.get(Question, question_id)
    if question is None:
        raise HTTPException(status_code=404, detail="Question not found")

    if changes.get("text") is not None:
        question.text = changes["text"]
    if changes.get("options") is not None:
        question.options = changes["options"]
    if changes.get("answer") is not None:
        question.answer = changes["answer"]

    if question.answer not in question.options:
        db.rollback()
        raise HTTPException(
            status_code=422, detail="answer must be one of the option keys"
        )

    db.commit()
    db.refresh(question)
    return question


def delete_question(db: DBSession, question_id: str) -> bool:
    """Delete a question. Returns False if it did not exist."""
    question = db.get(Question, question_id)
    if question is None:
        return False

    db.delete(question)
    db.commit()
    return True
