"""Question bank endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session as DbSession

from api.database import get_db
from api.dependencies.auth import require_admin
from api.models import (
    MessageResponse,
    QuestionCreate,
    QuestionResponse,
    QuestionUpdate,
)
from api.models.db.question import Question
from api.services import question_service

router = APIRouter(prefix="/api", tags=["questions"])


@router.get("/categories")
def list_categories(
    db: Annotated[DbSession, Depends(get_db)],
) -> list[str]:
    """List all quiz categories."""
    return question_service.list_categories(db)


@router.get("/questions/{category}", response_model=list[QuestionResponse])
def get_questions(
    category: str,
    db: Annotated[DbSession, Depends(get_db)],
) -> list[Question]:
    """Get all questions of a category."""
    return question_service.get_questions_by_category(db, category)


@router.post(
    "/questions",
    response_model=QuestionResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_question(
    payload: QuestionCreate,
    _admin: Annotated[dict, Depends(require_admin)],
    db: Annotated[DbSession, Depends(get_db)],
) -> Question:
    """Add a question to a category."""
    return question_service.create_question(
        db,
        payload.id,
        payload.category,
        payload.text,
        payload.options,
        payload.answer,
    )


@router.put("/questions/{question_id}", response_model=QuestionResponse)
def update_question(
    question_id: str,
    payload: QuestionUpdate,
    _admin: Annotated[dict, Depends(require_admin)],
    db: Annotated[DbSession, Depends(get_db)],
) -> Question:
    """Update an existing question."""
    return question_service.update_question(
        db, question_id, payload.model_dump(exclude_none=True)
    )


@router.delete("/questions/{question_id}", response_model=MessageResponse)
def delete_question(
    question_id: str,
    _admin: Annotated[dict, Depends(require_admin)],
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    """Delete a question."""
    if not question_service.delete_question(db, question_id):
        raise HTTPException(status_code=404, detail="Question not found")
    return MessageResponse(message="Question deleted successfully")
