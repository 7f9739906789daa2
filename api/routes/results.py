"""Result submission and admin review endpoints."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session as DbSession

from api.database import get_db
from api.dependencies.auth import require_admin
from api.models import MessageResponse, ResultCreate, ResultResponse
from api.services import result_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/results", tags=["results"])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def submit_result(
    payload: ResultCreate,
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    """Store a candidate's submitted result."""
    result = result_service.save_result(db, payload)
    logger.info(
        "Saved result %s for %s (%s/%s)",
        result.id,
        payload.rollNumber,
        payload.score,
        payload.totalQuestions,
    )
    return MessageResponse(message="Result saved successfully")


@router.get("", response_model=list[ResultResponse])
def list_results(
    _admin: Annotated[dict, Depends(require_admin)],
    db: Annotated[DbSession, Depends(get_db)],
) -> list[dict[str, object]]:
    """List all results, newest first."""
    return [
        result_service.result_to_payload(result)
        for result in result_service.list_results(db)
    ]


@router.delete("/{result_id}", response_model=MessageResponse)
def delete_result(
    result_id: int,
    _admin: Annotated[dict, Depends(require_admin)],
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    """Delete a single result."""
    if not result_service.delete_result(db, result_id):
        raise HTTPException(status_code=404, detail="Result not found")
    return MessageResponse(message="Result deleted successfully")


@router.delete("", response_model=MessageResponse)
def delete_all_results(
    _admin: Annotated[dict, Depends(require_admin)],
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    """Delete every result."""
    deleted = result_service.delete_all_results(db)
    logger.info("Deleted %s results", deleted)
    return MessageResponse(message="All results deleted successfully")
