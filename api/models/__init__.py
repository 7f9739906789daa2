"""Pydantic models."""
from api.models.auth import AdminLogin, MessageResponse, TokenResponse
from api.models.questions import (
    QuestionCreate,
    QuestionResponse,
    QuestionUpdate,
)
from api.models.results import AnswerPayload, ResultCreate, ResultResponse

__all__ = [
    "AdminLogin",
    "AnswerPayload",
    "MessageResponse",
    "QuestionCreate",
    "QuestionResponse",
    "QuestionUpdate",
    "ResultCreate",
    "ResultResponse",
    "TokenResponse",
]
