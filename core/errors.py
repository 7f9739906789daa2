"""Errors raised by the quiz core.

Every failure is scoped to a single operation; none of them is fatal to the
session or the process.
"""
from __future__ import annotations


class QuizError(Exception):
    """Base class for quiz errors."""


class QuizNotFound(QuizError):
    """The requested quiz/category has no questions."""

    def __init__(self, category: str):
        super().__init__(f"Quiz not found: {category!r}")
        self.category = category


class ValidationFailure(QuizError):
    """Input rejected before anything was sent (e.g. missing candidate name)."""


class Unauthorized(QuizError):
    """Admin credential missing, expired or rejected. Log in again."""


class TransientStoreFailure(QuizError):
    """Network or store error. The operation may be retried by the user."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SessionStateError(QuizError):
    """Operation not allowed in the session's current state."""
