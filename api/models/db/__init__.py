"""Database models."""
from api.models.db.admin import AdminUser
from api.models.db.question import Question
from api.models.db.result import UserResult

__all__ = [
    "AdminUser",
    "Question",
    "UserResult",
]
