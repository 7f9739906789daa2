"""Question database model."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

import sqlalchemy as sa
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from api.database import Base


class Question(Base):
    """
    A single multiple-choice question.
    Questions are grouped into quizzes by their category.
    """

    __tablename__ = "questions"

    # Primary key - chosen by the admin client, e.g. "python_1712345678"
    id: Mapped[str] = mapped_column(String(64), primary_key=True, index=True)
    category: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)

    # Option key -> option text (stored as JSON string)
    options_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")

    # Key of the correct option
    answer: Mapped[str] = mapped_column(String(16), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    @property
    def options(self) -> dict[str, str]:
        """Parse options from JSON, ordered by key."""
        if not self.options_json:
            return {}
        try:
            raw = json.loads(self.options_json)
        except (json.JSONDecodeError, TypeError):
            return {}
        if not isinstance(raw, dict):
            return {}
        return {str(key): str(raw[key]) for key in sorted(raw)}

    @options.setter
    def options(self, value: dict[str, Any]) -> None:
        """Serialize options to JSON."""
        self.options_json = json.dumps(
            {str(key): value[key] for key in sorted(value or {})}, ensure_ascii=False
        )

    def __repr__(self) -> str:
        return f"<Question(id='{self.id}', category='{self.category}')>"
