from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class AnswerState(enum.IntEnum):
    """Display status of one question in the navigator."""

    UNANSWERED = 0
    CORRECT = 1
    WRONG = 2
    SKIPPED = 3


@dataclass(frozen=True)
class Question:
    id: str
    text: str
    options: Dict[str, str]  # option key -> option text, ordered by key
    answer: str  # key of the correct option
    category: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Question":
        options = payload.get("options") or {}
        return cls(
            id=str(payload["id"]),
            text=str(payload.get("text", "")),
            options={str(key): str(options[key]) for key in sorted(options)},
            answer=str(payload.get("answer", "")),
            category=payload.get("category"),
        )

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "options": dict(self.options),
            "answer": self.answer,
        }
        if self.category is not None:
            payload["category"] = self.category
        return payload


@dataclass(frozen=True)
class Answer:
    question_id: str
    selected_option: str
    is_correct: bool

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Answer":
        return cls(
            question_id=str(payload["questionId"]),
            selected_option=str(payload["selectedOption"]),
            is_correct=bool(payload["isCorrect"]),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "questionId": self.question_id,
            "selectedOption": self.selected_option,
            "isCorrect": self.is_correct,
        }


@dataclass(frozen=True)
class Result:
    name: str
    roll_number: str
    quiz_title: str
    answers: List[Answer]
    score: int
    total_questions: int
    timestamp: int  # milliseconds since epoch
    category: Optional[str] = None
    id: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Result":
        return cls(
            id=payload.get("id"),
            name=str(payload["name"]),
            roll_number=str(payload["rollNumber"]),
            quiz_title=str(payload["quizTitle"]),
            category=payload.get("category"),
            answers=[Answer.from_payload(item) for item in payload.get("answers", [])],
            score=int(payload["score"]),
            total_questions=int(payload["totalQuestions"]),
            timestamp=int(payload["timestamp"]),
        )

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "rollNumber": self.roll_number,
            "quizTitle": self.quiz_title,
            "category": self.category,
            "answers": [answer.to_payload() for answer in self.answers],
            "score": self.score,
            "totalQuestions": self.total_questions,
            "timestamp": self.timestamp,
        }
        if self.id is not None:
            payload["id"] = self.id
        return payload


@dataclass
class Candidate:
    name: str = ""
    roll_number: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.name.strip()) and bool(self.roll_number.strip())


@dataclass(frozen=True)
class ScoreSummary:
    score: int
    incorrect_count: int
    skipped_count: int
    total_questions: int
    correct: List[Answer] = field(default_factory=list)
    incorrect: List[Answer] = field(default_factory=list)
