"""Result-related Pydantic models.

Wire payloads use camelCase; the table columns are snake_case.
"""
from pydantic import BaseModel, Field, model_validator


class AnswerPayload(BaseModel):
    """A recorded answer to one question."""

    questionId: str = Field(..., min_length=1)
    selectedOption: str = Field(..., min_length=1)
    isCorrect: bool


class ResultBase(BaseModel):
    """Fields shared by result payloads."""

    name: str = Field(..., min_length=1)
    rollNumber: str = Field(..., min_length=1)
    quizTitle: str = Field(..., min_length=1)
    category: str | None = None
    answers: list[AnswerPayload]
    score: int = Field(..., ge=0)
    totalQuestions: int = Field(..., ge=0)
    timestamp: int = Field(..., ge=0)


class ResultCreate(ResultBase):
    """Model for submitting a quiz result."""

    @model_validator(mode="after")
    def check_score_matches_answers(self) -> "ResultCreate":
        question_ids = [answer.questionId for answer in self.answers]
        if len(set(question_ids)) != len(question_ids):
            raise ValueError("each question may be answered only once")
        if len(self.answers) > self.totalQuestions:
            raise ValueError("more answers than questions")
        if self.score != sum(1 for answer in self.answers if answer.isCorrect):
            raise ValueError("score must equal the number of correct answers")
        return self


class ResultResponse(ResultBase):
    """Stored result as returned to admins."""

    id: int
