"""Question-related Pydantic models."""
from pydantic import BaseModel, Field, model_validator


class QuestionBase(BaseModel):
    """Fields shared by question payloads."""

    text: str = Field(..., min_length=1)
    options: dict[str, str] = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_answer_is_option(self) -> "QuestionBase":
        if self.answer not in self.options:
            raise ValueError("answer must be one of the option keys")
        return self


class QuestionCreate(QuestionBase):
    """Model for creating a new question."""

    id: str = Field(..., min_length=1, max_length=64)
    category: str = Field(..., min_length=1, max_length=100)


class QuestionUpdate(BaseModel):
    """Model for updating a question. Omitted fields are left unchanged."""

    text: str | None = Field(None, min_length=1)
    options: dict[str, str] | None = Field(None, min_length=1)
    answer: str | None = Field(None, min_length=1)


class QuestionResponse(BaseModel):
    """Question as returned to clients."""

    id: str
    category: str
    text: str
    options: dict[str, str]
    answer: str

    class Config:
        from_attributes = True
