"""Score computation and per-question classification.

All functions here are pure: the same inputs always give the same output and
nothing is stored. The result timestamp is assigned by the caller.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from core.models import Answer, AnswerState, Candidate, Question, Result, ScoreSummary


def score_answers(answers: Iterable[Answer], total_questions: int) -> ScoreSummary:
    """Reduce the recorded answers of an attempt to a score.

    ``answers`` holds only the questions that were actually answered, so the
    skipped count is the difference to ``total_questions``.
    """
    answers = list(answers)
    correct = [answer for answer in answers if answer.is_correct]
    incorrect = [answer for answer in answers if not answer.is_correct]
    skipped = total_questions - len(answers)
    if skipped < 0:
        raise ValueError(
            f"{len(answers)} answers recorded for {total_questions} questions"
        )
    return ScoreSummary(
        score=len(correct),
        incorrect_count=len(incorrect),
        skipped_count=skipped,
        total_questions=total_questions,
        correct=correct,
        incorrect=incorrect,
    )


def build_result(
    candidate: Candidate,
    quiz_title: str,
    answers: Sequence[Answer],
    total_questions: int,
    timestamp: int,
    category: str | None = None,
) -> Result:
    """Assemble the Result body for a submission."""
    summary = score_answers(answers, total_questions)
    return Result(
        name=candidate.name.strip(),
        roll_number=candidate.roll_number.strip(),
        quiz_title=quiz_title,
        category=category,
        answers=list(answers),
        score=summary.score,
        total_questions=summary.total_questions,
        timestamp=timestamp,
    )


def classify(answer: Answer | None, index: int, cursor: int) -> AnswerState:
    """Status of the question at ``index`` given its answer and the cursor."""
    if answer is None:
        if cursor > index:
            return AnswerState.SKIPPED
        return AnswerState.UNANSWERED
    return AnswerState.CORRECT if answer.is_correct else AnswerState.WRONG


@dataclass(frozen=True)
class ResultReview:
    """Question numbers (1-based) grouped for the results page."""

    correct: list[int | None]
    incorrect: list[int | None]
    skipped: list[int]


def review(result: Result, questions: Sequence[Question]) -> ResultReview:
    """Map a stored result back onto the quiz's questions.

    Numbers are ``None`` for answers whose question is no longer in the bank.
    """
    positions = {question.id: number for number, question in enumerate(questions, start=1)}
    summary = score_answers(result.answers, result.total_questions)
    answered = {answer.question_id for answer in result.answers}
    return ResultReview(
        correct=[positions.get(answer.question_id) for answer in summary.correct],
        incorrect=[positions.get(answer.question_id) for answer in summary.incorrect],
        skipped=[
            positions[question.id]
            for question in questions
            if question.id not in answered
        ],
    )
