"""In-progress quiz attempt.

A :class:`QuizSession` holds one candidate's attempt: the fetched questions,
the cursor and the answer record. It is never persisted; submitting it
produces a :class:`~core.models.Result` and discards the session.
"""
from __future__ import annotations

import enum
import logging
import time
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from core import scoring
from core.errors import QuizNotFound, SessionStateError, ValidationFailure
from core.links import quiz_title
from core.models import Answer, AnswerState, Candidate, Question, Result

logger = logging.getLogger(__name__)


class QuestionSource(Protocol):
    def get_questions(self, category: str) -> List[Question]: ...


class ResultSink(Protocol):
    def save_result(self, result: Result) -> None: ...


class SessionState(str, enum.Enum):
    """Lifecycle of a quiz attempt.

    ``LOADING`` covers the question fetch; a session object only exists once
    that fetch returned at least one question.
    """

    LOADING = "loading"
    READY = "ready"
    SUBMITTING = "submitting"
    COMPLETED = "completed"
    FAILED = "failed"


# States in which the candidate can still work on the quiz
_INTERACTIVE = (SessionState.READY, SessionState.FAILED)


def _now_ms() -> int:
    return int(time.time() * 1000)


class QuizSession:
    def __init__(
        self,
        category: str,
        questions: Sequence[Question],
        title: Optional[str] = None,
    ):
        if not questions:
            raise QuizNotFound(category)
        self.category = category
        self.title = title or quiz_title(category)
        self.candidate = Candidate()
        self._questions: Tuple[Question, ...] = tuple(questions)
        self._index: Dict[str, int] = {q.id: i for i, q in enumerate(self._questions)}
        self._answers: Dict[str, Optional[Answer]] = {q.id: None for q in self._questions}
        self._cursor = 0
        self._confirm_pending = False
        self._result: Optional[Result] = None
        self._state = SessionState.READY

    @classmethod
    def load(
        cls,
        category: str,
        source: QuestionSource,
        title: Optional[str] = None,
    ) -> "QuizSession":
        """Fetch the questions of ``category`` and start a fresh attempt.

        Raises:
            QuizNotFound: the category is empty or has no questions. No
                session is created in that case.
        """
        category = (category or "").strip()
        if not category:
            raise QuizNotFound(category)
        logger.debug("Loading quiz %r", category)
        questions = source.get_questions(category)
        if not questions:
            logger.info("Quiz %r has no questions", category)
            raise QuizNotFound(category)
        return cls(category, questions, title)

    # -- read-only views -------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def questions(self) -> Tuple[Question, ...]:
        return self._questions

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current_question(self) -> Question:
        return self._questions[self._cursor]

    @property
    def is_last(self) -> bool:
        return self._cursor == len(self._questions) - 1

    @property
    def confirm_pending(self) -> bool:
        return self._confirm_pending

    @property
    def result(self) -> Optional[Result]:
        return self._result

    def answer_for(self, question_id: str) -> Optional[Answer]:
        self._require_question(question_id)
        return self._answers[question_id]

    def recorded_answers(self) -> List[Answer]:
        """Answers in question order, leaving out unanswered questions."""
        return [
            self._answers[q.id]
            for q in self._questions
            if self._answers[q.id] is not None
        ]

    # -- answering and navigation ----------------------------------------

    def select_option(self, question_id: str, option_key: str) -> Answer:
        """Record the candidate's choice for a question.

        The first selection is final: later calls for the same question
        return the existing answer unchanged.
        """
        self._require_interactive()
        question = self._questions[self._require_question(question_id)]
        existing = self._answers[question_id]
        if existing is not None:
            return existing
        if option_key not in question.options:
            raise ValidationFailure(
                f"Unknown option {option_key!r} for question {question_id!r}"
            )
        answer = Answer(
            question_id=question_id,
            selected_option=option_key,
            is_correct=option_key == question.answer,
        )
        self._answers[question_id] = answer
        return answer

    def select_current(self, option_key: str) -> Answer:
        return self.select_option(self.current_question.id, option_key)

    def advance(self) -> int:
        self._require_interactive()
        self._cursor = min(self._cursor + 1, len(self._questions) - 1)
        return self._cursor

    def retreat(self) -> int:
        self._require_interactive()
        self._cursor = max(self._cursor - 1, 0)
        return self._cursor

    def jump_to(self, index: int) -> int:
        """Move the cursor straight to ``index`` (clamped)."""
        self._require_interactive()
        self._cursor = max(0, min(index, len(self._questions) - 1))
        return self._cursor

    def classify(self, question_id: str) -> AnswerState:
        index = self._require_question(question_id)
        return scoring.classify(self._answers[question_id], index, self._cursor)

    def classify_all(self) -> List[Tuple[Question, AnswerState]]:
        return [(q, self.classify(q.id)) for q in self._questions]

    # -- submission ------------------------------------------------------

    def set_candidate(self, name: str, roll_number: str) -> None:
        self._require_interactive()
        self.candidate = Candidate(name=name, roll_number=roll_number)

    def request_submit(self) -> None:
        """First submission phase: check the candidate and ask to confirm."""
        self._require_interactive()
        if not self.candidate.is_complete:
            raise ValidationFailure(
                "Please fill in your name and roll number before submitting."
            )
        self._confirm_pending = True

    def cancel_submit(self) -> None:
        self._confirm_pending = False

    def confirm_submit(self, sink: ResultSink, now: Optional[int] = None) -> Result:
        """Second submission phase: score the attempt and store the result.

        On a store failure the session moves to ``FAILED`` and the error is
        raised; calling :meth:`submit` again retries.
        """
        self._require_interactive()
        if not self._confirm_pending:
            raise SessionStateError("Submission has not been confirmed")
        if not self.candidate.is_complete:
            raise ValidationFailure(
                "Please fill in your name and roll number before submitting."
            )

        self._state = SessionState.SUBMITTING
        self._confirm_pending = False
        result = scoring.build_result(
            self.candidate,
            self.title,
            self.recorded_answers(),
            len(self._questions),
            timestamp=_now_ms() if now is None else now,
            category=self.category,
        )
        try:
            sink.save_result(result)
        except Exception:
            self._state = SessionState.FAILED
            logger.warning("Submitting quiz %r failed", self.category)
            raise

        self._state = SessionState.COMPLETED
        self._result = result
        self._discard()
        logger.info(
            "Quiz %r submitted: %s/%s", self.category, result.score, result.total_questions
        )
        return result

    def submit(self, sink: ResultSink, now: Optional[int] = None) -> Result:
        """Run both submission phases at once."""
        self.request_submit()
        return self.confirm_submit(sink, now=now)

    # -- internals -------------------------------------------------------

    def _discard(self) -> None:
        self._answers = {}
        self._index = {}
        self._questions = ()
        self._cursor = 0

    def _require_interactive(self) -> None:
        if self._state not in _INTERACTIVE:
            raise SessionStateError(f"Not allowed while {self._state.value}")

    def _require_question(self, question_id: str) -> int:
        try:
            return self._index[question_id]
        except KeyError:
            raise KeyError(f"Unknown question {question_id!r}") from None
