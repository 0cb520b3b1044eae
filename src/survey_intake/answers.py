"""AnswerStore — per-question true/false answer state.

Answers are kept in a dict keyed by question id rather than by list
position, so ids do not need to be dense or 1-based.  Dict insertion order
follows the question sequence, which keeps :meth:`AnswerStore.snapshot`
ordered like the questions.

Each slot holds ``None`` (unanswered), ``True`` or ``False``.  Slots are
created once and never added or removed; answers can be overwritten but not
cleared.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from survey_intake.errors import (
    DuplicateQuestionIdError,
    InvalidAnswerError,
    InvalidQuestionIdError,
)
from survey_intake.models.question import Question

logger = logging.getLogger(__name__)


class AnswerStore:
    """Holds one answer slot per question and derives completion metrics.

    Args:
        questions: the ordered question sequence; ids must be unique
    """

    def __init__(self, questions: Sequence[Question]) -> None:
        self._answers: dict[int, Optional[bool]] = {}
        for q in questions:
            if q.id in self._answers:
                raise DuplicateQuestionIdError(f"Duplicate question id: {q.id}")
            self._answers[q.id] = None

    # ------------------------------------------------------------------
    # Point updates / lookups
    # ------------------------------------------------------------------

    def set_answer(self, question_id: int, value: bool) -> None:
        """Record (or overwrite) the answer for a question.

        Raises:
            InvalidQuestionIdError: if no question has this id.
            InvalidAnswerError: if ``value`` is not a bool.
        """
        if question_id not in self._answers:
            raise InvalidQuestionIdError(question_id)
        if not isinstance(value, bool):
            raise InvalidAnswerError(
                f"Answer for question {question_id} must be True or False, got {value!r}"
            )
        previous = self._answers[question_id]
        self._answers[question_id] = value
        logger.debug("Answer q%s: %s -> %s", question_id, previous, value)

    def get_answer(self, question_id: int) -> Optional[bool]:
        """Return the stored answer, or None if the question is unanswered."""
        try:
            return self._answers[question_id]
        except KeyError:
            raise InvalidQuestionIdError(question_id) from None

    def is_answered(self, question_id: int) -> bool:
        return self.get_answer(question_id) is not None

    # ------------------------------------------------------------------
    # Derived metrics
    # ------------------------------------------------------------------

    def page_complete(self, questions_on_page: Iterable[Question]) -> bool:
        """True iff every question in the slice is answered.

        An empty slice is vacuously complete.
        """
        return all(self.is_answered(q.id) for q in questions_on_page)

    @property
    def question_count(self) -> int:
        return len(self._answers)

    @property
    def answered_count(self) -> int:
        return sum(1 for v in self._answers.values() if v is not None)

    def progress(self) -> float:
        """Fraction of all questions answered, in ``[0, 1]``.

        A store with no questions reports 0.0.
        """
        if not self._answers:
            return 0.0
        return self.answered_count / self.question_count

    def snapshot(self) -> list[Optional[bool]]:
        """Copy of all answers, ordered like the question sequence."""
        return list(self._answers.values())

    def snapshot_by_id(self, question_ids: Iterable[int] | None = None) -> dict[int, Optional[bool]]:
        """Copy of answers keyed by id, optionally limited to ``question_ids``."""
        if question_ids is None:
            return dict(self._answers)
        return {qid: self.get_answer(qid) for qid in question_ids}
