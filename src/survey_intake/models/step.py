"""Step and result models — the contract between the flow and its callers.

These models are read-only projections of a :class:`SurveyFlow`'s state.
They are rebuilt on every access so a renderer never sees stale values.

Step types:
  - QuestionPageStep: present one page of questions
  - InfoStep: present the identifying-information form

The ``Step`` union covers both cases so callers can dispatch on ``type``.
Transitions return a :class:`TransitionResult`; a successful submit hands a
:class:`SurveyResult` to the completion callback.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from survey_intake.models.enums import Rejection
from survey_intake.models.info import InfoField
from survey_intake.models.question import Question


class QuestionPageStep(BaseModel):
    """Flow step: one page of questions."""

    type: Literal["question_page"] = "question_page"
    # 0-based index and its 1-based display number ("page 2 / 6")
    page_index: int
    page_number: int
    total_pages: int
    # 1-based question positions covered by this page ("questions 11-20 of 52")
    first_question_number: int
    last_question_number: int
    question_count: int
    questions: list[Question]
    # answers for this page keyed by question id (None = unanswered)
    answers: dict[int, Optional[bool]]
    is_complete: bool
    can_go_prev: bool
    # True on the last page, where "next" opens the info form
    leads_to_info: bool
    progress: float = Field(ge=0.0, le=1.0)


class InfoStep(BaseModel):
    """Flow step: the terminal identifying-information form."""

    type: Literal["info"] = "info"
    fields: list[InfoField]
    values: dict[str, str]
    missing_fields: list[str]
    is_complete: bool
    can_go_prev: bool
    progress: float = Field(ge=0.0, le=1.0)


# Callers can match on step.type to dispatch rendering logic.
Step = QuestionPageStep | InfoStep


class TransitionResult(BaseModel):
    """Outcome of a navigation or submission attempt.

    ``accepted`` is False when a guard refused the transition; ``reason``
    then says why and the flow state is unchanged.  ``step`` is always the
    step the flow is on after the attempt.
    """

    accepted: bool
    reason: Optional[Rejection] = None
    step: Step
    # Blank required fields, set when reason is INFO_INCOMPLETE
    missing_fields: list[str] = []


class SurveyResult(BaseModel):
    """Final survey result handed to the completion callback.

    ``answers`` is ordered like the question sequence; ``question_ids``
    gives the id for each position.
    """

    question_ids: list[int]
    answers: list[Optional[bool]]
    info: dict[str, str]

    def answer_codes(self) -> list[Optional[int]]:
        """Answers encoded as 1 (true), 0 (false) or None (unanswered)."""
        return [None if a is None else int(a) for a in self.answers]

    def answer_for(self, question_id: int) -> Optional[bool]:
        """Look up the recorded answer for a single question id.

        Raises:
            KeyError: if the id is not part of this result.
        """
        try:
            return self.answers[self.question_ids.index(question_id)]
        except ValueError:
            raise KeyError(question_id) from None
