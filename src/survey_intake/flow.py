"""SurveyFlow — the pagination / progress / validation state machine.

One instance drives one survey session from the first question page to the
final info-form submission.  All operations are synchronous and take effect
immediately; the flow holds no locks, so a concurrent host must serialize
calls per session.

Steps:
    QuestionPage(0) ─► QuestionPage(1) ─► ... ─► QuestionPage(N-1) ─► InfoStep
                  ◄─                  ◄─       ◄─                   ◄─

  - ``next()`` is gated on the current page being fully answered.
  - ``prev()`` is never gated; it is a no-op on the first page.
  - ``submit()`` is gated on every info field being filled and hands a
    :class:`SurveyResult` to the completion callback exactly once.

A survey with no questions starts on the info step.

Internally the position is a single page index in ``[0, total_pages]``;
``total_pages`` itself denotes the info step.

Usage::

    flow = SurveyFlow(questions, on_complete=handle_result)
    flow.answer(1, True)
    ...
    result = flow.next()
    if not result.accepted:
        print(result.reason)            # Rejection.PAGE_INCOMPLETE
    ...
    flow.update_info_field("name", "Ana")
    flow.submit()
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from survey_intake.answers import AnswerStore
from survey_intake.config import SurveySettings, load_settings
from survey_intake.constants import DEFAULT_INFO_FIELDS, STEP_NAMES
from survey_intake.errors import (
    InvalidInfoValueError,
    SessionCompletedError,
    UnknownInfoFieldError,
)
from survey_intake.models.enums import FlowStatus, Rejection
from survey_intake.models.info import InfoField
from survey_intake.models.question import Question
from survey_intake.models.step import (
    InfoStep,
    QuestionPageStep,
    Step,
    SurveyResult,
    TransitionResult,
)
from survey_intake.paginator import page_slice, total_pages

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[SurveyResult], None]


class SurveyFlow:
    """Owns the current step, the answers and the info form of one survey.

    Args:
        questions: ordered question sequence (read-only to the flow)
        on_complete: called once with the :class:`SurveyResult` on a
            successful :meth:`submit`.  Hosts written against a two-argument
            ``on_complete(answers, info)`` callback can adapt with
            ``lambda r: handler(r.answers, r.info)``
        page_size: questions per page; defaults to ``settings.page_size``
        info_fields: info form definition; defaults to
            :data:`~survey_intake.constants.DEFAULT_INFO_FIELDS`
        strip_info_values: treat whitespace-only info values as blank;
            defaults to ``settings.strip_info_values``
        settings: a :class:`SurveySettings`; read from the environment
            when omitted
    """

    def __init__(
        self,
        questions: Sequence[Question],
        on_complete: CompletionCallback,
        *,
        page_size: int | None = None,
        info_fields: Iterable[InfoField] | None = None,
        strip_info_values: bool | None = None,
        settings: SurveySettings | None = None,
    ) -> None:
        if settings is None:
            settings = load_settings()

        self._questions: tuple[Question, ...] = tuple(questions)
        self._on_complete = on_complete
        self._page_size = settings.page_size if page_size is None else page_size
        self._strip = settings.strip_info_values if strip_info_values is None else strip_info_values

        # Raises ValueError for a non-positive page size
        self._total_pages = total_pages(len(self._questions), self._page_size)
        self._store = AnswerStore(self._questions)

        self._info_fields: tuple[InfoField, ...] = tuple(
            DEFAULT_INFO_FIELDS if info_fields is None else info_fields
        )
        self._info: dict[str, str] = {}
        for f in self._info_fields:
            if f.key in self._info:
                raise ValueError(f"Duplicate info field key: {f.key}")
            self._info[f.key] = ""

        # A survey without questions starts directly on the info step
        self._page_index = 0
        self._status = FlowStatus.IN_PROGRESS

        logger.debug(
            "SurveyFlow created: %d questions, page_size=%d, %d pages",
            len(self._questions), self._page_size, self._total_pages,
        )

    # ==================================================================
    # Static shape
    # ==================================================================

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def total_pages(self) -> int:
        return self._total_pages

    @property
    def info_fields(self) -> tuple[InfoField, ...]:
        return self._info_fields

    @property
    def answers(self) -> AnswerStore:
        return self._store

    # ==================================================================
    # Live state projections, recomputed on every access
    # ==================================================================

    @property
    def status(self) -> FlowStatus:
        return self._status

    @property
    def page_index(self) -> int:
        """Current position; equals :attr:`total_pages` on the info step."""
        return self._page_index

    @property
    def is_info_step(self) -> bool:
        return self._page_index == self._total_pages

    @property
    def current_page_questions(self) -> list[Question]:
        """Questions on the current page (empty on the info step)."""
        if self.is_info_step:
            return []
        return self.page_questions(self._page_index)

    @property
    def is_page_complete(self) -> bool:
        """True when the current question page is fully answered.

        Always False on the info step, where there is no page to advance
        past.
        """
        if self.is_info_step:
            return False
        return self._store.page_complete(self.current_page_questions)

    @property
    def progress(self) -> float:
        return self._store.progress()

    @property
    def can_go_prev(self) -> bool:
        if self._status is FlowStatus.COMPLETED:
            return False
        if self.is_info_step:
            return self._total_pages > 0
        return self._page_index > 0

    @property
    def can_go_next(self) -> bool:
        return self._status is FlowStatus.IN_PROGRESS and self.is_page_complete

    @property
    def info_values(self) -> dict[str, str]:
        return dict(self._info)

    @property
    def missing_info_fields(self) -> list[str]:
        """Keys of info fields that still count as blank, in form order."""
        return [key for key, value in self._info.items() if not self._is_filled(value)]

    @property
    def info_complete(self) -> bool:
        return not self.missing_info_fields

    @property
    def current_step(self) -> Step:
        if self.is_info_step:
            return self._info_step()
        return self._question_page_step()

    def page_questions(self, page_index: int) -> list[Question]:
        """Questions on a given question page.

        Raises:
            PageOutOfRangeError: if ``page_index`` is not a question page.
        """
        start, end = page_slice(page_index, len(self._questions), self._page_size)
        return list(self._questions[start:end])

    # ==================================================================
    # Answering
    # ==================================================================

    def answer(self, question_id: int, value: bool) -> None:
        """Record an answer for any question, on any page.

        Raises:
            InvalidQuestionIdError: if no question has this id.
            InvalidAnswerError: if ``value`` is not a bool.
            SessionCompletedError: if the survey was already submitted.
        """
        if self._status is FlowStatus.COMPLETED:
            raise SessionCompletedError(
                f"Cannot answer question {question_id}: survey already submitted"
            )
        self._store.set_answer(question_id, value)

    # ==================================================================
    # Navigation
    # ==================================================================

    def next(self) -> TransitionResult:
        """Advance one page, or from the last page to the info step.

        Rejected when the current page has unanswered questions, and a
        no-op on the info step.
        """
        if self._status is FlowStatus.COMPLETED:
            return self._reject(Rejection.SESSION_COMPLETED, "next")
        if self.is_info_step:
            return self._reject(Rejection.AT_INFO_STEP, "next")
        if not self._store.page_complete(self.current_page_questions):
            return self._reject(Rejection.PAGE_INCOMPLETE, "next")

        # page_index + 1 == total_pages lands on the info step
        return self._move_to(self._page_index + 1)

    def prev(self) -> TransitionResult:
        """Go back one page, or from the info step to the last question page."""
        if self._status is FlowStatus.COMPLETED:
            return self._reject(Rejection.SESSION_COMPLETED, "prev")
        if self.is_info_step and self._total_pages == 0:
            return self._reject(Rejection.NO_QUESTION_PAGES, "prev")
        if self._page_index == 0:
            return self._reject(Rejection.AT_FIRST_PAGE, "prev")
        return self._move_to(self._page_index - 1)

    def _move_to(self, page_index: int) -> TransitionResult:
        # Clamp so the index can never leave [0, total_pages]
        target = max(0, min(page_index, self._total_pages))
        logger.debug("Step %s -> %s", self._describe(self._page_index), self._describe(target))
        self._page_index = target
        return TransitionResult(accepted=True, step=self.current_step)

    # ==================================================================
    # Info form
    # ==================================================================

    def update_info_field(self, field: str, value: str) -> TransitionResult:
        """Set an info field value.  Blank values are accepted here; the
        required-field check happens on :meth:`submit`.

        Rejected outside the info step.

        Raises:
            UnknownInfoFieldError: if ``field`` is not on the form.
            InvalidInfoValueError: if ``value`` is not a str.
        """
        if field not in self._info:
            raise UnknownInfoFieldError(field)
        if not isinstance(value, str):
            raise InvalidInfoValueError(
                f"Info field {field!r} must be a string, got {value!r}"
            )
        if self._status is FlowStatus.COMPLETED:
            return self._reject(Rejection.SESSION_COMPLETED, "update_info_field")
        if not self.is_info_step:
            return self._reject(Rejection.NOT_INFO_STEP, "update_info_field")
        self._info[field] = value
        return TransitionResult(accepted=True, step=self.current_step)

    def submit(self) -> TransitionResult:
        """Finalize the survey and hand the result to the completion callback.

        Rejected outside the info step, when any required field is blank,
        or after a previous successful submit.  If the callback raises, the
        exception propagates and the session stays in progress.
        """
        if self._status is FlowStatus.COMPLETED:
            return self._reject(Rejection.SESSION_COMPLETED, "submit")
        if not self.is_info_step:
            return self._reject(Rejection.NOT_INFO_STEP, "submit")

        missing = self.missing_info_fields
        if missing:
            logger.debug("submit rejected: missing info fields %s", missing)
            return TransitionResult(
                accepted=False,
                reason=Rejection.INFO_INCOMPLETE,
                step=self.current_step,
                missing_fields=missing,
            )

        result = SurveyResult(
            question_ids=[q.id for q in self._questions],
            answers=self._store.snapshot(),
            info=dict(self._info),
        )
        # Closed before the callback runs so a re-entrant submit() is rejected
        self._status = FlowStatus.COMPLETED
        try:
            self._on_complete(result)
        except Exception:
            self._status = FlowStatus.IN_PROGRESS
            raise
        logger.info(
            "Survey submitted: %d/%d questions answered",
            self._store.answered_count, self._store.question_count,
        )
        return TransitionResult(accepted=True, step=self.current_step)

    # ==================================================================
    # Internal helpers
    # ==================================================================

    def _is_filled(self, value: str) -> bool:
        if self._strip:
            return bool(value.strip())
        return bool(value)

    def _reject(self, reason: Rejection, action: str) -> TransitionResult:
        logger.debug("%s rejected at %s: %s", action, self._describe(self._page_index), reason.value)
        return TransitionResult(accepted=False, reason=reason, step=self.current_step)

    def _describe(self, page_index: int) -> str:
        if page_index == self._total_pages:
            return STEP_NAMES["info"]
        return f"{STEP_NAMES['question_page']} {page_index + 1}/{self._total_pages}"

    def _question_page_step(self) -> QuestionPageStep:
        start, end = page_slice(self._page_index, len(self._questions), self._page_size)
        questions = list(self._questions[start:end])
        return QuestionPageStep(
            page_index=self._page_index,
            page_number=self._page_index + 1,
            total_pages=self._total_pages,
            first_question_number=start + 1,
            last_question_number=end,
            question_count=len(self._questions),
            questions=questions,
            answers=self._store.snapshot_by_id(q.id for q in questions),
            is_complete=self._store.page_complete(questions),
            can_go_prev=self.can_go_prev,
            leads_to_info=self._page_index + 1 == self._total_pages,
            progress=self.progress,
        )

    def _info_step(self) -> InfoStep:
        missing = self.missing_info_fields
        return InfoStep(
            fields=list(self._info_fields),
            values=dict(self._info),
            missing_fields=missing,
            is_complete=not missing,
            can_go_prev=self.can_go_prev,
            progress=self.progress,
        )
