"""Enumerations for survey sessions and transition outcomes."""

import enum


class FlowStatus(str, enum.Enum):
    """Lifecycle states for a survey session.

    Transitions:
        in_progress -> completed  (info form submitted, result handed off)
    """

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Rejection(str, enum.Enum):
    """Why a transition was refused.

    Rejections are expected, recoverable outcomes; the flow state is left
    unchanged whenever one is reported.
    """

    # next() on a question page that still has unanswered questions
    PAGE_INCOMPLETE = "page_incomplete"
    # next() on the info step; there is nothing beyond it
    AT_INFO_STEP = "at_info_step"
    # prev() on the first question page
    AT_FIRST_PAGE = "at_first_page"
    # prev() on the info step of a survey with no question pages
    NO_QUESTION_PAGES = "no_question_pages"
    # update_info_field() / submit() while still on a question page
    NOT_INFO_STEP = "not_info_step"
    # submit() with one or more blank required fields
    INFO_INCOMPLETE = "info_incomplete"
    # any transition after a successful submit()
    SESSION_COMPLETED = "session_completed"
