"""survey_intake — paginated true/false survey intake flow.

Public API:
    SurveyFlow        — state machine for one survey session (pages → info form)
    AnswerStore       — per-question answer state and progress metrics
    QuestionBank      — loads the ordered question list from YAML
    total_pages       — number of question pages for a question count
    page_slice        — (start, end) positions of one question page

Models:
    Question          — a single true/false survey item
    InfoField         — a required field on the identifying-information form
    QuestionPageStep  — step: one page of questions
    InfoStep          — step: the identifying-information form
    Step              — union of both step types
    TransitionResult  — outcome of next / prev / update_info_field / submit
    SurveyResult      — final answers + info handed to the completion callback
    FlowStatus        — session lifecycle (in_progress / completed)
    Rejection         — why a transition was refused

Configuration:
    SurveySettings    — immutable settings read from SURVEY_* env vars
    load_settings     — build SurveySettings from the environment
"""

from survey_intake.answers import AnswerStore
from survey_intake.config import SurveySettings, configure_logging, load_settings
from survey_intake.errors import (
    DuplicateQuestionIdError,
    InvalidAnswerError,
    InvalidInfoValueError,
    InvalidQuestionIdError,
    PageOutOfRangeError,
    QuestionBankError,
    SessionCompletedError,
    SurveyError,
    UnknownInfoFieldError,
)
from survey_intake.flow import SurveyFlow
from survey_intake.models import (
    FlowStatus,
    InfoField,
    InfoStep,
    Question,
    QuestionPageStep,
    Rejection,
    Step,
    SurveyResult,
    TransitionResult,
)
from survey_intake.paginator import iter_page_slices, page_slice, total_pages
from survey_intake.question_bank import QuestionBank

__all__ = [
    # Flow & store
    "AnswerStore",
    "QuestionBank",
    "SurveyFlow",
    # Paginator
    "iter_page_slices",
    "page_slice",
    "total_pages",
    # Models
    "FlowStatus",
    "InfoField",
    "InfoStep",
    "Question",
    "QuestionPageStep",
    "Rejection",
    "Step",
    "SurveyResult",
    "TransitionResult",
    # Configuration
    "SurveySettings",
    "configure_logging",
    "load_settings",
    # Errors
    "DuplicateQuestionIdError",
    "InvalidAnswerError",
    "InvalidInfoValueError",
    "InvalidQuestionIdError",
    "PageOutOfRangeError",
    "QuestionBankError",
    "SessionCompletedError",
    "SurveyError",
    "UnknownInfoFieldError",
]
