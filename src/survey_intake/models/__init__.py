"""Public model re-exports for survey_intake.

Consumers should import from ``survey_intake.models`` rather than reaching
into sub-modules directly.
"""

# --- Enums ---
from survey_intake.models.enums import FlowStatus, Rejection

# --- Questions / info form ---
from survey_intake.models.info import InfoField
from survey_intake.models.question import Question

# --- Steps / results ---
from survey_intake.models.step import (
    InfoStep,
    QuestionPageStep,
    Step,
    SurveyResult,
    TransitionResult,
)

__all__ = [
    # Enums
    "FlowStatus",
    "Rejection",
    # Questions / info form
    "InfoField",
    "Question",
    # Steps / results
    "InfoStep",
    "QuestionPageStep",
    "Step",
    "SurveyResult",
    "TransitionResult",
]
