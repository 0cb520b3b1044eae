"""Survey configuration — reads settings from environment variables.

All settings have sensible defaults for local development.  Hosts that
embed the flow typically call :func:`load_settings` once at startup and
pass the result to every :class:`~survey_intake.flow.SurveyFlow`.
"""

import logging
import os
from dataclasses import dataclass

from survey_intake.constants import QUESTIONS_PER_PAGE

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class SurveySettings:
    """Immutable survey configuration read from environment at startup."""

    # Questions per page (last page may be shorter)
    page_size: int = QUESTIONS_PER_PAGE

    # YAML question file (None → QuestionBank default, data/questions.yaml
    # from the repo root)
    questions_path: str | None = None

    # Whitespace-only info values count as blank when True
    strip_info_values: bool = True

    # Logging
    log_level: str = "INFO"


def load_settings() -> SurveySettings:
    """Build settings from ``SURVEY_*`` environment variables."""
    return SurveySettings(
        page_size=int(os.getenv("SURVEY_QUESTIONS_PER_PAGE", str(QUESTIONS_PER_PAGE))),
        questions_path=os.getenv("SURVEY_QUESTIONS_PATH") or None,
        strip_info_values=os.getenv("SURVEY_STRIP_INFO_VALUES", "true").strip().lower() in _TRUE_VALUES,
        log_level=os.getenv("SURVEY_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(settings: SurveySettings | None = None) -> None:
    """Apply ``logging.basicConfig`` using the level from *settings*."""
    if settings is None:
        settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
