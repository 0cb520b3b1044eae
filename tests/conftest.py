import pytest

from survey_intake.config import SurveySettings
from survey_intake.flow import SurveyFlow

from helpers.survey import Recorder, make_questions


@pytest.fixture
def settings():
    """Explicit settings so tests never depend on SURVEY_* env vars."""
    return SurveySettings(page_size=10, strip_info_values=True)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def make_flow(settings, recorder):
    """Factory: SurveyFlow over ``count`` generated questions."""

    def _make(count: int = 52, **kwargs):
        kwargs.setdefault("settings", settings)
        return SurveyFlow(make_questions(count), recorder, **kwargs)

    return _make
