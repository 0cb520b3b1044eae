"""Survey-intake constants shared across the package.

These values are referenced by the settings loader and the flow controller.
Environment overrides are applied in
:func:`survey_intake.config.load_settings`, not here.
"""

from survey_intake.models.info import InfoField

# Default number of questions shown together on one page.  The last page
# holds the remainder.  SURVEY_QUESTIONS_PER_PAGE overrides it at settings
# load time.
QUESTIONS_PER_PAGE = 10

# Identifying-information form shown after the last question page.
# Every field is required before the survey can be submitted.
DEFAULT_INFO_FIELDS: tuple[InfoField, ...] = (
    InfoField(key="name", label="Name", label_zh="姓名"),
    InfoField(key="age", label="Age", label_zh="年龄", kind="number"),
    InfoField(key="school", label="School", label_zh="学校"),
    InfoField(key="grade", label="Grade", label_zh="年级"),
)

# Human-readable step names for logging.
STEP_NAMES: dict[str, str] = {
    "question_page": "Questions",
    "info": "Personal Information",
}
