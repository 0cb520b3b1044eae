"""Question model for the survey question sequence.

Questions are supplied by the caller (or loaded by
:class:`~survey_intake.question_bank.QuestionBank`) and are read-only to the
flow.  Only ``id`` carries meaning for pagination and answering; the text
fields are opaque content passed through to the presentation layer.  Any
extra keys found in the source data are preserved on the model.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Question(BaseModel):
    """A single true/false survey item.

    ``id`` is a positive integer, unique within one survey.  ``text`` is
    the primary wording and ``text_zh`` an optional Chinese translation.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int = Field(gt=0)
    text: str = ""
    text_zh: Optional[str] = None
