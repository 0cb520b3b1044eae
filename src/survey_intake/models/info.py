"""Info form field definitions.

The info step collects identifying details after the last question page.
Each field is a required free-text input; ``kind`` tells the presentation
layer which input widget to render and carries no validation meaning.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


class InfoField(BaseModel):
    """A required field on the info form (e.g. name, age)."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    label_zh: Optional[str] = None
    kind: Literal["text", "number"] = "text"
