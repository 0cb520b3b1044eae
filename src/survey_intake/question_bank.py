"""QuestionBank — loads the ordered survey question list from YAML.

The flow itself only needs a sequence of :class:`Question` models; this
store is the usual way to get one from a data file.  It is loaded once at
startup and then shared (read-only) by every survey session.

The YAML file is either a bare list of question mappings or a mapping with
a ``questions`` key::

    questions:
      - id: 1
        text: I ask myself periodically if I am meeting my goals.
        text_zh: 我会定期问自己是否达成了目标。
      - id: 2
        text: ...

Usage::

    bank = QuestionBank()          # defaults to default_questions_path()
    bank.load()
    flow = SurveyFlow(bank.questions, on_complete=...)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from survey_intake.errors import DuplicateQuestionIdError, QuestionBankError
from survey_intake.models.question import Question

logger = logging.getLogger(__name__)


def default_questions_path() -> Path:
    """``data/questions.yaml`` in the project checkout holding this package.

    The checkout is the nearest ancestor with a pyproject.toml or .git; an
    installed copy without one falls back to the working directory.
    """
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents):
        if (candidate / "pyproject.toml").exists() or (candidate / ".git").exists():
            return candidate / "data" / "questions.yaml"
    return Path.cwd() / "data" / "questions.yaml"


def _read_yaml(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Question file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


# ---------------------------------------------------------------------------
# QuestionBank
# ---------------------------------------------------------------------------

class QuestionBank:
    """Loads a question YAML file and provides typed lookup.

    Attributes populated after :meth:`load`:

        questions — list[Question] in file order
    """

    def __init__(self, path: str | Path | None = None) -> None:
        if path is None:
            path = default_questions_path()
        self._path = Path(path)

        # Populated by load()
        self.questions: list[Question] = []
        self._by_id: dict[int, Question] = {}

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Parse the YAML file into typed :class:`Question` models.

        Raises ``FileNotFoundError`` if the file is missing and
        :class:`QuestionBankError` if its content is not a valid question
        list.  A failed load leaves any previously loaded questions intact.
        """
        raw = _read_yaml(self._path)
        if isinstance(raw, dict):
            raw = raw.get("questions")
        if raw is None:
            raw = []
        if not isinstance(raw, list):
            raise QuestionBankError(
                f"Expected a list of questions in {self._path}, got {type(raw).__name__}"
            )

        questions: list[Question] = []
        by_id: dict[int, Question] = {}
        for pos, q_dict in enumerate(raw):
            if not isinstance(q_dict, dict):
                raise QuestionBankError(
                    f"Question #{pos + 1} in {self._path} is not a mapping"
                )
            try:
                q = Question(**q_dict)
            except ValidationError as exc:
                raise QuestionBankError(
                    f"Invalid question #{pos + 1} in {self._path}: {exc}"
                ) from exc
            if q.id in by_id:
                raise DuplicateQuestionIdError(
                    f"Duplicate question id {q.id} in {self._path}"
                )
            questions.append(q)
            by_id[q.id] = q

        self.questions = questions
        self._by_id = by_id
        logger.info("QuestionBank loaded: %d questions from %s", len(questions), self._path)

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    def get(self, question_id: int) -> Question:
        """Look up a single question by id.

        Raises:
            KeyError: if no question has this id.
        """
        return self._by_id[question_id]

    def __len__(self) -> int:
        return len(self.questions)
