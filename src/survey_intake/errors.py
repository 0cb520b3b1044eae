"""Exception taxonomy for the survey-intake flow.

Every exception derives from :class:`SurveyError` and from the builtin that
matches its meaning (``KeyError`` for unknown keys, ``ValueError`` for bad
values, ``IndexError`` for out-of-range pages), so hosts that already map
builtin exceptions keep working.

Guard violations (advancing past an incomplete page, submitting an
incomplete info form) are *not* exceptions.  They are reported as a
rejected :class:`~survey_intake.models.step.TransitionResult` instead.
"""


class SurveyError(Exception):
    """Base class for all survey-intake errors."""


class InvalidQuestionIdError(SurveyError, KeyError):
    """An answer operation referenced a question id that does not exist."""

    def __init__(self, question_id) -> None:
        self.question_id = question_id
        super().__init__(f"Question id {question_id!r} not found")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.args[0]


class PageOutOfRangeError(SurveyError, IndexError):
    """A page index outside ``[0, total_pages - 1]`` was requested."""

    def __init__(self, page_index: int, total_pages: int) -> None:
        self.page_index = page_index
        self.total_pages = total_pages
        super().__init__(
            f"Page index {page_index} out of range: expected 0-{total_pages - 1}"
            if total_pages > 0
            else f"Page index {page_index} out of range: there are no question pages"
        )


class InvalidAnswerError(SurveyError, ValueError):
    """An answer value was not a bool."""


class DuplicateQuestionIdError(SurveyError, ValueError):
    """Two questions in the supplied sequence share the same id."""


class UnknownInfoFieldError(SurveyError, KeyError):
    """An info form update named a field that is not part of the form."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Info field {field!r} not found")

    def __str__(self) -> str:
        return self.args[0]


class InvalidInfoValueError(SurveyError, ValueError):
    """An info form value was not a string."""


class SessionCompletedError(SurveyError, ValueError):
    """The survey was already submitted; answers can no longer change."""


class QuestionBankError(SurveyError, ValueError):
    """The question file could not be parsed into questions."""
