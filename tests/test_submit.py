"""Info step and submission tests.

Verifies that:
  - info fields can only be edited on the info step
  - submit() is gated on every required field being filled
  - the completion callback receives the full result exactly once
  - the session is closed after a successful submit
"""

import pytest

from survey_intake.errors import (
    InvalidInfoValueError,
    SessionCompletedError,
    UnknownInfoFieldError,
)
from survey_intake.flow import SurveyFlow
from survey_intake.models.enums import FlowStatus, Rejection
from survey_intake.models.info import InfoField
from survey_intake.models.step import InfoStep

from helpers.survey import VALID_INFO, advance_to_info, answer_page, fill_info, make_questions


# =====================================================================
# Info form editing
# =====================================================================


def test_info_step_projection(make_flow):
    flow = make_flow(12)
    advance_to_info(flow)

    step = flow.current_step

    assert isinstance(step, InfoStep)
    assert step.type == "info"
    assert [f.key for f in step.fields] == ["name", "age", "school", "grade"]
    assert step.values == {"name": "", "age": "", "school": "", "grade": ""}
    assert step.missing_fields == ["name", "age", "school", "grade"]
    assert not step.is_complete
    assert step.can_go_prev
    assert step.progress == 1.0


def test_update_info_field_rejected_on_question_page(make_flow):
    flow = make_flow(12)
    result = flow.update_info_field("name", "Lin")
    assert not result.accepted
    assert result.reason is Rejection.NOT_INFO_STEP
    assert flow.info_values["name"] == ""


def test_update_info_field_unknown_key(make_flow):
    flow = make_flow(0)
    with pytest.raises(UnknownInfoFieldError):
        flow.update_info_field("email", "a@b.c")
    with pytest.raises(KeyError):
        flow.update_info_field("email", "a@b.c")


def test_update_info_field_rejects_non_str(make_flow):
    flow = make_flow(0)
    with pytest.raises(InvalidInfoValueError):
        flow.update_info_field("age", 16)
    with pytest.raises(ValueError):
        flow.update_info_field("name", None)

    assert flow.info_values["age"] == ""
    assert flow.current_step.missing_fields == ["name", "age", "school", "grade"]
    assert "age" in flow.missing_info_fields


def test_update_info_field_stores_value_as_typed(make_flow):
    """No validation or trimming at keystroke time."""
    flow = make_flow(0)
    assert flow.update_info_field("name", "  Lin ").accepted
    assert flow.update_info_field("age", "abc").accepted
    assert flow.info_values["name"] == "  Lin "
    assert flow.info_values["age"] == "abc"
    assert flow.missing_info_fields == ["school", "grade"]


def test_info_values_survive_step_back(make_flow):
    flow = make_flow(5)
    advance_to_info(flow)
    flow.update_info_field("school", "Riverside")
    flow.prev()
    flow.next()
    assert flow.info_values["school"] == "Riverside"


# =====================================================================
# submit(): gating
# =====================================================================


def test_submit_rejected_on_question_page(make_flow, recorder):
    flow = make_flow(12)
    answer_page(flow)
    result = flow.submit()
    assert not result.accepted
    assert result.reason is Rejection.NOT_INFO_STEP
    assert recorder.results == []


@pytest.mark.parametrize("blank", ["name", "age", "school", "grade"])
def test_submit_rejected_when_field_blank(make_flow, recorder, blank):
    flow = make_flow(12)
    advance_to_info(flow)
    fill_info(flow, **{blank: ""})

    result = flow.submit()

    assert not result.accepted
    assert result.reason is Rejection.INFO_INCOMPLETE
    assert result.missing_fields == [blank]
    assert recorder.results == []
    assert flow.status is FlowStatus.IN_PROGRESS
    assert flow.is_info_step


def test_whitespace_only_counts_as_blank(make_flow, recorder):
    flow = make_flow(0)
    fill_info(flow, grade="   ")
    assert not flow.info_complete
    assert flow.missing_info_fields == ["grade"]
    assert not flow.submit().accepted
    assert recorder.results == []


def test_whitespace_accepted_when_stripping_disabled(make_flow, recorder):
    flow = make_flow(0, strip_info_values=False)
    fill_info(flow, grade="   ")
    assert flow.info_complete
    assert flow.submit().accepted
    assert recorder.results[0].info["grade"] == "   "


# =====================================================================
# submit(): success
# =====================================================================


def test_submit_invokes_callback_once_with_full_result(make_flow, recorder):
    flow = make_flow(52)
    flow.answer(5, True)
    flow.answer(5, False)
    advance_to_info(flow, value=True)
    # Change one answer after the fact via step-back
    flow.prev()
    flow.answer(52, False)
    flow.next()
    fill_info(flow)
    assert flow.info_complete

    result = flow.submit()

    assert result.accepted
    assert len(recorder.results) == 1
    survey = recorder.results[0]
    assert survey.question_ids == list(range(1, 53))
    assert len(survey.answers) == 52
    # advance_to_info answered page 1 again, overwriting id 5
    assert survey.answers[4] is True
    assert survey.answers[51] is False
    assert survey.answer_for(52) is False
    assert survey.info == VALID_INFO
    assert flow.status is FlowStatus.COMPLETED


def test_submit_result_answer_codes(make_flow, recorder):
    flow = make_flow(3)
    flow.answer(1, True)
    flow.answer(2, False)
    flow.answer(3, True)
    flow.next()
    fill_info(flow)
    flow.submit()
    assert recorder.results[0].answer_codes() == [1, 0, 1]


def test_two_argument_handler_via_adapter():
    received = []

    def handler(answers, info):
        received.append((answers, info))

    flow = SurveyFlow(make_questions(2), lambda r: handler(r.answers, r.info), page_size=10)
    flow.answer(1, False)
    flow.answer(2, True)
    flow.next()
    fill_info(flow)

    assert flow.submit().accepted
    assert received == [([False, True], VALID_INFO)]


def test_submit_with_no_questions(make_flow, recorder):
    flow = make_flow(0)
    fill_info(flow)
    assert flow.submit().accepted
    survey = recorder.results[0]
    assert survey.answers == []
    assert survey.answer_codes() == []
    assert survey.info == VALID_INFO


def test_result_is_a_snapshot(make_flow, recorder):
    flow = make_flow(0)
    fill_info(flow)
    flow.submit()
    recorder.results[0].info["name"] = "changed"
    assert flow.info_values["name"] == VALID_INFO["name"]


def test_answer_for_unknown_id(make_flow, recorder):
    flow = make_flow(1)
    flow.answer(1, True)
    flow.next()
    fill_info(flow)
    flow.submit()
    with pytest.raises(KeyError):
        recorder.results[0].answer_for(2)


# =====================================================================
# After completion
# =====================================================================


def test_second_submit_rejected(make_flow, recorder):
    flow = make_flow(0)
    fill_info(flow)
    assert flow.submit().accepted

    result = flow.submit()

    assert not result.accepted
    assert result.reason is Rejection.SESSION_COMPLETED
    assert len(recorder.results) == 1


def test_transitions_closed_after_submit(make_flow):
    flow = make_flow(10)
    advance_to_info(flow)
    fill_info(flow)
    flow.submit()

    assert not flow.can_go_prev
    assert not flow.can_go_next
    assert flow.prev().reason is Rejection.SESSION_COMPLETED
    assert flow.next().reason is Rejection.SESSION_COMPLETED
    assert flow.update_info_field("name", "x").reason is Rejection.SESSION_COMPLETED
    with pytest.raises(SessionCompletedError):
        flow.answer(1, False)
    assert flow.answers.get_answer(1) is True


def test_callback_error_keeps_session_open():
    calls = []

    def failing(result):
        calls.append(result)
        raise RuntimeError("sink unavailable")

    flow = SurveyFlow([], failing, page_size=10)
    fill_info(flow)

    with pytest.raises(RuntimeError, match="sink unavailable"):
        flow.submit()
    assert flow.status is FlowStatus.IN_PROGRESS
    assert len(calls) == 1


def test_retry_after_callback_error_submits_once():
    calls = []

    def flaky(result):
        calls.append(result)
        if len(calls) == 1:
            raise RuntimeError("sink unavailable")

    flow = SurveyFlow([], flaky, page_size=10)
    fill_info(flow)

    with pytest.raises(RuntimeError):
        flow.submit()
    assert flow.submit().accepted
    assert flow.status is FlowStatus.COMPLETED
    assert len(calls) == 2
    assert flow.submit().reason is Rejection.SESSION_COMPLETED


def test_reentrant_submit_from_callback_is_rejected():
    """A callback that submits again does not fire a second time."""
    calls = []
    nested = []

    def resubmitting(result):
        calls.append(result)
        nested.append(flow.submit())

    flow = SurveyFlow(make_questions(3), resubmitting, page_size=10)
    answer_page(flow)
    flow.next()
    fill_info(flow)

    result = flow.submit()

    assert result.accepted
    assert len(calls) == 1
    assert not nested[0].accepted
    assert nested[0].reason is Rejection.SESSION_COMPLETED
    assert flow.status is FlowStatus.COMPLETED


# =====================================================================
# Custom info form
# =====================================================================


def test_custom_info_fields(recorder):
    fields = [InfoField(key="nickname", label="Nickname")]
    flow = SurveyFlow(make_questions(0), recorder, page_size=10, info_fields=fields)
    assert flow.missing_info_fields == ["nickname"]
    flow.update_info_field("nickname", "li")
    assert flow.submit().accepted
    assert recorder.results[0].info == {"nickname": "li"}


def test_duplicate_info_field_keys_rejected():
    fields = [InfoField(key="name", label="Name"), InfoField(key="name", label="Again")]
    with pytest.raises(ValueError, match="Duplicate info field"):
        SurveyFlow([], lambda result: None, page_size=10, info_fields=fields)
