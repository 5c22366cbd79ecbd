"""
Tests for the Session state machine.
"""

import pytest
from pydantic import ValidationError

from paleo_doc_utils.errors import InvalidTransition
from paleo_doc_utils.session import Session, SessionStatus

IMAGE_REF = "data:image/png;base64,AAAA"


def analyzing():
    return Session().start_upload().begin_analysis(IMAGE_REF)


class TestInvariants:

    def test_new_session_is_idle_and_empty(self):
        session = Session()
        assert session.status == SessionStatus.IDLE
        assert session.source_image_ref is None
        assert session.result_text is None
        assert session.error_message is None
        assert session.is_busy is False

    def test_result_and_error_never_together(self):
        with pytest.raises(ValidationError):
            Session(status=SessionStatus.SUCCESS, result_text="T", error_message="boom")
        with pytest.raises(ValidationError):
            Session(status=SessionStatus.ERROR, result_text="T", error_message="boom")

    def test_idle_cannot_carry_image(self):
        with pytest.raises(ValidationError):
            Session(source_image_ref=IMAGE_REF)

    def test_in_flight_states_carry_no_result(self):
        with pytest.raises(ValidationError):
            Session(status=SessionStatus.ANALYZING, result_text="T")
        with pytest.raises(ValidationError):
            Session(status=SessionStatus.UPLOADING, error_message="boom")

    def test_success_requires_text(self):
        with pytest.raises(ValidationError):
            Session(status=SessionStatus.SUCCESS)

    def test_session_is_immutable(self):
        session = Session()
        with pytest.raises(ValidationError):
            session.status = SessionStatus.UPLOADING


class TestTransitions:

    def test_happy_path(self):
        session = Session().start_upload()
        assert session.status == SessionStatus.UPLOADING
        assert session.is_busy

        session = session.begin_analysis(IMAGE_REF)
        assert session.status == SessionStatus.ANALYZING
        assert session.source_image_ref == IMAGE_REF

        session = session.succeed("T")
        assert session.status == SessionStatus.SUCCESS
        assert session.result_text == "T"
        assert session.error_message is None
        assert session.source_image_ref == IMAGE_REF

    def test_direct_file_skips_uploading(self):
        session = Session().begin_analysis(IMAGE_REF)
        assert session.status == SessionStatus.ANALYZING

    def test_transitions_return_new_objects(self):
        idle = Session()
        uploading = idle.start_upload()
        assert idle.status == SessionStatus.IDLE
        assert uploading is not idle

    def test_fail_from_analyzing(self):
        session = analyzing().fail("quota exceeded")
        assert session.status == SessionStatus.ERROR
        assert session.error_message == "quota exceeded"
        assert session.result_text is None

    def test_fail_from_uploading(self):
        session = Session().start_upload().fail("no demo")
        assert session.status == SessionStatus.ERROR

    def test_fail_with_empty_message_uses_generic_text(self):
        session = analyzing().fail("")
        assert session.error_message == "An unexpected error occurred."

    @pytest.mark.parametrize("finish", [
        lambda s: s.succeed("T"),
        lambda s: s.fail("boom"),
    ])
    def test_reset_clears_everything(self, finish):
        session = finish(analyzing()).reset()
        assert session == Session()

    def test_terminal_states_only_go_back_to_idle(self):
        done = analyzing().succeed("T")
        with pytest.raises(InvalidTransition):
            done.start_upload()
        with pytest.raises(InvalidTransition):
            done.fail("late")
        with pytest.raises(InvalidTransition):
            done.begin_analysis(IMAGE_REF)

        failed = analyzing().fail("boom")
        with pytest.raises(InvalidTransition):
            failed.succeed("T")

    def test_cannot_start_second_attempt_while_busy(self):
        with pytest.raises(InvalidTransition):
            Session().start_upload().start_upload()
        with pytest.raises(InvalidTransition):
            analyzing().reset()

    def test_succeed_requires_analyzing(self):
        with pytest.raises(InvalidTransition):
            Session().start_upload().succeed("T")
