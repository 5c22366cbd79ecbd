"""
Lifecycle of one transcription attempt as seen by the user.

    idle -> uploading -> analyzing -> success | error -> idle

A Session is immutable; every transition returns a new one, so the UI simply
replaces the object it holds.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from .errors import InvalidTransition, TranscriptionError


class SessionStatus(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    ANALYZING = "analyzing"
    SUCCESS = "success"
    ERROR = "error"


IN_FLIGHT = (SessionStatus.UPLOADING, SessionStatus.ANALYZING)


class Session(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: SessionStatus = SessionStatus.IDLE
    result_text: Optional[str] = None
    error_message: Optional[str] = None
    source_image_ref: Optional[str] = None

    @model_validator(mode="after")
    def _check_fields(self):
        status = self.status
        if status == SessionStatus.SUCCESS:
            if not self.result_text or self.error_message is not None:
                raise ValueError("success requires result_text and no error_message")
        elif status == SessionStatus.ERROR:
            if not self.error_message or self.result_text is not None:
                raise ValueError("error requires error_message and no result_text")
        elif self.result_text is not None or self.error_message is not None:
            raise ValueError(f"{status.value} session cannot carry a result or an error")
        if status == SessionStatus.IDLE and self.source_image_ref is not None:
            raise ValueError("idle session cannot carry an image")
        return self

    @property
    def is_busy(self) -> bool:
        return self.status in IN_FLIGHT

    def _move(self, allowed, status, **fields) -> "Session":
        if self.status not in allowed:
            raise InvalidTransition(f"cannot go from {self.status.value} to {status.value}")
        return Session(status=status, **fields)

    def start_upload(self) -> "Session":
        return self._move((SessionStatus.IDLE,), SessionStatus.UPLOADING)

    def begin_analysis(self, image_ref: str) -> "Session":
        # idle -> analyzing is the collapsed path for a directly chosen file
        return self._move(
            (SessionStatus.IDLE, SessionStatus.UPLOADING),
            SessionStatus.ANALYZING,
            source_image_ref=image_ref,
        )

    def succeed(self, text: str) -> "Session":
        return self._move(
            (SessionStatus.ANALYZING,),
            SessionStatus.SUCCESS,
            result_text=text,
            source_image_ref=self.source_image_ref,
        )

    def fail(self, message: str) -> "Session":
        return self._move(
            IN_FLIGHT,
            SessionStatus.ERROR,
            error_message=message or TranscriptionError.default_message,
            source_image_ref=self.source_image_ref,
        )

    def reset(self) -> "Session":
        return self._move(
            (SessionStatus.IDLE, SessionStatus.SUCCESS, SessionStatus.ERROR),
            SessionStatus.IDLE,
        )
