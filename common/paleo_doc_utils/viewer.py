"""
Presentation state of the result viewer and the text export.
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

MIN_ZOOM = 1.0
MAX_ZOOM = 4.0
ZOOM_STEP = 0.5

EXPORT_FILENAME = "transcription.txt"
EXPORT_MIME = "text/plain"


class ViewMode(str, Enum):
    SPLIT = "SPLIT"
    IMAGE_ONLY = "IMAGE_ONLY"
    TEXT_ONLY = "TEXT_ONLY"


class ViewState(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: ViewMode = ViewMode.SPLIT
    zoom: float = MIN_ZOOM

    @field_validator("zoom")
    @classmethod
    def _clamp_zoom(cls, value: float) -> float:
        return min(max(value, MIN_ZOOM), MAX_ZOOM)

    @property
    def shows_image(self) -> bool:
        return self.mode != ViewMode.TEXT_ONLY

    @property
    def shows_text(self) -> bool:
        return self.mode != ViewMode.IMAGE_ONLY

    @property
    def zoom_label(self) -> str:
        return f"{round(self.zoom * 100)}%"

    def with_mode(self, mode) -> "ViewState":
        return ViewState(mode=ViewMode(mode), zoom=self.zoom)

    def zoom_in(self) -> "ViewState":
        return ViewState(mode=self.mode, zoom=self.zoom + ZOOM_STEP)

    def zoom_out(self) -> "ViewState":
        return ViewState(mode=self.mode, zoom=self.zoom - ZOOM_STEP)

    def image_width(self, base_width: int) -> int:
        return int(base_width * self.zoom)


def export_bytes(text: str) -> bytes:
    """The transcription as a UTF-8 plain-text file body."""
    return text.encode("utf-8")
