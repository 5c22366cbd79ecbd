from typing import Dict, Any
from pydantic import BaseModel, ConfigDict, Field

from .encoding import encode_image, build_data_uri


class TranscriptionRequest(BaseModel):
    """
    One image, ready for the model: base64 payload plus its MIME type.
    Built once per attempt and never mutated.
    """
    model_config = ConfigDict(frozen=True)

    base64_image: str = Field(min_length=1)
    mime_type: str = Field(min_length=1)

    @classmethod
    def from_bytes(cls, image_bytes, mime_type: str) -> "TranscriptionRequest":
        return cls(base64_image=encode_image(image_bytes), mime_type=mime_type)

    @property
    def data_uri(self) -> str:
        return build_data_uri(self.base64_image, self.mime_type)


class TranscriptionResponse(BaseModel):
    """
    What the API returns for one transcribed image.
    """
    text: str  # model output, verbatim
    raw_json: Dict[str, Any]  # request metadata: filename, size, hash, model, timing...


class ApiKeyValidation(BaseModel):
    status: str
    message: str
