"""
Turning image files into the base64 text the transport needs.
"""
import base64
import os

from .errors import EncodingError


def is_image_type(mime_type: str) -> bool:
    """Declared-type check only; the bytes are never sniffed."""
    return bool(mime_type) and mime_type.lower().startswith("image/")


def read_image_bytes(source) -> bytes:
    """
    Raw bytes from bytes, a filesystem path, or a file-like object.
    File-like objects are rewound after reading when they support it.
    """
    try:
        if isinstance(source, (bytes, bytearray)):
            raw = bytes(source)
        elif isinstance(source, (str, os.PathLike)):
            with open(source, "rb") as f:
                raw = f.read()
        elif hasattr(source, "read"):
            raw = source.read()
            if hasattr(source, "seek"):
                source.seek(0)
        else:
            raise EncodingError(f"Unsupported image source: {type(source).__name__}")
    except OSError as e:
        raise EncodingError(f"Error processing file: {e}") from e

    if not raw:
        raise EncodingError("Error processing file: the image is empty.")
    return raw


def encode_image(source) -> str:
    """Base64 text of the image bytes."""
    return base64.b64encode(read_image_bytes(source)).decode("ascii")


def build_data_uri(payload: str, mime_type: str) -> str:
    return f"data:{mime_type};base64,{payload}"
