import logging

import requests

from . import settings
from .errors import ERROR_TYPE_HEADER, ConfigurationError, EncodingError, InferenceError
from .utils import compute_file_hash

logger = logging.getLogger(__name__)


def _endpoint(api_url, path: str) -> str:
    return (api_url or settings.API_URL).rstrip("/") + path


def _detail(resp) -> str:
    try:
        detail = resp.json().get("detail")
    except ValueError:
        detail = None
    return detail if isinstance(detail, str) and detail else resp.reason or f"HTTP {resp.status_code}"


def call_transcribe(raw_bytes: bytes, filename: str = "upload.jpg", content_type: str = None, api_url: str = None) -> str:
    """
    Send one image to the API's /transcribe endpoint and return the text.

    Errors come back as the same taxonomy the transcriber raises, with the
    API's detail message forwarded verbatim:
      503 marked by the API as a configuration failure -> ConfigurationError,
      400/415 -> EncodingError,
      anything else (including transport failures) -> InferenceError.
    """
    files = {
        "file": (filename, raw_bytes, content_type or "application/octet-stream")
    }
    logger.info(
        f"Sending file: {filename}, size: {len(raw_bytes)} bytes, "
        f"hash: {compute_file_hash(raw_bytes)}, type: {content_type}"
    )

    try:
        # no timeout: the model call is allowed to take as long as it takes
        resp = requests.post(_endpoint(api_url, "/transcribe"), files=files)
    except requests.exceptions.ConnectionError as e:
        logger.error("Cannot connect to transcription API: %s", e)
        raise InferenceError("Transcription service unavailable. Please try again later.") from e
    except requests.exceptions.RequestException as e:
        logger.error("Transcription API request failed: %s", e)
        raise InferenceError(str(e)) from e

    if resp.status_code == 503 and resp.headers.get(ERROR_TYPE_HEADER) == ConfigurationError.error_type:
        raise ConfigurationError(_detail(resp))
    if resp.status_code in (400, 415):
        raise EncodingError(_detail(resp))
    if not resp.ok:
        logger.error("Transcription API HTTP error %s", resp.status_code)
        raise InferenceError(_detail(resp))

    try:
        text = resp.json().get("text")
    except ValueError as e:
        logger.error("Transcription API returned invalid JSON: %s", e)
        raise InferenceError("Transcription service returned invalid data.") from e
    if not text:
        raise InferenceError()
    return text


def check_health(api_url: str = None, timeout: int = 5) -> dict:
    resp = requests.get(_endpoint(api_url, "/health"), timeout=timeout)
    resp.raise_for_status()
    return resp.json()
