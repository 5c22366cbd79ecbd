"""
Drive one attempt through the session states.

`transcribe` is any callable (image_bytes, mime_type) -> text; the front-end
passes the API client, tests pass fakes. `fetch` returns (bytes, mime_type).

Each step takes the session in one state and returns the next one, so a UI
can render `uploading` and `analyzing` between steps.
"""
import logging

from .demo import DEMO_FAILURE_MESSAGE
from .encoding import encode_image, is_image_type, build_data_uri
from .errors import EncodingError, FetchError, InferenceError, TranscriptionError, UnsupportedFileError
from .session import Session, SessionStatus

logger = logging.getLogger(__name__)


def check_image_type(mime_type: str):
    if not is_image_type(mime_type):
        raise UnsupportedFileError()


def fetch_demo(session: Session, fetch):
    """
    uploading -> uploading with the demo bytes, or error.
    Returns (session, image_bytes, mime_type); the bytes are None on failure.
    """
    try:
        image_bytes, mime_type = fetch()
    except FetchError as e:
        logger.error("Demo load failed: %s", e.message)
        return session.fail(DEMO_FAILURE_MESSAGE), None, None
    except Exception:
        logger.exception("Unexpected error while loading the demo image")
        return session.fail(DEMO_FAILURE_MESSAGE), None, None
    return session, image_bytes, mime_type


def prepare_upload(session: Session, image_bytes, mime_type: str) -> Session:
    """uploading -> analyzing, or error when the image cannot be read."""
    try:
        payload = encode_image(image_bytes)
    except EncodingError as e:
        logger.error("Error processing file: %s", e.message)
        return session.fail(e.message)
    return session.begin_analysis(build_data_uri(payload, mime_type))


def analyze(session: Session, image_bytes, mime_type: str, transcribe) -> Session:
    """analyzing -> success or error."""
    try:
        text = transcribe(image_bytes, mime_type)
    except TranscriptionError as e:
        logger.error("Transcription failed: %s", e.message)
        return session.fail(e.message)
    except Exception as e:
        logger.exception("Unexpected error during transcription")
        return session.fail(str(e))

    if not text:
        return session.fail(InferenceError.default_message)
    return session.succeed(text)


def complete_upload(session: Session, image_bytes, mime_type: str, transcribe) -> Session:
    """Finish an attempt from the uploading state."""
    session = prepare_upload(session, image_bytes, mime_type)
    if session.status != SessionStatus.ANALYZING:
        return session
    return analyze(session, image_bytes, mime_type, transcribe)


def run_transcription(session: Session, image_bytes, mime_type: str, transcribe) -> Session:
    """
    Start and finish an attempt for a chosen file.

    A non-image file raises UnsupportedFileError and the idle session is
    left as it was.
    """
    check_image_type(mime_type)
    return complete_upload(session.start_upload(), image_bytes, mime_type, transcribe)


def complete_demo(session: Session, fetch, transcribe) -> Session:
    """Fetch the demo asset and finish the attempt from the uploading state."""
    session, image_bytes, mime_type = fetch_demo(session, fetch)
    if session.status == SessionStatus.ERROR:
        return session
    return complete_upload(session, image_bytes, mime_type, transcribe)


def run_demo(session: Session, fetch, transcribe) -> Session:
    return complete_demo(session.start_upload(), fetch, transcribe)
