"""
Fetching a remote manuscript image, used for the demo button and for
URL submissions to the API.
"""
import io
import logging

import requests
from PIL import Image

from . import settings
from .encoding import is_image_type
from .errors import FetchError

logger = logging.getLogger(__name__)

DEMO_FAILURE_MESSAGE = "Failed to load demo image. Please upload your own."

# Wikimedia rejects requests without a descriptive user agent
HEADERS = {"User-Agent": "paleo-doc/0.1 (manuscript transcription demo)"}


def fetch_image(url: str, timeout: int = 30):
    """
    Download an image and return (bytes, mime_type).

    Raises FetchError on network failure, non-2xx status, a non-image
    content type, or bytes Pillow cannot decode.
    """
    try:
        logger.info(f"Fetching image from URL: {url}")
        response = requests.get(url, headers=HEADERS, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        logger.error(f"Failed to fetch URL {url}: {str(e)}")
        raise FetchError(f"Could not load image from URL: {e}") from e

    raw = response.content
    mime_type = response.headers.get("Content-Type", "").split(";")[0].strip()
    if not raw:
        raise FetchError("Could not load image from URL: empty response")
    if not is_image_type(mime_type):
        raise FetchError(f"URL did not return an image (Content-Type: {mime_type or 'unknown'})")

    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.verify()
    except Exception as e:
        # Pillow signals bad or oversized images with several unrelated types
        # (UnidentifiedImageError, DecompressionBombError, SyntaxError...)
        logger.error(f"Cannot decode image from {url}: {e}")
        raise FetchError(f"Could not decode image from URL: {e}") from e

    return raw, mime_type


def fetch_demo_image(url: str = None, timeout: int = 30):
    """
    The fixed demo manuscript. Every failure is reported with the same
    user-facing message.
    """
    try:
        return fetch_image(url or settings.DEMO_IMAGE_URL, timeout=timeout)
    except FetchError as e:
        logger.error("Demo load failed: %s", e.message)
        raise FetchError(DEMO_FAILURE_MESSAGE) from e
