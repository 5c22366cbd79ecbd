"""
Transcription client: sends one manuscript image to the Mistral vision model
with a fixed paleography prompt and returns the text it produces.
"""
import logging
import time

from mistralai import Mistral

from . import settings
from .errors import ConfigurationError, InferenceError
from .schemas import TranscriptionRequest

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = """
You are an expert paleographer and historian specializing in 16th and 17th-century Spanish colonial manuscripts, specifically those found in the Archivo General de Indias.

Your task is to transcribe the provided image exactly as it is written.
1. Preserve archaic spelling (e.g., "vuestra merced", "tierra", archaic abbreviations).
2. If a word is abbreviated in the manuscript (e.g., "dho" for "dicho", "V.M." for "Vuestra Merced"), expand it in brackets like this: d[ich]o, V[uestra] M[erced], or keep it as is if commonly understood.
3. Maintain line breaks where possible to match the image structure.
4. If a word is illegible, mark it as [illegible].
5. Do not add conversational filler. Output only the transcription.
6. If the image is not a document, state that you cannot transcribe it.
"""

USER_PROMPT = "Transcribe this historical Spanish manuscript text found in the Archivo de Indias."

# Low temperature: literal fidelity over creativity.
TEMPERATURE = 0.1


def _resolve_api_key(api_key=None) -> str:
    key = api_key or settings.get_api_key()
    if not key:
        raise ConfigurationError()
    return key


def _message_text(content) -> str:
    # content is either a plain string or a list of typed chunks
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    return "".join(getattr(chunk, "text", "") or "" for chunk in content)


def transcribe_request(request: TranscriptionRequest, api_key=None, model=None, client=None) -> str:
    """
    Issue one chat completion for the request and return the model text.

    Raises ConfigurationError before touching the network when no key is
    available, InferenceError when the call fails or yields no text.
    No retry is attempted.
    """
    model = model or settings.MISTRAL_MODEL
    if client is None:
        client = Mistral(api_key=_resolve_api_key(api_key))

    messages = [
        {"role": "system", "content": SYSTEM_INSTRUCTION},
        {
            "role": "user",
            "content": [
                {"type": "image_url", "image_url": request.data_uri},
                {"type": "text", "text": USER_PROMPT},
            ],
        },
    ]

    start_time = time.time()
    try:
        response = client.chat.complete(
            model=model,
            messages=messages,
            temperature=TEMPERATURE,
        )
    except Exception as e:
        logger.error("Mistral API error: %s", e)
        raise InferenceError(str(e) or None) from e

    choices = getattr(response, "choices", None) or []
    text = _message_text(choices[0].message.content) if choices else ""
    if not text.strip():
        logger.warning("Model %s returned no transcription", model)
        raise InferenceError("No transcription could be generated.")

    logger.info(
        "Transcribed %s image with %s in %.2fs (%d chars)",
        request.mime_type, model, time.time() - start_time, len(text),
    )
    return text


def transcribe(image_bytes, mime_type: str, api_key=None, model=None, client=None) -> str:
    """
    Encode the image and transcribe it. See transcribe_request.
    """
    if client is None:
        # fail on a missing key before doing any work
        _resolve_api_key(api_key)
    request = TranscriptionRequest.from_bytes(image_bytes, mime_type)
    return transcribe_request(request, api_key=api_key, model=model, client=client)


def validate_api_key(api_key: str) -> bool:
    """
    Cheap authenticated call to check a key. Returns False when Mistral
    rejects it.
    """
    try:
        Mistral(api_key=api_key).models.list()
    except Exception as e:
        logger.error("Invalid API key: %s", e)
        return False
    return True
