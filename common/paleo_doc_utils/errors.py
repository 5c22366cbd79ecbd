# set by the API on responses whose failure is a missing credential
ERROR_TYPE_HEADER = "X-Error-Type"


class TranscriptionError(Exception):
    """Base class for everything that ends a transcription attempt."""

    default_message = "An unexpected error occurred."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigurationError(TranscriptionError):
    """No model credential available. Not retryable."""

    error_type = "configuration"
    default_message = "API Key is missing. Please ensure MISTRAL_API_KEY is set."


class InferenceError(TranscriptionError):
    """The remote model call failed or returned no text."""

    default_message = "No transcription could be generated."


class EncodingError(TranscriptionError):
    """The local image could not be read."""

    default_message = "Error processing file."


class UnsupportedFileError(EncodingError):
    default_message = "Please upload an image file (JPG, PNG, WEBP)."


class FetchError(TranscriptionError):
    """A remote image (demo asset or URL) could not be loaded."""

    default_message = "Failed to load demo image. Please upload your own."


class InvalidTransition(ValueError):
    pass
