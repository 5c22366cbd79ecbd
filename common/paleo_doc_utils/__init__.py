from .errors import (
    TranscriptionError,
    ConfigurationError,
    InferenceError,
    EncodingError,
    UnsupportedFileError,
    FetchError,
    InvalidTransition,
)
from .session import Session, SessionStatus
from .viewer import ViewMode, ViewState

__version__ = "0.1.0"
