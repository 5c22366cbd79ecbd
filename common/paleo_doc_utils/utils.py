import os
import logging
import datetime
import hashlib


def setup_logging(level=logging.INFO):
    """
    Configure basic logging and return the root logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        level=level,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger()


def get_env(key: str, default=None):
    """
    Read an environment variable, falling back to default when unset or blank.
    """
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip()


def get_timestamp() -> str:
    """UTC time, ISO 8601 to the second."""
    return datetime.datetime.now(datetime.timezone.utc).isoformat(timespec="seconds")


def compute_file_hash(file_bytes: bytes) -> str:
    """Short content fingerprint for correlating fe and api log lines."""
    return hashlib.md5(file_bytes, usedforsecurity=False).hexdigest()[:12]
