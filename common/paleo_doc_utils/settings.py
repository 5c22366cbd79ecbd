"""
Runtime configuration, read from the environment (and a local .env file).
"""
from dotenv import load_dotenv

from .utils import get_env

load_dotenv()

MISTRAL_MODEL = get_env("MISTRAL_MODEL", "pixtral-large-latest")
API_URL = get_env("API_URL", "http://api:8000")
DEMO_IMAGE_URL = get_env(
    "DEMO_IMAGE_URL",
    "https://upload.wikimedia.org/wikipedia/commons/thumb/6/64/"
    "Carta_de_Juan_de_la_Cosa.jpg/800px-Carta_de_Juan_de_la_Cosa.jpg",
)
LOG_LEVEL = get_env("LOG_LEVEL", "INFO")


def get_api_key():
    """
    The model credential. Read on every call so a missing key is reported
    per attempt rather than at import time.
    """
    return get_env("MISTRAL_API_KEY")
