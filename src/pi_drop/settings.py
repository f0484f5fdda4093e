import logging
import os
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_COMMENTARY_TIMEOUT_S = 10.0


def _positive_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("%s=%r is not a number; using %s.", name, raw, default)
        return default
    if not value > 0:
        logger.warning("%s=%r must be > 0; using %s.", name, raw, default)
        return default
    return value


GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-3-flash-preview")
GEMINI_ENDPOINT = os.getenv(
    "GEMINI_ENDPOINT", "https://generativelanguage.googleapis.com/v1beta"
)

COMMENTARY_TIMEOUT_S = _positive_float("COMMENTARY_TIMEOUT_S", DEFAULT_COMMENTARY_TIMEOUT_S)
