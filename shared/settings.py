import logging
import os
from dotenv import load_dotenv

from shared import __version__

logger = logging.getLogger(__name__)

load_dotenv()

def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("ignoring %s=%r, not a number; using %s", name, raw, default)
        return default

class Settings:
    DATABASE = os.getenv("FEEDBAG_DB", "feedbag.db")
    LOG_LEVEL = os.getenv("FEEDBAG_LOG_LEVEL", "WARNING").upper()
    REQUEST_TIMEOUT = _float_env("FEEDBAG_TIMEOUT", 30.0)
    USER_AGENT = os.getenv("FEEDBAG_USER_AGENT", f"feedbag/{__version__}")

settings = Settings()
