"""Runtime configuration read from the environment (and an optional .env file)."""
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parents[2]

ENV_PATH = BASE_DIR / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH)

API_KEY_ENV = "GEMINI_API_KEY"
BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TIMEOUT = 60
DEFAULT_TEMPERATURE = 0.3

# Languages the oracle is asked to pick from when detecting the input language
SUPPORTED_LANGUAGES = ("English", "Hindi", "Tamil")

TREND_WINDOW_SIZE = 5

REPORT_FILENAME = "stress-analysis-report.pdf"


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def get_api_key() -> str:
    return (os.getenv(API_KEY_ENV) or "").strip()


def get_model() -> str:
    return os.getenv("GEMINI_MODEL", DEFAULT_MODEL).strip() or DEFAULT_MODEL


def get_timeout() -> int:
    return _int_env("GEMINI_TIMEOUT", DEFAULT_TIMEOUT)


def get_temperature() -> float:
    return _float_env("GEMINI_TEMPERATURE", DEFAULT_TEMPERATURE)


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
