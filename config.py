"""Configuration management"""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Storage
DATA_PATH: Path = Path(os.getenv("DATA_PATH", "./data"))
EXPORT_PATH: Path = Path(os.getenv("EXPORT_PATH", "./exports"))
STORAGE_KEY = "habitai_data_v1"

# Coaching
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
COACH_MODEL: str = os.getenv("COACH_MODEL", "gpt-4o-mini")
COACH_SERVICE_PORT: int = int(os.getenv("COACH_SERVICE_PORT", "5570"))
COACH_TIMEOUT_MS: int = int(os.getenv("COACH_TIMEOUT_MS", "30000"))

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def storage_file(data_path: Path = DATA_PATH) -> Path:
    """Path of the single JSON blob holding the habit collection."""
    return data_path / f"{STORAGE_KEY}.json"


def has_coach_credentials(api_key: str = OPENAI_API_KEY) -> bool:
    return bool(api_key and api_key.strip())


def setup_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
