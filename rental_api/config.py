import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load variables from a .env file next to the project, if present
load_dotenv()

BASE_DIR = Path(__file__).resolve().parents[1]
DEFAULT_DATA_PATH = BASE_DIR / "data.pkl"


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Settings read from the environment when the app is created."""

    def __init__(self):
        self.SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
        self.JWT_SECRET = os.getenv("JWT_SECRET", self.SECRET_KEY)
        self.JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
        self.JWT_EXPIRES_DAYS = int(os.getenv("JWT_EXPIRES_DAYS", "7"))
        self.DATA_PATH = os.getenv("DATA_PATH", str(DEFAULT_DATA_PATH))
        self.TIMEZONE = os.getenv("TIMEZONE", "UTC")
        self.STRICT_STATUS_TRANSITIONS = _env_bool("STRICT_STATUS_TRANSITIONS")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.LOG_FILE = os.getenv("LOG_FILE") or None
        self.TESTING = os.getenv("APP_ENV") == "test"

    def as_dict(self) -> dict:
        return {k: v for k, v in vars(self).items() if k.isupper()}


def configure_logging(level: str = "INFO", filename: str | None = None):
    """Root logging setup shared by the app and the scripts."""
    logging.basicConfig(
        filename=filename,
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
