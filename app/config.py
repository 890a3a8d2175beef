import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# Optional integrations - all disabled by default, set ENABLE_*=true to activate
FEATURES = {
    "database": os.getenv("ENABLE_DATABASE", "false").lower() == "true",
    "storage": os.getenv("ENABLE_STORAGE", "false").lower() == "true",
    "smtp": os.getenv("ENABLE_SMTP", "false").lower() == "true",
}

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./norfolk_cleaners.db")

# Security - CRITICAL: No default secret key in production
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

# Session cookie holding the signed JWT
SESSION_COOKIE = os.getenv("SESSION_COOKIE", "nc_session")
TOKEN_MAX_AGE = int(os.getenv("TOKEN_MAX_AGE", str(60 * 60 * 24)))  # seconds

ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:3000,http://localhost:5173",
).split(",")

# Schedule board defaults (visible window 07:00-19:00)
SCHEDULE_START_HOUR = float(os.getenv("SCHEDULE_START_HOUR", "7"))
SCHEDULE_END_HOUR = float(os.getenv("SCHEDULE_END_HOUR", "19"))
HOUR_HEIGHT = float(os.getenv("SCHEDULE_HOUR_HEIGHT", "80"))  # px per hour, day view
HOUR_WIDTH = float(os.getenv("SCHEDULE_HOUR_WIDTH", "160"))  # px per hour, dispatch board
SLOT_MINUTES = int(os.getenv("SCHEDULE_SLOT_MINUTES", "30"))
MIN_EVENT_LENGTH = float(os.getenv("SCHEDULE_MIN_EVENT_LENGTH", "24"))  # keeps short jobs clickable
NOW_REFRESH_SECONDS = float(os.getenv("SCHEDULE_NOW_REFRESH_SECONDS", "60"))


class FeatureDisabledError(RuntimeError):
    """Raised when code touches an integration that is switched off"""


def is_enabled(key: str) -> bool:
    return FEATURES.get(key, False)


def require_feature(key: str) -> None:
    """
    Check whether a feature is enabled at runtime.
    Raises FeatureDisabledError with the env var to flip when it is not.
    """
    if not is_enabled(key):
        raise FeatureDisabledError(
            f'Feature "{key}" is disabled. Set ENABLE_{key.upper()}=true in your .env to enable it.'
        )
