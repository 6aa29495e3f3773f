"""
Application settings, read from the environment (and a local .env file).
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str:
    value = os.getenv(name) or default
    assert value is not None, f"Expected {name} environment variable to be provided"
    return value


def _get_env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got '{value}'")


def _get_env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default

    v = value.strip().upper()
    if v == "TRUE":
        return True
    elif v == "FALSE":
        return False
    else:
        raise ValueError(f"Environment variable {name} must be a boolean ('TRUE' or 'FALSE'), got '{value}'")


SECRET_KEY = _get_env("SECRET_KEY", "dev-secret-change-in-production")
DATABASE_URL = _get_env("DATABASE_URL", "sqlite:///db/wordle.db")
REDIS_URL = _get_env("REDIS_URL", "redis://localhost:6379/0")
# "redis" for server-side sessions, empty for Flask's signed cookie sessions
SESSION_TYPE = os.getenv("SESSION_TYPE", "redis")

PUZZLE_SOURCE_URL = _get_env("PUZZLE_SOURCE_URL", "https://www.nytimes.com/svc/wordle/v2")
PUZZLE_FETCH_TIMEOUT = _get_env_int("PUZZLE_FETCH_TIMEOUT", 10)
API_TIMEOUT = _get_env_int("API_TIMEOUT", 10)
PUZZLE_TIMEZONE = _get_env("PUZZLE_TIMEZONE", "UTC")
ALLOW_PAST_PUZZLES = _get_env_bool("ALLOW_PAST_PUZZLES", True)

LOG_FORMAT = _get_env("LOG_FORMAT", "text")
LOG_LEVEL = _get_env("LOG_LEVEL", "INFO")
