# config.py - configuration constants
import os
from pathlib import Path

# Create instance folder if it doesn't exist
INSTANCE_PATH = Path(__file__).parent / 'instance'
INSTANCE_PATH.mkdir(exist_ok=True)

# Database file will be stored in the instance folder
DB_PATH = INSTANCE_PATH / 'jeopardy.db'
SESSION_DIR = INSTANCE_PATH / 'flask_session'


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "supersecretkey")
    # Use DATABASE_URL for production, fallback to SQLite for local development
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", f"sqlite:///{DB_PATH.absolute()}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    INSTANCE_PATH = str(INSTANCE_PATH)
    # - pool_pre_ping checks connections before use to avoid stale/expired sockets
    # - pool_recycle forces periodic reconnects to reduce SSL/idle issues
    # - pool_timeout controls how long to wait for a connection from the pool
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_recycle": _int_env("SQLALCHEMY_POOL_RECYCLE", 280),
        "pool_timeout": _int_env("SQLALCHEMY_POOL_TIMEOUT", 10),
    }

    # Cookie/session security (tunable via env for local vs prod)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = os.getenv("SESSION_COOKIE_SAMESITE", "Lax")
    # Don't force Secure cookies locally unless explicitly enabled
    SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "0") == "1"
    # Server-side sessions via Flask-Session; the cookie only carries the session id
    SESSION_TYPE = os.getenv("SESSION_TYPE", "filesystem")
    SESSION_FILE_DIR = str(SESSION_DIR)
    SESSION_PERMANENT = False

    # Preferred scheme for URL generation in prod behind HTTPS
    PREFERRED_URL_SCHEME = os.getenv("PREFERRED_URL_SCHEME", "https")

    # Game settings
    MAX_CATEGORIES = _int_env("MAX_CATEGORIES", 12)
    CLUES_PER_CARD = _int_env("CLUES_PER_CARD", 5)
    # A searching flag older than this is treated as abandoned
    SEARCH_LOCK_SECONDS = _int_env("SEARCH_LOCK_SECONDS", 120)
    ANSWER_CASE_SENSITIVE = os.getenv("ANSWER_CASE_SENSITIVE", "1") == "1"
