"""Configuration for the Local Library catalog.

Values are read from the environment so the same code runs on a laptop and
behind a WSGI server:

    LIBRARY_SECRET        Flask SECRET_KEY (sessions and CSRF tokens)
    LIBRARY_DATABASE_URL  SQLAlchemy database URL
    LIBRARY_LOG_LEVEL     log level for the ``local_library`` logger
    LIBRARY_DB_TIMEOUT    seconds SQLite waits on a locked database
    LIBRARY_FORCE_HTTPS   "1" to let Talisman redirect plain HTTP to HTTPS
"""

import os


def _env_flag(name, default="0"):
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    # SECURITY: set a secure random key in production via env var
    SECRET_KEY = os.environ.get("LIBRARY_SECRET") or "change-this-secret-in-production"
    SQLALCHEMY_DATABASE_URI = os.environ.get("LIBRARY_DATABASE_URL") or "sqlite:///library.db"
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LIBRARY_LOG_LEVEL = os.environ.get("LIBRARY_LOG_LEVEL", "INFO").upper()
    LIBRARY_DB_TIMEOUT = float(os.environ.get("LIBRARY_DB_TIMEOUT", "15"))
    # Create missing tables when the app starts
    LIBRARY_CREATE_SCHEMA = True

    TALISMAN_ENABLED = True
    LIBRARY_FORCE_HTTPS = _env_flag("LIBRARY_FORCE_HTTPS")
    CONTENT_SECURITY_POLICY = {
        "default-src": ["'self'"],
        "script-src": ["'self'", "https://cdn.jsdelivr.net"],
        "style-src": ["'self'", "https://cdn.jsdelivr.net", "'unsafe-inline'"],
        "img-src": ["'self'", "data:"],
    }


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "testing"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    WTF_CSRF_ENABLED = False
    TALISMAN_ENABLED = False
    LIBRARY_LOG_LEVEL = "DEBUG"
