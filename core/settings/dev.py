import os

from .base import *  # noqa: F401,F403

# ruff: noqa: F405

# --- Env flag (handy for sanity checks) ---
ENV_NAME = "dev"

# --- Debug & hosts ---
DEBUG = True
ALLOWED_HOSTS = ["*"]
CSRF_TRUSTED_ORIGINS = [
    "http://127.0.0.1",
    "http://localhost",
    "http://127.0.0.1:8000",
    "http://localhost:8000",
]

# --- Cache ---
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "dev-locmem",
    }
}

# --- Sessions in the locmem cache: no session table needed ---
SESSION_ENGINE = "django.contrib.sessions.backends.cache"

# --- Security relaxed for dev ---
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False
SECURE_SSL_REDIRECT = False

# --- Use SQLite in dev (no psycopg needed) ---
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

LOGGING["loggers"]["shopcart"]["level"] = os.getenv("CART_LOG_LEVEL", "DEBUG")
