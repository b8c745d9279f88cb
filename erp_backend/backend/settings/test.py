# backend/settings/test.py
"""
PATH: backend/settings/test.py

TEST SETTINGS

- In-memory SQLite unless DATABASE_URL is given (CI may point at Postgres)
- Quiet engine logs
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import LOGGING, env

DEBUG = False

DATABASES = {
    "default": env.db("DATABASE_URL", default="sqlite://:memory:"),
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

for _logger in LOGGING["loggers"].values():
    _logger["level"] = "ERROR"
