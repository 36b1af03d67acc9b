from __future__ import annotations

from .settings_base import *  # noqa: F403

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

DEFAULT_DELIVERY_MODE = "colissimo"
DEFAULT_VAT_ENABLED = False
DEFAULT_VAT_RATE = "20"
