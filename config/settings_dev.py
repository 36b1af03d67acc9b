from __future__ import annotations

from .settings_base import *  # noqa: F403

# Development defaults
DEBUG = env.bool("DEBUG", default=True)  # type: ignore[name-defined]  # noqa: F405
NINJA_ENABLE_DOCS = env.bool("NINJA_ENABLE_DOCS", default=True)  # type: ignore[name-defined]  # noqa: F405

# A local SQLite file unless DATABASE_URL points elsewhere
DATABASES = {
    "default": env.db(  # type: ignore[name-defined]  # noqa: F405
        "DATABASE_URL",
        default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}",  # noqa: F405
    )
}
