# backend/config.py
# Environment-aware configuration for the Asset Manager backend

import os
from typing import List, Literal

# Environment detection
ENV: Literal["dev", "staging", "prod"] = os.environ.get("ENV", "dev")  # type: ignore
IS_PROD = (ENV == "prod")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# Connection pool sizing (Postgres only; SQLite uses the dialect default)
DB_POOL_SIZE = int(os.environ.get("DB_POOL_SIZE", "5"))
DB_MAX_OVERFLOW = int(os.environ.get("DB_MAX_OVERFLOW", "10"))

UPDATE_MODES = ("falsy", "presence")

_TRUTHY = {"1", "true", "yes", "on"}


def get_database_url() -> str:
    """
    Return the database connection string.

    DATABASE_URL is required; POSTGRES_URL is accepted when it is unset.
    Render-style ``postgres://`` URLs are rewritten to ``postgresql://``
    because SQLAlchemy no longer accepts the short scheme.

    Raises:
        RuntimeError: If neither variable holds a URL
    """
    url = os.environ.get("DATABASE_URL", "").strip() or os.environ.get("POSTGRES_URL", "").strip()
    if not url:
        raise RuntimeError(
            "DATABASE_URL is not defined. Set it to a postgresql:// or sqlite:/// connection string."
        )
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    return url


def is_postgres_url(url: str) -> bool:
    return url.startswith(("postgresql://", "postgresql+"))


def get_update_mode() -> str:
    """
    Merge strategy for PUT /assets/{id}.

    - "falsy" (default): falsy values in the body keep the stored value
    - "presence": any field present in the body overwrites the stored value
    """
    mode = os.environ.get("ASSET_UPDATE_MODE", "falsy").strip().lower()
    if mode not in UPDATE_MODES:
        raise ValueError(f"Invalid ASSET_UPDATE_MODE: {mode!r} (expected one of {', '.join(UPDATE_MODES)})")
    return mode


def atomic_writes_enabled() -> bool:
    """Use conditional UPDATE/DELETE instead of read-then-write."""
    return os.environ.get("ASSET_ATOMIC_WRITES", "false").strip().lower() in _TRUTHY


def get_cors_origins() -> List[str]:
    """CORS origins for staging/prod. Dev allows everything (see main.py)."""
    origins = [
        "http://localhost:8501",  # Streamlit default
        "http://127.0.0.1:8501",
    ]
    extra = os.environ.get("CORS_ORIGINS", "")
    if extra:
        origins.extend(o.strip() for o in extra.split(",") if o.strip())
    return origins


CORS_ORIGINS = get_cors_origins()
