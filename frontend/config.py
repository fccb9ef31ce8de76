# frontend/config.py
# Environment-aware configuration for the Asset Manager frontend

import os
from typing import Literal

# Environment detection - normalize to lowercase
_raw_env = os.environ.get("ENV", "local").lower()
ENV: Literal["local", "staging", "production"] = _raw_env if _raw_env in ("local", "staging", "production") else "production"  # type: ignore

IS_LOCAL = (ENV == "local")

LOCAL_API_URL = "http://127.0.0.1:8000"

# Seconds; applies to every backend call, no retries
REQUEST_TIMEOUT = float(os.environ.get("REQUEST_TIMEOUT", "20"))


def validate_api_url(url: str, env: str) -> None:
    """
    Validate API base URL according to environment security rules.

    Raises:
        ValueError: If URL violates security constraints for the environment
    """
    if not url:
        raise ValueError("API base URL cannot be empty")

    # Production/staging must use HTTPS and never localhost
    if env in ("staging", "production"):
        if not url.startswith("https://"):
            raise ValueError(f"Production/staging must use HTTPS. Got: {url}")
        if "127.0.0.1" in url or "localhost" in url:
            raise ValueError(f"Production/staging cannot use localhost URLs. Got: {url}")


def get_api_base_url(env: str = ENV) -> str:
    """
    Get API base URL with strict priority and validation.

    Priority:
    1. BACKEND_URL environment variable
    2. API_BASE_URL environment variable
    3. Local dev default (http://127.0.0.1:8000) ONLY if env == "local"

    Returns:
        Validated API base URL with trailing slash removed

    Raises:
        RuntimeError: If staging/production has no configured URL
        ValueError: If the configured URL breaks the environment's rules
    """
    for var in ("BACKEND_URL", "API_BASE_URL"):
        configured = os.environ.get(var, "").strip()
        if configured:
            url = configured.rstrip("/")
            validate_api_url(url, env)
            return url

    if env == "local":
        return LOCAL_API_URL

    raise RuntimeError(
        f"Backend URL not configured for {env.upper()} environment. "
        f"Set BACKEND_URL to the backend service URL (HTTPS, not localhost)."
    )
