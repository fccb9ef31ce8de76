"""
backend/errors.py

Exception taxonomy for the Asset Service.

Each error carries the HTTP status it maps to and the message returned to the
caller as ``{"error": message}``. Handlers are registered in backend/main.py.
"""

from __future__ import annotations


class AssetError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AssetValidationError(AssetError):
    """Bad or missing input (non-numeric id, empty name, malformed body)."""

    status_code = 400


class AssetNotFoundError(AssetError):
    """Well-formed id with no matching row."""

    status_code = 404

    def __init__(self, message: str = "Asset not found"):
        super().__init__(message)


class AssetInfrastructureError(AssetError):
    """Persistence layer unreachable or failing. Never retried."""

    status_code = 500
