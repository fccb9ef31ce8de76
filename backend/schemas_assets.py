"""
backend/schemas_assets.py

Pydantic schemas for the Assets API.
Request bodies are loosely typed JSON from the browser; these schemas pin down
which fields are required and which are optional before the service sees them.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator


# quantity is an INTEGER column on both dialects
QUANTITY_MIN = -2**31
QUANTITY_MAX = 2**31 - 1


def _strip(v: Any) -> Any:
    if isinstance(v, str):
        return v.strip()
    return v


class AssetCreateRequest(BaseModel):
    """Request schema for creating an asset.

    - name is required, trimmed, and must not be empty afterwards
    - category defaults to null
    - quantity defaults to 1 (applied by the service when omitted or null)
    """
    name: str = Field(..., max_length=255, description="Asset name (required)")
    category: Optional[str] = Field(None, max_length=100, description="Optional category")
    quantity: Optional[StrictInt] = Field(None, ge=QUANTITY_MIN, le=QUANTITY_MAX, description="Quantity (defaults to 1)")

    @field_validator("name", mode="before")
    @classmethod
    def trim_name(cls, v: Any) -> Any:
        """Trim whitespace from name."""
        return _strip(v)

    @field_validator("name")
    @classmethod
    def validate_name_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("name must not be empty")
        return v


class AssetUpdateRequest(BaseModel):
    """Request schema for a merge-update.

    Every field is optional. Which supplied values actually overwrite the
    stored row is decided by the service (falsy vs presence merge mode);
    ``model_fields_set`` records which keys the client sent.
    """
    name: Optional[str] = Field(None, max_length=255, description="New name")
    category: Optional[str] = Field(None, max_length=100, description="New category")
    quantity: Optional[StrictInt] = Field(None, ge=QUANTITY_MIN, le=QUANTITY_MAX, description="New quantity")

    @field_validator("name", mode="before")
    @classmethod
    def trim_name(cls, v: Any) -> Any:
        return _strip(v)


class AssetResponse(BaseModel):
    """A persisted asset row."""
    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., description="Asset ID")
    name: str = Field(..., description="Asset name")
    category: Optional[str] = Field(None, description="Category or null")
    quantity: Optional[int] = Field(None, description="Quantity or null")


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
