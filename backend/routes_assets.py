"""
backend/routes_assets.py

Assets CRUD endpoints.

- GET    /assets          list every asset
- POST   /assets          create (201)
- GET    /assets/{id}     fetch one
- PUT    /assets/{id}     merge-update
- DELETE /assets/{id}     delete (200 with a message body)

Path ids are taken as strings and parsed by the service so a non-numeric id
answers 400 with the API's own message rather than FastAPI's 422. Errors are
raised as backend.errors types and rendered by the handlers in main.py.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Path

from backend import asset_service
from backend.schemas_assets import (
    AssetCreateRequest,
    AssetResponse,
    AssetUpdateRequest,
    ErrorResponse,
    MessageResponse,
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid ID or request body"},
    404: {"model": ErrorResponse, "description": "Asset not found"},
    500: {"model": ErrorResponse, "description": "Database error"},
}

router = APIRouter(
    prefix="/assets",
    tags=["assets"],
)


@router.get("", response_model=List[AssetResponse], responses={500: ERROR_RESPONSES[500]})
def list_assets() -> List[Dict[str, Any]]:
    """List all assets in insertion order."""
    return asset_service.list_assets()


@router.post(
    "",
    response_model=AssetResponse,
    status_code=201,
    responses={400: ERROR_RESPONSES[400], 500: ERROR_RESPONSES[500]},
)
def create_asset(request: AssetCreateRequest) -> Dict[str, Any]:
    """
    Create a new asset.

    Omitted category is stored as null, omitted quantity as 1.
    """
    return asset_service.create_asset(request)


@router.get("/{asset_id}", response_model=AssetResponse, responses=ERROR_RESPONSES)
def get_asset(asset_id: str = Path(..., description="Asset ID")) -> Dict[str, Any]:
    """Get a single asset by ID."""
    parsed_id = asset_service.parse_asset_id(asset_id, "Invalid asset ID")
    return asset_service.get_asset(parsed_id)


@router.put("/{asset_id}", response_model=AssetResponse, responses=ERROR_RESPONSES)
def update_asset(
    asset_id: str = Path(..., description="Asset ID"),
    request: Optional[AssetUpdateRequest] = Body(None),
) -> Dict[str, Any]:
    """
    Update only the supplied fields of an asset.

    By default empty values (``""``, ``0``, null) keep the stored value.
    A missing body is an empty update.
    """
    parsed_id = asset_service.parse_asset_id(asset_id)
    if request is None:
        request = AssetUpdateRequest()
    return asset_service.update_asset(parsed_id, request)


@router.delete("/{asset_id}", response_model=MessageResponse, responses=ERROR_RESPONSES)
def delete_asset(asset_id: str = Path(..., description="Asset ID to delete")) -> Dict[str, str]:
    """Delete an asset. Answers 200 with a message body, not 204."""
    parsed_id = asset_service.parse_asset_id(asset_id)
    asset_service.delete_asset(parsed_id)
    return {"message": "Asset deleted successfully"}
