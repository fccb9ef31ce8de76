"""
backend/asset_service.py

Asset Service: validation, merge rules and persistence for the five CRUD
operations. Routes call these functions and translate the raised
AssetError subclasses into HTTP responses (see backend/main.py).

Every operation checks out one pooled connection and commits once. Update and
Delete default to read-then-write, matching the behaviour existing clients
rely on; set ASSET_ATOMIC_WRITES=true to use a single conditional statement
instead.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Optional

from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from backend import asset_store
from backend.config import atomic_writes_enabled, get_update_mode
from backend.db import commit, get_db_connection
from backend.errors import AssetInfrastructureError, AssetNotFoundError, AssetValidationError
from backend.schemas_assets import AssetCreateRequest, AssetUpdateRequest

logger = logging.getLogger(__name__)

DEFAULT_QUANTITY = 1

# ids are SERIAL (int4); anything wider cannot match a row
MAX_ASSET_ID = 2**31 - 1

_ID_PATTERN = re.compile(r"^[+-]?\d+$")


def parse_asset_id(raw: str, error_message: str = "Invalid ID") -> int:
    """
    Parse a path parameter into an asset id.

    Surrounding whitespace is ignored; anything else that is not a plain
    base-10 integer is rejected.

    Raises:
        AssetValidationError: If ``raw`` is not an integer
    """
    value = raw.strip() if isinstance(raw, str) else ""
    if not _ID_PATTERN.match(value):
        raise AssetValidationError(error_message)
    return int(value)


@contextmanager
def _unit_of_work(action: str, failure_message: str) -> Generator[Connection, None, None]:
    """Run one operation on one connection; persistence failures become 500s."""
    try:
        with get_db_connection() as conn:
            yield conn
            commit(conn)
    except SQLAlchemyError as e:
        logger.exception("[ASSETS] DB error on %s", action)
        raise AssetInfrastructureError(failure_message) from e


def _in_id_range(asset_id: int) -> bool:
    return -MAX_ASSET_ID - 1 <= asset_id <= MAX_ASSET_ID


def resolve_changes(request: AssetUpdateRequest, mode: str) -> Dict[str, Any]:
    """
    Decide which supplied fields overwrite the stored row.

    - "falsy": a field counts only if its value is truthy, so ``""``, ``0``
      and null all keep the stored value
    - "presence": every field the client sent counts; a sent name must still
      be non-empty

    Raises:
        AssetValidationError: presence mode with an empty or null name
    """
    if mode == "presence":
        changes = {field: getattr(request, field) for field in asset_store.UPDATABLE_FIELDS
                   if field in request.model_fields_set}
        if "name" in changes and not changes["name"]:
            raise AssetValidationError("Name is required")
        return changes

    return {field: getattr(request, field) for field in asset_store.UPDATABLE_FIELDS
            if getattr(request, field)}


def list_assets() -> List[Dict[str, Any]]:
    with _unit_of_work("list", "Failed to fetch assets") as conn:
        assets = asset_store.list_assets(conn)
    logger.debug("[ASSETS] List: results=%d", len(assets))
    return assets


def create_asset(request: AssetCreateRequest) -> Dict[str, Any]:
    if not request.name:
        raise AssetValidationError("Name is required")

    quantity = request.quantity if request.quantity is not None else DEFAULT_QUANTITY

    with _unit_of_work("create", "Failed to create asset") as conn:
        asset = asset_store.insert_asset(conn, request.name, request.category, quantity)

    logger.info("[ASSETS] Created asset_id=%s", asset["id"])
    return asset


def get_asset(asset_id: int) -> Dict[str, Any]:
    if not _in_id_range(asset_id):
        raise AssetNotFoundError()

    with _unit_of_work("get", "Failed to fetch asset") as conn:
        asset = asset_store.get_asset(conn, asset_id)

    if asset is None:
        raise AssetNotFoundError()
    logger.debug("[ASSETS] Get: asset_id=%s", asset_id)
    return asset


def update_asset(
    asset_id: int,
    request: AssetUpdateRequest,
    mode: Optional[str] = None,
    atomic: Optional[bool] = None,
) -> Dict[str, Any]:
    """
    Merge-update one asset.

    Args:
        asset_id: Target row
        request: Partial payload
        mode: "falsy" or "presence"; defaults to ASSET_UPDATE_MODE
        atomic: Skip the existence pre-read; defaults to ASSET_ATOMIC_WRITES

    Raises:
        AssetNotFoundError: No row with this id (no write attempted)
        AssetValidationError: presence mode with an empty name
        AssetInfrastructureError: Persistence failure
    """
    mode = mode or get_update_mode()
    atomic = atomic_writes_enabled() if atomic is None else atomic

    changes = resolve_changes(request, mode)
    if not _in_id_range(asset_id):
        raise AssetNotFoundError()

    with _unit_of_work("update", "Failed to update asset") as conn:
        if atomic:
            updated = asset_store.update_asset(conn, asset_id, changes)
        else:
            existing = asset_store.get_asset(conn, asset_id)
            if existing is None:
                raise AssetNotFoundError()
            merged = {field: existing[field] for field in asset_store.UPDATABLE_FIELDS}
            merged.update(changes)
            # Row can vanish between the read and the write
            updated = asset_store.update_asset(conn, asset_id, merged)

        if updated is None:
            raise AssetNotFoundError()

    logger.info("[ASSETS] Updated asset_id=%s fields=%s", asset_id, sorted(changes))
    return updated


def delete_asset(asset_id: int, atomic: Optional[bool] = None) -> None:
    """
    Delete one asset.

    In read-then-write mode a concurrent delete can win the race after our
    existence check; the second DELETE then matches nothing and the call
    still succeeds.

    Raises:
        AssetNotFoundError: No row with this id
        AssetInfrastructureError: Persistence failure
    """
    atomic = atomic_writes_enabled() if atomic is None else atomic
    if not _in_id_range(asset_id):
        raise AssetNotFoundError()

    with _unit_of_work("delete", "Failed to delete asset") as conn:
        if atomic:
            if not asset_store.delete_asset(conn, asset_id):
                raise AssetNotFoundError()
        else:
            if asset_store.get_asset(conn, asset_id) is None:
                raise AssetNotFoundError()
            if not asset_store.delete_asset(conn, asset_id):
                logger.debug("[ASSETS] Delete raced: asset_id=%s already removed", asset_id)

    logger.info("[ASSETS] Deleted asset_id=%s", asset_id)
