"""
backend/asset_store.py

SQL for the ``assets`` table. Every function takes an open connection, runs a
single statement, and returns plain dicts (or None when no row matched).
Transaction boundaries belong to the caller (backend/asset_service.py).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.engine import Connection, Row

from backend.db import execute_query

ASSET_COLUMNS = "id, name, category, quantity"

# Columns a merge-update is allowed to touch
UPDATABLE_FIELDS = ("name", "category", "quantity")


def row_to_dict(row: Optional[Row]) -> Optional[Dict[str, Any]]:
    """Convert a SQLAlchemy Row to a dict, passing None through."""
    if row is None:
        return None
    return dict(row._mapping)


def list_assets(conn: Connection) -> List[Dict[str, Any]]:
    result = execute_query(conn, f"SELECT {ASSET_COLUMNS} FROM assets ORDER BY id")
    return [row_to_dict(row) for row in result.fetchall()]


def get_asset(conn: Connection, asset_id: int) -> Optional[Dict[str, Any]]:
    result = execute_query(
        conn,
        f"SELECT {ASSET_COLUMNS} FROM assets WHERE id = :id",
        {"id": asset_id},
    )
    return row_to_dict(result.fetchone())


def insert_asset(
    conn: Connection,
    name: str,
    category: Optional[str],
    quantity: Optional[int],
) -> Dict[str, Any]:
    result = execute_query(
        conn,
        f"""
        INSERT INTO assets (name, category, quantity)
        VALUES (:name, :category, :quantity)
        RETURNING {ASSET_COLUMNS}
        """,
        {"name": name, "category": category, "quantity": quantity},
    )
    return row_to_dict(result.fetchone())


def update_asset(
    conn: Connection,
    asset_id: int,
    changes: Dict[str, Any],
) -> Optional[Dict[str, Any]]:
    """
    Apply ``changes`` to one row and return the row as stored afterwards.

    Only keys in UPDATABLE_FIELDS are written. An empty change set still
    issues an UPDATE (``SET id = id``) so the caller learns whether the row
    exists from the same statement.

    Returns:
        The updated row, or None if no row has this id
    """
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValueError(f"Cannot update column(s): {', '.join(sorted(unknown))}")

    if changes:
        assignments = ", ".join(f"{field} = :{field}" for field in UPDATABLE_FIELDS if field in changes)
    else:
        assignments = "id = id"

    params = dict(changes)
    params["id"] = asset_id
    result = execute_query(
        conn,
        f"UPDATE assets SET {assignments} WHERE id = :id RETURNING {ASSET_COLUMNS}",
        params,
    )
    return row_to_dict(result.fetchone())


def delete_asset(conn: Connection, asset_id: int) -> bool:
    """Delete one row. Returns False if nothing matched (already gone)."""
    result = execute_query(
        conn,
        "DELETE FROM assets WHERE id = :id RETURNING id",
        {"id": asset_id},
    )
    return result.fetchone() is not None
