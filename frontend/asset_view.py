# frontend/asset_view.py
# Streamlit-free helpers for the asset page: form normalization, stat cards, table rows

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd

TABLE_COLUMNS = ["ID", "Name", "Category", "Quantity"]
EMPTY_CATEGORY = "—"

# One generic message per action; 400/404/500 are not told apart
ACTION_MESSAGES = {
    "fetch": "Could not load assets from the backend.",
    "load": "Could not load the asset for editing.",
    "create": "Could not create the asset.",
    "update": "Could not save changes to the asset.",
    "delete": "Could not delete the asset.",
}


def action_message(action: str) -> str:
    return ACTION_MESSAGES.get(action, "Something went wrong. Please try again.")


def empty_form() -> Dict[str, Any]:
    return {"name": "", "category": "", "quantity": 1}


def form_values(asset: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Initial form values: blank for create, the stored asset for edit."""
    if not asset:
        return empty_form()
    quantity = asset.get("quantity")
    return {
        "name": asset.get("name") or "",
        "category": asset.get("category") or "",
        "quantity": quantity if quantity is not None else 1,
    }


def build_payload(name: str, category: Optional[str], quantity: Optional[int]) -> Optional[Dict[str, Any]]:
    """
    Turn raw form input into a request body.

    - name is trimmed; an empty name means "don't submit" (returns None)
    - a blank category is left out of the body entirely
    - quantity below 1 (or missing) becomes 1
    """
    name = (name or "").strip()
    if not name:
        return None

    payload: Dict[str, Any] = {"name": name}
    category = (category or "").strip()
    if category:
        payload["category"] = category
    payload["quantity"] = quantity if quantity and quantity > 0 else 1
    return payload


def compute_stats(assets: List[Dict[str, Any]]) -> Dict[str, int]:
    """Numbers for the stat cards above the table."""
    categories = {a["category"] for a in assets if a.get("category")}
    return {
        "total_assets": len(assets),
        "total_units": sum(a.get("quantity") or 0 for a in assets),
        "categories": len(categories),
        "uncategorized": sum(1 for a in assets if not a.get("category")),
    }


def format_asset_id(asset_id: int) -> str:
    return f"#{asset_id:04d}"


def assets_to_frame(assets: List[Dict[str, Any]]) -> pd.DataFrame:
    rows = [
        {
            "ID": format_asset_id(a["id"]),
            "Name": a.get("name") or "",
            "Category": a.get("category") or EMPTY_CATEGORY,
            "Quantity": a.get("quantity") if a.get("quantity") is not None else 0,
        }
        for a in assets
    ]
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)
