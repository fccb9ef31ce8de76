# frontend/asset_state.py
# Page state for the asset screen: backend operations, error banner, Retry and list refetch.
# Takes any mutable mapping as session state so it runs without Streamlit.

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, MutableMapping, Optional

try:
    from frontend import api_client
    from frontend.api_client import AssetApiError
    from frontend.asset_view import action_message
except ModuleNotFoundError:
    import api_client
    from api_client import AssetApiError
    from asset_view import action_message

logger = logging.getLogger(__name__)

State = MutableMapping[str, Any]

# Actions that change rows; each one schedules a full list refetch
MUTATIONS = ("create", "update", "delete")


def init_state(state: State) -> None:
    # Last fetched list; None until the first successful fetch
    state.setdefault("assets", None)

    # Form: None (closed), "create" or "edit"
    state.setdefault("form_mode", None)
    state.setdefault("editing_asset", None)

    # Error banner + the operation the Retry button re-runs
    state.setdefault("_last_error", None)
    state.setdefault("_retry_op", None)

    # Forces a refetch on the next rerun
    state.setdefault("_refresh_assets", True)


def open_form(state: State, mode: str, asset: Optional[Dict[str, Any]] = None) -> None:
    state["form_mode"] = mode
    state["editing_asset"] = asset


def close_form(state: State) -> None:
    state["form_mode"] = None
    state["editing_asset"] = None


def dismiss_error(state: State) -> None:
    state["_last_error"] = None
    state["_retry_op"] = None


def _fetch(state: State, _: Dict[str, Any]) -> None:
    state["assets"] = api_client.list_assets()


def _load(state: State, op: Dict[str, Any]) -> None:
    # Edit the stored row, not the possibly stale table copy
    open_form(state, "edit", api_client.get_asset(op["asset_id"]))


def _create(state: State, op: Dict[str, Any]) -> None:
    api_client.create_asset(op["payload"])


def _update(state: State, op: Dict[str, Any]) -> None:
    api_client.update_asset(op["asset_id"], op["payload"])


def _delete(state: State, op: Dict[str, Any]) -> None:
    api_client.delete_asset(op["asset_id"])


OPERATIONS: Dict[str, Callable[[State, Dict[str, Any]], None]] = {
    "fetch": _fetch,
    "load": _load,
    "create": _create,
    "update": _update,
    "delete": _delete,
}


def run_operation(state: State, op: Dict[str, Any]) -> bool:
    """
    Run one backend operation once.

    On failure the banner message and the operation are kept in state so
    Retry can re-run it; nothing is retried automatically. Successful
    mutations schedule a full list refetch.

    Returns:
        True if the backend call succeeded
    """
    action = op["action"]
    try:
        OPERATIONS[action](state, op)
    except AssetApiError as e:
        logger.warning("[ASSETS] %s failed: status=%s message=%s", action, e.status_code, e.message)
        state["_last_error"] = {"action": action, "message": action_message(action), "detail": e.message}
        state["_retry_op"] = op
        return False

    dismiss_error(state)
    if action in MUTATIONS:
        state["_refresh_assets"] = True
    return True


def retry(state: State) -> bool:
    """Re-run the operation behind the current error banner, if any."""
    op = state.get("_retry_op")
    if not op:
        return False
    return run_operation(state, op)


def refresh_assets_if_needed(state: State) -> None:
    if state.get("_refresh_assets"):
        state["_refresh_assets"] = False
        run_operation(state, {"action": "fetch"})
