"""
frontend/api_client.py
Centralized API client for the Asset Manager backend.

This module ensures:
1. Every backend call goes through api_request (one place for base URL, headers, timeout)
2. Non-2xx responses, timeouts and connection failures all raise AssetApiError
3. No retries: the UI offers a manual Retry instead
"""

import logging
from typing import Any, Dict, List, Literal, Optional

import requests

try:
    from frontend.config import REQUEST_TIMEOUT, get_api_base_url
except ModuleNotFoundError:
    from config import REQUEST_TIMEOUT, get_api_base_url

logger = logging.getLogger(__name__)

__all__ = [
    "AssetApiError",
    "api_request",
    "list_assets",
    "get_asset",
    "create_asset",
    "update_asset",
    "delete_asset",
]


class AssetApiError(Exception):
    """
    A failed backend call.

    Attributes:
        action: What the UI was doing ("fetch", "load", "create", "update", "delete")
        status_code: HTTP status, or None when no response arrived
        message: Backend-provided error text, or a transport description
    """

    def __init__(self, action: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{action} failed ({status_code or 'no response'}): {message}")
        self.action = action
        self.message = message
        self.status_code = status_code


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200] or f"HTTP {resp.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {resp.status_code}"


def api_request(
    method: Literal["GET", "POST", "PUT", "DELETE"],
    path: str,
    action: str,
    json: Optional[Dict[str, Any]] = None,
    base_url: Optional[str] = None,
    timeout: float = REQUEST_TIMEOUT,
) -> Any:
    """
    Make one backend call and return the decoded JSON body.

    Args:
        method: HTTP method
        path: API path (e.g. "/assets/3")
        action: Label for errors ("fetch", "load", "create", "update", "delete")
        json: JSON body for POST/PUT
        base_url: Override for get_api_base_url()
        timeout: Seconds before giving up

    Raises:
        AssetApiError: Configuration problem, transport failure or non-2xx status
    """
    try:
        url = f"{base_url or get_api_base_url()}{path}"
    except (RuntimeError, ValueError) as e:
        raise AssetApiError(action, f"Configuration error: {e}") from e

    headers = {"Accept": "application/json"}

    try:
        resp = requests.request(method, url, json=json, headers=headers, timeout=timeout)
    except requests.exceptions.Timeout as e:
        logger.warning("[API] Timeout on %s %s", method, path)
        raise AssetApiError(action, f"Request timed out after {timeout:g}s") from e
    except requests.exceptions.ConnectionError as e:
        logger.warning("[API] Connection error on %s %s", method, path)
        raise AssetApiError(action, "Cannot connect to backend") from e
    except requests.exceptions.RequestException as e:
        logger.warning("[API] Request error on %s %s: %s", method, path, type(e).__name__)
        raise AssetApiError(action, str(e)[:200]) from e

    if not resp.ok:
        message = _error_message(resp)
        logger.info("[API] %s %s -> %s: %s", method, path, resp.status_code, message)
        raise AssetApiError(action, message, resp.status_code)

    try:
        return resp.json()
    except ValueError as e:
        raise AssetApiError(action, "Backend returned invalid JSON", resp.status_code) from e


def list_assets(base_url: Optional[str] = None) -> List[Dict[str, Any]]:
    return api_request("GET", "/assets", "fetch", base_url=base_url)


def get_asset(asset_id: int, base_url: Optional[str] = None) -> Dict[str, Any]:
    return api_request("GET", f"/assets/{asset_id}", "load", base_url=base_url)


def create_asset(payload: Dict[str, Any], base_url: Optional[str] = None) -> Dict[str, Any]:
    return api_request("POST", "/assets", "create", json=payload, base_url=base_url)


def update_asset(asset_id: int, payload: Dict[str, Any], base_url: Optional[str] = None) -> Dict[str, Any]:
    return api_request("PUT", f"/assets/{asset_id}", "update", json=payload, base_url=base_url)


def delete_asset(asset_id: int, base_url: Optional[str] = None) -> Dict[str, Any]:
    return api_request("DELETE", f"/assets/{asset_id}", "delete", base_url=base_url)
