"""
Smoke Test for the Assets API - full lifecycle against a running backend

Tests:
1. Create an asset with defaults applied
2. Fetch it back by id
3. Merge-update one field
4. Delete it, then confirm 404 on fetch and on a second delete
5. Invalid id and missing name are rejected with 400

Run: python smoke_test_assets.py [BASE_URL]

Requirements:
- Backend running (default http://localhost:8000)
- Writes one row and removes it again
"""

import sys
from typing import Any, Optional

import requests

BASE_URL = sys.argv[1].rstrip("/") if len(sys.argv) > 1 else "http://localhost:8000"


class TestResult:
    def __init__(self):
        self.passed = 0
        self.failed = 0

    def check(self, name: str, ok: bool, detail: str = ""):
        if ok:
            self.passed += 1
            print(f"✅ PASS: {name}")
        else:
            self.failed += 1
            print(f"❌ FAIL: {name}")
        if detail:
            print(f"  └─ {detail}")

    def summary(self):
        print("\n" + "="*60)
        print(f"SMOKE TEST SUMMARY: {self.passed} passed, {self.failed} failed")
        print("="*60)
        return self.failed == 0


def expect(result: TestResult, name: str, resp: requests.Response, status: int, body: Optional[Any] = None):
    ok = resp.status_code == status and (body is None or resp.json() == body)
    result.check(name, ok, f"{resp.status_code} {resp.text[:120]}")


def main():
    result = TestResult()

    print("="*60)
    print(f"SMOKE TEST: Assets API lifecycle ({BASE_URL})")
    print("="*60)

    resp = requests.post(f"{BASE_URL}/assets", json={"name": "Smoke Test Drill", "quantity": 3})
    if resp.status_code != 201:
        result.check("Create", False, f"{resp.status_code} {resp.text[:120]}")
        result.summary()
        return 1
    asset_id = resp.json()["id"]
    expected = {"id": asset_id, "name": "Smoke Test Drill", "category": None, "quantity": 3}
    result.check("Create", resp.json() == expected, f"id={asset_id}")

    expect(result, "Get by id", requests.get(f"{BASE_URL}/assets/{asset_id}"), 200, expected)

    expect(
        result,
        "Merge update",
        requests.put(f"{BASE_URL}/assets/{asset_id}", json={"category": "Tools"}),
        200,
        {**expected, "category": "Tools"},
    )

    listed = requests.get(f"{BASE_URL}/assets")
    result.check("Listed", listed.status_code == 200 and any(a["id"] == asset_id for a in listed.json()))

    expect(
        result,
        "Delete",
        requests.delete(f"{BASE_URL}/assets/{asset_id}"),
        200,
        {"message": "Asset deleted successfully"},
    )
    expect(result, "Get after delete", requests.get(f"{BASE_URL}/assets/{asset_id}"), 404, {"error": "Asset not found"})
    expect(result, "Second delete", requests.delete(f"{BASE_URL}/assets/{asset_id}"), 404)

    expect(result, "Invalid id", requests.get(f"{BASE_URL}/assets/abc"), 400, {"error": "Invalid asset ID"})
    expect(result, "Missing name", requests.post(f"{BASE_URL}/assets", json={"quantity": 2}), 400, {"error": "Name is required"})

    return 0 if result.summary() else 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nTest interrupted by user")
        sys.exit(1)
    except requests.exceptions.ConnectionError:
        print(f"\n\n❌ ERROR: cannot reach backend at {BASE_URL}")
        sys.exit(1)
