# frontend/test_asset_view.py
# Unit tests for form normalization, stat cards and table rows

from frontend.asset_view import (
    EMPTY_CATEGORY,
    TABLE_COLUMNS,
    action_message,
    assets_to_frame,
    build_payload,
    compute_stats,
    form_values,
    format_asset_id,
)

ASSETS = [
    {"id": 1, "name": "Camera", "category": "Video", "quantity": 2},
    {"id": 2, "name": "Tripod", "category": "Video", "quantity": 1},
    {"id": 3, "name": "Drill", "category": "Tools", "quantity": 3},
    {"id": 12, "name": "Mystery box", "category": None, "quantity": None},
]


def test_build_payload_trims_and_defaults():
    assert build_payload("  Drill ", "  Tools ", 3) == {"name": "Drill", "category": "Tools", "quantity": 3}


def test_build_payload_omits_blank_category():
    assert build_payload("Drill", "   ", 2) == {"name": "Drill", "quantity": 2}
    assert build_payload("Drill", None, 2) == {"name": "Drill", "quantity": 2}


def test_build_payload_clamps_quantity():
    assert build_payload("Drill", "", 0)["quantity"] == 1
    assert build_payload("Drill", "", -5)["quantity"] == 1
    assert build_payload("Drill", "", None)["quantity"] == 1


def test_build_payload_refuses_empty_name():
    assert build_payload("", "Tools", 1) is None
    assert build_payload("    ", "Tools", 1) is None


def test_form_values_for_create_and_edit():
    assert form_values(None) == {"name": "", "category": "", "quantity": 1}
    assert form_values(ASSETS[0]) == {"name": "Camera", "category": "Video", "quantity": 2}
    assert form_values(ASSETS[3]) == {"name": "Mystery box", "category": "", "quantity": 1}


def test_compute_stats():
    assert compute_stats(ASSETS) == {
        "total_assets": 4,
        "total_units": 6,
        "categories": 2,
        "uncategorized": 1,
    }


def test_compute_stats_empty():
    assert compute_stats([]) == {"total_assets": 0, "total_units": 0, "categories": 0, "uncategorized": 0}


def test_format_asset_id():
    assert format_asset_id(7) == "#0007"
    assert format_asset_id(12345) == "#12345"


def test_assets_to_frame():
    frame = assets_to_frame(ASSETS)

    assert list(frame.columns) == TABLE_COLUMNS
    assert list(frame["ID"]) == ["#0001", "#0002", "#0003", "#0012"]
    assert frame.iloc[3]["Category"] == EMPTY_CATEGORY
    assert frame.iloc[3]["Quantity"] == 0


def test_assets_to_frame_empty_keeps_columns():
    frame = assets_to_frame([])
    assert frame.empty
    assert list(frame.columns) == TABLE_COLUMNS


def test_action_messages_are_generic():
    assert action_message("delete") == "Could not delete the asset."
    assert "try again" in action_message("unknown").lower()
