"""
backend/test_asset_service.py

Unit tests for the service layer: id parsing, merge rules, the
check-then-write race on delete, and startup configuration.

Run:
    pytest backend/test_asset_service.py -v
"""

from unittest.mock import patch

import pytest

from backend import asset_service, asset_store, config
from backend.errors import AssetNotFoundError, AssetValidationError
from backend.schemas_assets import AssetCreateRequest, AssetUpdateRequest


class TestParseAssetId:
    @pytest.mark.parametrize("raw,expected", [("1", 1), ("42", 42), (" 7 ", 7), ("-3", -3), ("+5", 5), ("007", 7)])
    def test_integers(self, raw, expected):
        assert asset_service.parse_asset_id(raw) == expected

    @pytest.mark.parametrize("raw", ["", " ", "abc", "1.5", "1e3", "1_000", "0x10", "NaN"])
    def test_rejects_non_integers(self, raw):
        with pytest.raises(AssetValidationError) as exc_info:
            asset_service.parse_asset_id(raw)
        assert exc_info.value.message == "Invalid ID"

    def test_custom_message(self):
        with pytest.raises(AssetValidationError, match="Invalid asset ID"):
            asset_service.parse_asset_id("x", "Invalid asset ID")


class TestResolveChanges:
    def test_falsy_mode_drops_empty_values(self):
        request = AssetUpdateRequest(name="", category="", quantity=0)
        assert asset_service.resolve_changes(request, "falsy") == {}

    def test_falsy_mode_keeps_truthy_values(self):
        request = AssetUpdateRequest(name="Drill", quantity=4)
        assert asset_service.resolve_changes(request, "falsy") == {"name": "Drill", "quantity": 4}

    def test_falsy_mode_keeps_negative_quantity(self):
        request = AssetUpdateRequest(quantity=-2)
        assert asset_service.resolve_changes(request, "falsy") == {"quantity": -2}

    def test_presence_mode_uses_sent_keys(self):
        request = AssetUpdateRequest.model_validate({"category": None, "quantity": 0})
        assert asset_service.resolve_changes(request, "presence") == {"category": None, "quantity": 0}

    def test_presence_mode_ignores_unsent_keys(self):
        request = AssetUpdateRequest.model_validate({"quantity": 3})
        assert asset_service.resolve_changes(request, "presence") == {"quantity": 3}

    def test_presence_mode_rejects_blank_name(self):
        request = AssetUpdateRequest.model_validate({"name": "  "})
        with pytest.raises(AssetValidationError, match="Name is required"):
            asset_service.resolve_changes(request, "presence")


class TestServiceAgainstDatabase:
    def test_create_and_get(self, db):
        created = asset_service.create_asset(AssetCreateRequest(name="Drill", quantity=3))
        assert asset_service.get_asset(created["id"]) == {
            "id": created["id"], "name": "Drill", "category": None, "quantity": 3,
        }

    def test_list_is_ordered_by_id(self, db):
        ids = [asset_service.create_asset(AssetCreateRequest(name=n))["id"] for n in ("a", "b", "c")]
        assert [a["id"] for a in asset_service.list_assets()] == ids

    def test_update_checks_existence_before_writing(self, db):
        with patch("backend.asset_store.update_asset") as update:
            with pytest.raises(AssetNotFoundError):
                asset_service.update_asset(555, AssetUpdateRequest(name="x"), mode="falsy", atomic=False)
        update.assert_not_called()

    def test_update_when_row_vanishes_after_check(self, db):
        asset = asset_service.create_asset(AssetCreateRequest(name="Drill"))
        asset_service.delete_asset(asset["id"])

        # Existence check still sees the old row; the write finds nothing
        with patch("backend.asset_store.get_asset", return_value=asset):
            with pytest.raises(AssetNotFoundError):
                asset_service.update_asset(asset["id"], AssetUpdateRequest(quantity=2), mode="falsy", atomic=False)

    def test_concurrent_delete_loser_does_not_fail(self, db):
        asset = asset_service.create_asset(AssetCreateRequest(name="Drill"))
        asset_service.delete_asset(asset["id"], atomic=False)

        # Second caller observed "exists" before the first delete committed
        with patch("backend.asset_store.get_asset", return_value=asset):
            asset_service.delete_asset(asset["id"], atomic=False)

        assert asset_service.list_assets() == []

    def test_atomic_delete_reports_missing_row(self, db):
        with pytest.raises(AssetNotFoundError):
            asset_service.delete_asset(12, atomic=True)

    def test_atomic_update_and_delete_skip_existence_read(self, db):
        asset = asset_service.create_asset(AssetCreateRequest(name="Drill", quantity=3))

        with patch("backend.asset_store.get_asset") as get_asset:
            updated = asset_service.update_asset(asset["id"], AssetUpdateRequest(quantity=5), mode="falsy", atomic=True)
            asset_service.delete_asset(asset["id"], atomic=True)
            with pytest.raises(AssetNotFoundError):
                asset_service.update_asset(asset["id"], AssetUpdateRequest(), mode="falsy", atomic=True)

        get_asset.assert_not_called()
        assert updated == {**asset, "quantity": 5}
        assert asset_service.list_assets() == []

    def test_read_then_write_update_and_delete_check_existence(self, db):
        asset = asset_service.create_asset(AssetCreateRequest(name="Drill"))

        with patch("backend.asset_store.get_asset", wraps=asset_store.get_asset) as get_asset:
            asset_service.update_asset(asset["id"], AssetUpdateRequest(quantity=5), mode="falsy", atomic=False)
            asset_service.delete_asset(asset["id"], atomic=False)

        assert get_asset.call_count == 2

    def test_create_rejects_blank_name_constructed_without_validation(self, db):
        request = AssetCreateRequest.model_construct(name="", category=None, quantity=None)
        with pytest.raises(AssetValidationError, match="Name is required"):
            asset_service.create_asset(request)
        assert asset_service.list_assets() == []


class TestConfig:
    def test_database_url_is_required(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("POSTGRES_URL", raising=False)
        with pytest.raises(RuntimeError, match="DATABASE_URL"):
            config.get_database_url()

    def test_blank_database_url_is_rejected(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "   ")
        monkeypatch.delenv("POSTGRES_URL", raising=False)
        with pytest.raises(RuntimeError):
            config.get_database_url()

    def test_engine_init_fails_without_database_url(self, monkeypatch):
        from backend.db import init_engine

        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("POSTGRES_URL", raising=False)
        with pytest.raises(RuntimeError):
            init_engine()

    def test_short_postgres_scheme_is_normalised(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgres://user:pw@db.example.com:5432/assets")
        assert config.get_database_url() == "postgresql://user:pw@db.example.com:5432/assets"

    def test_postgres_url_is_used_when_database_url_is_unset(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setenv("POSTGRES_URL", "postgres://user:pw@db.example.com:5432/assets")
        assert config.get_database_url() == "postgresql://user:pw@db.example.com:5432/assets"

    def test_database_url_wins_over_postgres_url(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///assets.db")
        monkeypatch.setenv("POSTGRES_URL", "postgresql://user:pw@db.example.com/assets")
        assert config.get_database_url() == "sqlite:///assets.db"

    def test_update_mode_default_and_override(self, monkeypatch):
        monkeypatch.delenv("ASSET_UPDATE_MODE", raising=False)
        assert config.get_update_mode() == "falsy"
        monkeypatch.setenv("ASSET_UPDATE_MODE", "Presence")
        assert config.get_update_mode() == "presence"

    def test_update_mode_rejects_unknown_value(self, monkeypatch):
        monkeypatch.setenv("ASSET_UPDATE_MODE", "replace")
        with pytest.raises(ValueError):
            config.get_update_mode()

    def test_startup_fails_on_unknown_update_mode(self, database_url, monkeypatch):
        from backend import db
        from backend.main import startup

        db.dispose_engine()
        monkeypatch.setenv("ASSET_UPDATE_MODE", "replace")
        with pytest.raises(ValueError, match="ASSET_UPDATE_MODE"):
            startup()
        assert db._engine is None

    @pytest.mark.parametrize("value,expected", [("true", True), ("1", True), ("YES", True), ("false", False), ("", False)])
    def test_atomic_writes_flag(self, monkeypatch, value, expected):
        monkeypatch.setenv("ASSET_ATOMIC_WRITES", value)
        assert config.atomic_writes_enabled() is expected
