"""Tests for storage_prompt.data.store — DataStore SQLite operations."""

from __future__ import annotations

import pytest

from storage_prompt.core.models import VolumeRecord
from storage_prompt.data.store import DataStore, default_db_path


# ── Config ────────────────────────────────────────────────────────────


class TestConfig:
    """get_config / set_config and schema defaults."""

    def test_default_log_level(self, temp_db: DataStore):
        assert temp_db.get_config("log_level") == "WARNING"

    def test_default_choice(self, temp_db: DataStore):
        assert temp_db.get_config("default_choice") == "ask"

    def test_get_config_missing_key_returns_none(self, temp_db: DataStore):
        assert temp_db.get_config("nonexistent_key") is None

    def test_set_config_overwrites_existing(self, temp_db: DataStore):
        temp_db.set_config("log_level", "DEBUG")
        assert temp_db.get_config("log_level") == "DEBUG"

    def test_config_survives_reopen(self, tmp_path):
        path = str(tmp_path / "cfg.db")
        store = DataStore(db_path=path)
        store.set_config("default_choice", "browse")
        store.close()

        reopened = DataStore(db_path=path)
        assert reopened.get_config("default_choice") == "browse"
        reopened.close()


class TestDefaultPath:
    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("STORAGE_PROMPT_DB", str(tmp_path / "env.db"))
        assert default_db_path() == str(tmp_path / "env.db")

    def test_home_default(self, monkeypatch):
        monkeypatch.delenv("STORAGE_PROMPT_DB", raising=False)
        assert default_db_path().endswith("data.db")


# ── Volume records ────────────────────────────────────────────────────


class TestVolumeRecords:
    def test_get_missing_record(self, temp_db: DataStore):
        assert temp_db.get_record("ABCD-1234") is None

    def test_upsert_creates(self, temp_db: DataStore):
        record = temp_db.upsert_record("ABCD-1234", snoozed=True)
        assert record == VolumeRecord(fs_uuid="ABCD-1234", snoozed=True)
        assert temp_db.get_record("ABCD-1234") == record

    def test_upsert_keeps_unspecified_fields(self, temp_db: DataStore):
        temp_db.upsert_record("ABCD-1234", snoozed=True, nickname="Stick")
        record = temp_db.upsert_record("ABCD-1234", inited=True)
        assert record.inited is True
        assert record.snoozed is True
        assert record.nickname == "Stick"

    def test_upsert_can_clear_flag(self, temp_db: DataStore):
        temp_db.upsert_record("ABCD-1234", snoozed=True)
        temp_db.upsert_record("ABCD-1234", snoozed=False)
        assert temp_db.get_record("ABCD-1234").snoozed is False

    def test_list_records_sorted(self, temp_db: DataStore):
        temp_db.upsert_record("bbbb")
        temp_db.upsert_record("aaaa", inited=True)
        assert [r.fs_uuid for r in temp_db.list_records()] == ["aaaa", "bbbb"]

    def test_delete_record(self, temp_db: DataStore):
        temp_db.upsert_record("ABCD-1234")
        assert temp_db.delete_record("ABCD-1234") is True
        assert temp_db.get_record("ABCD-1234") is None

    def test_delete_missing_record(self, temp_db: DataStore):
        assert temp_db.delete_record("nope") is False


class TestClose:
    def test_close_idempotent(self, tmp_path):
        store = DataStore(db_path=str(tmp_path / "c.db"))
        store.close()
        store.close()

    def test_reconnects_after_close(self, tmp_path):
        store = DataStore(db_path=str(tmp_path / "c.db"))
        store.close()
        assert store.get_config("log_level") == "WARNING"
        store.close()
