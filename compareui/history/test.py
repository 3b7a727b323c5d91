"""Tests for prompt history.

Tests cover:
- PromptRecord serialization
- HistoryManager operations against SQLite
- Pruning
- AuditRecorder fire-and-forget behaviour
"""

from datetime import UTC, datetime, timedelta

import pytest

from .lib import AuditRecorder, HistoryManager, get_history_manager, close_history_manager
from .models import PromptRecord, StorageConfig
from .storage import SQLiteStorage

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def manager(tmp_path):
    """HistoryManager backed by a temporary database."""
    mgr = HistoryManager(db_path=tmp_path / "history.db")
    yield mgr
    mgr.close()


def _button(variant: str) -> dict:
    return {"label": "Save", "variant": variant, "size": "medium"}


# =============================================================================
# Models
# =============================================================================


class TestModels:
    """Tests for data models."""

    @pytest.mark.unit
    def test_record_defaults(self):
        record = PromptRecord(intent="x", kind="button", response_config={})
        assert record.id
        assert record.attempts == 1
        assert record.created_at.tzinfo is UTC

    @pytest.mark.unit
    def test_to_dict(self):
        record = PromptRecord(
            intent="outlined", kind="button", response_config=_button("outlined")
        )
        data = record.to_dict()
        assert data["responseConfig"] == _button("outlined")
        assert data["currentConfig"] is None
        assert data["createdAt"] == record.created_at.isoformat()


# =============================================================================
# HistoryManager
# =============================================================================


class TestHistoryManager:
    """Tests for HistoryManager CRUD against SQLite."""

    @pytest.mark.unit
    def test_creates_database_file(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "history.db"
        mgr = HistoryManager(db_path=db_path)
        try:
            assert db_path.exists()
        finally:
            mgr.close()

    @pytest.mark.unit
    def test_db_path_from_environment(self, tmp_path, monkeypatch):
        db_path = tmp_path / "env.db"
        monkeypatch.setenv("COMPAREUI_HISTORY_DB", str(db_path))
        mgr = HistoryManager()
        try:
            assert db_path.exists()
        finally:
            mgr.close()

    @pytest.mark.unit
    def test_record_round_trip(self, manager):
        record = manager.record_prompt(
            intent="make it outlined",
            kind="button",
            response_config=_button("outlined"),
            current_config=_button("contained"),
            attempts=2,
            model="mock:mock-model-v1",
        )

        loaded = manager.get_record(record.id)
        assert loaded == record

    @pytest.mark.unit
    def test_missing_record(self, manager):
        assert manager.get_record("nope") is None
        assert manager.delete_record("nope") is False

    @pytest.mark.unit
    def test_list_newest_first_and_filter(self, manager):
        first = manager.record_prompt("a", "button", _button("text"))
        second = manager.record_prompt("b", "progress", {"value": 1})
        third = manager.record_prompt("c", "button", _button("outlined"))

        assert [r.id for r in manager.list_records()] == [third.id, second.id, first.id]
        assert [r.id for r in manager.list_records(kind="button")] == [third.id, first.id]
        assert [r.id for r in manager.list_records(limit=1, offset=1)] == [second.id]

    @pytest.mark.unit
    def test_playground_code_map(self, manager):
        code = {"mui": "export default () => null", "chakra": "export default () => null"}
        record = manager.record_prompt("x", "playground", code, current_config=None)
        assert manager.get_record(record.id).response_config == code

    @pytest.mark.unit
    def test_stats(self, manager):
        manager.record_prompt("a", "button", _button("text"))
        manager.record_prompt("b", "button", _button("text"))
        manager.record_prompt("c", "tabs", {"tabs": []})

        stats = manager.get_stats()
        assert stats.record_count == 3
        assert stats.by_kind == {"button": 2, "tabs": 1}
        assert stats.oldest is not None

    @pytest.mark.unit
    def test_delete(self, manager):
        record = manager.record_prompt("a", "button", _button("text"))
        assert manager.delete_record(record.id) is True
        assert manager.list_records() == []


class TestCleanup:
    """Tests for pruning old records."""

    @pytest.mark.unit
    def test_prune_keeps_newest(self):
        storage = SQLiteStorage(":memory:")
        mgr = HistoryManager(storage=storage, config=StorageConfig(max_records=2))
        base = datetime(2026, 1, 1, tzinfo=UTC)
        for offset in range(4):
            storage.store_record(
                PromptRecord(
                    intent=f"r{offset}",
                    kind="button",
                    response_config={},
                    created_at=base + timedelta(minutes=offset),
                )
            )

        assert mgr.cleanup() == 2
        assert [r.intent for r in mgr.list_records()] == ["r3", "r2"]
        mgr.close()


# =============================================================================
# AuditRecorder
# =============================================================================


class TestAuditRecorder:
    """Tests for background persistence."""

    @pytest.mark.unit
    def test_records_in_background(self, manager):
        recorder = AuditRecorder(lambda: manager)
        future = recorder.record("x", "button", _button("text"), attempts=3)
        recorder.shutdown()

        stored = future.result()
        assert stored.attempts == 3
        assert manager.get_record(stored.id) == stored

    @pytest.mark.unit
    def test_failures_are_swallowed(self, caplog):
        def broken() -> HistoryManager:
            raise OSError("disk full")

        recorder = AuditRecorder(broken)
        future = recorder.record("x", "button", {})
        recorder.shutdown()

        assert future.result() is None
        assert "disk full" in caplog.text

    @pytest.mark.unit
    def test_global_manager_singleton(self, tmp_path, monkeypatch):
        monkeypatch.setenv("COMPAREUI_HISTORY_DB", str(tmp_path / "g.db"))
        try:
            assert get_history_manager() is get_history_manager()
        finally:
            close_history_manager()
