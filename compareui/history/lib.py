"""History Manager for compareui.

Persists an audit trail of successful generations. Writing history is
never on the caller's critical path: AuditRecorder hands records to a
single background worker and logs, rather than raises, any failure.
"""

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any

from compareui.config import get_history_db_path

from .models import PromptRecord, StorageConfig, StorageStats
from .storage import SQLiteStorage
from .storage.protocol import HistoryStorage

logger = logging.getLogger(__name__)


class HistoryManager:
    """Manager for prompt history.

    Example:
        >>> manager = HistoryManager(db_path=":memory:")
        >>> record = manager.record_prompt(
        ...     intent="make it outlined",
        ...     kind="button",
        ...     response_config={"label": "Save", "variant": "outlined", "size": "medium"},
        ...     current_config={"label": "Save", "variant": "contained", "size": "medium"},
        ... )
        >>> manager.list_records(kind="button")[0].id == record.id
        True

    Args:
        storage: Storage backend to use. If None, creates SQLiteStorage.
        config: Storage configuration. If None, uses defaults.
        db_path: Path to database file (only used if storage is None).
            Defaults to COMPAREUI_HISTORY_DB.
        auto_cleanup: Whether to prune old records on initialization.
    """

    def __init__(
        self,
        storage: HistoryStorage | None = None,
        config: StorageConfig | None = None,
        db_path: Path | str | None = None,
        auto_cleanup: bool = True,
    ):
        self._config = config or StorageConfig()

        if storage:
            self._storage = storage
        elif db_path == ":memory:":
            self._storage = SQLiteStorage(":memory:")
        else:
            self._storage = SQLiteStorage(get_history_db_path(db_path))

        self._storage.initialize()

        if auto_cleanup:
            self.cleanup()

    @property
    def config(self) -> StorageConfig:
        """Get storage configuration."""
        return self._config

    def close(self) -> None:
        """Close storage connections."""
        self._storage.close()

    def record_prompt(
        self,
        intent: str,
        kind: str,
        response_config: Any,
        current_config: Any = None,
        attempts: int = 1,
        model: str = "",
    ) -> PromptRecord:
        """Store one successful generation."""
        record = PromptRecord(
            intent=intent,
            kind=kind,
            response_config=response_config,
            current_config=current_config,
            attempts=attempts,
            model=model,
        )
        self._storage.store_record(record)
        logger.debug(f"Stored history record {record.id} ({kind})")
        return record

    def get_record(self, record_id: str) -> PromptRecord | None:
        return self._storage.get_record(record_id)

    def list_records(
        self,
        kind: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[PromptRecord]:
        """List records, newest first."""
        return self._storage.list_records(kind=kind, limit=limit, offset=offset)

    def delete_record(self, record_id: str) -> bool:
        return self._storage.delete_record(record_id)

    def get_stats(self) -> StorageStats:
        return self._storage.get_stats()

    def cleanup(self) -> int:
        """Prune records beyond the configured maximum.

        Returns:
            Number of records removed.
        """
        return self._storage.prune(self._config.max_records)


class AuditRecorder:
    """Fire-and-forget writer of history records.

    Records are written by a single worker thread in submission order.
    Failures, including failure to open the database, are logged and
    swallowed so the caller's response is never affected.

    Args:
        manager_factory: Returns the HistoryManager to write to. Called
            lazily on the worker thread for the first record.
    """

    def __init__(self, manager_factory: Callable[[], HistoryManager] | None = None):
        self._manager_factory = manager_factory or get_history_manager
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="compareui-audit")

    def record(
        self,
        intent: str,
        kind: str,
        response_config: Any,
        current_config: Any = None,
        attempts: int = 1,
        model: str = "",
    ) -> Future:
        """Queue a record for writing and return immediately.

        Returns:
            Future resolving to the stored PromptRecord, or None on failure.
        """
        return self._executor.submit(
            self._write,
            intent=intent,
            kind=kind,
            response_config=response_config,
            current_config=current_config,
            attempts=attempts,
            model=model,
        )

    def _write(self, **fields: Any) -> PromptRecord | None:
        try:
            return self._manager_factory().record_prompt(**fields)
        except Exception as e:
            logger.warning(f"Failed to persist history record: {e}")
            return None

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker, optionally waiting for queued records."""
        self._executor.shutdown(wait=wait)


# Global instances for convenience
_global_manager: HistoryManager | None = None
_global_recorder: AuditRecorder | None = None


def get_history_manager(
    db_path: Path | str | None = None,
    config: StorageConfig | None = None,
) -> HistoryManager:
    """Get or create the global history manager.

    Args:
        db_path: Database path (only used on first call).
        config: Storage config (only used on first call).
    """
    global _global_manager
    if _global_manager is None:
        _global_manager = HistoryManager(db_path=db_path, config=config)
    return _global_manager


def get_audit_recorder() -> AuditRecorder:
    """Get or create the global audit recorder."""
    global _global_recorder
    if _global_recorder is None:
        _global_recorder = AuditRecorder()
    return _global_recorder


def close_history_manager() -> None:
    """Flush queued records, then close and clear the global instances."""
    global _global_manager, _global_recorder
    if _global_recorder:
        _global_recorder.shutdown(wait=True)
        _global_recorder = None
    if _global_manager:
        _global_manager.close()
        _global_manager = None


__all__ = [
    "HistoryManager",
    "AuditRecorder",
    "get_history_manager",
    "get_audit_recorder",
    "close_history_manager",
]
