"""Storage protocol for prompt history."""

from typing import Protocol

from ..models import PromptRecord, StorageStats


class HistoryStorage(Protocol):
    """Interface a history storage backend must implement."""

    def initialize(self) -> None:
        """Create tables and indexes."""
        ...

    def close(self) -> None:
        """Release connections."""
        ...

    def store_record(self, record: PromptRecord) -> PromptRecord:
        """Persist a record and return it."""
        ...

    def get_record(self, record_id: str) -> PromptRecord | None:
        """Get a record by ID, or None."""
        ...

    def list_records(
        self,
        kind: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[PromptRecord]:
        """List records, newest first."""
        ...

    def delete_record(self, record_id: str) -> bool:
        """Delete a record. Returns True if it existed."""
        ...

    def prune(self, max_records: int) -> int:
        """Delete the oldest records beyond `max_records`. Returns the count removed."""
        ...

    def get_stats(self) -> StorageStats:
        """Summarize stored records."""
        ...


__all__ = ["HistoryStorage"]
