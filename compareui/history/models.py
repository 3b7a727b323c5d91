"""Data models for prompt history.

A PromptRecord is the audit entry written after a successful generation:
what was asked, what the engine started from and what it produced.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4


@dataclass
class PromptRecord:
    """One successful generation, persisted for audit.

    Attributes:
        intent: The caller's natural language request.
        kind: Artifact kind that was generated.
        response_config: Accepted value (config dict or provider code map).
        current_config: State the request started from.
        attempts: Attempts the generation needed.
        model: Backend identifier ('provider:model').
        id: Unique identifier.
        created_at: Creation timestamp (UTC).
    """

    intent: str
    kind: str
    response_config: Any
    current_config: Any = None
    attempts: int = 1
    model: str = ""
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "id": self.id,
            "intent": self.intent,
            "kind": self.kind,
            "responseConfig": self.response_config,
            "currentConfig": self.current_config,
            "attempts": self.attempts,
            "model": self.model,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass
class StorageConfig:
    """Configuration for history storage.

    Attributes:
        max_records: Records kept; the oldest are pruned past this count.
    """

    max_records: int = 10000


@dataclass
class StorageStats:
    """Statistics about stored history.

    Attributes:
        record_count: Number of stored records.
        by_kind: Record count per artifact kind.
        oldest: Timestamp of the oldest record, if any.
    """

    record_count: int = 0
    by_kind: dict[str, int] = field(default_factory=dict)
    oldest: datetime | None = None


__all__ = ["PromptRecord", "StorageConfig", "StorageStats"]
