"""Prompt history for compareui.

Keeps an audit trail of successful generations in SQLite: the intent, the
kind, the state the request started from and the accepted result.

Example:
    >>> from compareui.history import get_audit_recorder
    >>> get_audit_recorder().record(
    ...     intent="make the bar green",
    ...     kind="progress",
    ...     response_config={"value": 10, "styles": {"indicatorColor": "#00FF00"}},
    ...     current_config={"value": 10},
    ... )
"""

from .lib import (
    AuditRecorder,
    HistoryManager,
    close_history_manager,
    get_audit_recorder,
    get_history_manager,
)
from .models import PromptRecord, StorageConfig, StorageStats

__all__ = [
    # Manager
    "HistoryManager",
    "AuditRecorder",
    "get_history_manager",
    "get_audit_recorder",
    "close_history_manager",
    # Models
    "PromptRecord",
    "StorageConfig",
    "StorageStats",
]
