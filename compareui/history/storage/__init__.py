"""Storage backends for prompt history.

Available backends:
- SQLiteStorage: File-based SQLite database
"""

from .protocol import HistoryStorage
from .sqlite import SQLiteStorage

__all__ = [
    "HistoryStorage",
    "SQLiteStorage",
]
