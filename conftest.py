"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Isolation of the history database from the working directory
"""

from __future__ import annotations

import pytest
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


@pytest.fixture(autouse=True)
def isolated_history_db(monkeypatch, tmp_path_factory):
    """Keep tests from writing to ./data/history.

    Tests that need a specific path set COMPAREUI_HISTORY_DB themselves.
    """
    db_dir = tmp_path_factory.mktemp("history")
    monkeypatch.setenv("COMPAREUI_HISTORY_DB", str(db_dir / "prompts.db"))
