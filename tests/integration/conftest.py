"""
Integration Test Fixtures.

Fixtures for integration tests - uses real databases and services.
These fixtures build on the root conftest.py database fixtures.
"""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest


# =============================================================================
# CLI Fixtures
# =============================================================================


@pytest.fixture
def cli_database(tmp_path: Path) -> Generator[Path, None, None]:
    """
    Point the CLI at a temporary SQLite file.

    Each CLI command runs its own event loop and disposes of the engine
    when it finishes, so the in-memory test engine cannot be shared.
    Logging setup is skipped to keep the project's log file untouched.

    Usage:
        def test_add(cli_database: Path):
            result = runner.invoke(app, ["notes", "add", "Groceries"])
    """
    db_path = tmp_path / "data" / "notes.db"
    url = f"sqlite+aiosqlite:///{db_path}"

    with patch("keepnotes.backend.core.config.get_database_url", return_value=url), \
         patch("keepnotes.cli.commands.db.get_database_url", return_value=url), \
         patch("cli.setup_logging"):
        yield db_path
