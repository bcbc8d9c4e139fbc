"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from keepnotes.backend.schemas.note import Note
from keepnotes.backend.services.note import NoteService

BASE_TIME = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


# =============================================================================
# Note Fixtures
# =============================================================================


@pytest.fixture
def make_note() -> Callable[..., Note]:
    """
    Factory for Note projections with sensible defaults.

    Usage:
        def test_something(make_note):
            note = make_note("n1", title="Groceries", is_pinned=True)
    """
    def _make(note_id: str, **fields: Any) -> Note:
        fields.setdefault("created_at", BASE_TIME)
        fields.setdefault("updated_at", fields["created_at"])
        return Note(id=note_id, **fields)

    return _make


@pytest.fixture
def later() -> Callable[[int], datetime]:
    """Timestamps a given number of minutes after the base time."""
    return lambda minutes: BASE_TIME + timedelta(minutes=minutes)


# =============================================================================
# Service Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_note_service() -> AsyncMock:
    """
    Mock NoteService for NoteState tests.

    Usage:
        async def test_archive(mock_note_service):
            mock_note_service.archive_note.return_value = archived_note
            state = NoteState(mock_note_service)
    """
    return AsyncMock(spec=NoteService)


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_session_factory() -> MagicMock:
    """
    Mock async_sessionmaker whose sessions and transactions are no-ops.

    Usage:
        def test_service(mock_session_factory):
            service = NoteService(mock_session_factory)
            # Patch NoteRepository methods to control results
    """
    session = MagicMock()
    transaction = MagicMock()
    transaction.__aenter__ = AsyncMock(return_value=transaction)
    transaction.__aexit__ = AsyncMock(return_value=False)
    session.begin = MagicMock(return_value=transaction)
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=False)

    factory = MagicMock(return_value=session)
    factory.session = session
    return factory


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.logger", mock_logger):
                # Test code that logs
                mock_logger.info.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
