"""Unit tests for CLI session helpers."""

from unittest.mock import AsyncMock, patch

import pytest
import typer
from sqlalchemy.exc import OperationalError

from keepnotes.backend.core.exceptions import StoreReadError, StoreWriteError
from keepnotes.backend.services.note_state import NoteState
from keepnotes.cli.state import NoteLookupError, resolve_note, run_with_state


@pytest.fixture
def state(mock_note_service, make_note):
    state = NoteState(mock_note_service)
    state.notes = [
        make_note("3f2a0000-aaaa"),
        make_note("3f2b0000-bbbb"),
        make_note("9c1d0000-cccc"),
    ]
    return state


class TestResolveNote:
    """Tests for finding notes by id or prefix."""

    def test_full_id(self, state):
        assert resolve_note(state, "3f2a0000-aaaa").id == "3f2a0000-aaaa"

    def test_unique_prefix(self, state):
        assert resolve_note(state, "9c").id == "9c1d0000-cccc"

    def test_ambiguous_prefix(self, state):
        with pytest.raises(NoteLookupError, match="matches 2 notes"):
            resolve_note(state, "3f")

    def test_no_match(self, state):
        with pytest.raises(NoteLookupError, match="No note matches"):
            resolve_note(state, "zz")


class TestRunWithState:
    """Tests for error reporting around a command action."""

    def test_runs_action(self):
        action = AsyncMock()

        with patch("keepnotes.cli.state._run", AsyncMock()) as mock_run:
            run_with_state(action)

        mock_run.assert_awaited_once_with(action)

    @pytest.mark.parametrize(
        "error",
        [
            StoreWriteError("Failed to archive note"),
            StoreReadError("Failed to fetch notes"),
            NoteLookupError("No note matches 'zz'"),
        ],
    )
    def test_known_errors_exit_with_message(self, error, capsys):
        with patch("keepnotes.cli.state._run", AsyncMock(side_effect=error)):
            with pytest.raises(typer.Exit) as exc_info:
                run_with_state(AsyncMock())

        assert exc_info.value.exit_code == 1
        assert str(error) in capsys.readouterr().out

    def test_unreachable_store_exits(self, capsys):
        failure = OperationalError("connect", {}, Exception("unable to open database file"))

        with patch("keepnotes.cli.state._run", AsyncMock(side_effect=failure)):
            with pytest.raises(typer.Exit):
                run_with_state(AsyncMock())

        assert "Cannot open the note store" in capsys.readouterr().out
