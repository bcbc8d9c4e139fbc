"""
Unit Tests for Note State.

Tests local patching, error recording, and local views with a mocked NoteService.
"""

import pytest

from keepnotes.backend.core.exceptions import StoreReadError, StoreWriteError
from keepnotes.backend.schemas.note import (
    NoteColor,
    NoteCreate,
    NoteStatus,
    NoteUpdate,
)
from keepnotes.backend.services.note_state import NoteState


@pytest.fixture
def state(mock_note_service):
    """NoteState over a mocked service."""
    return NoteState(mock_note_service)


@pytest.fixture
def loaded_state(state, make_note, later):
    """NoteState holding three notes, newest first."""
    state.notes = [
        make_note("c", title="Meeting", content="agenda", created_at=later(20)),
        make_note("b", title="Groceries", content="milk, eggs", is_pinned=True, created_at=later(10)),
        make_note("a", title="Ideas", content="meeting notes", is_deleted=True),
    ]
    return state


class TestRefresh:
    """Tests for loading the note list."""

    @pytest.mark.asyncio
    async def test_refresh_replaces_notes(self, state, mock_note_service, make_note):
        mock_note_service.list_notes.return_value = [make_note("x"), make_note("y")]

        await state.refresh()

        assert [note.id for note in state.notes] == ["x", "y"]
        assert state.loading is False
        assert state.error is None

    @pytest.mark.asyncio
    async def test_refresh_failure_keeps_stale_list(self, loaded_state, mock_note_service):
        """A failed refresh sets error and leaves the previous list in place."""
        before = list(loaded_state.notes)
        mock_note_service.list_notes.side_effect = StoreReadError("Failed to fetch notes")

        await loaded_state.refresh()

        assert loaded_state.notes == before
        assert loaded_state.error == "Failed to fetch notes"
        assert loaded_state.loading is False

    @pytest.mark.asyncio
    async def test_refresh_sets_loading_while_fetching(self, state, mock_note_service):
        seen = []

        async def fetch():
            seen.append(state.loading)
            return []

        mock_note_service.list_notes.side_effect = fetch

        await state.refresh()

        assert seen == [True]
        assert state.loading is False

    @pytest.mark.asyncio
    async def test_successful_refresh_clears_error(self, state, mock_note_service):
        state.error = "Failed to archive note"
        mock_note_service.list_notes.return_value = []

        await state.refresh()

        assert state.error is None

    def test_get(self, loaded_state):
        assert loaded_state.get("b").title == "Groceries"
        assert loaded_state.get("missing") is None


class TestCreate:
    """Tests for creating notes."""

    @pytest.mark.asyncio
    async def test_create_prepends(self, loaded_state, mock_note_service, make_note, later):
        created = make_note("d", title="New", created_at=later(30))
        mock_note_service.create_note.return_value = created

        result = await loaded_state.create(NoteCreate(title="New"))

        assert result is created
        assert [note.id for note in loaded_state.notes] == ["d", "c", "b", "a"]

    @pytest.mark.asyncio
    async def test_create_failure_leaves_list(self, loaded_state, mock_note_service):
        before = list(loaded_state.notes)
        mock_note_service.create_note.side_effect = StoreWriteError("Failed to create note")

        with pytest.raises(StoreWriteError):
            await loaded_state.create(NoteCreate(title="New"))

        assert loaded_state.notes == before
        assert loaded_state.error == "Failed to create note"


class TestMutations:
    """Tests for mirroring confirmed changes."""

    @pytest.mark.asyncio
    async def test_update_replaces_in_place(self, loaded_state, mock_note_service, make_note):
        updated = make_note("b", title="Shopping", is_pinned=True)
        mock_note_service.update_note.return_value = updated

        await loaded_state.update("b", NoteUpdate(title="Shopping"))

        assert [note.id for note in loaded_state.notes] == ["c", "b", "a"]
        assert loaded_state.notes[1] is updated

    @pytest.mark.asyncio
    async def test_local_copy_is_the_confirmed_note(self, loaded_state, mock_note_service, make_note, later):
        """The local entry carries the store's updated_at, not a guessed one."""
        confirmed = make_note("c", title="Meeting", is_archived=True, updated_at=later(45))
        mock_note_service.archive_note.return_value = confirmed

        await loaded_state.archive("c")

        assert loaded_state.get("c").updated_at == later(45)
        assert loaded_state.get("c").status is NoteStatus.ARCHIVED

    @pytest.mark.parametrize(
        ("state_method", "service_method", "args"),
        [
            ("change_color", "change_color", (NoteColor.PINK,)),
            ("archive", "archive_note", ()),
            ("unarchive", "unarchive_note", ()),
            ("soft_delete", "soft_delete_note", ()),
            ("restore", "restore_note", ()),
            ("add_label", "add_label", ("work",)),
            ("remove_label", "remove_label", ("work",)),
            ("remove_reminder", "remove_reminder", ()),
        ],
    )
    @pytest.mark.asyncio
    async def test_mutation_delegates_and_replaces(
        self, loaded_state, mock_note_service, make_note, state_method, service_method, args
    ):
        confirmed = make_note("c", title="confirmed")
        getattr(mock_note_service, service_method).return_value = confirmed

        result = await getattr(loaded_state, state_method)("c", *args)

        getattr(mock_note_service, service_method).assert_awaited_once_with("c", *args)
        assert result is confirmed
        assert loaded_state.get("c") is confirmed

    @pytest.mark.asyncio
    async def test_failed_mutation_sets_error_and_raises(self, loaded_state, mock_note_service):
        before = list(loaded_state.notes)
        mock_note_service.archive_note.side_effect = StoreWriteError("Failed to archive note")

        with pytest.raises(StoreWriteError):
            await loaded_state.archive("c")

        assert loaded_state.error == "Failed to archive note"
        assert loaded_state.notes == before

    @pytest.mark.asyncio
    async def test_next_operation_clears_error(self, loaded_state, mock_note_service, make_note):
        loaded_state.error = "Failed to archive note"
        mock_note_service.restore_note.return_value = make_note("a")

        await loaded_state.restore("a")

        assert loaded_state.error is None

    @pytest.mark.asyncio
    async def test_unknown_confirmed_note_is_not_added(self, loaded_state, mock_note_service, make_note):
        """A note missing from the local list stays missing until refresh."""
        mock_note_service.archive_note.return_value = make_note("elsewhere")

        await loaded_state.archive("elsewhere")

        assert loaded_state.get("elsewhere") is None


class TestTogglePin:
    """Tests for flipping the pin."""

    @pytest.mark.asyncio
    async def test_flips_local_value(self, loaded_state, mock_note_service, make_note):
        mock_note_service.toggle_pin.return_value = make_note("b", is_pinned=False)

        result = await loaded_state.toggle_pin("b")

        mock_note_service.toggle_pin.assert_awaited_once_with("b", False)
        assert result.is_pinned is False

    @pytest.mark.asyncio
    async def test_unknown_note_is_ignored(self, loaded_state, mock_note_service):
        assert await loaded_state.toggle_pin("missing") is None
        mock_note_service.toggle_pin.assert_not_awaited()


class TestReminders:
    """Tests for setting reminders."""

    @pytest.mark.asyncio
    async def test_set_reminder(self, loaded_state, mock_note_service, make_note, later):
        when = later(60 * 24)
        mock_note_service.set_reminder.return_value = make_note("c", reminder_date=when)

        result = await loaded_state.set_reminder("c", when)

        mock_note_service.set_reminder.assert_awaited_once_with("c", when)
        assert loaded_state.get("c").reminder_date == when
        assert result.has_reminder


class TestDeletion:
    """Tests for removing notes."""

    @pytest.mark.asyncio
    async def test_delete_removes(self, loaded_state, mock_note_service):
        await loaded_state.delete("b")

        mock_note_service.delete_note.assert_awaited_once_with("b")
        assert loaded_state.get("b") is None

    @pytest.mark.asyncio
    async def test_permanent_delete_removes(self, loaded_state, mock_note_service):
        await loaded_state.permanent_delete("a")

        mock_note_service.permanent_delete_note.assert_awaited_once_with("a")
        assert [note.id for note in loaded_state.notes] == ["c", "b"]

    @pytest.mark.asyncio
    async def test_failed_delete_keeps_note(self, loaded_state, mock_note_service):
        mock_note_service.delete_note.side_effect = StoreWriteError("Failed to delete note")

        with pytest.raises(StoreWriteError):
            await loaded_state.delete("b")

        assert loaded_state.get("b") is not None

    @pytest.mark.asyncio
    async def test_empty_trash(self, loaded_state, mock_note_service):
        count = await loaded_state.empty_trash()

        assert count == 1
        mock_note_service.permanent_delete_note.assert_awaited_once_with("a")
        assert all(not note.is_deleted for note in loaded_state.notes)

    @pytest.mark.asyncio
    async def test_empty_trash_when_empty(self, state, mock_note_service):
        assert await state.empty_trash() == 0
        mock_note_service.permanent_delete_note.assert_not_awaited()


class TestLabels:
    """Tests for label edits across notes."""

    @pytest.mark.asyncio
    async def test_rename_label_replaces_changed(self, loaded_state, mock_note_service, make_note):
        changed = [make_note("c", labels=["job"]), make_note("b", labels=["job"])]
        mock_note_service.rename_label.return_value = changed

        result = await loaded_state.rename_label("work", "job")

        assert result == changed
        assert loaded_state.get("c").labels == ["job"]
        assert loaded_state.get("b").labels == ["job"]
        assert loaded_state.get("a").labels == []

    @pytest.mark.asyncio
    async def test_delete_label_replaces_changed(self, loaded_state, mock_note_service, make_note):
        mock_note_service.delete_label.return_value = [make_note("c", title="Meeting")]

        await loaded_state.delete_label("work")

        mock_note_service.delete_label.assert_awaited_once_with("work")
        assert loaded_state.get("c").content == ""


class TestSearch:
    """Tests for the local search view."""

    def test_blank_query_returns_everything(self, loaded_state):
        assert loaded_state.search_notes("") == loaded_state.notes
        assert loaded_state.search_notes("   ") == loaded_state.notes

    def test_blank_query_returns_a_copy(self, loaded_state):
        result = loaded_state.search_notes("")
        result.clear()

        assert len(loaded_state.notes) == 3

    def test_matches_title_or_content_case_insensitively(self, loaded_state):
        result = loaded_state.search_notes("MEETING")

        assert [note.id for note in result] == ["c", "a"]

    def test_no_match(self, loaded_state):
        assert loaded_state.search_notes("zebra") == []

    def test_search_makes_no_remote_call(self, loaded_state, mock_note_service):
        loaded_state.search_notes("milk")

        assert mock_note_service.method_calls == []


class TestPartitionPinned:
    """Tests for splitting pinned notes from the rest."""

    def test_partitions_local_list(self, loaded_state):
        pinned, others = loaded_state.partition_pinned()

        assert [note.id for note in pinned] == ["b"]
        assert [note.id for note in others] == ["c", "a"]

    def test_partitions_given_notes(self, loaded_state):
        pinned, others = loaded_state.partition_pinned(loaded_state.search_notes("meeting"))

        assert pinned == []
        assert [note.id for note in others] == ["c", "a"]


class TestPassThroughQueries:
    """Tests for views fetched from the store."""

    @pytest.mark.asyncio
    async def test_get_notes_by_status_bypasses_local_list(self, loaded_state, mock_note_service, make_note):
        remote = [make_note("r", is_archived=True)]
        mock_note_service.get_notes_by_status.return_value = remote

        result = await loaded_state.get_notes_by_status(NoteStatus.ARCHIVED)

        assert result == remote
        assert loaded_state.get("r") is None

    @pytest.mark.asyncio
    async def test_get_notes_with_reminders(self, loaded_state, mock_note_service):
        mock_note_service.get_notes_with_reminders.return_value = []

        assert await loaded_state.get_notes_with_reminders() == []

    @pytest.mark.asyncio
    async def test_get_all_labels_failure(self, loaded_state, mock_note_service):
        mock_note_service.get_all_labels.side_effect = StoreReadError("Failed to fetch labels")

        with pytest.raises(StoreReadError):
            await loaded_state.get_all_labels()

        assert loaded_state.error == "Failed to fetch labels"
