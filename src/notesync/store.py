"""
Note synchronization store.

The only mutator of local note state. Every change is a server round trip
first; local state follows the server's answer:

- load: replace the whole list
- create: prepend the returned note
- update: replace the matching note in place
- delete: drop the matching note (absent id is a no-op)
- toggle: update with `completed` flipped, only if the note is known locally

Concurrency caveat: operations share `notes`, `loading` and `error` with no
lock or queue. On one event loop, concurrent calls each write their own
outcome when they finish; the last to finish wins for `loading` and `error`,
and list changes land in completion order. Fine for one interactive user,
not for a multi-writer server.
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from notesync.api import NotesApi
from notesync.models import CreateNoteRequest, Note, UpdateNoteRequest
from notesync.notify import show_alert

logger = logging.getLogger(__name__)

AlertCallback = Callable[[str, str], None]

UNKNOWN_ERROR = "Unknown error occurred"


def _exception_message(e: Exception) -> str:
    return str(e) or UNKNOWN_ERROR


class NoteStore:
    """Local notes mirror with shared loading/error state."""

    def __init__(self, api: NotesApi | None = None, alert: AlertCallback | None = None):
        self.api = api or NotesApi()
        self.alert = alert or show_alert

        self.notes: list[Note] = []
        self.loading = False
        self.error: str | None = None
        self.last_sync: datetime | None = None

        self._activated = False

    # -- Presentation helpers ----------------------------------------------

    @property
    def is_connected(self) -> bool:
        return self.error is None

    def get_note(self, note_id: str) -> Note | None:
        """Find a note in local state by id."""
        return next((note for note in self.notes if note.id == note_id), None)

    def stats(self) -> tuple[int, int]:
        """Return (completed, total)."""
        completed = sum(1 for note in self.notes if note.completed)
        return completed, len(self.notes)

    # -- Lifecycle ---------------------------------------------------------

    async def activate(self) -> None:
        """Perform the initial load. Later calls do nothing."""
        if self._activated:
            return
        self._activated = True
        await self._load_notes()

    def _begin(self) -> None:
        self.loading = True
        self.error = None

    def _fail(self, message: str, notify: bool = True) -> bool:
        self.error = message
        if notify:
            self.alert("Error", message)
        return False

    # -- Operations --------------------------------------------------------

    async def _load_notes(self) -> None:
        self._begin()
        try:
            response = await self.api.get_all_notes()

            if response.success and response.data is not None:
                self.notes = list(response.data)
                self.last_sync = datetime.now(timezone.utc)
            else:
                self.error = response.error or "Failed to load notes"
        except Exception as e:
            self.error = _exception_message(e)
            logger.error("Error loading notes: %s", self.error)
        finally:
            self.loading = False

    async def refresh_notes(self) -> None:
        """Reload the full list from the server."""
        await self._load_notes()

    async def add_note(self, note_data: CreateNoteRequest | dict) -> bool:
        """Create a note; on success it goes to the front of the list."""
        self._begin()
        try:
            response = await self.api.create_note(note_data)

            if response.success and response.data is not None:
                self.notes = [response.data, *self.notes]
                return True
            return self._fail(response.error or "Failed to create note")
        except Exception as e:
            return self._fail(_exception_message(e))
        finally:
            self.loading = False

    async def update_note(self, note_id: str, note_data: UpdateNoteRequest | dict) -> bool:
        """Update a note; the server's copy replaces the local one in place."""
        self._begin()
        try:
            response = await self.api.update_note(note_id, note_data)

            if response.success and response.data is not None:
                updated = response.data
                self.notes = [updated if note.id == note_id else note for note in self.notes]
                return True
            return self._fail(response.error or "Failed to update note")
        except Exception as e:
            return self._fail(_exception_message(e))
        finally:
            self.loading = False

    async def delete_note(self, note_id: str) -> bool:
        """Delete a note on the server, then locally."""
        self._begin()
        try:
            response = await self.api.delete_note(note_id)

            if response.success:
                self.notes = [note for note in self.notes if note.id != note_id]
                return True
            return self._fail(response.error or "Failed to delete note")
        except Exception as e:
            return self._fail(_exception_message(e))
        finally:
            self.loading = False

    async def toggle_note(self, note_id: str) -> bool:
        """Flip `completed`. Unknown ids fail without a request."""
        note = self.get_note(note_id)
        if note is None:
            return False

        return await self.update_note(note_id, UpdateNoteRequest(completed=not note.completed))
