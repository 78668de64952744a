import pytest

from notesync.models import ApiResponse, Note


def make_note(note_id: str, title: str = "", completed: bool = False, **extra) -> Note:
    return Note(
        id=note_id,
        title=title,
        content=extra.pop("content", title),
        completed=completed,
        **extra,
    )


class FakeApi:
    """Stands in for NotesApi: records calls, replays queued envelopes."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.list_response = ApiResponse.ok([])
        self.create_response = ApiResponse.fail("not configured")
        self.update_response = ApiResponse.fail("not configured")
        self.delete_response = ApiResponse.ok()
        self.raise_error: Exception | None = None
        self.update_echo = False  # Reply to updates with the payload applied
        self.echo_source: dict[str, Note] = {}

    def _maybe_raise(self):
        if self.raise_error is not None:
            raise self.raise_error

    async def get_all_notes(self):
        self.calls.append(("list",))
        self._maybe_raise()
        return self.list_response

    async def create_note(self, note_data):
        self.calls.append(("create", note_data))
        self._maybe_raise()
        return self.create_response

    async def update_note(self, note_id, note_data):
        self.calls.append(("update", note_id, note_data))
        self._maybe_raise()
        if self.update_echo:
            payload = note_data if isinstance(note_data, dict) else note_data.to_payload()
            current = self.echo_source[note_id]
            updated = current.model_copy(update=payload)
            self.echo_source[note_id] = updated
            return ApiResponse.ok(updated)
        return self.update_response

    async def delete_note(self, note_id):
        self.calls.append(("delete", note_id))
        self._maybe_raise()
        return self.delete_response


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep tests away from the real config file and environment."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("NO_COLOR", "1")
    for name in ("NOTESYNC_API_URL", "NOTESYNC_TIMEOUT", "NOTESYNC_DEBUG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def alerts():
    return []


@pytest.fixture
def store(fake_api, alerts):
    from notesync.store import NoteStore

    return NoteStore(api=fake_api, alert=lambda title, message: alerts.append((title, message)))
