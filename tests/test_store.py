"""Tests for NoteStore reconciliation and the loading/error state machine."""
import asyncio

from conftest import make_note
from notesync.models import ApiResponse, CreateNoteRequest, Note, UpdateNoteRequest


# =============================================================================
# Load / refresh
# =============================================================================


async def test_activate_loads_once(store, fake_api):
    fake_api.list_response = ApiResponse.ok([make_note("1", "Milk")])

    await store.activate()
    await store.activate()

    assert fake_api.calls == [("list",)]
    assert [note.id for note in store.notes] == ["1"]
    assert store.last_sync is not None


async def test_refresh_replaces_wholesale_in_server_order(store, fake_api):
    store.notes = [make_note("old")]
    fake_api.list_response = ApiResponse.ok([make_note("2"), make_note("1"), make_note("3")])

    await store.refresh_notes()

    assert [note.id for note in store.notes] == ["2", "1", "3"]
    assert store.loading is False
    assert store.error is None


async def test_failed_load_sets_error_without_alert(store, fake_api, alerts):
    store.notes = [make_note("1")]
    fake_api.list_response = ApiResponse.fail("Network error: Connection refused")

    await store.refresh_notes()

    assert store.error == "Network error: Connection refused"
    assert store.notes == [make_note("1")]
    assert store.loading is False
    assert store.is_connected is False
    assert alerts == []


async def test_load_success_without_data_uses_fallback(store, fake_api):
    fake_api.list_response = ApiResponse(success=True)

    await store.refresh_notes()

    assert store.error == "Failed to load notes"


async def test_load_exception_is_absorbed(store, fake_api):
    fake_api.raise_error = RuntimeError("boom")

    await store.refresh_notes()

    assert store.error == "boom"
    assert store.loading is False


# =============================================================================
# Create
# =============================================================================


async def test_create_prepends_server_note(store, fake_api):
    store.notes = [make_note("B"), make_note("A")]
    fake_api.create_response = ApiResponse.ok(make_note("C", "New"))

    result = await store.add_note(CreateNoteRequest(title="New", content="New"))

    assert result is True
    assert [note.id for note in store.notes] == ["C", "B", "A"]
    assert store.error is None
    assert store.loading is False


async def test_create_failure_alerts_and_leaves_notes(store, fake_api, alerts):
    store.notes = [make_note("A")]
    fake_api.create_response = ApiResponse.fail("HTTP 500: Internal Server Error")

    result = await store.add_note({"title": "x", "content": "x"})

    assert result is False
    assert [note.id for note in store.notes] == ["A"]
    assert store.error == "HTTP 500: Internal Server Error"
    assert alerts == [("Error", "HTTP 500: Internal Server Error")]


async def test_create_failure_without_message_uses_fallback(store, fake_api, alerts):
    fake_api.create_response = ApiResponse(success=False)

    assert await store.add_note({"title": "x", "content": "x"}) is False
    assert store.error == "Failed to create note"
    assert alerts == [("Error", "Failed to create note")]


async def test_create_exception_is_absorbed(store, fake_api, alerts):
    fake_api.raise_error = RuntimeError("exploded")

    assert await store.add_note({"title": "x", "content": "x"}) is False
    assert store.error == "exploded"
    assert alerts == [("Error", "exploded")]
    assert store.loading is False


# =============================================================================
# Update
# =============================================================================


async def test_update_replaces_in_place(store, fake_api):
    store.notes = [make_note("1"), make_note("2", "Before"), make_note("3")]
    fake_api.update_response = ApiResponse.ok(make_note("2", "After", completed=True))

    result = await store.update_note("2", UpdateNoteRequest(title="After"))

    assert result is True
    assert [note.id for note in store.notes] == ["1", "2", "3"]
    assert store.notes[1].title == "After"
    assert store.notes[0] == make_note("1")
    assert store.notes[2] == make_note("3")


async def test_repeated_update_keeps_single_copy(store, fake_api):
    note = make_note("1", "Milk")
    store.notes = [note]
    fake_api.update_echo = True
    fake_api.echo_source = {"1": note}

    assert await store.update_note("1", {"completed": True}) is True
    assert await store.update_note("1", {"completed": True}) is True

    matching = [n for n in store.notes if n.id == "1"]
    assert len(matching) == 1
    assert matching[0].completed is True


async def test_update_failure_leaves_note_identical(store, fake_api, alerts):
    original = make_note("1", "Milk", createdAt="2024-01-01T00:00:00Z")
    snapshot = original.model_dump_json()
    store.notes = [original]
    fake_api.update_response = ApiResponse.fail("Validation failed")

    result = await store.update_note("1", {"title": "Changed"})

    assert result is False
    assert store.notes[0] is original
    assert store.notes[0].model_dump_json() == snapshot
    assert store.error == "Validation failed"
    assert alerts == [("Error", "Validation failed")]


async def test_update_of_unknown_id_touches_nothing(store, fake_api):
    store.notes = [make_note("1")]
    fake_api.update_response = ApiResponse.ok(make_note("9", "Elsewhere"))

    assert await store.update_note("9", {"title": "Elsewhere"}) is True
    assert store.notes == [make_note("1")]


# =============================================================================
# Delete
# =============================================================================


async def test_delete_removes_note(store, fake_api):
    store.notes = [make_note("1"), make_note("2")]

    assert await store.delete_note("1") is True
    assert [note.id for note in store.notes] == ["2"]


async def test_delete_absent_id_is_silent_noop(store, fake_api, alerts):
    store.notes = [make_note("1")]

    result = await store.delete_note("missing")

    assert result is True
    assert store.notes == [make_note("1")]
    assert store.error is None
    assert alerts == []


async def test_delete_failure_keeps_note(store, fake_api, alerts):
    store.notes = [make_note("1")]
    fake_api.delete_response = ApiResponse.fail("not found")

    assert await store.delete_note("1") is False
    assert store.notes == [make_note("1")]
    assert store.error == "not found"
    assert alerts == [("Error", "not found")]


# =============================================================================
# Toggle
# =============================================================================


async def test_toggle_sends_flipped_completed_only(store, fake_api):
    store.notes = [make_note("1", "Milk", completed=False)]
    fake_api.update_response = ApiResponse.ok(make_note("1", "Milk", completed=True))

    assert await store.toggle_note("1") is True

    (_, note_id, payload), = [call for call in fake_api.calls if call[0] == "update"]
    assert note_id == "1"
    assert payload.to_payload() == {"completed": True}
    assert store.notes[0].completed is True


async def test_toggle_missing_id_makes_no_request(store, fake_api, alerts):
    store.notes = [make_note("1")]

    assert await store.toggle_note("nope") is False
    assert fake_api.calls == []
    assert store.error is None
    assert alerts == []


# =============================================================================
# Loading flag and concurrency
# =============================================================================


async def test_loading_is_true_while_in_flight(store, fake_api):
    release = asyncio.Event()
    seen = []

    async def slow_list():
        seen.append(store.loading)
        await release.wait()
        return ApiResponse.ok([])

    fake_api.get_all_notes = slow_list

    task = asyncio.create_task(store.refresh_notes())
    await asyncio.sleep(0)
    assert store.loading is True

    release.set()
    await task

    assert seen == [True]
    assert store.loading is False


async def test_concurrent_operations_apply_in_completion_order(store, fake_api):
    store.notes = [make_note("1"), make_note("2")]
    first_gate = asyncio.Event()

    async def delete_note(note_id):
        if note_id == "1":
            await first_gate.wait()
            return ApiResponse.fail("slow failure")
        return ApiResponse.ok()

    fake_api.delete_note = delete_note

    slow = asyncio.create_task(store.delete_note("1"))
    fast = asyncio.create_task(store.delete_note("2"))
    await asyncio.sleep(0)

    assert await fast is True
    assert store.error is None

    first_gate.set()
    assert await slow is False

    # The slower call finished last, so its outcome is what remains
    assert store.error == "slow failure"
    assert [note.id for note in store.notes] == ["1"]
    assert store.loading is False


# =============================================================================
# End-to-end scenario
# =============================================================================


async def test_refresh_update_delete_scenario(store, fake_api, alerts):
    fake_api.list_response = ApiResponse.ok([make_note("1", "Milk", completed=False)])

    await store.refresh_notes()
    assert store.notes == [make_note("1", "Milk", completed=False)]
    assert store.loading is False

    fake_api.update_response = ApiResponse.ok(make_note("1", "Milk", completed=True))
    assert await store.update_note("1", {"completed": True}) is True
    assert store.notes[0].completed is True
    assert store.error is None

    fake_api.delete_response = ApiResponse.fail("not found")
    before = list(store.notes)
    assert await store.delete_note("1") is False
    assert store.notes == before
    assert store.error == "not found"


async def test_stats_and_lookup(store):
    store.notes = [make_note("1", completed=True), make_note("2"), make_note("3", completed=True)]

    assert store.stats() == (2, 3)
    assert store.get_note("2") == make_note("2")
    assert store.get_note("x") is None


async def test_numeric_server_ids_match_on_toggle_and_delete(store, fake_api):
    fake_api.list_response = ApiResponse.ok([
        Note.model_validate({"id": 1, "title": "Milk", "completed": False}),
        Note.model_validate({"id": 2, "title": "Eggs", "completed": False}),
    ])
    await store.refresh_notes()
    fake_api.update_response = ApiResponse.ok(Note.model_validate({"id": 1, "title": "Milk", "completed": True}))

    assert await store.toggle_note("1") is True
    assert store.get_note("1").completed is True
    assert [call[1] for call in fake_api.calls if call[0] == "update"] == ["1"]

    assert await store.delete_note("2") is True
    assert [note.id for note in store.notes] == ["1"]
