"""
CLI for Notesync.

Minimal CLI using stdlib argument handling. Subcommands are imported lazily.

Usage:
    notesync                        # List notes
    notesync add "buy milk"         # Create a note
    notesync --help                 # Show help
"""

import sys


def print_help() -> None:
    """Print help message."""
    print("""notesync - todo notes synced with a REST API

Usage:
    notesync [list]               List notes (newest first)

Commands:
    notesync add <text>           Create a note
    notesync edit <id> <text>     Replace a note's text
    notesync toggle <id>          Toggle completion (alias: done)
    notesync rm <id> [--yes]      Delete a note (asks for confirmation)
    notesync show <id>            Show a single note from the server
    notesync status               Check configuration and API connection

Options:
    notesync --help, -h           Show this help
    notesync --version, -v        Show version
    notesync --debug              Trace API requests and responses

Configuration:
    ~/.config/notesync/config.toml, or NOTESYNC_API_URL,
    NOTESYNC_TIMEOUT and NOTESYNC_DEBUG in the environment.""")


def print_version() -> None:
    """Print version."""
    from notesync import __version__
    print(f"notesync {__version__}")


def setup_logging(debug: bool) -> None:
    """Configure root logging for a CLI run."""
    import logging

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else logging.WARNING,
    )


def make_store(debug: bool = False):
    """Build a store wired to the terminal alert."""
    from notesync.api import NotesApi
    from notesync.notify import show_alert
    from notesync.store import NoteStore

    api = NotesApi(debug=True if debug else None)
    return NoteStore(api=api, alert=show_alert)


async def cmd_list(debug: bool = False) -> int:
    """List all notes."""
    from notesync.display import format_notes

    store = make_store(debug)
    await store.activate()

    print(format_notes(store))
    return 0 if store.error is None else 1


async def cmd_add(args: list[str], debug: bool = False) -> int:
    """Create a note from the given text."""
    from notesync.display import format_note
    from notesync.models import CreateNoteRequest

    text = " ".join(args).strip()
    if not text:
        print("Usage: notesync add <text>", file=sys.stderr)
        return 1

    store = make_store(debug)
    await store.activate()

    # Title and content carry the same text
    success = await store.add_note(CreateNoteRequest(title=text, content=text, completed=False))
    if not success:
        return 1

    print(f"Added: {format_note(store.notes[0])}")
    return 0


async def cmd_edit(args: list[str], debug: bool = False) -> int:
    """Replace a note's title and content."""
    from notesync.display import format_note
    from notesync.models import UpdateNoteRequest

    if len(args) < 2 or not " ".join(args[1:]).strip():
        print("Usage: notesync edit <id> <text>", file=sys.stderr)
        return 1

    note_id = args[0]
    text = " ".join(args[1:]).strip()

    store = make_store(debug)
    await store.activate()

    success = await store.update_note(note_id, UpdateNoteRequest(title=text, content=text))
    if not success:
        return 1

    note = store.get_note(note_id)
    print(f"Updated: {format_note(note)}" if note else f"Updated: {note_id}")
    return 0


async def cmd_toggle(args: list[str], debug: bool = False) -> int:
    """Toggle a note's completion."""
    from notesync.display import format_note

    if not args:
        print("Usage: notesync toggle <id>", file=sys.stderr)
        return 1

    note_id = args[0]

    store = make_store(debug)
    await store.activate()

    if store.get_note(note_id) is None:
        print(f"Not found: {note_id}", file=sys.stderr)
        return 1

    if not await store.toggle_note(note_id):
        return 1

    print(format_note(store.get_note(note_id)))
    return 0


def confirm(prompt: str) -> bool:
    """Ask a yes/no question on the terminal."""
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


async def cmd_rm(args: list[str], debug: bool = False) -> int:
    """Delete a note after confirmation."""
    assume_yes = any(arg in ("--yes", "-y") for arg in args)
    ids = [arg for arg in args if arg not in ("--yes", "-y")]

    if not ids:
        print("Usage: notesync rm <id> [--yes]", file=sys.stderr)
        return 1

    note_id = ids[0]

    if not assume_yes and not confirm("Are you sure you want to delete this todo?"):
        print("Cancelled.")
        return 1

    store = make_store(debug)
    await store.activate()

    if not await store.delete_note(note_id):
        return 1

    print(f"Deleted: {note_id}")
    return 0


async def cmd_show(args: list[str], debug: bool = False) -> int:
    """Fetch one note straight from the server."""
    from notesync.api import NotesApi
    from notesync.display import format_note_detail

    if not args:
        print("Usage: notesync show <id>", file=sys.stderr)
        return 1

    api = NotesApi(debug=True if debug else None)
    response = await api.get_note_by_id(args[0])

    if not response.success:
        print(f"Error: {response.error}", file=sys.stderr)
        return 1

    print(format_note_detail(response.data))
    return 0


async def cmd_status(debug: bool = False) -> int:
    """Show health report."""
    from notesync.display import format_sync_status
    from notesync.health import format_health_report, run_health_check

    store = make_store(debug)
    await store.activate()

    checks = await run_health_check(store.api)
    print(format_health_report(checks))
    print(format_sync_status(store.is_connected, store.last_sync))
    return 0 if all(status == "✓" for status, _ in checks.values()) else 1


def run(first_arg: str, rest: list[str], debug: bool) -> int:
    """Dispatch a subcommand on a fresh event loop."""
    import asyncio

    if first_arg == "list":
        return asyncio.run(cmd_list(debug))

    if first_arg == "add":
        return asyncio.run(cmd_add(rest, debug))

    if first_arg == "edit":
        return asyncio.run(cmd_edit(rest, debug))

    if first_arg in ("toggle", "done"):
        return asyncio.run(cmd_toggle(rest, debug))

    if first_arg in ("rm", "delete"):
        return asyncio.run(cmd_rm(rest, debug))

    if first_arg == "show":
        return asyncio.run(cmd_show(rest, debug))

    if first_arg == "status":
        return asyncio.run(cmd_status(debug))

    print(f"Unknown command: {first_arg}", file=sys.stderr)
    print("Run 'notesync --help' for usage.", file=sys.stderr)
    return 1


def main() -> int:
    """Main entry point."""
    args = sys.argv[1:]

    debug = "--debug" in args
    args = [arg for arg in args if arg != "--debug"]

    if args and args[0] in ("--help", "-h", "help"):
        print_help()
        return 0

    if args and args[0] in ("--version", "-v", "version"):
        print_version()
        return 0

    setup_logging(debug)

    first_arg = args[0] if args else "list"

    try:
        return run(first_arg, args[1:], debug)
    except ValueError as e:
        # Bad configuration (e.g. non-numeric timeout)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
