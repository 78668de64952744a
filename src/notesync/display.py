"""
Terminal formatting for notes.
"""

import os
from datetime import datetime

from notesync.models import Note
from notesync.store import NoteStore


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"

    BRIGHT_BLACK = "\033[90m"  # Gray

    @classmethod
    def enabled(cls) -> bool:
        """Check if colors should be enabled."""
        # Disable if NO_COLOR is set
        if os.environ.get("NO_COLOR"):
            return False
        return True


def c(text: str, *codes: str) -> str:
    """Apply color codes to text if colors are enabled."""
    if not Colors.enabled():
        return text
    return "".join(codes) + text + Colors.RESET


def format_note(note: Note) -> str:
    """One line: checkbox, title, id."""
    if note.completed:
        box = c("[x]", Colors.GREEN)
        title = c(note.title, Colors.DIM)
    else:
        box = "[ ]"
        title = note.title

    return f"{box} {title}  {c(f'({note.id})', Colors.BRIGHT_BLACK)}"


def format_summary(stats: tuple[int, int]) -> str:
    """Completed counter from NoteStore.stats(), e.g. '2/5 completed'."""
    completed, total = stats
    if total == 0:
        return "No todos yet"
    return f"{completed}/{total} completed"


def format_sync_status(connected: bool, last_sync: datetime | None) -> str:
    """Connection indicator with the time of the last successful load."""
    if connected:
        status = c("Connected", Colors.GREEN)
    else:
        status = c("Disconnected", Colors.RED)

    if last_sync is None:
        return f"{status} | Last sync: never"
    local = last_sync.astimezone().strftime("%H:%M:%S")
    return f"{status} | Last sync: {local}"


def format_error_banner(error: str) -> str:
    """Inline status banner for a failed load."""
    return c(f"! {error}", Colors.RED, Colors.BOLD)


def format_notes(store: NoteStore) -> str:
    """Render the store: status line, header, counter and the notes."""
    lines = [
        format_sync_status(store.is_connected, store.last_sync),
        c("My Todo List", Colors.BOLD),
        format_summary(store.stats()),
        "",
    ]

    if store.error:
        lines.insert(0, format_error_banner(store.error))

    for note in store.notes:
        lines.append(format_note(note))

    return "\n".join(lines).rstrip("\n")


def format_note_detail(note: Note) -> str:
    """Multi-line view of a single note."""
    lines = [
        format_note(note),
        "",
        note.content,
        "",
        c(f"created: {note.created_at or '-'}", Colors.DIM),
        c(f"updated: {note.updated_at or '-'}", Colors.DIM),
    ]
    return "\n".join(lines)
