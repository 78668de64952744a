"""
MCP Server for Notesync.

Exposes the note store as tools for MCP clients.
"""

import logging
import os
import sys

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from notesync.display import format_note, format_notes, format_sync_status
from notesync.health import format_health_report, run_health_check
from notesync.models import CreateNoteRequest, UpdateNoteRequest
from notesync.notify import log_alert
from notesync.store import NoteStore

# Tool output is plain text
os.environ.setdefault("NO_COLOR", "1")

# stdout carries the MCP protocol, so logs go to stderr
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

# Create MCP server
server = Server("notesync")

_store: NoteStore | None = None


async def get_store() -> NoteStore:
    """Shared store, loaded on first use."""
    global _store
    if _store is None:
        _store = NoteStore(alert=log_alert)
    await _store.activate()
    return _store


def _text(text: str) -> list[TextContent]:
    return [TextContent(type="text", text=text)]


ID_SCHEMA = {
    "type": "object",
    "properties": {
        "note_id": {
            "type": "string",
            "description": "The ID of the note",
        },
    },
    "required": ["note_id"],
}


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="notes_list",
            description="List all notes (newest first) with a completed counter.",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="notes_add",
            description="Create a new note. The text is used as both title and content.",
            inputSchema={
                "type": "object",
                "properties": {
                    "text": {
                        "type": "string",
                        "description": "The note text",
                    },
                },
                "required": ["text"],
            },
        ),
        Tool(
            name="notes_update",
            description="Replace the text of an existing note.",
            inputSchema={
                "type": "object",
                "properties": {
                    "note_id": {
                        "type": "string",
                        "description": "The ID of the note to update",
                    },
                    "text": {
                        "type": "string",
                        "description": "New note text",
                    },
                },
                "required": ["note_id", "text"],
            },
        ),
        Tool(
            name="notes_toggle",
            description="Toggle a note between completed and open.",
            inputSchema=ID_SCHEMA,
        ),
        Tool(
            name="notes_delete",
            description="Delete a note on the server.",
            inputSchema=ID_SCHEMA,
        ),
        Tool(
            name="notes_refresh",
            description="Reload all notes from the server.",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="notes_status",
            description="Check configuration and API connection.",
            inputSchema={"type": "object", "properties": {}},
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "notes_list":
            return await tool_list(arguments)
        elif name == "notes_add":
            return await tool_add(arguments)
        elif name == "notes_update":
            return await tool_update(arguments)
        elif name == "notes_toggle":
            return await tool_toggle(arguments)
        elif name == "notes_delete":
            return await tool_delete(arguments)
        elif name == "notes_refresh":
            return await tool_refresh(arguments)
        elif name == "notes_status":
            return await tool_status(arguments)
        else:
            return _text(f"Unknown tool: {name}")
    except Exception as e:
        logger.exception("Tool %s failed", name)
        return _text(f"Error: {e}")


async def tool_list(args: dict) -> list[TextContent]:
    """List notes from local state."""
    store = await get_store()
    return _text(format_notes(store))


async def tool_add(args: dict) -> list[TextContent]:
    """Create a note."""
    text = args.get("text", "").strip()
    if not text:
        return _text("Error: Empty note")

    store = await get_store()
    if await store.add_note(CreateNoteRequest(title=text, content=text, completed=False)):
        return _text(f"Added: {format_note(store.notes[0])}")
    return _text(f"Error: {store.error}")


async def tool_update(args: dict) -> list[TextContent]:
    """Replace a note's text."""
    note_id = args.get("note_id", "").strip()
    text = args.get("text", "").strip()
    if not note_id:
        return _text("Error: No note_id provided")
    if not text:
        return _text("Error: Empty note")

    store = await get_store()
    if await store.update_note(note_id, UpdateNoteRequest(title=text, content=text)):
        note = store.get_note(note_id)
        return _text(f"Updated: {format_note(note)}" if note else f"Updated: {note_id}")
    return _text(f"Error: {store.error}")


async def tool_toggle(args: dict) -> list[TextContent]:
    """Toggle completion."""
    note_id = args.get("note_id", "").strip()
    if not note_id:
        return _text("Error: No note_id provided")

    store = await get_store()
    if store.get_note(note_id) is None:
        return _text(f"Note not found: {note_id}")

    if await store.toggle_note(note_id):
        return _text(format_note(store.get_note(note_id)))
    return _text(f"Error: {store.error}")


async def tool_delete(args: dict) -> list[TextContent]:
    """Delete a note."""
    note_id = args.get("note_id", "").strip()
    if not note_id:
        return _text("Error: No note_id provided")

    store = await get_store()
    if await store.delete_note(note_id):
        return _text(f"Deleted: {note_id}")
    return _text(f"Error: {store.error}")


async def tool_refresh(args: dict) -> list[TextContent]:
    """Reload notes from the server."""
    store = await get_store()
    await store.refresh_notes()
    return _text(format_notes(store))


async def tool_status(args: dict) -> list[TextContent]:
    """Report health."""
    store = await get_store()
    checks = await run_health_check(store.api)
    report = format_health_report(checks)
    return _text(f"{report}\n{format_sync_status(store.is_connected, store.last_sync)}")


async def main():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run() -> None:
    """Console script entry point."""
    import asyncio
    asyncio.run(main())


if __name__ == "__main__":
    run()
