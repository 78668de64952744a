"""
Notesync: keep a local list of notes in step with a remote notes API.

Provides:
- An async transport client that never raises (uniform result envelope)
- A synchronization store owning notes, loading and error state
- A terminal CLI and an MCP server on top of the store
"""

__version__ = "0.1.0"
