"""
Health check module for Notesync.

Reports configuration and API connection status.
"""

from notesync.api import NotesApi
from notesync.config import get_api_settings, get_config_path


def check_config() -> tuple[str, str]:
    """Check configuration status."""
    try:
        settings = get_api_settings()
    except Exception as e:
        return "✗", f"Error: {e}"

    source = "config.toml" if get_config_path().exists() else "defaults"
    debug = ", debug" if settings["debug"] else ""
    return "✓", f"OK ({source}{debug})"


async def check_api(api: NotesApi | None = None) -> tuple[str, str]:
    """Check API connection by listing notes."""
    try:
        api = api or NotesApi()
    except ValueError as e:
        return "✗", f"Error: {e}"

    response = await api.get_all_notes()
    if response.success:
        count = len(response.data or [])
        return "✓", f"Connected ({count} notes) at {api.base_url}"
    return "✗", f"Disconnected: {response.error}"


async def run_health_check(api: NotesApi | None = None) -> dict[str, tuple[str, str]]:
    """Run all health checks."""
    return {
        "Config": check_config(),
        "API": await check_api(api),
    }


def format_health_report(checks: dict[str, tuple[str, str]]) -> str:
    """Format health check results."""
    lines = ["Notesync Health Check", "-" * 40]

    for name, (status, message) in checks.items():
        lines.append(f"{status} {name}: {message}")

    return "\n".join(lines)
