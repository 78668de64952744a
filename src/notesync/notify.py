"""
User-facing failure notifications.

The store calls an alert(title, message) callback whenever a create,
update or delete fails. These are the callbacks the shipped front ends use.
"""

import logging
import subprocess
import sys

from notesync.config import is_truthy, load_config

logger = logging.getLogger(__name__)


def send_desktop_notification(title: str, body: str = "") -> None:
    """Send desktop notification via notify-send."""
    try:
        cmd = ["notify-send", title]
        if body:
            cmd.append(body)
        subprocess.run(cmd, check=False, capture_output=True)
    except OSError:
        pass  # Notifications are best-effort


def show_alert(title: str, message: str) -> None:
    """Blocking terminal alert, optionally mirrored to the desktop."""
    print(f"{title}: {message}", file=sys.stderr, flush=True)

    notify_config = load_config().get("notify", {})
    if is_truthy(notify_config.get("desktop", False)):
        send_desktop_notification(f"Notesync: {title}", message)


def log_alert(title: str, message: str) -> None:
    """Alert through logging only (for front ends that own stdout)."""
    logger.warning("%s: %s", title, message)
