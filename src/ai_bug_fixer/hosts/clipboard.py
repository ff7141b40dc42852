"""System clipboard access through the platform's clipboard command."""

import logging
import os
import shutil
import subprocess
import sys

from anyio import to_thread

logger = logging.getLogger(__name__)

CLIPBOARD_TIMEOUT = 5.0


def clipboard_commands() -> list[list[str]]:
    """Candidate paste commands for this platform, in preference order."""
    if sys.platform == "darwin":
        return [["pbpaste"]]
    if os.name == "nt":
        return [["powershell", "-NoProfile", "-Command", "Get-Clipboard"]]

    commands = []
    if os.environ.get("WAYLAND_DISPLAY"):
        commands.append(["wl-paste", "--no-newline"])
    commands.extend(
        [
            ["xclip", "-selection", "clipboard", "-o"],
            ["xsel", "--clipboard", "--output"],
        ]
    )
    return commands


def read_clipboard_sync() -> str | None:
    """Read clipboard text with the first available paste command.

    Returns None when no command is installed or every command fails.
    """
    for command in clipboard_commands():
        if shutil.which(command[0]) is None:
            continue
        try:
            completed = subprocess.run(command, capture_output=True, text=True, timeout=CLIPBOARD_TIMEOUT, check=False)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug(f"Clipboard command {command[0]} failed: {e}")
            continue
        if completed.returncode == 0:
            return completed.stdout
        logger.debug(f"Clipboard command {command[0]} exited with {completed.returncode}")

    logger.info("No usable clipboard command found")
    return None


async def read_clipboard() -> str | None:
    return await to_thread.run_sync(read_clipboard_sync)
