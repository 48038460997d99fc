"""Cross-platform abstractions for Windows and POSIX systems.

This module provides platform-agnostic helpers for process detachment of
the background tunnel process.

All functions are designed to work correctly on both Windows and POSIX systems.
"""

from typing import Any

from tunnel_bootstrap.constants import (
    WINDOWS_CREATE_NEW_PROCESS_GROUP,
    WINDOWS_CREATE_NO_WINDOW,
)

# =============================================================================
# Process Management
# =============================================================================


def get_process_detach_kwargs(windows: bool) -> dict[str, Any]:
    """Get subprocess.Popen kwargs for detaching a process from the parent.

    Returns kwargs to pass to subprocess.Popen that will:
    - On POSIX: Create a new session (setsid), so the child keeps running
      after this process exits
    - On Windows: Create a new process group without a console window

    Args:
        windows: Whether the Windows (True) or POSIX (False) variant is wanted.

    Returns:
        Dictionary of kwargs to pass to subprocess.Popen.
    """
    if windows:
        return {
            "creationflags": WINDOWS_CREATE_NEW_PROCESS_GROUP | WINDOWS_CREATE_NO_WINDOW,
        }
    return {
        "start_new_session": True,
    }
