"""Factory for the platform-specific halves of the pipeline.

The process spawner and the output channel each have a POSIX and a Windows
implementation; the PlatformTarget decides which one is used.
"""

from pathlib import Path
from typing import TextIO

from tunnel_bootstrap.tunnel.launcher import (
    PosixProcessSpawner,
    ProcessSpawner,
    WindowsProcessSpawner,
)
from tunnel_bootstrap.tunnel.platform import PlatformTarget
from tunnel_bootstrap.tunnel.reporter import (
    OutputChannel,
    PosixOutputChannel,
    WindowsOutputChannel,
)


def create_process_spawner(target: PlatformTarget) -> ProcessSpawner:
    """Create the detach strategy for a platform target."""
    if target.is_windows:
        return WindowsProcessSpawner()
    return PosixProcessSpawner()


def create_output_channel(
    target: PlatformTarget,
    output_path: Path | None,
    stream: TextIO | None = None,
) -> OutputChannel:
    """Create the step-output writer for a platform target.

    Args:
        target: The resolved platform target.
        output_path: The runner's output file (GITHUB_OUTPUT), if any.
        stream: Fallback stream when there is no output file.
    """
    if target.is_windows:
        return WindowsOutputChannel(output_path, stream=stream)
    return PosixOutputChannel(output_path, stream=stream)
