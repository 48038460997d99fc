"""File system utilities for tunnel-bootstrap."""

import os
import shutil
from pathlib import Path

from tunnel_bootstrap.constants import EXECUTABLE_BITS, TUNNEL_ENCODING_UTF8


def read_file(path: Path, errors: str = "strict") -> str:
    """Read text file contents.

    Args:
        path: Path to file to read
        errors: Decoding error handler, as for `open()`

    Returns:
        File contents as string

    Raises:
        FileNotFoundError: If file doesn't exist
        UnicodeDecodeError: If the file is not valid UTF-8 and errors is "strict"
    """
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    return path.read_text(encoding=TUNNEL_ENCODING_UTF8, errors=errors)


def file_size(path: Path) -> int | None:
    """Return the size of a regular file, or None if it is missing or not a file."""
    try:
        if not path.is_file():
            return None
        return path.stat().st_size
    except OSError:
        return None


def move_file(src: Path, dst: Path) -> Path:
    """Move a file, replacing anything already at the destination.

    Args:
        src: Source file path
        dst: Destination file path

    Returns:
        The destination path

    Raises:
        FileNotFoundError: If source file doesn't exist
        OSError: If the move fails
    """
    if not src.exists():
        raise FileNotFoundError(f"Source file not found: {src}")

    dst.parent.mkdir(parents=True, exist_ok=True)
    if dst.exists():
        dst.unlink()
    shutil.move(str(src), str(dst))
    return dst


def make_executable(path: Path) -> None:
    """Add the execute bits to a file (chmod +x).

    Raises:
        OSError: If the mode cannot be changed
    """
    mode = path.stat().st_mode
    path.chmod(mode | EXECUTABLE_BITS)


def is_executable(path: Path) -> bool:
    """Check whether the current user may execute a file."""
    return path.is_file() and os.access(path, os.X_OK)


def delete_file(path: Path) -> bool:
    """Delete a file if it exists.

    Args:
        path: Path to file to delete

    Returns:
        True if file was deleted, False if it didn't exist
    """
    if path.exists():
        path.unlink()
        return True
    return False


def tail_lines(content: str, count: int) -> list[str]:
    """Return at most the last `count` lines of text, ignoring outer whitespace."""
    stripped = content.strip()
    if not stripped or count <= 0:
        return []
    return stripped.split("\n")[-count:]
