"""Utility helpers for tunnel-bootstrap."""

from tunnel_bootstrap.utils.console import (
    get_console,
    print_error,
    print_info,
    print_success,
    set_console,
)
from tunnel_bootstrap.utils.file_utils import (
    delete_file,
    file_size,
    is_executable,
    make_executable,
    move_file,
    read_file,
    tail_lines,
)

__all__ = [
    "delete_file",
    "file_size",
    "is_executable",
    "get_console",
    "make_executable",
    "move_file",
    "print_error",
    "print_info",
    "print_success",
    "read_file",
    "set_console",
    "tail_lines",
]
