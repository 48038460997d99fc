"""Rich console helpers for tunnel-bootstrap output."""

from rich.console import Console

_console: Console | None = None


def get_console() -> Console:
    """Return the shared console, creating it on first use."""
    global _console
    if _console is None:
        _console = Console(highlight=False, soft_wrap=True)
    return _console


def set_console(console: Console | None) -> None:
    """Replace the shared console (used by tests to capture output)."""
    global _console
    _console = console


def print_info(message: str) -> None:
    """Print an informational message."""
    get_console().print(f"[blue]ℹ[/blue] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    get_console().print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    get_console().print(f"[red]✗[/red] {message}")
