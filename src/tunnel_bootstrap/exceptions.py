"""Custom exceptions for tunnel-bootstrap.

This module defines a hierarchy of exceptions for consistent error handling
across the bootstrap pipeline. All fatal errors inherit from
TunnelBootstrapError, so the CLI layer can turn any of them into a failed
step with a single except clause.

Exception hierarchy:
    TunnelBootstrapError (base)
    ├── ConfigError
    ├── DownloadError
    ├── InstallError
    ├── LaunchError
    ├── PollReadError
    └── TunnelTimeout

    UpdateWarning (Warning, never raised to the caller)
"""

from pathlib import Path
from typing import Any


class TunnelBootstrapError(Exception):
    """Base exception for all tunnel-bootstrap errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(TunnelBootstrapError):
    """Raised when a required input is missing or invalid.

    Reported before any download is attempted.
    """

    def __init__(self, message: str, key: str | None = None):
        """Initialize configuration error.

        Args:
            message: Error description.
            key: The input name that caused the error.
        """
        super().__init__(message)
        self.key = key


# =============================================================================
# Artifact Errors
# =============================================================================


class DownloadError(TunnelBootstrapError):
    """Raised when the tunnel client could not be fetched.

    Examples:
        - HTTP error or network failure while downloading
        - The fetched file is missing or has zero length
    """

    def __init__(self, message: str, url: str | None = None, path: Path | None = None):
        details = {}
        if url:
            details["url"] = url
        if path:
            details["path"] = str(path)
        super().__init__(message, details)
        self.url = url
        self.path = path


class InstallError(TunnelBootstrapError):
    """Raised when a post-download step (move, extract, chmod) fails."""

    def __init__(self, message: str, path: Path | None = None):
        details = {"path": str(path)} if path else None
        super().__init__(message, details)
        self.path = path


# =============================================================================
# Process Errors
# =============================================================================


class LaunchError(TunnelBootstrapError):
    """Raised when the background tunnel process cannot be spawned."""

    def __init__(self, message: str, command: list[str] | None = None):
        details = {"command": " ".join(command)} if command else None
        super().__init__(message, details)
        self.command = command


class UpdateWarning(Warning):
    """Self-update of the tunnel client failed.

    Only ever logged; the installed binary is used as-is.
    """


# =============================================================================
# Polling Errors
# =============================================================================


class PollReadError(TunnelBootstrapError):
    """A single attempt to read the tunnel log failed.

    Non-fatal: the poller logs it and moves on to the next attempt.
    """

    def __init__(self, message: str, path: Path):
        super().__init__(message, {"path": str(path)})
        self.path = path


class TunnelTimeout(TunnelBootstrapError):
    """No tunnel hostname appeared in the log before the deadline.

    Attributes:
        log_tail: The last lines of the tunnel log, for diagnostics.
    """

    def __init__(self, message: str, log_tail: list[str] | None = None):
        super().__init__(message)
        self.log_tail = log_tail or []
