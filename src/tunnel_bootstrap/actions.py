"""GitHub Actions runner integration.

Provides the small slice of the Actions toolkit the bootstrap needs:
- failure signalling (`::error::` plus a recorded exit code)
- workflow-command rendering for log records (`::debug::`, `::warning::`)

Inputs come from tunnel_bootstrap.config.settings.ActionInputs and outputs
are written by tunnel_bootstrap.tunnel.reporter.
"""

import logging

from rich.console import Console

from tunnel_bootstrap.constants import EXIT_CODE_FAILURE, EXIT_CODE_SUCCESS


def escape_data(value: str) -> str:
    """Escape a workflow-command message so it stays on one line."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsCore:
    """Writes workflow commands to the job log and tracks the step result.

    Args:
        console: Console to write to (stdout by default).
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(highlight=False, soft_wrap=True)
        self.exit_code = EXIT_CODE_SUCCESS

    @property
    def failed(self) -> bool:
        return self.exit_code != EXIT_CODE_SUCCESS

    def _command(self, command: str, message: str) -> None:
        self._console.out(f"::{command}::{escape_data(message)}", highlight=False)

    def info(self, message: str) -> None:
        self._console.out(message, highlight=False)

    def debug(self, message: str) -> None:
        self._command("debug", message)

    def warning(self, message: str) -> None:
        self._command("warning", message)

    def error(self, message: str) -> None:
        self._command("error", message)

    def set_failed(self, message: str) -> None:
        """Mark the step as failed; the process exits with code 1 at the end."""
        self.error(message)
        self.exit_code = EXIT_CODE_FAILURE


class WorkflowCommandHandler(logging.Handler):
    """Logging handler that renders records through ActionsCore.

    DEBUG records become `::debug::` (only shown with step debugging on),
    WARNING and ERROR become annotations, INFO is printed as-is.
    """

    def __init__(self, core: ActionsCore, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._core = core

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if record.levelno >= logging.ERROR:
                self._core.error(message)
            elif record.levelno >= logging.WARNING:
                self._core.warning(message)
            elif record.levelno >= logging.INFO:
                self._core.info(message)
            else:
                self._core.debug(message)
        except Exception:
            self.handleError(record)


def configure_logging(core: ActionsCore, level: str | int = logging.INFO) -> None:
    """Route the package's log records to the job log through `core`."""
    logger = logging.getLogger("tunnel_bootstrap")
    for handler in list(logger.handlers):
        if isinstance(handler, WorkflowCommandHandler):
            logger.removeHandler(handler)
    handler = WorkflowCommandHandler(core)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
