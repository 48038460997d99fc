"""Reporting the outcome of the tunnel bootstrap.

On success the hostname is appended to the step output file as
`server=<hostname>`. On timeout the tail of the tunnel log is logged and a
TunnelTimeout is raised for the caller to turn into a failed step.
"""

import logging
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import NoReturn, TextIO

from tunnel_bootstrap.constants import (
    ERROR_TUNNEL_TIMEOUT,
    LOG_NO_OUTPUT_FILE,
    LOG_SERVER,
    LOG_TAIL_HEADER,
    LOG_TAIL_LINES,
    LOG_TAIL_READ_FAILED,
    OUTPUT_KEY_SERVER,
    OUTPUT_NEWLINE_POSIX,
    OUTPUT_NEWLINE_WINDOWS,
    OUTPUT_RECORD_TEMPLATE,
    POLL_DEADLINE_SECONDS,
    TUNNEL_ENCODING_UTF8,
    TUNNEL_LOG_DECODE_ERRORS,
)
from tunnel_bootstrap.exceptions import TunnelTimeout
from tunnel_bootstrap.utils.file_utils import read_file, tail_lines

logger = logging.getLogger(__name__)


class OutputChannel(ABC):
    """Appends key/value records to the CI step output.

    Args:
        output_path: The runner's output file. When None, records are written
            to `stream` (stdout by default) so local runs still show them.
        stream: Fallback text stream.
    """

    def __init__(self, output_path: Path | None, stream: TextIO | None = None) -> None:
        self._output_path = output_path
        self._stream = stream

    @property
    def output_path(self) -> Path | None:
        return self._output_path

    @property
    @abstractmethod
    def newline(self) -> str:
        """Line terminator the platform's append command writes."""
        ...

    def set_output(self, key: str, value: str) -> None:
        """Append `key=value` as one line."""
        record = OUTPUT_RECORD_TEMPLATE.format(key=key, value=value)
        if self._output_path is None:
            logger.warning(LOG_NO_OUTPUT_FILE)
            stream = self._stream or sys.stdout
            stream.write(record + "\n")
            stream.flush()
            return

        # newline="" keeps the terminator exactly as given on every platform
        with self._output_path.open("a", encoding=TUNNEL_ENCODING_UTF8, newline="") as f:
            f.write(record + self.newline)


class PosixOutputChannel(OutputChannel):
    """`echo "key=value" >> $GITHUB_OUTPUT` semantics."""

    @property
    def newline(self) -> str:
        return OUTPUT_NEWLINE_POSIX


class WindowsOutputChannel(OutputChannel):
    """`Add-Content -Path $env:GITHUB_OUTPUT -Value "key=value"` semantics."""

    @property
    def newline(self) -> str:
        return OUTPUT_NEWLINE_WINDOWS


class OutcomeReporter:
    """Publish the hostname, or fail with the recent log context.

    Args:
        channel: Where step outputs are written.
        log_path: The tunnel log, read once more on timeout.
        tail_lines: How many trailing log lines to surface on timeout.
    """

    def __init__(
        self,
        channel: OutputChannel,
        log_path: Path,
        tail_lines: int = LOG_TAIL_LINES,
    ) -> None:
        self._channel = channel
        self._log_path = log_path
        self._tail_lines = tail_lines

    def report_found(self, hostname: str) -> None:
        """Write `server=<hostname>` to the step output."""
        logger.info(LOG_SERVER.format(server=hostname))
        self._channel.set_output(OUTPUT_KEY_SERVER, hostname)

    def collect_log_tail(self) -> list[str]:
        """Best-effort read of the last lines of the tunnel log."""
        if not self._log_path.exists():
            return []
        try:
            content = read_file(self._log_path, errors=TUNNEL_LOG_DECODE_ERRORS)
        except OSError as e:
            logger.info(LOG_TAIL_READ_FAILED.format(error=e))
            return []
        return tail_lines(content, self._tail_lines)

    def report_timeout(self) -> NoReturn:
        """Log the log tail and raise TunnelTimeout.

        Raises:
            TunnelTimeout: Always.
        """
        tail = self.collect_log_tail()
        if tail:
            logger.info(LOG_TAIL_HEADER.format(tail="\n".join(tail)))
        raise TunnelTimeout(
            ERROR_TUNNEL_TIMEOUT.format(seconds=POLL_DEADLINE_SECONDS),
            log_tail=tail,
        )
