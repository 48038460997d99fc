"""Bounded polling of the tunnel log for the public hostname.

The poller sleeps a fixed interval, re-reads the whole log and scans it with
the extractor, up to a fixed number of attempts:

    Polling(attempt 0..N-1) -> Found(hostname) | TimedOut

A log that is missing, unreadable or not yet complete is not an error; the
attempt simply finds nothing and the next one tries again. Invalid UTF-8 is
replaced rather than rejected, so one bad byte never hides the hostname.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from tunnel_bootstrap.constants import (
    LOG_POLL_ATTEMPT,
    LOG_READ_ERROR,
    POLL_INTERVAL_SECONDS,
    POLL_MAX_ATTEMPTS,
    TUNNEL_LOG_DECODE_ERRORS,
)
from tunnel_bootstrap.exceptions import PollReadError
from tunnel_bootstrap.tunnel.extractor import extract_hostname
from tunnel_bootstrap.utils.file_utils import read_file

logger = logging.getLogger(__name__)


class PollState(StrEnum):
    """Terminal states of a polling run."""

    FOUND = "found"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class PollResult:
    """Outcome of polling the tunnel log.

    Attributes:
        state: FOUND or TIMED_OUT.
        hostname: The extracted hostname (None when timed out).
        attempts: Number of attempts made.
    """

    state: PollState
    hostname: str | None = None
    attempts: int = 0

    @property
    def found(self) -> bool:
        return self.state is PollState.FOUND


class TunnelUrlPoller:
    """Wait for cloudflared to print its quick-tunnel URL.

    Args:
        log_path: The tunnel log to watch.
        max_attempts: How many times to look before giving up.
        interval_seconds: Sleep before each attempt.
        sleep: Sleep function (injectable for tests).
    """

    def __init__(
        self,
        log_path: Path,
        max_attempts: int = POLL_MAX_ATTEMPTS,
        interval_seconds: float = POLL_INTERVAL_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._log_path = log_path
        self._max_attempts = max_attempts
        self._interval_seconds = interval_seconds
        self._sleep = sleep

    def read_log(self) -> str:
        """Read the full log.

        Raises:
            PollReadError: If the file is missing or unreadable.
        """
        try:
            return read_file(self._log_path, errors=TUNNEL_LOG_DECODE_ERRORS)
        except OSError as e:
            raise PollReadError(str(e), self._log_path) from e

    def check_once(self) -> str | None:
        """Make one attempt: read the log and extract a hostname, never raising."""
        try:
            content = self.read_log()
        except PollReadError as e:
            logger.info(LOG_READ_ERROR.format(error=e.message))
            return None
        return extract_hostname(content)

    def poll(self) -> PollResult:
        """Run the polling loop until a hostname is found or attempts run out."""
        for attempt in range(1, self._max_attempts + 1):
            self._sleep(self._interval_seconds)
            logger.debug(LOG_POLL_ATTEMPT.format(attempt=attempt, total=self._max_attempts))

            hostname = self.check_once()
            if hostname:
                return PollResult(state=PollState.FOUND, hostname=hostname, attempts=attempt)

        return PollResult(state=PollState.TIMED_OUT, attempts=self._max_attempts)
