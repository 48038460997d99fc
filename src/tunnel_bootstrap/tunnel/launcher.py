"""Launching cloudflared as a detached background process.

The launcher first lets cloudflared try to update itself, then starts
`cloudflared tunnel --url <protocol>://localhost:<port> --output json` with
stdout and stderr redirected into the tunnel log. No process handle is kept:
from here on the log file is the only way to observe the tunnel.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from tunnel_bootstrap.constants import (
    ERROR_LAUNCH_FAILED,
    ERROR_UPDATE_EXIT_CODE,
    LOG_START_TUNNEL,
    LOG_UPDATE_FAILED,
    TUNNEL_CLOUDFLARED_FLAG_OUTPUT,
    TUNNEL_CLOUDFLARED_FLAG_URL,
    TUNNEL_CLOUDFLARED_OUTPUT_JSON,
    TUNNEL_CLOUDFLARED_SUBCOMMAND,
    TUNNEL_CLOUDFLARED_UPDATE_SUBCOMMAND,
    TUNNEL_LOCALHOST_URL_TEMPLATE,
)
from tunnel_bootstrap.exceptions import LaunchError, UpdateWarning
from tunnel_bootstrap.utils.platform import get_process_detach_kwargs

logger = logging.getLogger(__name__)


class ProcessSpawner(ABC):
    """Starts a process that outlives this one, with output sent to a file."""

    @abstractmethod
    def popen_kwargs(self) -> dict:
        """Platform-specific subprocess.Popen kwargs that detach the child."""
        ...

    def spawn_detached(self, command: list[str], log_path: Path) -> None:
        """Start `command` in the background with combined output in `log_path`.

        The log file is truncated first so stale output from an earlier run
        is never picked up.

        Raises:
            OSError: If the log cannot be opened or the process cannot be started.
        """
        with log_path.open("wb") as log_file:
            subprocess.Popen(  # noqa: S603
                command,
                stdin=subprocess.DEVNULL,
                stdout=log_file,
                stderr=subprocess.STDOUT,
                **self.popen_kwargs(),
            )


class PosixProcessSpawner(ProcessSpawner):
    """Detach by starting the child in its own session, like `cmd &` from a shell."""

    def popen_kwargs(self) -> dict:
        return get_process_detach_kwargs(windows=False)


class WindowsProcessSpawner(ProcessSpawner):
    """Detach by creating a new, windowless process group."""

    def popen_kwargs(self) -> dict:
        return get_process_detach_kwargs(windows=True)


def build_tunnel_command(binary: Path, protocol: str, port: str) -> list[str]:
    """Build the cloudflared quick-tunnel command line."""
    return [
        str(binary),
        TUNNEL_CLOUDFLARED_SUBCOMMAND,
        TUNNEL_CLOUDFLARED_FLAG_URL,
        TUNNEL_LOCALHOST_URL_TEMPLATE.format(protocol=protocol, port=port),
        TUNNEL_CLOUDFLARED_FLAG_OUTPUT,
        TUNNEL_CLOUDFLARED_OUTPUT_JSON,
    ]


class ProcessLauncher:
    """Update and start cloudflared in the background.

    Args:
        spawner: Platform-specific detach strategy.
        log_path: File that receives the tunnel's combined output.
        update_timeout: Upper bound for the `cloudflared update` run, in seconds.
    """

    def __init__(
        self,
        spawner: ProcessSpawner,
        log_path: Path,
        update_timeout: float = 60.0,
    ) -> None:
        self._spawner = spawner
        self._log_path = log_path
        self._update_timeout = update_timeout

    def try_update(self, binary: Path) -> bool:
        """Run `cloudflared update`, ignoring any failure.

        Returns:
            True if the update command exited cleanly.
        """
        cmd = [str(binary), TUNNEL_CLOUDFLARED_UPDATE_SUBCOMMAND]
        try:
            result = subprocess.run(  # noqa: S603
                cmd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=self._update_timeout,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as e:
            self._warn_update(str(e))
            return False

        if result.returncode != 0:
            self._warn_update(ERROR_UPDATE_EXIT_CODE.format(code=result.returncode))
            return False
        return True

    def launch(self, binary: Path, protocol: str, port: str) -> None:
        """Start the tunnel. Returns as soon as the process has been spawned.

        Raises:
            LaunchError: If the process could not be started.
        """
        self.try_update(binary)

        cmd = build_tunnel_command(binary, protocol, port)
        logger.info(LOG_START_TUNNEL.format(command=" ".join(cmd)))
        try:
            self._spawner.spawn_detached(cmd, self._log_path)
        except OSError as e:
            raise LaunchError(ERROR_LAUNCH_FAILED.format(error=e), command=cmd) from e

    @staticmethod
    def _warn_update(reason: str) -> None:
        warning = UpdateWarning(LOG_UPDATE_FAILED.format(error=reason))
        logger.info(str(warning))
