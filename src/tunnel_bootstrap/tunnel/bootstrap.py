"""The tunnel bootstrap pipeline.

Resolver -> Installer -> Launcher -> Poller -> Reporter, strictly in order.
Every fatal problem surfaces as a TunnelBootstrapError; `run_action` turns
it into a failed CI step.
"""

import logging
from pathlib import Path
from typing import TextIO

from tunnel_bootstrap.actions import ActionsCore
from tunnel_bootstrap.config.settings import ActionInputs
from tunnel_bootstrap.constants import (
    DEFAULT_PROTOCOL,
    ERROR_NO_PORT,
    LOG_INPUT_PORT,
    LOG_INPUT_PROTOCOL,
    TUNNEL_LOG_FILENAME,
)
from tunnel_bootstrap.exceptions import ConfigError, TunnelBootstrapError
from tunnel_bootstrap.tunnel.download import FetchFunc
from tunnel_bootstrap.tunnel.factory import create_output_channel, create_process_spawner
from tunnel_bootstrap.tunnel.installer import ArtifactInstaller
from tunnel_bootstrap.tunnel.launcher import ProcessLauncher
from tunnel_bootstrap.tunnel.platform import PlatformTarget
from tunnel_bootstrap.tunnel.poller import TunnelUrlPoller
from tunnel_bootstrap.tunnel.reporter import OutcomeReporter

logger = logging.getLogger(__name__)


class TunnelBootstrap:
    """Wires the pipeline stages together for one run.

    Args:
        target: Platform target, resolved once at startup.
        installer: Fetches and installs cloudflared.
        launcher: Starts cloudflared in the background.
        poller: Waits for the hostname to show up in the log.
        reporter: Publishes the result.
    """

    def __init__(
        self,
        target: PlatformTarget,
        installer: ArtifactInstaller,
        launcher: ProcessLauncher,
        poller: TunnelUrlPoller,
        reporter: OutcomeReporter,
    ) -> None:
        self.target = target
        self.installer = installer
        self.launcher = launcher
        self.poller = poller
        self.reporter = reporter

    @classmethod
    def create(
        cls,
        target: PlatformTarget,
        work_dir: Path,
        fetch: FetchFunc,
        output_path: Path | None,
        update_timeout: float = 60.0,
        output_stream: TextIO | None = None,
    ) -> "TunnelBootstrap":
        """Build a pipeline with the default stage implementations."""
        log_path = work_dir / TUNNEL_LOG_FILENAME
        return cls(
            target=target,
            installer=ArtifactInstaller(work_dir, fetch),
            launcher=ProcessLauncher(
                create_process_spawner(target),
                log_path,
                update_timeout=update_timeout,
            ),
            poller=TunnelUrlPoller(log_path),
            reporter=OutcomeReporter(
                create_output_channel(target, output_path, stream=output_stream),
                log_path,
            ),
        )

    def run(self, inputs: ActionInputs) -> str:
        """Run the whole pipeline.

        Returns:
            The public tunnel hostname.

        Raises:
            ConfigError: If no port was given (nothing is downloaded).
            DownloadError, InstallError, LaunchError: From the respective stage.
            TunnelTimeout: If no hostname appeared before the deadline.
        """
        logger.info(LOG_INPUT_PROTOCOL.format(protocol=inputs.protocol))
        logger.info(LOG_INPUT_PORT.format(port=inputs.port))
        protocol = inputs.protocol or DEFAULT_PROTOCOL
        if not inputs.port:
            raise ConfigError(ERROR_NO_PORT, key="port")

        artifact = self.installer.install(self.target)
        self.launcher.launch(artifact.path, protocol, inputs.port)

        result = self.poller.poll()
        if not result.found or result.hostname is None:
            self.reporter.report_timeout()

        self.reporter.report_found(result.hostname)
        return result.hostname


def run_action(pipeline: TunnelBootstrap, inputs: ActionInputs, core: ActionsCore) -> int:
    """Run the pipeline and convert any failure into a failed step.

    Returns:
        The exit code recorded by `core` (0 on success, 1 after a failure).
    """
    try:
        pipeline.run(inputs)
    except TunnelBootstrapError as e:
        core.set_failed(str(e))
    except Exception as e:
        logger.debug("Unexpected error during bootstrap", exc_info=True)
        core.set_failed(str(e))
    return core.exit_code
