"""Pytest configuration and fixtures for tunnel-bootstrap tests."""

import logging
from collections.abc import Iterator

import pytest

from tunnel_bootstrap.utils.console import set_console

_RUNNER_ENV_VARS = (
    "INPUT_PORT",
    "INPUT_PROTOCOL",
    "GITHUB_OUTPUT",
    "GITHUB_ACTION_PATH",
    "RUNNER_TEMP",
    "RUNNER_DEBUG",
    "TUNNEL_BOOTSTRAP_WORK_DIR",
    "TUNNEL_BOOTSTRAP_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_runner_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the surrounding CI job's variables out of the tests."""
    for name in _RUNNER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo handler/level changes made by configure_logging()."""
    logger = logging.getLogger("tunnel_bootstrap")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
    set_console(None)
