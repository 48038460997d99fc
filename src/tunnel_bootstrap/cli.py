"""Main CLI entry point for tunnel-bootstrap."""

import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from pydantic import ValidationError

from tunnel_bootstrap.actions import ActionsCore, configure_logging
from tunnel_bootstrap.config.messages import (
    ERROR_MESSAGES,
    HELP_EXTRACT,
    HELP_OPTION_PORT,
    HELP_OPTION_PROTOCOL,
    HELP_OPTION_WORK_DIR,
    HELP_START,
    HELP_TARGET,
    HELP_VERSION,
    INFO_MESSAGES,
    PROJECT_TAGLINE,
)
from tunnel_bootstrap.config.settings import (
    ActionInputs,
    BootstrapSettings,
    RunnerSettings,
    resolve_work_dir,
)
from tunnel_bootstrap.constants import (
    ERROR_INVALID_SETTINGS,
    EXIT_CODE_FAILURE,
    TUNNEL_LOG_DECODE_ERRORS,
    VERSION,
)
from tunnel_bootstrap.tunnel.bootstrap import TunnelBootstrap, run_action
from tunnel_bootstrap.tunnel.download import make_fetcher
from tunnel_bootstrap.tunnel.extractor import extract_hostname
from tunnel_bootstrap.tunnel.platform import detect_platform_target
from tunnel_bootstrap.utils import print_error, print_info, print_success, read_file

# Load .env file from current directory if it exists
load_dotenv(Path.cwd() / ".env", verbose=False)

app = typer.Typer(
    name="tunnel-bootstrap",
    help=PROJECT_TAGLINE,
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


@app.command("start", help=HELP_START)
def start(
    port: str | None = typer.Option(None, "--port", "-p", help=HELP_OPTION_PORT),
    protocol: str | None = typer.Option(None, "--protocol", help=HELP_OPTION_PROTOCOL),
    work_dir: Path | None = typer.Option(
        None,
        "--work-dir",
        help=HELP_OPTION_WORK_DIR,
        file_okay=False,
    ),
) -> None:
    """Run the full bootstrap: install, launch, poll, report."""
    core = ActionsCore()

    overrides: dict[str, str] = {}
    if port is not None:
        overrides["port"] = port
    if protocol is not None:
        overrides["protocol"] = protocol

    try:
        runner = RunnerSettings()
        settings = BootstrapSettings()
        inputs = ActionInputs(**overrides)
    except ValidationError as e:
        core.set_failed(ERROR_INVALID_SETTINGS.format(error=_summarize_validation_error(e)))
        raise typer.Exit(code=core.exit_code) from e

    level = logging.DEBUG if runner.runner_debug else settings.log_level
    configure_logging(core, level)

    directory = resolve_work_dir(runner, settings, override=work_dir)
    pipeline = TunnelBootstrap.create(
        target=detect_platform_target(),
        work_dir=directory,
        fetch=make_fetcher(runner.runner_temp, timeout=settings.download_timeout_seconds),
        output_path=runner.github_output,
        update_timeout=settings.update_timeout_seconds,
    )

    exit_code = run_action(pipeline, inputs, core)
    if exit_code:
        raise typer.Exit(code=exit_code)


def _summarize_validation_error(error: ValidationError) -> str:
    """Render pydantic errors as `field: message` pairs on one line."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in error.errors()
    )


@app.command("target", help=HELP_TARGET)
def target() -> None:
    """Show the resolved cloudflared artifact for this host."""
    resolved = detect_platform_target()
    print_info(INFO_MESSAGES["target_os"].format(os=resolved.operating_system.value))
    print_info(INFO_MESSAGES["target_arch"].format(arch=resolved.architecture.value))
    print_info(INFO_MESSAGES["target_url"].format(url=resolved.download_url))
    print_info(INFO_MESSAGES["target_archive"].format(archive=resolved.archive_kind.value))
    print_info(INFO_MESSAGES["target_binary"].format(binary=resolved.binary_name))


@app.command("extract", help=HELP_EXTRACT)
def extract(
    log_file: Path = typer.Argument(..., help="cloudflared log file to scan"),
) -> None:
    """Scan a log file once for the quick-tunnel hostname."""
    try:
        content = read_file(log_file, errors=TUNNEL_LOG_DECODE_ERRORS)
    except OSError as e:
        print_error(ERROR_MESSAGES["log_unreadable"].format(path=log_file, error=e))
        raise typer.Exit(code=EXIT_CODE_FAILURE) from e

    hostname = extract_hostname(content)
    if not hostname:
        print_error(ERROR_MESSAGES["no_hostname"].format(path=log_file))
        raise typer.Exit(code=EXIT_CODE_FAILURE)
    print_success(INFO_MESSAGES["hostname_found"].format(hostname=hostname))


@app.command("version", help=HELP_VERSION)
def version() -> None:
    """Show version information."""
    print_info(INFO_MESSAGES["version"].format(version=VERSION))


def main() -> None:
    """Entry point for the console script."""
    app()


if __name__ == "__main__":
    main()
