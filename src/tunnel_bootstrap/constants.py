"""Constants for tunnel-bootstrap.

This module centralizes the magic strings and numbers used by the bootstrap
pipeline so that the components never hard-code them.

Constants are organized by domain:
- Version
- Cloudflared release artifacts
- Filesystem layout
- Cloudflared command line
- Polling
- Outputs
- Log message templates

For runtime settings and user-facing CLI messages, import from:
- tunnel_bootstrap.config.settings
- tunnel_bootstrap.config.messages
"""

from typing import Final

from tunnel_bootstrap import __version__

# =============================================================================
# Version
# =============================================================================

VERSION = __version__

# =============================================================================
# Cloudflared Release Artifacts
# =============================================================================

CLOUDFLARED_VERSION: Final[str] = "2025.11.1"
CLOUDFLARED_RELEASE_URL_TEMPLATE: Final[str] = (
    "https://github.com/cloudflare/cloudflared/releases/download/{version}/{asset}"
)

# Asset names keyed by (os, arch)
CLOUDFLARED_ASSET_DARWIN_TEMPLATE: Final[str] = "cloudflared-darwin-{arch}.tgz"
CLOUDFLARED_ASSET_LINUX_TEMPLATE: Final[str] = "cloudflared-linux-{arch}"
CLOUDFLARED_ASSET_WINDOWS_TEMPLATE: Final[str] = "cloudflared-windows-{arch}.exe"

# Host identifiers
OS_ID_DARWIN: Final[tuple[str, ...]] = ("darwin", "macos")
OS_ID_LINUX: Final[tuple[str, ...]] = ("linux",)
ARCH_ID_ARM: Final[tuple[str, ...]] = ("arm64", "aarch64")

# =============================================================================
# Filesystem Layout
# =============================================================================

CLOUDFLARED_BINARY_NAME: Final[str] = "cloudflared"
CLOUDFLARED_BINARY_NAME_WINDOWS: Final[str] = "cloudflared.exe"
CLOUDFLARED_ARCHIVE_NAME: Final[str] = "cf.tgz"
TUNNEL_LOG_FILENAME: Final[str] = "cf.log"
DOWNLOAD_TEMP_PREFIX: Final[str] = "tunnel-bootstrap-"
DOWNLOAD_CHUNK_SIZE: Final[int] = 64 * 1024
EXECUTABLE_BITS: Final[int] = 0o111

# =============================================================================
# Cloudflared Command Line
# =============================================================================

TUNNEL_CLOUDFLARED_SUBCOMMAND: Final[str] = "tunnel"
TUNNEL_CLOUDFLARED_UPDATE_SUBCOMMAND: Final[str] = "update"
TUNNEL_CLOUDFLARED_FLAG_URL: Final[str] = "--url"
TUNNEL_CLOUDFLARED_FLAG_OUTPUT: Final[str] = "--output"
TUNNEL_CLOUDFLARED_OUTPUT_JSON: Final[str] = "json"
TUNNEL_LOCALHOST_URL_TEMPLATE: Final[str] = "{protocol}://localhost:{port}"
DEFAULT_PROTOCOL: Final[str] = "tcp"

# Windows process creation flags (subprocess only exposes these on Windows)
WINDOWS_CREATE_NEW_PROCESS_GROUP: Final[int] = 0x00000200
WINDOWS_CREATE_NO_WINDOW: Final[int] = 0x08000000

# =============================================================================
# Polling
# =============================================================================

POLL_MAX_ATTEMPTS: Final[int] = 12
POLL_INTERVAL_SECONDS: Final[float] = 5.0
POLL_DEADLINE_SECONDS: Final[int] = int(POLL_MAX_ATTEMPTS * POLL_INTERVAL_SECONDS)
LOG_TAIL_LINES: Final[int] = 20

CLOUDFLARED_URL_PATTERN: Final[str] = r"https?://([A-Za-z0-9.-]+\.trycloudflare\.com)"
TUNNEL_ENCODING_UTF8: Final[str] = "utf-8"
# cloudflared output may contain partial multi-byte sequences
TUNNEL_LOG_DECODE_ERRORS: Final[str] = "replace"

# =============================================================================
# Outputs
# =============================================================================

OUTPUT_KEY_SERVER: Final[str] = "server"
OUTPUT_RECORD_TEMPLATE: Final[str] = "{key}={value}"
OUTPUT_NEWLINE_POSIX: Final[str] = "\n"
OUTPUT_NEWLINE_WINDOWS: Final[str] = "\r\n"

EXIT_CODE_SUCCESS: Final[int] = 0
EXIT_CODE_FAILURE: Final[int] = 1

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL_DEBUG: Final[str] = "DEBUG"
LOG_LEVEL_INFO: Final[str] = "INFO"
LOG_LEVEL_WARNING: Final[str] = "WARNING"
LOG_LEVEL_ERROR: Final[str] = "ERROR"
VALID_LOG_LEVELS: Final[tuple[str, ...]] = (
    LOG_LEVEL_DEBUG,
    LOG_LEVEL_INFO,
    LOG_LEVEL_WARNING,
    LOG_LEVEL_ERROR,
)

# =============================================================================
# Log Message Templates
# =============================================================================

LOG_INPUT_PROTOCOL: Final[str] = "protocol: {protocol}"
LOG_INPUT_PORT: Final[str] = "port: {port}"
LOG_DOWNLOADING: Final[str] = "Downloading: {url}"
LOG_DOWNLOADED: Final[str] = "Downloaded file: {path}"
LOG_EXTRACTING: Final[str] = "Extracting {archive} into {target}"
LOG_ARCHIVE_REMOVE_FAILED: Final[str] = "Could not remove tar file: {error}"
LOG_INSTALLED: Final[str] = "Installed cloudflared at {path}"
LOG_UPDATE_FAILED: Final[str] = "Update failed or not needed: {error}"
LOG_START_TUNNEL: Final[str] = "Starting cloudflared: {command}"
LOG_POLL_ATTEMPT: Final[str] = "Waiting for tunnel URL (attempt {attempt}/{total})"
LOG_READ_ERROR: Final[str] = "Error reading log: {error}"
LOG_SERVER: Final[str] = "server: {server}"
LOG_TAIL_HEADER: Final[str] = "Last log lines:\n{tail}"
LOG_TAIL_READ_FAILED: Final[str] = "Could not read log tail: {error}"
LOG_NO_OUTPUT_FILE: Final[str] = "GITHUB_OUTPUT is not set; printing output to stdout instead"

# =============================================================================
# Error Messages
# =============================================================================

ERROR_NO_PORT: Final[str] = "No port !"
ERROR_INVALID_SETTINGS: Final[str] = "Invalid configuration: {error}"
ERROR_INVALID_LOG_LEVEL: Final[str] = "Invalid log level: {level} (expected one of {expected})"
ERROR_DOWNLOAD_FAILED: Final[str] = "Download failed: {error}"
ERROR_EMPTY_ARTIFACT: Final[str] = "empty or missing artifact"
ERROR_MOVE_FAILED: Final[str] = "Could not move {src} to {dst}: {error}"
ERROR_EXTRACT_FAILED: Final[str] = "Could not extract {archive}: {error}"
ERROR_CHMOD_FAILED: Final[str] = "Could not make {path} executable: {error}"
ERROR_BINARY_MISSING_AFTER_INSTALL: Final[str] = "cloudflared binary not found at {path}"
ERROR_LAUNCH_FAILED: Final[str] = "Failed to start cloudflared: {error}"
ERROR_UPDATE_EXIT_CODE: Final[str] = "exit code {code}"
ERROR_TUNNEL_TIMEOUT: Final[str] = (
    "Failed to get tunnel URL after {seconds} seconds. Please check the logs."
)
