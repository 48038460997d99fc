"""UI messages and strings for tunnel-bootstrap.

This module consolidates the user-facing CLI text. Log message templates
used inside the pipeline live in tunnel_bootstrap.constants.
"""

# =============================================================================
# Project Metadata
# =============================================================================

PROJECT_TAGLINE = "Expose a local CI service through an ephemeral cloudflared quick tunnel"

# =============================================================================
# Command Help
# =============================================================================

HELP_START = "Download cloudflared, start a quick tunnel and publish its hostname."
HELP_TARGET = "Show the cloudflared artifact resolved for this host."
HELP_EXTRACT = "Scan a cloudflared log once and print the tunnel hostname."
HELP_VERSION = "Show version information."

HELP_OPTION_PORT = "Local port to expose (defaults to INPUT_PORT)"
HELP_OPTION_PROTOCOL = "Protocol of the local service (defaults to INPUT_PROTOCOL, then tcp)"
HELP_OPTION_WORK_DIR = "Directory for the cloudflared binary and cf.log"

# =============================================================================
# Info / Error Messages
# =============================================================================

INFO_MESSAGES = {
    "version": "tunnel-bootstrap version {version}",
    "target_os": "Operating system: {os}",
    "target_arch": "Architecture:     {arch}",
    "target_url": "Download URL:     {url}",
    "target_archive": "Archive kind:     {archive}",
    "target_binary": "Binary name:      {binary}",
    "hostname_found": "Tunnel hostname: {hostname}",
}

ERROR_MESSAGES = {
    "no_hostname": "No trycloudflare.com hostname found in {path}",
    "log_unreadable": "Could not read {path}: {error}",
}
