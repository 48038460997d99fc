"""Cloudflared quick-tunnel bootstrap.

Downloads cloudflared for the current platform, starts a quick tunnel in the
background and publishes the trycloudflare.com hostname it reports.
"""

from tunnel_bootstrap.tunnel.bootstrap import TunnelBootstrap, run_action
from tunnel_bootstrap.tunnel.extractor import extract_hostname
from tunnel_bootstrap.tunnel.platform import (
    PlatformTarget,
    detect_platform_target,
    resolve_platform_target,
)
from tunnel_bootstrap.tunnel.poller import PollResult, PollState, TunnelUrlPoller

__all__ = [
    "PlatformTarget",
    "PollResult",
    "PollState",
    "TunnelBootstrap",
    "TunnelUrlPoller",
    "detect_platform_target",
    "extract_hostname",
    "resolve_platform_target",
    "run_action",
]
