"""Platform resolution for the cloudflared artifact.

Maps the host operating system and CPU architecture to the release asset to
download and the layout it arrives in.
"""

import platform
import sys
from dataclasses import dataclass
from enum import StrEnum

from tunnel_bootstrap.constants import (
    ARCH_ID_ARM,
    CLOUDFLARED_ASSET_DARWIN_TEMPLATE,
    CLOUDFLARED_ASSET_LINUX_TEMPLATE,
    CLOUDFLARED_ASSET_WINDOWS_TEMPLATE,
    CLOUDFLARED_BINARY_NAME,
    CLOUDFLARED_BINARY_NAME_WINDOWS,
    CLOUDFLARED_RELEASE_URL_TEMPLATE,
    CLOUDFLARED_VERSION,
    OS_ID_DARWIN,
    OS_ID_LINUX,
)


class OperatingSystem(StrEnum):
    """Operating systems cloudflared is published for."""

    DARWIN = "darwin"
    LINUX = "linux"
    WINDOWS = "windows"


class Architecture(StrEnum):
    """CPU architectures cloudflared is published for."""

    AMD64 = "amd64"
    ARM64 = "arm64"


class ArchiveKind(StrEnum):
    """How the downloaded asset is packaged."""

    NONE = "none"
    TAR_GZIP = "tar-gzip"


@dataclass(frozen=True)
class PlatformTarget:
    """The cloudflared artifact for one (OS, architecture) pair.

    Attributes:
        operating_system: Target operating system.
        architecture: Target CPU architecture.
        download_url: Release asset URL.
        archive_kind: Whether the asset is a raw executable or a gzipped tarball.
        binary_name: File name of the executable once installed.
    """

    operating_system: OperatingSystem
    architecture: Architecture
    download_url: str
    archive_kind: ArchiveKind
    binary_name: str

    @property
    def is_windows(self) -> bool:
        return self.operating_system is OperatingSystem.WINDOWS


_ASSET_TEMPLATES: dict[OperatingSystem, tuple[str, ArchiveKind]] = {
    OperatingSystem.DARWIN: (CLOUDFLARED_ASSET_DARWIN_TEMPLATE, ArchiveKind.TAR_GZIP),
    OperatingSystem.LINUX: (CLOUDFLARED_ASSET_LINUX_TEMPLATE, ArchiveKind.NONE),
    OperatingSystem.WINDOWS: (CLOUDFLARED_ASSET_WINDOWS_TEMPLATE, ArchiveKind.NONE),
}


def classify_os(system: str) -> OperatingSystem:
    """Classify an OS identifier; anything unrecognized is treated as Windows."""
    normalized = system.strip().lower()
    if normalized in OS_ID_DARWIN:
        return OperatingSystem.DARWIN
    if normalized in OS_ID_LINUX:
        return OperatingSystem.LINUX
    return OperatingSystem.WINDOWS


def classify_arch(machine: str) -> Architecture:
    """Classify a CPU identifier; only arm64/aarch64 count as ARM."""
    if machine.strip().lower() in ARCH_ID_ARM:
        return Architecture.ARM64
    return Architecture.AMD64


def resolve_platform_target(
    system: str,
    machine: str,
    version: str = CLOUDFLARED_VERSION,
) -> PlatformTarget:
    """Resolve the cloudflared artifact for an OS and architecture.

    Never fails: unknown systems fall back to the Windows artifact and unknown
    architectures to amd64.

    Args:
        system: OS identifier, e.g. `sys.platform` or `platform.system()`.
        machine: Architecture identifier, e.g. `platform.machine()`.
        version: cloudflared release to download.

    Returns:
        The PlatformTarget describing what to download and how to install it.
    """
    operating_system = classify_os(system)
    architecture = classify_arch(machine)
    asset_template, archive_kind = _ASSET_TEMPLATES[operating_system]
    asset = asset_template.format(arch=architecture.value)
    binary_name = (
        CLOUDFLARED_BINARY_NAME_WINDOWS
        if operating_system is OperatingSystem.WINDOWS
        else CLOUDFLARED_BINARY_NAME
    )
    return PlatformTarget(
        operating_system=operating_system,
        architecture=architecture,
        download_url=CLOUDFLARED_RELEASE_URL_TEMPLATE.format(version=version, asset=asset),
        archive_kind=archive_kind,
        binary_name=binary_name,
    )


def detect_platform_target() -> PlatformTarget:
    """Resolve the cloudflared artifact for the current host."""
    return resolve_platform_target(sys.platform, platform.machine())
