"""Installation of the cloudflared binary into the working directory.

The installer fetches the release asset, checks that something non-empty
arrived, then puts the executable at a fixed path:

- macOS: the tarball is extracted into the working directory
- Linux: the raw binary is moved to ./cloudflared and made executable
- Windows: the raw binary is moved to ./cloudflared.exe

Any artifact left by a previous run is overwritten.
"""

import logging
import tarfile
from dataclasses import dataclass
from pathlib import Path

from tunnel_bootstrap.constants import (
    CLOUDFLARED_ARCHIVE_NAME,
    ERROR_BINARY_MISSING_AFTER_INSTALL,
    ERROR_CHMOD_FAILED,
    ERROR_DOWNLOAD_FAILED,
    ERROR_EMPTY_ARTIFACT,
    ERROR_EXTRACT_FAILED,
    ERROR_MOVE_FAILED,
    LOG_ARCHIVE_REMOVE_FAILED,
    LOG_DOWNLOADED,
    LOG_DOWNLOADING,
    LOG_EXTRACTING,
    LOG_INSTALLED,
)
from tunnel_bootstrap.exceptions import DownloadError, InstallError
from tunnel_bootstrap.tunnel.download import FetchFunc
from tunnel_bootstrap.tunnel.platform import ArchiveKind, PlatformTarget
from tunnel_bootstrap.utils.file_utils import (
    delete_file,
    file_size,
    is_executable,
    make_executable,
    move_file,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstalledArtifact:
    """A cloudflared binary ready to launch.

    Attributes:
        path: Location of the executable.
        is_executable: Whether the execute bit is set (always True off Windows).
    """

    path: Path
    is_executable: bool


class ArtifactInstaller:
    """Fetch and install the cloudflared binary for a platform target.

    Args:
        work_dir: Directory that receives the binary.
        fetch: Download collaborator, URL -> local file path. Raises on failure.
    """

    def __init__(self, work_dir: Path, fetch: FetchFunc) -> None:
        self._work_dir = work_dir
        self._fetch = fetch

    def binary_path(self, target: PlatformTarget) -> Path:
        """Path the binary for `target` is installed at."""
        return self._work_dir / target.binary_name

    def install(self, target: PlatformTarget) -> InstalledArtifact:
        """Download and install cloudflared.

        Args:
            target: The resolved platform target.

        Returns:
            The installed artifact.

        Raises:
            DownloadError: If the fetch fails or yields an empty/missing file.
            InstallError: If moving, extracting or chmod-ing the binary fails.
        """
        fetched = self._download(target.download_url)

        self._work_dir.mkdir(parents=True, exist_ok=True)
        if target.archive_kind is ArchiveKind.TAR_GZIP:
            self._install_from_archive(fetched)
        else:
            self._move(fetched, self.binary_path(target))

        binary = self.binary_path(target)
        if not binary.is_file():
            raise InstallError(ERROR_BINARY_MISSING_AFTER_INSTALL.format(path=binary), path=binary)

        if not target.is_windows:
            self._ensure_executable(binary, required=target.archive_kind is ArchiveKind.NONE)

        logger.info(LOG_INSTALLED.format(path=binary))
        return InstalledArtifact(
            path=binary,
            is_executable=target.is_windows or is_executable(binary),
        )

    def _download(self, url: str) -> Path:
        logger.info(LOG_DOWNLOADING.format(url=url))
        try:
            fetched = self._fetch(url)
        except Exception as e:
            raise DownloadError(ERROR_DOWNLOAD_FAILED.format(error=e), url=url) from e
        logger.info(LOG_DOWNLOADED.format(path=fetched))

        # Validate before any post-processing so a bad download never gets installed
        size = file_size(fetched)
        if not size:
            raise DownloadError(
                ERROR_DOWNLOAD_FAILED.format(error=ERROR_EMPTY_ARTIFACT),
                url=url,
                path=fetched,
            )
        return fetched

    def _move(self, src: Path, dst: Path) -> None:
        try:
            move_file(src, dst)
        except OSError as e:
            raise InstallError(ERROR_MOVE_FAILED.format(src=src, dst=dst, error=e), path=dst) from e

    def _install_from_archive(self, fetched: Path) -> None:
        archive = self._work_dir / CLOUDFLARED_ARCHIVE_NAME
        self._move(fetched, archive)

        logger.info(LOG_EXTRACTING.format(archive=archive, target=self._work_dir))
        try:
            with tarfile.open(archive, "r:gz") as tar:
                tar.extractall(self._work_dir, filter="data")
        except (tarfile.TarError, OSError) as e:
            raise InstallError(ERROR_EXTRACT_FAILED.format(archive=archive, error=e), path=archive) from e

        try:
            delete_file(archive)
        except OSError as e:
            logger.warning(LOG_ARCHIVE_REMOVE_FAILED.format(error=e))

    def _ensure_executable(self, binary: Path, required: bool) -> None:
        try:
            make_executable(binary)
        except OSError as e:
            message = ERROR_CHMOD_FAILED.format(path=binary, error=e)
            if required:
                raise InstallError(message, path=binary) from e
            logger.warning(message)
