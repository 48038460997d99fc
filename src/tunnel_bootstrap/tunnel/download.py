"""HTTP download of release artifacts.

Streams a URL into a uniquely named file in the runner's temporary
directory, the way the CI tool cache does it. There is no retry: callers
treat any raised exception as a failed download.
"""

import logging
import tempfile
import uuid
from collections.abc import Callable
from pathlib import Path

import httpx

from tunnel_bootstrap.constants import DOWNLOAD_CHUNK_SIZE, DOWNLOAD_TEMP_PREFIX

logger = logging.getLogger(__name__)

# A fetch collaborator: URL in, local file path out, raises on failure.
FetchFunc = Callable[[str], Path]


def download_tool(
    url: str,
    dest_dir: Path | None = None,
    timeout: float = 120.0,
    client: httpx.Client | None = None,
) -> Path:
    """Download a URL to a new file and return its path.

    Args:
        url: URL to fetch. Redirects are followed.
        dest_dir: Directory for the downloaded file (defaults to the system temp dir).
        timeout: Overall HTTP timeout in seconds.
        client: Optional preconfigured client (used by tests).

    Returns:
        Path to the downloaded file.

    Raises:
        httpx.HTTPStatusError: If the server answers with a non-2xx status.
        httpx.RequestError: On network or protocol errors.
        OSError: If the file cannot be written.
    """
    target_dir = dest_dir or Path(tempfile.gettempdir())
    target_dir.mkdir(parents=True, exist_ok=True)
    dest = target_dir / f"{DOWNLOAD_TEMP_PREFIX}{uuid.uuid4().hex}"

    owns_client = client is None
    http = client or httpx.Client(timeout=timeout, follow_redirects=True)
    try:
        with http.stream("GET", url) as response:
            response.raise_for_status()
            with dest.open("wb") as f:
                for chunk in response.iter_bytes(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    f.write(chunk)
    except BaseException:
        dest.unlink(missing_ok=True)
        raise
    finally:
        if owns_client:
            http.close()

    logger.debug(f"Downloaded {url} to {dest} ({dest.stat().st_size} bytes)")
    return dest


def make_fetcher(dest_dir: Path | None = None, timeout: float = 120.0) -> FetchFunc:
    """Bind download options into a fetch collaborator for the installer."""

    def _fetch(url: str) -> Path:
        return download_tool(url, dest_dir=dest_dir, timeout=timeout)

    return _fetch
