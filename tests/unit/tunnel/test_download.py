"""Tests for the HTTP download helper."""

from pathlib import Path

import httpx
import pytest

from tunnel_bootstrap.tunnel.download import download_tool, make_fetcher

from .fixtures import TEST_BINARY_CONTENT, TEST_DOWNLOAD_URL


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler), follow_redirects=True)


class TestDownloadTool:
    """Tests for download_tool()."""

    def test_writes_body_to_new_file(self, tmp_path: Path) -> None:
        client = _client(lambda request: httpx.Response(200, content=TEST_BINARY_CONTENT))

        path = download_tool(TEST_DOWNLOAD_URL, dest_dir=tmp_path, client=client)

        assert path.parent == tmp_path
        assert path.read_bytes() == TEST_BINARY_CONTENT

    def test_each_download_gets_its_own_file(self, tmp_path: Path) -> None:
        client = _client(lambda request: httpx.Response(200, content=TEST_BINARY_CONTENT))
        first = download_tool(TEST_DOWNLOAD_URL, dest_dir=tmp_path, client=client)
        second = download_tool(TEST_DOWNLOAD_URL, dest_dir=tmp_path, client=client)
        assert first != second

    def test_follows_redirects(self, tmp_path: Path) -> None:
        """GitHub release assets redirect to a CDN."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "example.invalid":
                return httpx.Response(302, headers={"Location": "https://cdn.invalid/asset"})
            return httpx.Response(200, content=TEST_BINARY_CONTENT)

        path = download_tool(TEST_DOWNLOAD_URL, dest_dir=tmp_path, client=_client(handler))
        assert path.read_bytes() == TEST_BINARY_CONTENT

    def test_http_error_raises_and_leaves_no_file(self, tmp_path: Path) -> None:
        client = _client(lambda request: httpx.Response(404))

        with pytest.raises(httpx.HTTPStatusError):
            download_tool(TEST_DOWNLOAD_URL, dest_dir=tmp_path, client=client)

        assert list(tmp_path.iterdir()) == []

    def test_transport_error_raises(self, tmp_path: Path) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(httpx.ConnectError):
            download_tool(TEST_DOWNLOAD_URL, dest_dir=tmp_path, client=_client(handler))


class TestMakeFetcher:
    """Tests for make_fetcher()."""

    def test_binds_destination(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple[str, Path | None, float]] = []

        def fake_download(url: str, dest_dir: Path | None = None, timeout: float = 0) -> Path:
            calls.append((url, dest_dir, timeout))
            return tmp_path / "file"

        monkeypatch.setattr("tunnel_bootstrap.tunnel.download.download_tool", fake_download)

        fetch = make_fetcher(tmp_path, timeout=5.0)
        assert fetch(TEST_DOWNLOAD_URL) == tmp_path / "file"
        assert calls == [(TEST_DOWNLOAD_URL, tmp_path, 5.0)]
