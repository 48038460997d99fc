"""Tests for outcome reporting."""

import io
from pathlib import Path
from unittest.mock import patch

import pytest

from tunnel_bootstrap.exceptions import TunnelTimeout
from tunnel_bootstrap.tunnel.reporter import (
    OutcomeReporter,
    PosixOutputChannel,
    WindowsOutputChannel,
)

from .fixtures import TEST_HOSTNAME_RAW, TEST_LOG_INVALID_UTF8, TEST_LOG_UNRELATED_LINES


class TestOutputChannels:
    """Tests for the step-output writers."""

    def test_posix_appends_lf_record(self, tmp_path: Path) -> None:
        output = tmp_path / "github_output"
        output.write_text("existing=1\n", encoding="utf-8")

        PosixOutputChannel(output).set_output("server", TEST_HOSTNAME_RAW)

        assert output.read_bytes() == f"existing=1\nserver={TEST_HOSTNAME_RAW}\n".encode()

    def test_windows_appends_crlf_record(self, tmp_path: Path) -> None:
        output = tmp_path / "github_output"

        WindowsOutputChannel(output).set_output("server", TEST_HOSTNAME_RAW)

        assert output.read_bytes() == f"server={TEST_HOSTNAME_RAW}\r\n".encode()

    def test_missing_output_file_falls_back_to_stream(self) -> None:
        stream = io.StringIO()
        PosixOutputChannel(None, stream=stream).set_output("server", TEST_HOSTNAME_RAW)
        assert stream.getvalue() == f"server={TEST_HOSTNAME_RAW}\n"


class TestOutcomeReporter:
    """Tests for OutcomeReporter."""

    def test_report_found_writes_server_output(self, tmp_path: Path) -> None:
        output = tmp_path / "github_output"
        reporter = OutcomeReporter(PosixOutputChannel(output), tmp_path / "cf.log")

        reporter.report_found(TEST_HOSTNAME_RAW)

        assert output.read_text(encoding="utf-8") == f"server={TEST_HOSTNAME_RAW}\n"

    def test_report_timeout_attaches_last_20_lines(self, tmp_path: Path) -> None:
        log_path = tmp_path / "cf.log"
        log_path.write_text("\n".join(TEST_LOG_UNRELATED_LINES) + "\n", encoding="utf-8")
        reporter = OutcomeReporter(PosixOutputChannel(tmp_path / "out"), log_path)

        with pytest.raises(TunnelTimeout) as exc_info:
            reporter.report_timeout()

        assert exc_info.value.log_tail == TEST_LOG_UNRELATED_LINES[-20:]
        assert "60 seconds" in str(exc_info.value)
        assert not (tmp_path / "out").exists()

    def test_report_timeout_short_log(self, tmp_path: Path) -> None:
        log_path = tmp_path / "cf.log"
        log_path.write_text("only\ntwo lines\n", encoding="utf-8")
        reporter = OutcomeReporter(PosixOutputChannel(None), log_path)

        with pytest.raises(TunnelTimeout) as exc_info:
            reporter.report_timeout()

        assert exc_info.value.log_tail == ["only", "two lines"]

    def test_report_timeout_without_log(self, tmp_path: Path) -> None:
        """A missing log still produces the timeout failure, with no tail."""
        reporter = OutcomeReporter(PosixOutputChannel(None), tmp_path / "cf.log")

        with pytest.raises(TunnelTimeout) as exc_info:
            reporter.report_timeout()

        assert exc_info.value.log_tail == []

    def test_report_timeout_tail_survives_invalid_utf8(self, tmp_path: Path) -> None:
        """Bad bytes are replaced so the diagnostic tail is still reported."""
        log_path = tmp_path / "cf.log"
        log_path.write_bytes(TEST_LOG_INVALID_UTF8)
        reporter = OutcomeReporter(PosixOutputChannel(None), log_path)

        with pytest.raises(TunnelTimeout) as exc_info:
            reporter.report_timeout()

        tail = exc_info.value.log_tail
        assert len(tail) == 2
        assert tail[0].startswith("INFO banner")
        assert "\ufffd" in tail[0]
        assert tail[1] == f"INFO https://{TEST_HOSTNAME_RAW}"

    def test_report_timeout_unreadable_log(self, tmp_path: Path) -> None:
        log_path = tmp_path / "cf.log"
        log_path.write_text("starting\n", encoding="utf-8")
        reporter = OutcomeReporter(PosixOutputChannel(None), log_path)

        with (
            patch(
                "tunnel_bootstrap.tunnel.reporter.read_file",
                side_effect=PermissionError("Permission denied"),
            ),
            pytest.raises(TunnelTimeout) as exc_info,
        ):
            reporter.report_timeout()

        assert exc_info.value.log_tail == []
