"""Tests for hostname extraction from cloudflared logs."""

from tunnel_bootstrap.tunnel.extractor import (
    extract_from_line,
    extract_hostname,
    parse_raw_line,
    parse_structured_line,
)

from .fixtures import (
    TEST_HOSTNAME_JSON,
    TEST_HOSTNAME_LATER,
    TEST_HOSTNAME_RAW,
    TEST_LOG_BANNER,
    TEST_LOG_JSON_LINE,
    TEST_LOG_JSON_NO_URL,
    TEST_LOG_JSON_NON_STRING_MESSAGE,
    TEST_LOG_RAW,
    TEST_LOG_UNRELATED_LINES,
)


class TestExtractHostname:
    """Tests for extract_hostname()."""

    def test_raw_line(self) -> None:
        """A plain-text line yields the bare hostname."""
        assert extract_hostname(TEST_LOG_RAW) == TEST_HOSTNAME_RAW

    def test_structured_line(self) -> None:
        """A JSON line with the URL in `message` yields the hostname."""
        assert extract_hostname(TEST_LOG_JSON_LINE) == TEST_HOSTNAME_JSON

    def test_cloudflared_banner(self) -> None:
        """The boxed banner cloudflared prints is recognized."""
        assert extract_hostname(TEST_LOG_BANNER) == TEST_HOSTNAME_JSON

    def test_first_match_wins(self) -> None:
        """The URL on the earlier line is returned."""
        content = (
            "starting\n"
            f"https://{TEST_HOSTNAME_RAW}\n"
            f'{{"message":"https://{TEST_HOSTNAME_LATER}"}}\n'
        )
        assert extract_hostname(content) == TEST_HOSTNAME_RAW

    def test_first_match_wins_structured_before_raw(self) -> None:
        """File order decides, not which parse strategy matched."""
        content = f"{TEST_LOG_JSON_LINE}\nhttps://{TEST_HOSTNAME_LATER}\n"
        assert extract_hostname(content) == TEST_HOSTNAME_JSON

    def test_no_match(self) -> None:
        """Unrelated text yields None."""
        assert extract_hostname("\n".join(TEST_LOG_UNRELATED_LINES)) is None

    def test_empty_content(self) -> None:
        assert extract_hostname("") is None

    def test_blank_and_partial_lines_are_skipped(self) -> None:
        """Blank lines and a half-written JSON line do not stop the scan."""
        content = f"\n   \n{{\"message\": \"https://trunc\n{TEST_LOG_RAW}"
        assert extract_hostname(content) == TEST_HOSTNAME_RAW

    def test_crlf_line_endings(self) -> None:
        """Windows line endings do not leak into the hostname."""
        content = f"INFO start\r\nINFO https://{TEST_HOSTNAME_RAW}\r\n"
        assert extract_hostname(content) == TEST_HOSTNAME_RAW

    def test_http_scheme(self) -> None:
        assert extract_hostname(f"http://{TEST_HOSTNAME_RAW}") == TEST_HOSTNAME_RAW

    def test_other_domain_ignored(self) -> None:
        assert extract_hostname("https://example.com and https://trycloudflare.com.evil") is None


class TestParseStrategies:
    """Tests for the individual line strategies."""

    def test_raw_strategy_ignores_json_shape(self) -> None:
        assert parse_raw_line(TEST_LOG_JSON_LINE) == TEST_HOSTNAME_JSON

    def test_structured_strategy_invalid_json(self) -> None:
        """Malformed JSON is not an error."""
        assert parse_structured_line("not json at all") is None

    def test_structured_strategy_non_object(self) -> None:
        assert parse_structured_line('["https://a.trycloudflare.com"]') is None

    def test_structured_strategy_missing_message(self) -> None:
        assert parse_structured_line('{"level":"info"}') is None

    def test_structured_strategy_non_string_message(self) -> None:
        assert parse_structured_line(TEST_LOG_JSON_NON_STRING_MESSAGE) is None

    def test_structured_strategy_message_without_url(self) -> None:
        assert parse_structured_line(TEST_LOG_JSON_NO_URL) is None

    def test_structured_strategy_extra_fields(self) -> None:
        line = f'{{"level":"info","time":"t","connIndex":0,"message":"https://{TEST_HOSTNAME_JSON}"}}'
        assert parse_structured_line(line) == TEST_HOSTNAME_JSON

    def test_chain_returns_none_for_unrelated_line(self) -> None:
        assert extract_from_line(TEST_LOG_UNRELATED_LINES[0]) is None
