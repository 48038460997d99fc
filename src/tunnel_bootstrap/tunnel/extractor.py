"""Extraction of the quick-tunnel hostname from cloudflared log output.

cloudflared may write plain text or JSON lines depending on its version and
flags, so each line goes through an ordered chain of parse strategies:

1. match the hostname pattern against the raw line
2. parse the line as a JSON log record and match its `message`

Each strategy is total (never raises) and the first hit wins.
"""

import re
from collections.abc import Callable, Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from tunnel_bootstrap.constants import CLOUDFLARED_URL_PATTERN

HOSTNAME_RE = re.compile(CLOUDFLARED_URL_PATTERN)

LineStrategy = Callable[[str], str | None]


class LogRecord(BaseModel):
    """One structured cloudflared log line (`--output json`)."""

    model_config = ConfigDict(extra="ignore")

    message: str
    level: Any = None
    time: Any = None


def match_hostname(text: str) -> str | None:
    """Return the trycloudflare.com hostname in `text`, without scheme."""
    match = HOSTNAME_RE.search(text)
    if match:
        return match.group(1)
    return None


def parse_raw_line(line: str) -> str | None:
    """Strategy 1: pattern match on the line as-is."""
    return match_hostname(line)


def parse_structured_line(line: str) -> str | None:
    """Strategy 2: JSON record whose `message` field contains the URL."""
    try:
        record = LogRecord.model_validate_json(line)
    except ValidationError:
        return None
    return match_hostname(record.message)


LINE_STRATEGIES: tuple[LineStrategy, ...] = (parse_raw_line, parse_structured_line)


def extract_from_line(line: str) -> str | None:
    """Run the strategy chain on one line."""
    for strategy in LINE_STRATEGIES:
        hostname = strategy(line)
        if hostname:
            return hostname
    return None


def extract_from_lines(lines: Iterable[str]) -> str | None:
    """Return the hostname from the first matching line, skipping blanks."""
    for line in lines:
        if not line.strip():
            continue
        hostname = extract_from_line(line)
        if hostname:
            return hostname
    return None


def extract_hostname(content: str) -> str | None:
    """Return the first tunnel hostname in a log, in file order."""
    return extract_from_lines(content.split("\n"))
