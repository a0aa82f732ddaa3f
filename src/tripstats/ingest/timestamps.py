"""Parsing of the naive local timestamps used in trip records."""

from __future__ import annotations

import re
from datetime import datetime

from .errors import ParseError

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# strptime alone accepts unpadded fields such as "2020-1-6 8:0:0".
_TIMESTAMP_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")


def parse_datetime(text: str) -> datetime:
    """Parse ``YYYY-MM-DD HH:MM:SS`` into a naive datetime.

    Raises:
        ParseError: if the text is not in the exact format or names an
            impossible calendar value (e.g. ``2020-02-30``).
    """
    if not isinstance(text, str) or _TIMESTAMP_PATTERN.fullmatch(text) is None:
        raise ParseError(text, f"expected format {TIMESTAMP_FORMAT}")
    try:
        return datetime.strptime(text, TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise ParseError(text, str(exc)) from exc
