"""Tolerant timestamp decoding for Gitea payloads.

Gitea has emitted timestamps in several textual layouts over its releases.
Layouts are tried in a fixed order and the first successful parse wins;
the order matters because some inputs are ambiguous between layouts.
"""

import re
from collections.abc import Callable
from datetime import UTC, datetime
from functools import partial
from typing import Annotated, Any

from pydantic import BeforeValidator

NULL_MARKER = "null"

_BASE_LAYOUT = "%Y-%m-%d %H:%M:%S"

# Seconds may carry a fractional part even though the layouts omit it
_FRACTION_PATTERN = re.compile(r"^(?P<stamp>.+:\d{2})(?:\.(?P<fraction>\d+))?$")


def _parse_base(stamp: str) -> datetime:
    """Parse the date and time part, keeping at most microsecond precision."""
    match = _FRACTION_PATTERN.match(stamp)
    if match is None:
        raise ValueError(f"not a date and time: {stamp!r}")
    parsed = datetime.strptime(match["stamp"], _BASE_LAYOUT)
    fraction = match["fraction"]
    if fraction:
        parsed = parsed.replace(microsecond=int(fraction[:6].ljust(6, "0")))
    return parsed


def _parse_zone_abbreviation(value: str) -> datetime:
    """Parse ``2006-01-02 15:04:05 MST`` style values.

    Zone abbreviations carry no offset information, so every abbreviation
    is read as a zero offset.
    """
    stamp, _, zone = value.rpartition(" ")
    if not zone.isalpha() or not zone.isupper() or len(zone) < 3:
        raise ValueError(f"not a zone abbreviation: {zone!r}")
    return _parse_base(stamp).replace(tzinfo=UTC)


def _parse_zone_offset(value: str, *, colon: bool) -> datetime:
    stamp, _, offset = value.rpartition(" ")
    if not offset or offset[0] not in "+-Z":
        raise ValueError(f"not a zone offset: {offset!r}")
    if offset != "Z" and (":" in offset) != colon:
        raise ValueError(f"unexpected offset form: {offset!r}")
    zone = datetime.strptime(offset, "%z").tzinfo
    return _parse_base(stamp).replace(tzinfo=zone)


def _parse_rfc3339(value: str) -> datetime:
    if "T" not in value and "t" not in value:
        raise ValueError("RFC 3339 requires a 'T' separator")
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        raise ValueError("RFC 3339 requires a zone offset")
    return parsed


TIMESTAMP_LAYOUTS: tuple[tuple[str, Callable[[str], datetime]], ...] = (
    ("2006-01-02 15:04:05 MST", _parse_zone_abbreviation),
    ("2006-01-02 15:04:05 Z07:00", partial(_parse_zone_offset, colon=True)),
    ("2006-01-02 15:04:05 Z0700", partial(_parse_zone_offset, colon=False)),
    ("RFC3339", _parse_rfc3339),
)


def parse_timestamp(value: Any) -> datetime | None:
    """Decode a timestamp value from a Gitea payload.

    Args:
        value: Raw JSON value (string, None, or an already decoded datetime).

    Returns:
        Timezone-aware datetime, or None for the null marker.

    Raises:
        ValueError: If the value is not a string or no known layout matches.
    """
    if value is None or isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"timestamp must be a string, got {type(value).__name__}")

    text = value.strip('"')
    if text == NULL_MARKER:
        return None

    for _name, parser in TIMESTAMP_LAYOUTS:
        try:
            return parser(text)
        except ValueError:
            continue

    raise ValueError(f"unrecognized timestamp format: {value!r}")


# Field type used by every payload model for date/time values
Timestamp = Annotated[datetime | None, BeforeValidator(parse_timestamp)]
