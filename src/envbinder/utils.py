"""Utility functions for EnvBinder."""

import json
import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from enum import Enum
from typing import Any, Optional, Union

Number = Union[int, float]

# Compared case-sensitively against the stripped value
FALSY_VALUES = frozenset(["false", "0", "null", "", "undefined", "off", "no", "none", "disabled"])

# Values at or below this are Unix seconds, above are milliseconds
MILLISECONDS_THRESHOLD = 1_000_000_000_000

DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
RADIX_PATTERN = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
INTEGER_PREFIX_PATTERN = re.compile(r"\s*([+-]?\d+)")
DURATION_PATTERN = re.compile(r"(\d+)([smhdw])", re.IGNORECASE)

DURATION_UNITS = {
    "s": 1000,
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
    "w": 7 * 24 * 60 * 60 * 1000,
}

# (field name, minimum, maximum) for minute, hour, day of month, month, day of week
CRON_FIELDS = (
    ("minute", 0, 59),
    ("hour", 0, 23),
    ("day of month", 1, 31),
    ("month", 1, 12),
    ("day of week", 0, 6),
)
CRON_ITEM_PATTERN = re.compile(r"(?:\*|(\d+)(?:-(\d+))?)(?:/(\d+))?")


class TimeUnit(str, Enum):
    """Target unit for minute-based time values."""

    MILLISECONDS = "MILLISECONDS"
    SECONDS = "SECONDS"
    MINUTES = "MINUTES"
    HOURS = "HOURS"


def is_falsy(value: str) -> bool:
    return value in FALSY_VALUES


def parse_number(value: str) -> Optional[Number]:
    """Parse a numeric literal.

    Accepts decimal and scientific notation, `0x`/`0o`/`0b` literals and
    `Infinity`. Surrounding whitespace is ignored.

    Args:
        value: String to parse

    Returns:
        int for integral literals, float otherwise, or None if not numeric
    """
    text = value.strip()

    if RADIX_PATTERN.fullmatch(text):
        return int(text, 0)

    if text in ("Infinity", "+Infinity", "-Infinity"):
        return float(text.replace("Infinity", "inf"))

    if not DECIMAL_PATTERN.fullmatch(text):
        return None

    # Keep plain integers as int, everything else becomes float
    if re.fullmatch(r"[+-]?\d+", text):
        return int(text)
    return float(text)


def parse_integer(value: str) -> Optional[int]:
    """Parse the leading base-10 integer of a string (`"12.7px"` -> 12)."""
    match = INTEGER_PREFIX_PATTERN.match(value)
    return int(match.group(1)) if match else None


def parse_date(value: str) -> Optional[datetime]:
    """Parse a date from an ISO-8601 or RFC 2822 string, or a Unix timestamp.

    Date strings are tried first, so `20240517` is a basic-format ISO date.
    Other numeric values are timestamps: seconds when at most 1e12,
    milliseconds above that, returned as aware UTC datetimes.

    Args:
        value: String to parse

    Returns:
        Parsed datetime, or None if the value is not a date
    """
    # Python 3.11+ accepts the trailing "Z" designator
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        pass

    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        pass

    timestamp = parse_number(value)
    if timestamp is None:
        return None
    if timestamp > MILLISECONDS_THRESHOLD:
        timestamp = timestamp / 1000
    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def parse_duration(value: str) -> Optional[int]:
    """Convert `<integer><unit>` (s, m, h, d or w) to milliseconds."""
    match = DURATION_PATTERN.fullmatch(value)
    if not match:
        return None
    amount, unit = match.groups()
    return int(amount) * DURATION_UNITS[unit.lower()]


def convert_minutes(minutes: Number, unit: Union[TimeUnit, str]) -> Number:
    """Convert a number of minutes to another time unit; unknown units keep minutes."""
    if unit == TimeUnit.MILLISECONDS:
        return minutes * 60 * 1000
    elif unit == TimeUnit.SECONDS:
        return minutes * 60
    elif unit == TimeUnit.HOURS:
        return minutes / 60
    else:
        return minutes


def is_valid_cron(expression: str) -> bool:
    """Check a 5-field cron expression.

    Each field is a comma-separated list of items. An item is `*`, a
    number, or a range `a-b`, optionally followed by a step `/n`. Numbers
    must fall inside the field's range.

    Args:
        expression: Cron expression  # (e.g., "*/15 9-17 * * 1-5")

    Returns:
        True if every field is well formed
    """
    fields = expression.split()
    if len(fields) != len(CRON_FIELDS):
        return False

    for field, (_, minimum, maximum) in zip(fields, CRON_FIELDS):
        items = field.split(",")
        # A wildcard cannot be combined with other items
        if len(items) > 1 and any(item.startswith("*") for item in items):
            return False
        for item in items:
            if not _is_valid_cron_item(item, minimum, maximum):
                return False
    return True


def _is_valid_cron_item(item: str, minimum: int, maximum: int) -> bool:
    match = CRON_ITEM_PATTERN.fullmatch(item)
    if not match:
        return False

    start, end, step = match.groups()
    if step is not None and int(step) < 1:
        return False
    # Bare `*` or `*/n`
    if start is None:
        return True

    low = int(start)
    high = int(end) if end is not None else low
    return minimum <= low <= high <= maximum


def stringify(item: Any) -> str:
    """Render a decoded JSON element as text (`null`/`false`/`0` become empty)."""
    if isinstance(item, bool):
        return "true" if item else ""
    if not item:
        return ""
    if isinstance(item, (list, dict)):
        return json.dumps(item)
    # JSON numbers have no int/float distinction: 1.0 renders as "1"
    if isinstance(item, float) and item.is_integer():
        return str(int(item))
    return str(item)
