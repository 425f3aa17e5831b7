"""Parsing of the locale-formatted timestamps written by response sheets.

Timezone-aware values are converted to UTC and returned naive. Values without
an offset are returned as written and are assumed to already share one clock;
a feed mixing both kinds compares the naive wall-clock times against UTC.
"""

from __future__ import annotations

from datetime import datetime, timezone
import re

_FORMATS = (
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%Y/%m/%d",
    "%Y-%m-%d",
)

# Google Forms export in zh-TW, e.g. "2024/3/8 下午 2:05:31"
_MERIDIEM_PATTERN = re.compile(
    r"^(\d{4})/(\d{1,2})/(\d{1,2})\s+(上午|下午)\s*(\d{1,2}):(\d{2})(?::(\d{2}))?$"
)


def parse_submission_instant(raw: str) -> datetime | None:
    """Return a naive UTC-comparable datetime, or ``None`` when ``raw`` is not understood."""
    value = raw.strip()
    if not value:
        return None

    parsed = _parse_meridiem(value)
    if parsed is None:
        parsed = _parse_iso(value)
    if parsed is None:
        for fmt in _FORMATS:
            try:
                parsed = datetime.strptime(value, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None

    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        except (OverflowError, ValueError):
            return None
    return parsed


def submission_sort_key(raw: str) -> tuple[int, datetime | str]:
    """Sort key placing parseable instants first (chronologically), then raw strings."""
    instant = parse_submission_instant(raw)
    if instant is None:
        return (1, raw)
    return (0, instant)


def _parse_iso(value: str) -> datetime | None:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def _parse_meridiem(value: str) -> datetime | None:
    match = _MERIDIEM_PATTERN.match(value)
    if match is None:
        return None
    year, month, day, meridiem, hour, minute, second = match.groups()
    hour_value = int(hour) % 12
    if meridiem == "下午":
        hour_value += 12
    try:
        return datetime(int(year), int(month), int(day), hour_value, int(minute), int(second or 0))
    except ValueError:
        return None
