from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone

from ..core.exceptions import ValidationError

# fromisoformat before 3.11 only takes 3 or 6 fractional digits
_FRACTION_RE = re.compile(r"(:\d{2})\.(\d+)")


def _pad_fraction(match: "re.Match[str]") -> str:
    return f"{match.group(1)}.{(match.group(2) + '000000')[:6]}"


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date.

    Full ISO datetimes are accepted too; only their date part is kept.
    """
    text = (value or "").strip()
    try:
        if "T" in text:
            return parse_iso_datetime(text).date()
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Ngày không hợp lệ: {value}")


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp (a trailing 'Z' means UTC).

    Naive values are treated as UTC so they can be compared with aware ones.
    """
    text = (value or "").strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(_pad_fraction, text, count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_iso_utc(value: datetime) -> str:
    """Format like JavaScript's Date.toISOString(): 2025-01-01T09:00:00.000Z."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max)


def day_bounds(now: datetime) -> tuple[datetime, datetime]:
    """[today 00:00, tomorrow 00:00) in the server's local time."""
    start = start_of_day(now.date())
    return start, start + timedelta(days=1)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def now_utc() -> datetime:
    return datetime.now(timezone.utc)
