# This file parses the start/end query parameters used by admin reports.
# It exists so both report routes apply the same inclusive-range rules.
# Date-only values expand to whole days; aware timestamps are normalized to naive UTC to match stored payment dates.

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, time


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime


def _parse_bound(raw: str, *, is_end: bool) -> datetime:
    value = raw.strip()
    if not value:
        raise ValueError("Date value must not be blank.")
    if len(value) == 10:
        try:
            day = date.fromisoformat(value)
        except ValueError as exc:
            raise ValueError(f"Invalid date: {raw!r}") from exc
        return datetime.combine(day, time.max if is_end else time.min)

    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValueError(f"Invalid date-time: {raw!r}") from exc
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


def parse_date_range(start: str | None, end: str | None) -> DateRange:
    """Validate report bounds; raises ValueError with a client-facing message."""

    if not start or not end:
        raise ValueError("Both start and end date are required.")
    start_ts = _parse_bound(start, is_end=False)
    end_ts = _parse_bound(end, is_end=True)
    if start_ts > end_ts:
        raise ValueError("start must be less than or equal to end.")
    return DateRange(start=start_ts, end=end_ts)
