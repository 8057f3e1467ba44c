"""Formatting helpers for table cells."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Final

from bo_table.columns import ColumnType

PLACEHOLDER: Final[str] = "—"
ERROR_PLACEHOLDER: Final[str] = "Error"

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR


@dataclass(frozen=True)
class FormattedDateTime:
    formatted: str
    raw: str


def parse_timestamp(value: Any) -> datetime | None:
    """Coerce ``value`` to an aware datetime, or None when it is unusable.

    Naive datetimes and ISO strings without an offset are taken as UTC.
    Numbers are epoch seconds.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def format_calendar_date(value: datetime) -> str:
    """Locale date representation in the viewer's local time zone."""
    return value.astimezone().strftime("%x")


def format_datetime(
    value: Any,
    *,
    now: datetime | None = None,
    relative_days_limit: int = 7,
) -> FormattedDateTime | None:
    """Recency-aware label plus ISO-8601 instant for a timestamp."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None

    reference = now or datetime.now(timezone.utc)
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=timezone.utc)

    seconds = int((reference - parsed).total_seconds())
    if seconds < _MINUTE:
        label = "Just now"
    elif seconds < _HOUR:
        label = _plural(seconds // _MINUTE, "minute")
    elif seconds < _DAY:
        label = _plural(seconds // _HOUR, "hour")
    elif seconds // _DAY <= relative_days_limit:
        label = _plural(seconds // _DAY, "day")
    else:
        label = format_calendar_date(parsed)

    raw = parsed.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
    return FormattedDateTime(formatted=label, raw=raw)


def format_number(value: Any) -> str:
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return f"{value:,}"
    try:
        number = float(value)
    except (TypeError, ValueError):
        return str(value)
    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,.2f}"


def format_cell_value(
    value: Any,
    column_type: ColumnType = ColumnType.TEXT,
    *,
    now: datetime | None = None,
) -> str:
    """Display text for a raw field value of a typed column."""
    if value is None or value == "":
        return PLACEHOLDER
    if column_type is ColumnType.DATETIME:
        formatted = format_datetime(value, now=now)
        return formatted.formatted if formatted is not None else PLACEHOLDER
    if column_type is ColumnType.NUMBER:
        return format_number(value)
    if column_type is ColumnType.BOOLEAN:
        return "Yes" if value else "No"
    return str(value)
