"""Display helpers for timestamps shown to Colombian users (es-CO)."""

from datetime import datetime, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo

DateLike = Union[datetime, str, None]


def get_timezone(name: str) -> tzinfo:
    return ZoneInfo(name)


def _parse(value: Union[datetime, str]) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def to_local_naive(value: datetime, tz: tzinfo) -> datetime:
    """Aware values are moved to ``tz``; naive ones are already local."""
    if value.tzinfo is None:
        return value
    return value.astimezone(tz).replace(tzinfo=None)


def format_es_co(value: DateLike, tz: tzinfo) -> Optional[str]:
    """
    Render a timestamp the way es-CO locales print date and time together,
    e.g. ``15/3/2024, 2:30:00 p. m.``.

    Day and month are not zero padded, the hour is on a 12 hour clock.
    """
    if value is None:
        return None
    moment = to_local_naive(_parse(value), tz)
    hour = moment.hour % 12 or 12
    period = "a. m." if moment.hour < 12 else "p. m."
    return (
        f"{moment.day}/{moment.month}/{moment.year}, "
        f"{hour}:{moment.minute:02d}:{moment.second:02d} {period}"
    )


def format_fields(row: dict, fields, tz: tzinfo) -> dict:
    formatted = dict(row)
    for field in fields:
        formatted[field] = format_es_co(formatted.get(field), tz)
    return formatted
