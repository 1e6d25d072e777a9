"""PDF date strings of the form ``D:YYYYMMDDHHmmSS+HH'mm'``."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

__all__ = ["format_pdf_date", "parse_pdf_date"]

_DATE = re.compile(r"([0-9]{4})([0-9]{2})([0-9]{2})([0-9]{2})([0-9]{2})([0-9]{2})([+-])([0-9]{2})([0-9]{2})")


def format_pdf_date(moment: datetime) -> str:
    """Format a datetime as a PDF date; naive datetimes are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    offset = moment.utcoffset() or timedelta(0)
    total_minutes = int(offset.total_seconds()) // 60
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return (
        f"D:{moment.year:04d}{moment.month:02d}{moment.day:02d}"
        f"{moment.hour:02d}{moment.minute:02d}{moment.second:02d}"
        f"{sign}{hours:02d}'{minutes:02d}'"
    )


def parse_pdf_date(data: object) -> datetime | None:
    """Parse a full PDF date with seconds and offset; None if it does not fit."""
    if isinstance(data, str):
        raw = data.encode("utf-8")
    elif isinstance(data, (bytes, bytearray)):
        raw = bytes(data)
    else:
        return None
    try:
        text = bytes(b for b in raw if b not in b"D:'").decode("utf-8")
    except UnicodeDecodeError:
        return None
    match = _DATE.fullmatch(text)
    if match is None:
        return None
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    sign = -1 if match.group(7) == "-" else 1
    offset = sign * timedelta(hours=int(match.group(8)), minutes=int(match.group(9)))
    try:
        return datetime(year, month, day, hour, minute, second, tzinfo=timezone(offset))
    except ValueError:
        return None