"""Date pattern composition and formatting for datetime components."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from datetime import UTC, date, datetime
from typing import Any

from dateutil import parser as date_parser

from submission_renderer.configuration.runtime_settings import RenderSettings

INVALID_DATE = "Invalid date"

_TOKEN_PATTERN = re.compile(
    r"\[[^\]]*\]|YYYY|YY|MMMM|MMM|MM|M|DD|D|dddd|ddd|HH|H|hh|h|mm|m|ss|s|SSS|A|a|ZZ|Z"
)
_DATE_LETTERS = re.compile(r"\[[^\]]*\]|[yd]")


def _hour12(moment: datetime) -> int:
    return moment.hour % 12 or 12


def _offset(moment: datetime, separator: str) -> str:
    offset = moment.utcoffset()
    if offset is None:
        return ""
    minutes = int(offset.total_seconds() // 60)
    sign = "+" if minutes >= 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}{separator}{minutes:02d}"


_TOKENS: Mapping[str, Callable[[datetime], str]] = {
    "YYYY": lambda moment: f"{moment.year:04d}",
    "YY": lambda moment: f"{moment.year % 100:02d}",
    "MMMM": lambda moment: moment.strftime("%B"),
    "MMM": lambda moment: moment.strftime("%b"),
    "MM": lambda moment: f"{moment.month:02d}",
    "M": lambda moment: str(moment.month),
    "DD": lambda moment: f"{moment.day:02d}",
    "D": lambda moment: str(moment.day),
    "dddd": lambda moment: moment.strftime("%A"),
    "ddd": lambda moment: moment.strftime("%a"),
    "HH": lambda moment: f"{moment.hour:02d}",
    "H": lambda moment: str(moment.hour),
    "hh": lambda moment: f"{_hour12(moment):02d}",
    "h": lambda moment: str(_hour12(moment)),
    "mm": lambda moment: f"{moment.minute:02d}",
    "m": lambda moment: str(moment.minute),
    "ss": lambda moment: f"{moment.second:02d}",
    "s": lambda moment: str(moment.second),
    "SSS": lambda moment: f"{moment.microsecond // 1000:03d}",
    "A": lambda moment: "PM" if moment.hour >= 12 else "AM",
    "a": lambda moment: "pm" if moment.hour >= 12 else "am",
    "ZZ": lambda moment: _offset(moment, ""),
    "Z": lambda moment: _offset(moment, ":"),
}


def compose_datetime_pattern(component: Mapping[str, Any], settings: RenderSettings) -> str:
    """Return the display pattern for a datetime component, or ``""`` when unformatted."""
    pattern = ""
    if component.get("enableDate"):
        pattern = normalize_date_pattern(component.get("format") or settings.date_format)
    if component.get("enableTime"):
        pattern += settings.time_format
    return pattern


def normalize_date_pattern(pattern: str) -> str:
    """Upper-case year and day letters so ``yyyy-MM-dd`` reads as ``YYYY-MM-DD``."""
    return _DATE_LETTERS.sub(
        lambda match: match.group(0) if match.group(0).startswith("[") else match.group(0).upper(),
        pattern,
    )


def format_date_value(value: Any, pattern: str) -> str:
    """Format a stored date value with a moment-style pattern."""
    moment = parse_date_value(value)
    if moment is None:
        return INVALID_DATE
    return _TOKEN_PATTERN.sub(lambda match: _render_token(match.group(0), moment), pattern)


def parse_date_value(value: Any) -> datetime | None:
    """Parse ISO strings, date objects and epoch milliseconds; ``None`` when unparseable."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date_parser.isoparse(text)
    except ValueError:
        pass
    try:
        return date_parser.parse(text)
    except (ValueError, OverflowError):
        return None


def _render_token(token: str, moment: datetime) -> str:
    if token.startswith("["):
        return token[1:-1]
    return _TOKENS[token](moment)
