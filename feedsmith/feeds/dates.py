"""
Date Normalization
==================
Turns item publication dates into ISO-8601 strings.

Dates arrive either as unix timestamps or as free text. Callers can tag the
value explicitly with ``Timestamp`` / ``FreeText``; untagged values are
interpreted according to the builder's date format mode.

Responsibility: Parse and format feed dates
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from email.utils import format_datetime
from enum import Enum
from typing import Optional, Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta, MO, TU, WE, TH, FR, SA, SU

from .exceptions import InvalidDateFormat

logger = logging.getLogger(__name__)


class DateFormat(str, Enum):
    """How untagged publication dates are interpreted"""
    TIMESTAMP = "timestamp"
    DATETIME = "datetime"


@dataclass(frozen=True)
class Timestamp:
    """Unix epoch seconds"""
    seconds: Union[int, float]


@dataclass(frozen=True)
class FreeText:
    """Free-form date string (RFC-2822, ISO-8601, "yesterday", ...)"""
    text: str


DateInput = Union[Timestamp, FreeText, datetime, int, float, str]


_UNITS = {
    "sec": "seconds",
    "second": "seconds",
    "min": "minutes",
    "minute": "minutes",
    "hour": "hours",
    "day": "days",
    "week": "weeks",
    "fortnight": "fortnights",
    "month": "months",
    "year": "years",
}

_WEEKDAYS = {
    "monday": MO,
    "tuesday": TU,
    "wednesday": WE,
    "thursday": TH,
    "friday": FR,
    "saturday": SA,
    "sunday": SU,
}

_UNIT_PATTERN = r"(sec|second|min|minute|hour|day|week|fortnight|month|year)s?"

_AGO_RE = re.compile(rf"^(\d+)\s*{_UNIT_PATTERN}\s+ago$")
_OFFSET_RE = re.compile(rf"^([+-])\s*(\d+)\s*{_UNIT_PATTERN}$")
_NEXT_LAST_RE = re.compile(rf"^(next|last)\s+{_UNIT_PATTERN}$")
_WEEKDAY_RE = re.compile(r"^(?:(next|last)\s+)?(monday|tuesday|wednesday|thursday|friday|saturday|sunday)$")


def _now() -> datetime:
    return datetime.now().astimezone()


def _delta(unit: str, amount: int) -> relativedelta:
    name = _UNITS[unit]
    if name == "fortnights":
        return relativedelta(weeks=2 * amount)
    return relativedelta(**{name: amount})


def _midnight(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _parse_relative(text: str, now: datetime) -> Optional[datetime]:
    """Resolve common English relative phrases against ``now``"""
    phrase = " ".join(text.lower().split())

    if phrase == "now":
        return now
    if phrase in ("today", "midnight"):
        return _midnight(now)
    if phrase == "yesterday":
        return _midnight(now - timedelta(days=1))
    if phrase == "tomorrow":
        return _midnight(now + timedelta(days=1))

    match = _AGO_RE.match(phrase)
    if match:
        return now - _delta(match.group(2), int(match.group(1)))

    match = _OFFSET_RE.match(phrase)
    if match:
        amount = int(match.group(2))
        if match.group(1) == "-":
            amount = -amount
        return now + _delta(match.group(3), amount)

    match = _NEXT_LAST_RE.match(phrase)
    if match:
        amount = 1 if match.group(1) == "next" else -1
        return now + _delta(match.group(2), amount)

    match = _WEEKDAY_RE.match(phrase)
    if match:
        direction, day = match.group(1), _WEEKDAYS[match.group(2)]
        base = _midnight(now)
        if direction == "last":
            return base + relativedelta(days=-1, weekday=day(-1))
        if direction == "next":
            return base + relativedelta(days=+1, weekday=day(+1))
        return base + relativedelta(weekday=day(+1))

    return None


def parse_free_text(text: str, now: Optional[datetime] = None) -> datetime:
    """
    Parse a free-form date string into an aware datetime.

    Supports RFC-2822 and ISO-8601 dates, English absolute dates such as
    "18 October 2026 10:00", and relative phrases such as "yesterday",
    "3 days ago", "+1 week" or "next monday". Naive results are taken as
    local time.

    Args:
        text: Date string
        now: Reference time for relative phrases (defaults to local now)

    Returns:
        Timezone-aware datetime

    Raises:
        InvalidDateFormat: If the text cannot be parsed
    """
    if not isinstance(text, str) or not text.strip():
        raise InvalidDateFormat(text, DateFormat.DATETIME.value)

    now = now or _now()

    relative = _parse_relative(text, now)
    if relative is not None:
        return relative

    try:
        parsed = date_parser.parse(text, default=_midnight(now).replace(tzinfo=None))
    except (ValueError, OverflowError) as e:
        logger.warning(f"Unparseable date {text!r}: {e}")
        raise InvalidDateFormat(text, DateFormat.DATETIME.value) from e

    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def to_iso8601(moment: datetime) -> str:
    """Format as ISO-8601 in the local time zone, e.g. 2026-10-18T10:00:00+02:00"""
    return moment.astimezone().isoformat(timespec="seconds")


def format_date(value: DateInput, mode: Union[DateFormat, str] = DateFormat.DATETIME) -> str:
    """
    Normalize a publication date to ISO-8601.

    Args:
        value: Tagged date, datetime, or raw value interpreted by ``mode``
        mode: Date format mode for untagged values

    Returns:
        ISO-8601 string with a numeric UTC offset

    Raises:
        InvalidDateFormat: If the value cannot be interpreted
    """
    mode = DateFormat(mode)

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.astimezone()
        return to_iso8601(value)

    if not isinstance(value, (Timestamp, FreeText)):
        if mode == DateFormat.TIMESTAMP:
            value = Timestamp(value)
        else:
            value = FreeText(value)

    if isinstance(value, Timestamp):
        seconds = value.seconds
        if isinstance(seconds, str):
            try:
                seconds = float(seconds.strip())
            except ValueError as e:
                raise InvalidDateFormat(value.seconds, DateFormat.TIMESTAMP.value) from e
        if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
            raise InvalidDateFormat(value.seconds, DateFormat.TIMESTAMP.value)
        try:
            return to_iso8601(datetime.fromtimestamp(seconds).astimezone())
        except (ValueError, OverflowError, OSError) as e:
            raise InvalidDateFormat(value.seconds, DateFormat.TIMESTAMP.value) from e

    return to_iso8601(parse_free_text(value.text))


def rfc2822_now() -> str:
    """Current local time in RFC-2822 form, e.g. Sun, 18 Oct 2026 10:00:00 +0200"""
    return format_datetime(_now())
