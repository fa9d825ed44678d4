from datetime import datetime, timedelta, timezone

import pytest

from feedsmith.feeds.dates import (
    DateFormat,
    FreeText,
    Timestamp,
    format_date,
    parse_free_text,
    rfc2822_now,
)
from feedsmith.feeds.exceptions import InvalidDateFormat

NOW = datetime(2026, 10, 14, 15, 45, 30, tzinfo=timezone.utc)  # a Wednesday


def test_timestamp_formats_with_numeric_offset() -> None:
    result = format_date(1791964800, DateFormat.TIMESTAMP)

    parsed = datetime.fromisoformat(result)
    assert parsed.utcoffset() is not None
    assert parsed == datetime.fromtimestamp(1791964800, tz=timezone.utc)
    assert "." not in result


def test_timestamp_accepts_numeric_strings() -> None:
    assert datetime.fromisoformat(format_date(Timestamp("60"))) == datetime(1970, 1, 1, 0, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", [Timestamp("yesterday"), Timestamp(True), Timestamp(10 ** 20)])
def test_bad_timestamps_raise(value: Timestamp) -> None:
    with pytest.raises(InvalidDateFormat):
        format_date(value)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Sat, 17 Oct 2026 09:30:00 +0000", datetime(2026, 10, 17, 9, 30, tzinfo=timezone.utc)),
        ("Sat, 17 Oct 2026 11:30:00 +0200", datetime(2026, 10, 17, 9, 30, tzinfo=timezone.utc)),
        ("2026-10-17T09:30:00Z", datetime(2026, 10, 17, 9, 30, tzinfo=timezone.utc)),
        ("2026-10-17T09:30:00-05:00", datetime(2026, 10, 17, 14, 30, tzinfo=timezone.utc)),
        ("October 17, 2026 9:30 UTC", datetime(2026, 10, 17, 9, 30, tzinfo=timezone.utc)),
    ],
)
def test_absolute_dates_keep_their_instant(text: str, expected: datetime) -> None:
    assert datetime.fromisoformat(format_date(text)) == expected


def test_naive_dates_are_local_time() -> None:
    result = datetime.fromisoformat(format_date("2026-10-17 09:30"))

    assert result == datetime(2026, 10, 17, 9, 30).astimezone()


@pytest.mark.parametrize(
    "phrase, expected",
    [
        ("now", NOW),
        ("today", datetime(2026, 10, 14, tzinfo=timezone.utc)),
        ("Yesterday", datetime(2026, 10, 13, tzinfo=timezone.utc)),
        ("tomorrow", datetime(2026, 10, 15, tzinfo=timezone.utc)),
        ("3 days ago", NOW - timedelta(days=3)),
        ("2 hours ago", NOW - timedelta(hours=2)),
        ("+1 week", NOW + timedelta(weeks=1)),
        ("-30 minutes", NOW - timedelta(minutes=30)),
        ("next day", NOW + timedelta(days=1)),
        ("last week", NOW - timedelta(weeks=1)),
        ("1 fortnight ago", NOW - timedelta(weeks=2)),
        ("next monday", datetime(2026, 10, 19, tzinfo=timezone.utc)),
        ("last monday", datetime(2026, 10, 12, tzinfo=timezone.utc)),
        ("friday", datetime(2026, 10, 16, tzinfo=timezone.utc)),
        ("wednesday", datetime(2026, 10, 14, tzinfo=timezone.utc)),
    ],
)
def test_relative_phrases(phrase: str, expected: datetime) -> None:
    assert parse_free_text(phrase, now=NOW) == expected


def test_relative_months_use_calendar_arithmetic() -> None:
    end_of_month = datetime(2026, 1, 31, 12, tzinfo=timezone.utc)

    assert parse_free_text("+1 month", now=end_of_month) == datetime(2026, 2, 28, 12, tzinfo=timezone.utc)


@pytest.mark.parametrize("text", ["", "   ", "not a date at all", "32/13/2026"])
def test_unparseable_free_text_raises(text: str) -> None:
    with pytest.raises(InvalidDateFormat) as exc_info:
        format_date(FreeText(text))

    assert exc_info.value.mode == "datetime"


def test_datetime_instances_accepted_in_any_mode() -> None:
    moment = datetime(2026, 10, 17, 9, 30, tzinfo=timezone.utc)

    assert datetime.fromisoformat(format_date(moment, "timestamp")) == moment
    assert datetime.fromisoformat(format_date(moment, "datetime")) == moment


def test_rfc2822_now_shape() -> None:
    value = rfc2822_now()

    parsed = datetime.strptime(value, "%a, %d %b %Y %H:%M:%S %z")
    assert abs(datetime.now(timezone.utc) - parsed) < timedelta(minutes=1)
