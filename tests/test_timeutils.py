"""Tests for calendar arithmetic and unit conversion."""

import re
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from lifecountdown import (
    calculate_goal_date,
    calculate_remaining_ms,
    convert_ms_to_unit,
    format_date,
    format_value,
    get_unit_label,
    parse_date,
)
from lifecountdown.util import MS_PER_DAY, MS_PER_MONTH, MS_PER_YEAR


def test_calculate_goal_date_adds_target_age():
    """Test that the goal is the target birthday at midnight."""
    goal = calculate_goal_date(date(2000, 5, 20), 80, tz="UTC")

    assert goal == datetime(2080, 5, 20, tzinfo=ZoneInfo("UTC"))
    assert goal.time() == time(0, 0)


def test_calculate_goal_date_uses_requested_zone():
    """Test that midnight is taken in the given timezone."""
    goal = calculate_goal_date(date(2000, 5, 20), 80, tz="Asia/Tokyo")

    assert goal.utcoffset() == timedelta(hours=9)
    assert (goal.year, goal.month, goal.day) == (2080, 5, 20)


def test_calculate_goal_date_defaults_to_local_midnight():
    """Test that omitting tz still yields an aware midnight."""
    goal = calculate_goal_date(date(1990, 1, 15), 30)

    assert goal.tzinfo is not None
    assert (goal.year, goal.month, goal.day) == (2020, 1, 15)
    assert (goal.hour, goal.minute, goal.second, goal.microsecond) == (0, 0, 0, 0)


def test_calculate_goal_date_drops_time_of_day():
    """Test that a datetime birth date is normalized to midnight."""
    goal = calculate_goal_date(datetime(2000, 5, 20, 15, 30), 1, tz="UTC")

    assert goal == datetime(2001, 5, 20, tzinfo=ZoneInfo("UTC"))


def test_calculate_goal_date_leap_day_in_leap_year():
    """Test a Feb 29 birthday when the target year is also a leap year."""
    goal = calculate_goal_date(date(2000, 2, 29), 80, tz="UTC")

    assert (goal.year, goal.month, goal.day) == (2080, 2, 29)


def test_calculate_goal_date_leap_day_rolls_forward():
    """Test that Feb 29 overflows to Mar 1 in a non-leap target year."""
    goal = calculate_goal_date(date(2000, 2, 29), 1, tz="UTC")

    assert (goal.year, goal.month, goal.day) == (2001, 3, 1)


@pytest.mark.parametrize("age", [1, 17, 80, 150])
def test_calculate_goal_date_year_matches_age(age):
    """Test that the goal year is always birth year plus target age."""
    goal = calculate_goal_date(date(1975, 11, 3), age, tz="UTC")

    assert goal.year == 1975 + age


def test_calculate_remaining_ms_future_goal():
    """Test remaining time for a goal in the future."""
    goal = datetime(2080, 5, 20, tzinfo=timezone.utc)
    now = datetime(2025, 1, 1, tzinfo=timezone.utc)

    remaining = calculate_remaining_ms(goal, now)

    assert remaining > 0
    assert remaining == int((goal - now).total_seconds()) * 1000


def test_calculate_remaining_ms_keeps_milliseconds():
    """Test that sub-second differences are counted in milliseconds."""
    now = datetime(2025, 1, 1, tzinfo=timezone.utc)
    goal = now + timedelta(seconds=2, milliseconds=345)

    assert calculate_remaining_ms(goal, now) == 2345


def test_calculate_remaining_ms_past_goal_is_zero():
    """Test that a goal in the past clamps to zero."""
    goal = datetime(2020, 1, 1, tzinfo=timezone.utc)
    now = datetime(2025, 1, 1, tzinfo=timezone.utc)

    assert calculate_remaining_ms(goal, now) == 0


def test_calculate_remaining_ms_goal_equals_now():
    """Test that reaching the goal exactly yields zero."""
    moment = datetime(2025, 1, 1, tzinfo=timezone.utc)

    assert calculate_remaining_ms(moment, moment) == 0


def test_calculate_remaining_ms_compares_across_zones():
    """Test that instants in different zones are compared correctly."""
    goal = datetime(2025, 1, 1, 9, 0, tzinfo=ZoneInfo("Asia/Tokyo"))
    now = datetime(2025, 1, 1, 0, 0, tzinfo=timezone.utc)

    # 09:00 Tokyo is 00:00 UTC
    assert calculate_remaining_ms(goal, now) == 0


def test_calculate_remaining_ms_defaults_to_current_time():
    """Test that now defaults to the current instant."""
    goal = datetime.now(timezone.utc) + timedelta(days=1)

    remaining = calculate_remaining_ms(goal)

    assert 0 < remaining <= MS_PER_DAY


def test_calculate_remaining_ms_rejects_naive_datetimes():
    """Test that naive datetimes raise a helpful TypeError."""
    aware = datetime(2025, 1, 1, tzinfo=timezone.utc)

    with pytest.raises(TypeError, match="timezone-aware"):
        calculate_remaining_ms(datetime(2080, 1, 1), aware)

    with pytest.raises(TypeError, match="timezone-aware"):
        calculate_remaining_ms(aware, datetime(2020, 1, 1))


def test_convert_ms_to_unit_week():
    """Test that seven days make one week."""
    assert convert_ms_to_unit(7 * MS_PER_DAY, "weeks") == pytest.approx(1, abs=1e-5)


def test_convert_ms_to_unit_average_month_and_year():
    """Test that months and years use averaged lengths."""
    assert convert_ms_to_unit(MS_PER_MONTH, "months") == pytest.approx(1, abs=1e-5)
    assert convert_ms_to_unit(MS_PER_YEAR, "years") == pytest.approx(1, abs=1e-5)
    assert MS_PER_MONTH == 30.4375 * MS_PER_DAY
    assert MS_PER_YEAR == 365.2425 * MS_PER_DAY


def test_convert_ms_to_unit_exact_units():
    """Test conversions between fixed-length units."""
    assert convert_ms_to_unit(MS_PER_DAY, "hours") == 24
    assert convert_ms_to_unit(60 * 60 * 1000, "minutes") == 60
    assert convert_ms_to_unit(60 * 1000, "seconds") == 60
    assert convert_ms_to_unit(MS_PER_DAY * 3, "days") == 3


def test_convert_ms_to_unit_unknown_unit_uses_days():
    """Test the fallback for an unrecognized unit."""
    assert convert_ms_to_unit(MS_PER_DAY * 3, "fortnights") == 3  # type: ignore[arg-type]


def test_format_value_seconds_are_floored():
    """Test that seconds render as whole numbers."""
    assert format_value(123.456, "seconds") == "123"
    assert format_value(59.999, "seconds") == "59"


def test_format_value_seconds_use_thousands_separators():
    """Test grouping of large second counts."""
    assert format_value(1234567.9, "seconds") == "1,234,567"
    assert format_value(0, "seconds") == "0"


@pytest.mark.parametrize(
    "value,unit,expected",
    [
        (123.456789, "days", "123.46"),
        (52.1234, "weeks", "52.12"),
        (55.5555, "years", "55.56"),
        (0, "hours", "0.00"),
        (12345.678, "minutes", "12345.68"),
    ],
)
def test_format_value_two_decimals(value, unit, expected):
    """Test that non-second units render with two decimals."""
    assert format_value(value, unit) == expected


def test_format_value_rounds_half_up():
    """Test that exact halves round away from zero."""
    # 0.125 is exactly representable in binary
    assert format_value(0.125, "days") == "0.13"
    # 2.675 is stored as 2.67499999..., so it rounds down
    assert format_value(2.675, "days") == "2.67"


def test_get_unit_label_japanese():
    """Test the default Japanese labels."""
    assert get_unit_label("years") == "年"
    assert get_unit_label("weeks") == "週間"
    assert get_unit_label("seconds") == "秒"


def test_get_unit_label_english():
    """Test the English labels."""
    assert get_unit_label("months", "en") == "months"


def test_get_unit_label_rejects_unknown_values():
    """Test that labels exist only for known units and locales."""
    with pytest.raises(ValueError, match="Invalid time unit"):
        get_unit_label("decades")  # type: ignore[arg-type]

    with pytest.raises(ValueError, match="Invalid locale"):
        get_unit_label("days", "fr")  # type: ignore[arg-type]


def test_format_date_zero_pads():
    """Test YYYY-MM-DD formatting."""
    assert format_date(date(2080, 5, 2)) == "2080-05-02"
    assert format_date(datetime(2001, 12, 31, 23, 59)) == "2001-12-31"
    assert format_date(date(999, 1, 1)) == "0999-01-01"


def test_parse_date_valid():
    """Test parsing a well-formed date."""
    parsed = parse_date("2000-05-20")

    assert parsed == date(2000, 5, 20)


def test_parse_date_without_zero_padding():
    """Test that components need not be zero-padded."""
    assert parse_date("2000-5-2") == date(2000, 5, 2)


@pytest.mark.parametrize(
    "text",
    ["", "invalid", "2000-05", "2000-05-", "abc-01-01", "2000-00-10", "0-01-01", "2000-1.5-01"],
)
def test_parse_date_rejects_malformed_input(text):
    """Test that malformed or incomplete strings yield None."""
    assert parse_date(text) is None


def test_parse_date_ignores_extra_components():
    """Test that anything after the day is ignored."""
    assert parse_date("2000-05-20-extra") == date(2000, 5, 20)


def test_parse_date_overflows_out_of_range_components():
    """Test calendar overflow of month and day."""
    assert parse_date("2001-13-01") == date(2002, 1, 1)
    assert parse_date("2001-04-31") == date(2001, 5, 1)
    assert parse_date("2001-02-29") == date(2001, 3, 1)


def test_parse_date_out_of_representable_range():
    """Test that years beyond the date range yield None."""
    assert parse_date("10000-01-01") is None
    assert parse_date("9999-13-01") is None


def test_end_to_end_years_display():
    """Test a full computation from stored settings to a display string."""
    birth = parse_date("2000-05-20")
    assert birth is not None
    goal = calculate_goal_date(birth, 80, tz="UTC")
    remaining = calculate_remaining_ms(goal, datetime(2025, 1, 1, tzinfo=timezone.utc))

    assert format_date(goal) == "2080-05-20"
    assert remaining > 0

    display = format_value(convert_ms_to_unit(remaining, "years"), "years")
    assert re.fullmatch(r"55\.\d{2}", display)


def test_format_value_very_large_values():
    """Test that huge finite values still render with two decimals."""
    assert format_value(1e30, "days") == "1000000000000000019884624838656.00"

    largest = format_value(1.7976931348623157e308, "years")
    assert largest.endswith(".00")
    assert len(largest) == 309 + 3
