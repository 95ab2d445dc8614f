"""Calendar arithmetic and unit conversion for the countdown.

Every function here is pure: callers pass "now" explicitly when they need
deterministic results. Instants are timezone-aware datetimes; calendar
dates are plain ``datetime.date`` values.
"""

import math
from datetime import date, datetime, time, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal, localcontext
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

from lifecountdown.units import (
    DEFAULT_LOCALE,
    MS_PER_UNIT,
    UNIT_LABELS,
    Locale,
    TimeUnit,
    check_locale,
    check_unit,
)
from lifecountdown.util import MS_PER_DAY

_ONE_MS = timedelta(milliseconds=1)
_HUNDREDTHS = Decimal("0.01")


def _require_aware(value: datetime, name: str) -> None:
    if not isinstance(value, datetime):
        raise TypeError(
            f"{name} must be a datetime.\n"
            f"Got {type(value).__name__!r}: {value!r}"
        )
    if value.tzinfo is None:
        raise TypeError(
            f"{name} must be a timezone-aware datetime.\n"
            f"Got naive datetime: {value!r}\n"
            f"Hint: Add timezone info:\n"
            f"  from zoneinfo import ZoneInfo\n"
            f"  dt = datetime(..., tzinfo=ZoneInfo('UTC'))"
        )


def parse_date(text: str) -> date | None:
    """Parse a ``YYYY-MM-DD`` string into a date.

    Returns None for empty input, fewer than three components, or components
    that are not positive integers. Month and day are not range-checked:
    out-of-range values overflow into the following month or year
    (``"2001-13-01"`` is 2002-01-01, ``"2001-04-31"`` is 2001-05-01).
    Rejecting such input is the job of the entry validation.
    """
    if not text:
        return None
    parts = text.split("-")
    if len(parts) < 3:
        return None
    try:
        year, month, day = (int(part) for part in parts[:3])
    except ValueError:
        return None
    if year <= 0 or month <= 0 or day <= 0:
        return None
    try:
        first_of_month = date(year, 1, 1) + relativedelta(months=month - 1)
        return first_of_month + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return None


def calculate_goal_date(
    birth_date: date, target_age: int, tz: str | None = None
) -> datetime:
    """Return midnight of the ``target_age``-th birthday.

    Args:
        birth_date: Date of birth
        target_age: Age in whole years to count down to
        tz: IANA timezone for the midnight; the system local zone when None

    A Feb 29 birthday whose target year is not a leap year lands on Mar 1,
    following calendar overflow rather than clamping to Feb 28.
    """
    if isinstance(birth_date, datetime):
        birth_date = birth_date.date()
    goal = birth_date + relativedelta(years=target_age)
    # relativedelta clamps to the month's last day; roll the difference forward
    if goal.day != birth_date.day:
        goal += timedelta(days=birth_date.day - goal.day)
    midnight = datetime.combine(goal, time.min)
    if tz is None:
        return midnight.astimezone()
    return midnight.replace(tzinfo=ZoneInfo(tz))


def calculate_remaining_ms(goal_date: datetime, now: datetime | None = None) -> int:
    """Milliseconds from ``now`` until ``goal_date``, never negative."""
    _require_aware(goal_date, "goal_date")
    if now is None:
        now = datetime.now(timezone.utc)
    else:
        _require_aware(now, "now")
    return max(0, (goal_date - now) // _ONE_MS)


def convert_ms_to_unit(ms: float, unit: TimeUnit) -> float:
    """Express ``ms`` in ``unit``; unrecognized units are treated as days."""
    return ms / MS_PER_UNIT.get(unit, MS_PER_DAY)


def format_value(value: float, unit: TimeUnit) -> str:
    """Render a converted value for display.

    Seconds are floored and grouped with thousands separators; every other
    unit gets exactly two decimals, rounded half-up.
    """
    if unit == "seconds":
        return f"{math.floor(value):,}"
    with localcontext() as ctx:
        # Wide enough for any finite float plus two decimals
        ctx.prec = 400
        return str(Decimal(value).quantize(_HUNDREDTHS, rounding=ROUND_HALF_UP))


def get_unit_label(unit: TimeUnit, locale: Locale = DEFAULT_LOCALE) -> str:
    return UNIT_LABELS[check_locale(locale)][check_unit(unit)]


def format_date(value: date) -> str:
    """Format a date (or datetime) as zero-padded ``YYYY-MM-DD``."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
