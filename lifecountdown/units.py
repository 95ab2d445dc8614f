"""Time units and their display labels.

``TimeUnit`` is a closed set. Every table keyed by unit is checked against
``UNITS`` at import time, so adding a unit without a label or conversion
factor fails loudly instead of rendering an empty string.
"""

from typing import Literal, TypeAlias, get_args

from lifecountdown.util import (
    MS_PER_DAY,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_MONTH,
    MS_PER_SECOND,
    MS_PER_WEEK,
    MS_PER_YEAR,
)

TimeUnit: TypeAlias = Literal[
    "years", "months", "weeks", "days", "hours", "minutes", "seconds"
]
Locale: TypeAlias = Literal["ja", "en"]

# Display order, largest to smallest
UNITS: tuple[TimeUnit, ...] = get_args(TimeUnit)
LOCALES: tuple[Locale, ...] = get_args(Locale)

DEFAULT_UNIT: TimeUnit = "days"
DEFAULT_LOCALE: Locale = "ja"

MS_PER_UNIT: dict[TimeUnit, float] = {
    "years": MS_PER_YEAR,
    "months": MS_PER_MONTH,
    "weeks": MS_PER_WEEK,
    "days": MS_PER_DAY,
    "hours": MS_PER_HOUR,
    "minutes": MS_PER_MINUTE,
    "seconds": MS_PER_SECOND,
}

UNIT_LABELS: dict[Locale, dict[TimeUnit, str]] = {
    "ja": {
        "years": "年",
        "months": "月",
        "weeks": "週間",
        "days": "日",
        "hours": "時間",
        "minutes": "分",
        "seconds": "秒",
    },
    "en": {
        "years": "years",
        "months": "months",
        "weeks": "weeks",
        "days": "days",
        "hours": "hours",
        "minutes": "minutes",
        "seconds": "seconds",
    },
}


def is_unit(value: object) -> bool:
    """True if ``value`` names one of the seven time units."""
    return isinstance(value, str) and value in UNITS


def check_unit(value: object) -> TimeUnit:
    """Return ``value`` as a TimeUnit or raise ValueError."""
    if not is_unit(value):
        valid = ", ".join(UNITS)
        raise ValueError(f"Invalid time unit: {value!r}\nValid units: {valid}\n")
    return value  # type: ignore[return-value]


def check_locale(value: object) -> Locale:
    """Return ``value`` as a Locale or raise ValueError."""
    if not isinstance(value, str) or value not in LOCALES:
        valid = ", ".join(LOCALES)
        raise ValueError(f"Invalid locale: {value!r}\nValid locales: {valid}\n")
    return value  # type: ignore[return-value]


def _check_coverage() -> None:
    expected = set(UNITS)
    if set(MS_PER_UNIT) != expected:
        raise RuntimeError(
            f"MS_PER_UNIT covers {sorted(MS_PER_UNIT)}, expected {sorted(expected)}"
        )
    if set(UNIT_LABELS) != set(LOCALES):
        raise RuntimeError(
            f"UNIT_LABELS covers locales {sorted(UNIT_LABELS)}, "
            f"expected {sorted(LOCALES)}"
        )
    for locale, labels in UNIT_LABELS.items():
        if set(labels) != expected:
            missing = sorted(expected - set(labels))
            raise RuntimeError(f"UNIT_LABELS[{locale!r}] is missing {missing}")


_check_coverage()
