"""The persisted countdown settings and their entry validation."""

from dataclasses import dataclass
from datetime import MAXYEAR, date
from typing import Any

from lifecountdown.exceptions import SettingsValidationError
from lifecountdown.timeutils import format_date, parse_date
from lifecountdown.units import DEFAULT_LOCALE, Locale, check_locale

MIN_TARGET_AGE = 1
MAX_TARGET_AGE = 150

_MESSAGES: dict[Locale, dict[str, str]] = {
    "ja": {
        "birth_date_required": "生年月日を入力してください",
        "invalid_date": "存在しない日付です",
        "future_birth_date": "生年月日に未来の日付は指定できません",
        "target_age_out_of_range": (
            f"目標年齢は{MIN_TARGET_AGE}〜{MAX_TARGET_AGE}の間で入力してください"
        ),
    },
    "en": {
        "birth_date_required": "Please enter your date of birth",
        "invalid_date": "That date does not exist",
        "future_birth_date": "Date of birth cannot be in the future",
        "target_age_out_of_range": (
            f"Target age must be between {MIN_TARGET_AGE} and {MAX_TARGET_AGE}"
        ),
    },
}


def message_for(code: str, locale: Locale = DEFAULT_LOCALE) -> str:
    """Localized text for a SettingsValidationError code."""
    return _MESSAGES[check_locale(locale)][code]


def _fail(code: str) -> SettingsValidationError:
    return SettingsValidationError(code, message_for(code, "en"))


@dataclass(frozen=True, kw_only=True)
class Settings:
    """A configured countdown.

    Attributes:
        birth_date: Date of birth as ``YYYY-MM-DD``
        target_age: Age in whole years the countdown runs to
    """

    birth_date: str
    target_age: int

    def to_json_obj(self) -> dict[str, Any]:
        return {"birthDate": self.birth_date, "targetAge": self.target_age}

    @classmethod
    def from_json_obj(cls, obj: Any) -> "Settings":
        """Rebuild settings from their stored JSON form.

        Raises:
            TypeError: If ``obj`` or one of its fields has the wrong type
            KeyError: If a field is missing
            ValueError: If the age is out of range or the birth date does not
                parse, or the goal date would fall past the last representable year
        """
        if not isinstance(obj, dict):
            raise TypeError(f"Settings must be a JSON object, got {type(obj).__name__}")
        birth_date = obj["birthDate"]
        target_age = obj["targetAge"]
        if not isinstance(birth_date, str):
            raise TypeError(f"birthDate must be a string, got {birth_date!r}")
        if isinstance(target_age, bool) or not isinstance(target_age, int):
            raise TypeError(f"targetAge must be an integer, got {target_age!r}")
        if not MIN_TARGET_AGE <= target_age <= MAX_TARGET_AGE:
            raise ValueError(
                f"targetAge must be between {MIN_TARGET_AGE} and {MAX_TARGET_AGE}, "
                f"got {target_age}"
            )
        parsed = parse_date(birth_date)
        if parsed is None:
            raise ValueError(f"birthDate is not a YYYY-MM-DD date: {birth_date!r}")
        if parsed.year + target_age > MAXYEAR:
            raise ValueError(f"Goal year {parsed.year + target_age} is past {MAXYEAR}")
        return cls(birth_date=birth_date, target_age=target_age)


def build_settings(
    year: int, month: int, day: int, target_age: int, today: date | None = None
) -> Settings:
    """Validate separately entered date fields and an age.

    The date is checked by round trip: it is parsed with overflow
    normalization and must come back with the same year, month and day.

    Raises:
        SettingsValidationError: With code ``invalid_date``,
            ``future_birth_date`` or ``target_age_out_of_range``
    """
    parsed = parse_date(f"{year:04d}-{month:02d}-{day:02d}")
    if parsed is None or (parsed.year, parsed.month, parsed.day) != (year, month, day):
        raise _fail("invalid_date")
    if parsed > (today or date.today()):
        raise _fail("future_birth_date")
    if (
        isinstance(target_age, bool)
        or not isinstance(target_age, int)
        or not MIN_TARGET_AGE <= target_age <= MAX_TARGET_AGE
    ):
        raise _fail("target_age_out_of_range")
    return Settings(birth_date=format_date(parsed), target_age=target_age)


def validate_settings(
    birth_date: str, target_age: int, today: date | None = None
) -> Settings:
    """Validate a ``YYYY-MM-DD`` birth date string and an age.

    Raises:
        SettingsValidationError: With code ``birth_date_required`` for empty
            input, otherwise as for ``build_settings``
    """
    if not birth_date or not birth_date.strip():
        raise _fail("birth_date_required")
    parts = birth_date.strip().split("-")
    if len(parts) != 3:
        raise _fail("invalid_date")
    try:
        year, month, day = (int(part) for part in parts)
    except ValueError:
        raise _fail("invalid_date") from None
    return build_settings(year, month, day, target_age, today=today)
