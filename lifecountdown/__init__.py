from .countdown import (
    SETTINGS_KEY,
    UNIT_KEY,
    Countdown,
    CountdownView,
    compute_view,
)
from .exceptions import (
    LifeCountdownError,
    SettingsValidationError,
    StorageError,
    StorageQuotaExceededError,
    StorageUnavailableError,
)
from .settings import Settings, build_settings, message_for, validate_settings
from .storage import (
    JsonFileStorage,
    MemoryStorage,
    PersistedValue,
    StorageBackend,
    read_value,
    reset_value,
    write_value,
)
from .ticker import Ticker
from .timeutils import (
    calculate_goal_date,
    calculate_remaining_ms,
    convert_ms_to_unit,
    format_date,
    format_value,
    get_unit_label,
    parse_date,
)
from .units import UNITS, Locale, TimeUnit

__all__ = [
    "TimeUnit",
    "Locale",
    "UNITS",
    "parse_date",
    "calculate_goal_date",
    "calculate_remaining_ms",
    "convert_ms_to_unit",
    "format_value",
    "get_unit_label",
    "format_date",
    "Settings",
    "build_settings",
    "validate_settings",
    "message_for",
    "StorageBackend",
    "MemoryStorage",
    "JsonFileStorage",
    "PersistedValue",
    "read_value",
    "write_value",
    "reset_value",
    "Ticker",
    "Countdown",
    "CountdownView",
    "compute_view",
    "SETTINGS_KEY",
    "UNIT_KEY",
    "LifeCountdownError",
    "StorageError",
    "StorageUnavailableError",
    "StorageQuotaExceededError",
    "SettingsValidationError",
]
