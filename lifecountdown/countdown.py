"""Headless countdown shell.

Wires the persisted settings and unit, the ticker and the time engine
together. A presentation layer subscribes to ``Countdown`` and renders each
``CountdownView`` it receives; it never touches storage or the engine
directly.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

from lifecountdown.config import CountdownConfig, get_config
from lifecountdown.settings import Settings, validate_settings
from lifecountdown.storage import JsonFileStorage, PersistedValue, StorageBackend
from lifecountdown.ticker import Ticker, utc_now
from lifecountdown.timeutils import (
    calculate_goal_date,
    calculate_remaining_ms,
    convert_ms_to_unit,
    format_date,
    format_value,
    get_unit_label,
    parse_date,
)
from lifecountdown.units import (
    DEFAULT_LOCALE,
    DEFAULT_UNIT,
    Locale,
    TimeUnit,
    check_unit,
)

logger = logging.getLogger(__name__)

SETTINGS_KEY = "life-countdown-settings"
UNIT_KEY = "life-countdown-unit"


@dataclass(frozen=True, kw_only=True)
class CountdownView:
    """Everything needed to render one frame of the countdown."""

    unit: TimeUnit
    remaining_ms: int
    display_value: str
    unit_label: str
    goal_date: datetime
    goal_date_text: str


def compute_view(
    settings: Settings | None,
    unit: TimeUnit,
    now: datetime,
    *,
    locale: Locale = DEFAULT_LOCALE,
    tz: str | None = None,
) -> CountdownView | None:
    """Derive the displayed countdown from settings, unit and the current instant.

    Returns None when there is nothing to count down to: no settings, a zero
    target age, or a birth date that does not parse.
    """
    if settings is None or not settings.birth_date or not settings.target_age:
        return None
    birth_date = parse_date(settings.birth_date)
    if birth_date is None:
        return None
    goal_date = calculate_goal_date(birth_date, settings.target_age, tz)
    remaining_ms = calculate_remaining_ms(goal_date, now)
    return CountdownView(
        unit=unit,
        remaining_ms=remaining_ms,
        display_value=format_value(convert_ms_to_unit(remaining_ms, unit), unit),
        unit_label=get_unit_label(unit, locale),
        goal_date=goal_date,
        goal_date_text=format_date(goal_date),
    )


def _decode_settings(data: Any) -> Settings | None:
    return None if data is None else Settings.from_json_obj(data)


def _encode_settings(settings: Settings | None) -> Any:
    return None if settings is None else settings.to_json_obj()


class Countdown:
    """Stateful countdown: persisted settings and unit plus a 1 Hz clock.

    Listeners registered with ``subscribe`` receive the fresh view (or None
    when unconfigured) after every tick, save, reset and unit change.
    """

    def __init__(
        self,
        storage: StorageBackend | None = None,
        config: CountdownConfig | None = None,
        now: datetime | None = None,
    ) -> None:
        self.config: CountdownConfig = config or get_config()
        self.storage: StorageBackend = (
            storage if storage is not None else JsonFileStorage(self.config.storage_path)
        )
        self.settings: PersistedValue[Settings | None] = PersistedValue(
            self.storage,
            SETTINGS_KEY,
            None,
            decode=_decode_settings,
            encode=_encode_settings,
        )
        self.unit: PersistedValue[TimeUnit] = PersistedValue(
            self.storage, UNIT_KEY, DEFAULT_UNIT, decode=check_unit
        )
        self.now: datetime = now or utc_now()
        self._listeners: list[Callable[[CountdownView | None], None]] = []
        self._ticker: Ticker = Ticker(self.tick, interval=self.config.tick_interval)
        self.settings.subscribe(lambda _: self._notify())
        self.unit.subscribe(lambda _: self._notify())

    @property
    def has_settings(self) -> bool:
        settings = self.settings.value
        return settings is not None and bool(settings.birth_date) and bool(
            settings.target_age
        )

    def view(self) -> CountdownView | None:
        return compute_view(
            self.settings.value,
            self.unit.value,
            self.now,
            locale=self.config.locale,
            tz=self.config.timezone,
        )

    def form_defaults(self) -> tuple[str, int]:
        """Initial (birth date, target age) for the settings form."""
        settings = self.settings.value
        if settings is None:
            return "", self.config.default_target_age
        return settings.birth_date, settings.target_age

    def tick(self, now: datetime | None = None) -> None:
        self.now = now or utc_now()
        self._notify()

    def save_settings(self, settings: Settings) -> None:
        self.settings.set(settings)
        logger.info(
            "Saved countdown settings (target age %d)", settings.target_age
        )

    def submit(self, birth_date: str, target_age: int) -> Settings:
        """Validate form input and save it.

        Raises:
            SettingsValidationError: If the input is rejected; nothing is saved
        """
        zone = ZoneInfo(self.config.timezone) if self.config.timezone else None
        today = self.now.astimezone(zone).date()
        settings = validate_settings(birth_date, target_age, today=today)
        self.save_settings(settings)
        return settings

    def reset_settings(self) -> None:
        self.settings.reset()
        logger.info("Countdown settings reset")

    def select_unit(self, unit: TimeUnit) -> None:
        self.unit.set(check_unit(unit))

    def subscribe(
        self, listener: Callable[[CountdownView | None], None]
    ) -> Callable[[], None]:
        """Register ``listener``; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def start(self) -> None:
        await self._ticker.start()

    async def stop(self) -> None:
        await self._ticker.stop()

    def _notify(self) -> None:
        if not self._listeners:
            return
        current = self.view()
        for listener in list(self._listeners):
            listener(current)
