"""Persistent key/value storage for countdown state.

Values are stored as JSON text under string keys, the same layout a
browser's localStorage uses. The storage medium is injected as a
``StorageBackend`` so the same code runs against a JSON file on disk or an
in-memory dict in tests.

Storage problems never reach the caller: reads fall back to the supplied
initial value and failed writes are logged and reported as ``False``.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import Any, Generic, TypeVar

from typing_extensions import override

from lifecountdown.exceptions import (
    StorageError,
    StorageQuotaExceededError,
    StorageUnavailableError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Decoder = Callable[[Any], T]
Encoder = Callable[[T], Any]


class StorageBackend(ABC):
    """A string-keyed medium holding JSON text.

    Implementations raise ``StorageError`` (or ``OSError``) when the medium
    cannot be used.
    """

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the text stored under ``key``, or None if absent."""
        pass

    @abstractmethod
    def set_item(self, key: str, text: str) -> None:
        """Store ``text`` under ``key``, replacing any previous value."""
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete ``key``; deleting a missing key is not an error."""
        pass


class MemoryStorage(StorageBackend):
    """Dict-backed storage for tests and ephemeral sessions.

    Attributes:
        quota: Maximum total characters (keys plus values), None for unlimited
        available: When False every operation raises StorageUnavailableError,
            mimicking a disabled medium
    """

    def __init__(
        self,
        items: dict[str, str] | None = None,
        *,
        quota: int | None = None,
        available: bool = True,
    ) -> None:
        self._items: dict[str, str] = dict(items or {})
        self.quota: int | None = quota
        self.available: bool = available

    def _check_available(self) -> None:
        if not self.available:
            raise StorageUnavailableError("Memory storage is disabled")

    def _size_with(self, key: str, text: str) -> int:
        size = sum(len(k) + len(v) for k, v in self._items.items() if k != key)
        return size + len(key) + len(text)

    @override
    def get_item(self, key: str) -> str | None:
        self._check_available()
        return self._items.get(key)

    @override
    def set_item(self, key: str, text: str) -> None:
        self._check_available()
        if self.quota is not None and self._size_with(key, text) > self.quota:
            raise StorageQuotaExceededError(
                f"Writing {key!r} would exceed the {self.quota} character quota"
            )
        self._items[key] = text

    @override
    def remove_item(self, key: str) -> None:
        self._check_available()
        self._items.pop(key, None)

    def clear(self) -> None:
        self._check_available()
        self._items.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)


class JsonFileStorage(StorageBackend):
    """All keys kept in a single JSON object file.

    The file is re-read on every access, so edits or deletion by another
    process between sessions are picked up. Writes go through a temporary
    file and ``os.replace``.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path: Path = Path(path).expanduser()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw_text = self.path.read_text(encoding="utf-8").strip()
        except UnicodeDecodeError:
            logger.warning("Ignoring storage file %s: not valid UTF-8", self.path)
            return {}
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot read {self.path}: {exc}") from exc
        if not raw_text:
            return {}
        try:
            data = json.loads(raw_text)
        except (json.JSONDecodeError, RecursionError):
            logger.warning("Ignoring corrupt storage file %s", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: not a JSON object", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _save(self, items: dict[str, str]) -> None:
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(items, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot write {self.path}: {exc}") from exc

    @override
    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    @override
    def set_item(self, key: str, text: str) -> None:
        items = self._load()
        items[key] = text
        self._save(items)

    @override
    def remove_item(self, key: str) -> None:
        items = self._load()
        if key in items:
            del items[key]
            self._save(items)


def read_value(
    storage: StorageBackend,
    key: str,
    initial: T,
    decode: Decoder[T] | None = None,
) -> T:
    """Load the value stored under ``key``.

    Args:
        storage: Backend to read from
        key: Storage key
        initial: Returned when the key is absent, unreadable or corrupt
        decode: Optional converter from the parsed JSON to ``T``; raising
            KeyError, TypeError or ValueError marks the payload as corrupt

    Returns:
        The stored value, or ``initial``
    """
    try:
        raw = storage.get_item(key)
    except (StorageError, OSError) as exc:
        logger.warning("Storage unavailable while reading %r: %s", key, exc)
        return initial
    if raw is None:
        logger.debug("No stored value for %r", key)
        return initial
    try:
        data = json.loads(raw)
        return decode(data) if decode is not None else data
    except (KeyError, TypeError, ValueError, RecursionError) as exc:
        logger.warning("Discarding corrupt value stored under %r: %s", key, exc)
        return initial


def write_value(
    storage: StorageBackend,
    key: str,
    value: T,
    encode: Encoder[T] | None = None,
) -> bool:
    """Serialize ``value`` and store it under ``key``.

    Returns:
        True if the write landed, False if the medium refused it

    Raises:
        TypeError: If ``value`` is not JSON-serializable
    """
    text = json.dumps(
        encode(value) if encode is not None else value, ensure_ascii=False
    )
    try:
        storage.set_item(key, text)
    except (StorageError, OSError) as exc:
        logger.warning("Could not persist %r: %s", key, exc)
        return False
    return True


def reset_value(storage: StorageBackend, key: str) -> bool:
    """Remove ``key`` from storage; returns False if the medium refused."""
    try:
        storage.remove_item(key)
    except (StorageError, OSError) as exc:
        logger.warning("Could not remove %r: %s", key, exc)
        return False
    return True


class PersistedValue(Generic[T]):
    """A value mirrored to storage that notifies listeners when it changes.

    The in-memory value is authoritative for the session: a write the
    medium rejects still updates ``value`` and still notifies listeners.

    Example:
        >>> unit = PersistedValue(MemoryStorage(), "unit", "days")
        >>> unsubscribe = unit.subscribe(print)
        >>> _ = unit.set("weeks")
        weeks
        >>> _ = unit.reset()
        days
    """

    def __init__(
        self,
        storage: StorageBackend,
        key: str,
        initial: T,
        *,
        decode: Decoder[T] | None = None,
        encode: Encoder[T] | None = None,
    ) -> None:
        self.storage: StorageBackend = storage
        self.key: str = key
        self.initial: T = initial
        self._decode: Decoder[T] | None = decode
        self._encode: Encoder[T] | None = encode
        self._listeners: list[Callable[[T], None]] = []
        self._value: T = read_value(storage, key, initial, decode)

    @property
    def value(self) -> T:
        return self._value

    def get(self) -> T:
        return self._value

    def set(self, value: "T | Callable[[T], T]") -> T:
        """Replace the value, or derive it from the current one.

        Args:
            value: New value, or a callable receiving the current value and
                returning the new one

        Returns:
            The new value
        """
        new_value: T = value(self._value) if callable(value) else value  # type: ignore[assignment]
        write_value(self.storage, self.key, new_value, self._encode)
        self._update(new_value)
        return new_value

    def reset(self) -> T:
        """Delete the stored entry and revert to the initial value."""
        reset_value(self.storage, self.key)
        self._update(self.initial)
        return self.initial

    def reload(self) -> T:
        """Re-read the stored value, picking up changes made elsewhere."""
        self._update(read_value(self.storage, self.key, self.initial, self._decode))
        return self._value

    def subscribe(self, listener: Callable[[T], None]) -> Callable[[], None]:
        """Call ``listener(value)`` after each change.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _update(self, new_value: T) -> None:
        changed = new_value != self._value
        self._value = new_value
        if changed:
            for listener in list(self._listeners):
                listener(new_value)
