"""Exception hierarchy for lifecountdown."""


class LifeCountdownError(Exception):
    """Base class for all errors raised by lifecountdown."""


class StorageError(LifeCountdownError):
    """A storage backend could not complete an operation."""


class StorageUnavailableError(StorageError):
    """The storage medium is disabled or cannot be reached."""


class StorageQuotaExceededError(StorageError):
    """Writing would exceed the storage medium's capacity."""


class SettingsValidationError(LifeCountdownError, ValueError):
    """User-entered settings failed validation.

    Attributes:
        code: Machine-readable reason, usable with ``message_for``
    """

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code: str = code
