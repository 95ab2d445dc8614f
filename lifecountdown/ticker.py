"""Cancellable periodic timer driving the countdown's notion of "now"."""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Ticker:
    """Asyncio task that calls ``callback(now)`` every ``interval`` seconds.

    Runs on the current event loop, so callbacks never overlap with other
    work on that loop. Once ``stop()`` returns (or ``cancel()`` has been
    called) the callback is not invoked again.
    """

    def __init__(
        self,
        callback: Callable[[datetime], None],
        interval: float = 1.0,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"Ticker interval must be positive, got {interval}")
        self.interval: float = interval
        self._callback: Callable[[datetime], None] = callback
        self._clock: Callable[[], datetime] = clock
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start ticking; a no-op if already running."""
        if self.running:
            return
        self._task = asyncio.create_task(self._loop())
        logger.debug("Ticker started (interval=%ss)", self.interval)

    def cancel(self) -> None:
        """Request cancellation without waiting; safe to call from a callback."""
        if self._task is not None:
            self._task.cancel()

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug("Ticker stopped")

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self._callback(self._clock())
            except Exception:
                logger.exception("Ticker callback failed")
