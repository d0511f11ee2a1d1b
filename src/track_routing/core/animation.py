"""Timer-driven, one-wave-per-tick consumption of a wave sequence."""

import asyncio
import inspect
import logging
from typing import Any, Callable, Iterable, Optional

from .graph import Wave

logger = logging.getLogger(__name__)


class WaveScheduler:
    """Hand waves to ``on_wave`` one at a time, yielding the loop in between.

    The remaining waves live in an iterator held as cursor state; each tick
    consumes one wave and, once ``on_wave`` has finished with it, schedules
    the next tick ``interval_s`` later. When ``on_wave`` returns an awaitable
    the next tick waits for it to complete, so waves never overlap.
    """

    def __init__(
        self,
        waves: Iterable[Wave],
        on_wave: Callable[[Wave], Any],
        interval_s: float = 0.0001,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        if interval_s < 0:
            raise ValueError(f"interval_s must be >= 0, got {interval_s}")
        self._waves = iter(waves)
        self._on_wave = on_wave
        self.interval_s = interval_s
        self._loop = loop
        self._handle: Optional[asyncio.Handle] = None
        self._done: Optional[asyncio.Future] = None
        self._pending: Optional[asyncio.Future] = None
        self._cancelled = False
        self.delivered = 0

    @property
    def running(self) -> bool:
        return self._done is not None and not self._done.done()

    def start(self) -> "WaveScheduler":
        if self._done is not None:
            raise RuntimeError("WaveScheduler can only be started once.")
        loop = self._loop or asyncio.get_running_loop()
        self._loop = loop
        self._done = loop.create_future()
        if self._cancelled:
            self._finish()
            return self
        self._handle = loop.call_soon(self._tick)
        return self

    def cancel(self) -> None:
        """Stop before the next tick. A wave being processed runs to completion."""
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._finish()

    async def wait(self) -> int:
        """Wait until all waves are delivered (or cancelled); return the count."""
        if self._done is None:
            raise RuntimeError("WaveScheduler has not been started.")
        return await self._done

    def _finish(self) -> None:
        if self._done is not None and not self._done.done():
            self._done.set_result(self.delivered)

    def _fail(self, exc: BaseException) -> None:
        logger.warning("Wave %d handler failed: %s", self.delivered, exc)
        if self._done is not None and not self._done.done():
            self._done.set_exception(exc)

    def _schedule_next(self) -> None:
        if self._cancelled:
            self._finish()
            return
        self._handle = self._loop.call_later(self.interval_s, self._tick)

    def _tick(self) -> None:
        self._handle = None
        if self._cancelled:
            self._finish()
            return
        try:
            wave = next(self._waves)
        except StopIteration:
            logger.debug("Wave sequence drained after %d wave(s)", self.delivered)
            self._finish()
            return

        try:
            result = self._on_wave(wave)
        except Exception as exc:
            self._fail(exc)
            return

        if inspect.isawaitable(result):
            self._pending = asyncio.ensure_future(result)
            self._pending.add_done_callback(self._wave_processed)
            return
        self.delivered += 1
        self._schedule_next()

    def _wave_processed(self, task: asyncio.Future) -> None:
        self._pending = None
        if task.cancelled():
            self._cancelled = True
            self._finish()
            return
        exc = task.exception()
        if exc is not None:
            self._fail(exc)
            return
        self.delivered += 1
        self._schedule_next()
