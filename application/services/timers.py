"""Asyncio timers owned by the check orchestrator."""
from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Optional

from core.logging.logger import get_logger

Callback = Callable[[], Any]

logger = get_logger(__name__, service="timers")


async def _invoke(callback: Callback) -> None:
    try:
        result = callback()
        if inspect.isawaitable(result):
            await result
    except asyncio.CancelledError:
        raise
    except Exception:
        logger.exception("timer callback failed")


class RepeatingTimer:
    """Calls `callback` every `interval_s` seconds, like setInterval.

    The callback is awaited, so it should return quickly; the check
    orchestrator's trigger only schedules a task.
    """

    def __init__(self, interval_s: float, callback: Callback, *, run_immediately: bool = True) -> None:
        if interval_s <= 0:
            raise ValueError("interval must be positive")
        self.interval_s = interval_s
        self.callback = callback
        self.run_immediately = run_immediately
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop())

    async def _loop(self) -> None:
        if self.run_immediately:
            await _invoke(self.callback)
        while True:
            await asyncio.sleep(self.interval_s)
            await _invoke(self.callback)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass


class DeferredTimer:
    """One-shot, cancellable timer, like setTimeout."""

    def __init__(self, delay_s: float, callback: Callback) -> None:
        self.delay_s = max(0.0, delay_s)
        self.callback = callback
        loop = asyncio.get_running_loop()
        self.due_at = loop.time() + self.delay_s
        self._task: Optional[asyncio.Task[None]] = loop.create_task(self._run())
        self.fired = False

    async def _run(self) -> None:
        await asyncio.sleep(self.delay_s)
        self.fired = True
        await _invoke(self.callback)

    @property
    def pending(self) -> bool:
        return self._task is not None and not self.fired and not self._task.done()

    def cancel(self) -> None:
        if self._task is not None and not self.fired:
            self._task.cancel()
        self._task = None
