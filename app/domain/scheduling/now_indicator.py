"""Live "now" line - periodically recomputes the current position on a schedule grid"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional

from ...config import NOW_REFRESH_SECONDS
from .geometry import TimeWindow, in_window, position_of

logger = logging.getLogger(__name__)


class NowIndicator:
    """
    Polls the clock every `interval` seconds and keeps the last computed
    position, or None while the current time is outside the window.

    The periodic task must be torn down when the board goes away, either
    with stop()/aclose() or by using the indicator as an async context
    manager.
    """

    def __init__(
        self,
        window: TimeWindow,
        clock: Callable[[], datetime] = datetime.now,
        interval: float = NOW_REFRESH_SECONDS,
        on_change: Optional[Callable[[Optional[float]], None]] = None,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.window = window
        self.clock = clock
        self.interval = interval
        self.on_change = on_change
        self.position: Optional[float] = None
        self._task: Optional[asyncio.Task] = None

    def compute(self) -> Optional[float]:
        """Recompute and store the position for the current clock reading"""
        now = self.clock()
        previous = self.position
        self.position = position_of(now, self.window) if in_window(now, self.window) else None
        if self.on_change and self.position != previous:
            self.on_change(self.position)
        return self.position

    @property
    def visible(self) -> bool:
        return self.position is not None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Compute immediately, then keep recomputing on the event loop"""
        if self.running:
            return
        self.compute()
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.compute()
            except Exception as e:
                # Keep the last good position and try again next tick
                logger.error(f"❌ Now indicator refresh failed: {e}")

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def aclose(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def __aenter__(self) -> "NowIndicator":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
