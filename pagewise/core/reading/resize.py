from __future__ import annotations

import asyncio
import time
from typing import Callable, Optional, Tuple

from pagewise.utils.logger import logger

from .bus.events import Resized
from .bus.queue import EventBus
from .constants import RESIZE_DEBOUNCE_MS
from .document import DocumentSession

Clock = Callable[[], float]


class LeadingEdgeDebouncer:
    """
    Lets the first call of a burst through and suppresses the rest.

    A burst ends once `window_ms` passes without any call; every call,
    accepted or not, restarts the window.
    """

    def __init__(self, window_ms: float = RESIZE_DEBOUNCE_MS, clock: Clock = time.monotonic) -> None:
        self.window_s = float(window_ms) / 1000.0
        self._clock = clock
        self._last_call: Optional[float] = None

    def should_fire(self) -> bool:
        now = self._clock()
        last = self._last_call
        self._last_call = now
        return last is None or (now - last) >= self.window_s

    def reset(self) -> None:
        self._last_call = None


class ResizeCoordinator:
    """Re-applies flow/spread when the rendering surface really changes size."""

    def __init__(
        self,
        bus: Optional[EventBus] = None,
        window_ms: float = RESIZE_DEBOUNCE_MS,
        clock: Clock = time.monotonic,
    ) -> None:
        self.debouncer = LeadingEdgeDebouncer(window_ms, clock)
        self._session: Optional[DocumentSession] = None
        self._last_applied: Tuple[int, int] = (0, 0)
        self._lock = asyncio.Lock()
        self.relayout_count = 0
        if bus is not None:
            bus.subscribe(Resized, self._on_resized_event)

    def attach(self, session: DocumentSession) -> None:
        self._session = session

    def detach(self) -> None:
        self._session = None

    @property
    def lock(self) -> asyncio.Lock:
        """Held while flow/spread are being re-applied."""
        return self._lock

    @property
    def last_applied_size(self) -> Tuple[int, int]:
        return self._last_applied

    def _on_resized_event(self, event: Resized):
        return self.handle_resize(event.width, event.height)

    async def handle_resize(self, width: int, height: int) -> bool:
        """Return True when the sample triggered a relayout."""
        if self._session is None or self._session.rendition is None:
            return False
        width, height = int(width), int(height)
        # A zero dimension means the view is hidden, not resized.
        if width == 0 or height == 0:
            return False
        if (width, height) == self._last_applied:
            return False
        if not self.debouncer.should_fire():
            logger.debug("Coalesced resize to %dx%d", width, height)
            return False
        self._last_applied = (width, height)
        await self.relayout()
        return True

    async def relayout(self, preserve_position: bool = True) -> None:
        """Apply the session's flow and spread, then return to the same spot."""
        session = self._session
        if session is None or session.rendition is None:
            return
        async with self._lock:
            rendition = session.rendition
            if rendition is None:
                return
            locator = rendition.current_location() if preserve_position else None
            rendition.flow(session.flow_mode)
            if session.settings.is_paginated:
                rendition.spread(session.settings.spread_mode)
            self.relayout_count += 1
            logger.debug(
                "Relayout #%d flow=%s columns=%d",
                self.relayout_count,
                session.flow_mode,
                session.columns,
            )
            if locator:
                await rendition.display(locator)
