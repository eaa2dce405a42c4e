from __future__ import annotations

import math
from typing import Callable, List, Optional, Tuple

from pagewise.utils.logger import logger

from .bus.events import Locator, Relocated
from .bus.queue import EventBus
from .document import DocumentSession
from .errors import NavigationNoop
from .location_index import LocationIndex

PageListener = Callable[[int, int], None]

UNKNOWN_TOTAL_LABEL = "…"


def _floor_or(value: object, default: int) -> int:
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or number == 0:
        return default
    if math.isinf(number):
        return default
    return int(math.floor(number))


class TopBarViewModel:
    """
    Current/total page state behind the page-number field.

    `total_pages == 0` means the location index is not available; in that state
    `goto` does nothing while Next/Prev keep working through the renderer.
    """

    def __init__(self, index: LocationIndex) -> None:
        self.index = index
        self.current_page = 1
        self.total_pages = 0
        self._session: Optional[DocumentSession] = None
        self._listeners: List[PageListener] = []

    def attach(self, session: DocumentSession) -> None:
        self._session = session

    def bind(self, bus: EventBus) -> None:
        bus.subscribe(Relocated, self._on_relocated_event)

    def subscribe(self, listener: PageListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: PageListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _update(self, current: int, total: int) -> None:
        if (current, total) == (self.current_page, self.total_pages):
            return
        self.current_page = current
        self.total_pages = total
        for listener in list(self._listeners):
            listener(current, total)

    def set_total(self, total: int) -> None:
        self._update(self.current_page, max(1, _floor_or(total, 0)))

    def set_current(self, page: int) -> None:
        self._update(max(1, _floor_or(page, 1)), self.total_pages)

    def clear_total(self) -> None:
        self._update(self.current_page, 0)

    @property
    def total_known(self) -> bool:
        return self.total_pages > 0

    @property
    def total_label(self) -> str:
        return str(self.total_pages) if self.total_known else UNKNOWN_TOTAL_LABEL

    def resolve(self, requested: int) -> Tuple[int, Locator]:
        """Clamp `requested` into range and map it to a page-boundary locator."""
        if not self.total_known or not self.index.is_ready:
            raise NavigationNoop("Page index is not available yet")
        page = max(1, min(self.total_pages, _floor_or(requested, 1)))
        locator = self.index.locator_of_page(page - 1)
        if not locator:
            raise NavigationNoop(f"No locator for page {page}")
        return page, locator

    async def goto(self, requested: int) -> Optional[int]:
        try:
            page, locator = self.resolve(requested)
        except NavigationNoop as exc:
            logger.debug("Ignoring goto(%s): %s", requested, exc)
            return None
        if self._session is None or self._session.rendition is None:
            logger.debug("Ignoring goto(%s): no rendition attached", requested)
            return None
        self.set_current(page)
        await self._session.rendition.display(locator)
        return page

    def on_relocated(self, locator: Locator) -> None:
        page = self.index.page_of_location(locator)
        if page is None:
            return
        self.set_current(page + 1)

    def _on_relocated_event(self, event: Relocated) -> None:
        self.on_relocated(event.locator)
