from __future__ import annotations

from typing import Optional

from pagewise.utils.logger import logger

from .bus.events import Locator, Relocated
from .bus.queue import EventBus
from .constants import ABSENT_LOCATOR_VALUES, current_location_key
from .document import DocumentSession
from .store import KeyValueStore


def is_absent_locator(value: Optional[str]) -> bool:
    return value is None or value.strip() in ABSENT_LOCATOR_VALUES


class ReadingPositionTracker:
    """Restores the last rendered position and writes every relocation through."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self._session: Optional[DocumentSession] = None
        self._last_locator: Optional[Locator] = None

    def bind(self, bus: EventBus) -> None:
        bus.subscribe(Relocated, self._on_relocated_event)

    def saved_locator(self, session: DocumentSession) -> Optional[Locator]:
        value = self.store.get(current_location_key(session.content_hash))
        if is_absent_locator(value):
            return None
        return value

    async def restore(self, session: DocumentSession) -> Optional[Locator]:
        self._session = session
        rendition = session.require_rendition()
        locator = self.saved_locator(session)
        if locator is None:
            await rendition.display()
            return None
        logger.info(
            "Restoring %s to saved location %s", session.content_hash[:12], locator
        )
        try:
            await rendition.display(locator)
        except Exception as exc:
            logger.warning(
                "Saved location %s rejected for %s: %s",
                locator,
                session.content_hash[:12],
                exc,
            )
            self.store.delete(current_location_key(session.content_hash))
            await rendition.display()
            return None
        return locator

    def on_relocated(self, locator: Locator) -> None:
        if self._session is None or is_absent_locator(locator):
            return
        self._last_locator = locator
        self.store.set(current_location_key(self._session.content_hash), locator)

    def _on_relocated_event(self, event: Relocated) -> None:
        self.on_relocated(event.locator)

    def forget(self) -> None:
        if self._session is None:
            return
        self.store.delete(current_location_key(self._session.content_hash))
        self._last_locator = None

    @property
    def last_locator(self) -> Optional[Locator]:
        return self._last_locator
