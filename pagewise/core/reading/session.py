from __future__ import annotations

import time
from typing import Any, List, Optional

from pagewise.utils.logger import logger

from .appearance import surface_background, theme_rules
from .bus.events import InputIntent, IntentKind, Locator, NavigationIntent, Relocated, Resized
from .bus.queue import EventBus
from .config.loader import load_settings, save_settings
from .config.schema import ReaderSettings
from .constants import LOCATIONS_PER_PAGE_BUDGET, RESIZE_DEBOUNCE_MS
from .document import DocumentSession, SessionState
from .errors import DecodeError, FetchError, IndexGenerationError, ReaderError
from .fetcher import content_hash
from .location_index import LocationIndex
from .navigation import NavigationController
from .position import ReadingPositionTracker
from .protocols import ContentFetcher, DocumentDecoder, TocEntry
from .resize import Clock, ResizeCoordinator
from .store import KeyValueStore
from .top_bar import TopBarViewModel


class ReadingSession:
    """
    Wires fetcher, renderer and the reading components for one opened document.

    Lifecycle: `open()` moves LOADING -> READY (or FAILED on fetch/decode
    errors); `close()` moves to CLOSED. Everything else degrades in place.
    """

    def __init__(
        self,
        fetcher: ContentFetcher,
        decoder: DocumentDecoder,
        store: KeyValueStore,
        surface: Any = None,
        settings: Optional[ReaderSettings] = None,
        bus: Optional[EventBus] = None,
        dark_mode: bool = False,
        per_page_budget: int = LOCATIONS_PER_PAGE_BUDGET,
        resize_window_ms: float = RESIZE_DEBOUNCE_MS,
        clock: Clock = time.monotonic,
    ) -> None:
        self.fetcher = fetcher
        self.decoder = decoder
        self.store = store
        self.surface = surface
        self.settings = settings if settings is not None else load_settings(store)
        self.dark_mode = bool(dark_mode)
        self.bus = bus or EventBus()
        self.state = SessionState.LOADING
        self.error_message = ""
        self.background_color = ""
        self.document_session: Optional[DocumentSession] = None
        self._pending_navigations = 0

        self.index = LocationIndex(store, per_page_budget)
        self.position = ReadingPositionTracker(store)
        self.top_bar = TopBarViewModel(self.index)
        self.navigation = NavigationController(self.bus)
        self.resize = ResizeCoordinator(self.bus, resize_window_ms, clock)

        self.position.bind(self.bus)
        self.top_bar.bind(self.bus)
        self.bus.subscribe(InputIntent, self._on_input_intent)
        self.bus.subscribe(Resized, self._on_resized)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    async def open(self) -> SessionState:
        await self.bus.start_dispatcher()
        try:
            data = await self.fetcher.fetch()
        except FetchError as exc:
            return self._fail(exc)
        except Exception as exc:  # noqa: BLE001
            return self._fail(FetchError(str(exc)))

        digest = content_hash(data)
        try:
            document = await self.decoder.decode(data)
        except DecodeError as exc:
            return self._fail(exc)
        except Exception as exc:  # noqa: BLE001
            return self._fail(DecodeError(str(exc)))

        session = DocumentSession(digest, document, self.settings)
        session.rendition = document.render(self.surface, self.settings.flow)
        session.rendition.on("relocated", self._on_renderer_relocated)
        self.document_session = session
        self.top_bar.attach(session)
        self.resize.attach(session)
        self.apply_layout()
        self.apply_appearance()

        await self._build_index(session)
        await self.position.restore(session)

        self.navigation.set_columns(self.settings.columns)
        self.navigation.enable()
        self.state = SessionState.READY
        logger.info("Reading session ready for %s", digest[:12])
        return self.state

    async def _build_index(self, session: DocumentSession) -> bool:
        try:
            await self.index.ensure(session)
        except IndexGenerationError as exc:
            logger.warning(
                "Page count unavailable for %s: %s", session.content_hash[:12], exc
            )
            return False
        self.top_bar.set_total(self.index.total_pages)
        return True

    def _fail(self, exc: ReaderError) -> SessionState:
        self.state = SessionState.FAILED
        self.error_message = f"Error loading document: {exc}"
        logger.error(self.error_message)
        return self.state

    async def close(self) -> None:
        self.navigation.disable()
        await self.bus.drain()
        await self.bus.stop_dispatcher()
        self.resize.detach()
        if self.document_session is not None:
            self.document_session.rendition = None
        self.state = SessionState.CLOSED

    # ------------------------------------------------------------------
    # Renderer and input events
    # ------------------------------------------------------------------
    def _on_renderer_relocated(self, locator: Locator) -> None:
        if locator:
            self.bus.publish(Relocated(str(locator)))

    def notify_resize(self, width: int, height: int) -> None:
        self.bus.publish(Resized(int(width), int(height)))

    def _on_resized(self, event: Resized) -> None:
        if event.width > 0 and event.height > 0:
            self.navigation.set_surface_size(event.width, event.height)

    def _on_input_intent(self, event: InputIntent):
        return self.navigate(event.intent)

    async def navigate(self, intent: NavigationIntent) -> None:
        session = self.document_session
        if session is None or session.rendition is None:
            return
        rendition = session.rendition
        self._pending_navigations += 1
        try:
            if intent.kind is IntentKind.NEXT:
                await rendition.next()
            elif intent.kind is IntentKind.PREV:
                await rendition.prev()
            elif intent.kind is IntentKind.GOTO_PAGE:
                await self.top_bar.goto(intent.page or 1)
            elif intent.kind is IntentKind.GOTO_LOCATOR:
                await rendition.display(intent.locator)
        finally:
            self._pending_navigations -= 1

    @property
    def is_navigating(self) -> bool:
        return self._pending_navigations > 0

    # ------------------------------------------------------------------
    # Layout and appearance
    # ------------------------------------------------------------------
    def apply_layout(self) -> None:
        session = self.document_session
        if session is None or session.rendition is None:
            logger.error("No rendition found; the document must be rendered before layout")
            return
        session.rendition.flow(self.settings.flow)
        if self.settings.is_paginated:
            session.rendition.spread(self.settings.spread_mode)

    def apply_appearance(self) -> None:
        self.background_color = surface_background(self.settings, self.dark_mode)
        session = self.document_session
        if session is None or session.rendition is None:
            return
        session.rendition.apply_theme(theme_rules(self.settings, self.dark_mode))

    def set_dark_mode(self, dark: bool) -> None:
        self.dark_mode = bool(dark)
        self.apply_appearance()

    async def apply_settings(self, updated: ReaderSettings) -> None:
        """Persist `updated` and re-apply layout, keeping the reader on the same page."""
        previous = self.settings
        self.settings = updated
        save_settings(self.store, updated)
        self.navigation.set_columns(updated.columns)

        session = self.document_session
        if session is None or session.rendition is None:
            return
        session.settings = updated
        flow_changed = previous.flow != updated.flow
        columns_changed = previous.columns != updated.columns

        async with self.resize.lock:
            rendition = session.rendition
            if rendition is None:
                return
            locator = rendition.current_location()
            page = self.index.page_of_location(locator)
            if flow_changed:
                rendition.flow(updated.flow)
            if updated.is_paginated:
                rendition.spread(updated.spread_mode)
            if flow_changed or columns_changed:
                target = self.index.locator_of_page(page) if page is not None else None
                target = target or locator
                if target:
                    await rendition.display(target)
        self.apply_appearance()

    async def reset_settings(self) -> None:
        await self.apply_settings(ReaderSettings())

    # ------------------------------------------------------------------
    # Table of contents and cache
    # ------------------------------------------------------------------
    async def table_of_contents(self) -> List[TocEntry]:
        session = self.document_session
        if session is None:
            return []
        try:
            return list(await session.document.table_of_contents())
        except Exception as exc:  # noqa: BLE001
            logger.warning("Table of contents unavailable: %s", exc)
            return []

    def open_toc_entry(self, entry: TocEntry) -> Optional[NavigationIntent]:
        return self.navigation.goto_locator(entry.href, source="toc")

    def request_page(self, page: int) -> Optional[NavigationIntent]:
        return self.navigation.goto_page(page)

    async def reset_cache(self) -> bool:
        """Forget the cached page index and saved position, then rebuild the index."""
        self.index.reset()
        self.position.forget()
        self.top_bar.clear_total()
        session = self.document_session
        if session is None or session.rendition is None:
            return False
        return await self._build_index(session)
