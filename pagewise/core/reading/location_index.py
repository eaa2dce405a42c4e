from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from pagewise.utils.logger import logger

from .bus.events import Locator
from .constants import LOCATIONS_PER_PAGE_BUDGET, locations_key
from .document import DocumentSession
from .errors import IndexGenerationError, PersistenceReadError
from .store import KeyValueStore


@dataclass(frozen=True)
class Pages:
    """Immutable page-boundary sequence for one content hash."""

    content_hash: str
    locators: Tuple[Locator, ...]
    from_cache: bool = False

    @property
    def total(self) -> int:
        return len(self.locators)


def serialize_locators(locators: Sequence[Locator]) -> str:
    return json.dumps(list(locators), ensure_ascii=False)


def deserialize_locators(payload: str) -> List[Locator]:
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, TypeError, ValueError) as exc:
        raise PersistenceReadError(f"Cached locations are not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise PersistenceReadError(
            f"Cached locations must be a list, got {type(data).__name__}"
        )
    if not all(isinstance(item, str) and item for item in data):
        raise PersistenceReadError("Cached locations must be non-empty strings")
    if len(set(data)) != len(data):
        raise PersistenceReadError("Cached locations contain duplicates")
    return list(data)


class LocationIndex:
    """
    Deterministic page boundaries for a document, generated once per content
    hash with a fixed per-page budget and cached in the key-value store.

    Page numbers here are 0-based; the top bar adds one for display.
    """

    def __init__(
        self,
        store: KeyValueStore,
        per_page_budget: int = LOCATIONS_PER_PAGE_BUDGET,
    ) -> None:
        self.store = store
        self.per_page_budget = int(per_page_budget)
        self._session: Optional[DocumentSession] = None
        self._pages: Optional[Pages] = None
        self._page_by_locator: Dict[Locator, int] = {}

    async def ensure(self, session: DocumentSession) -> Pages:
        """Load the cached index for `session` or generate and persist one.

        Raises IndexGenerationError when the renderer yields no boundaries;
        callers degrade to "total unknown" in that case.
        """
        self._session = session
        self._pages = None
        self._page_by_locator = {}
        pages = self._load_cached(session)
        if pages is None:
            pages = await self._generate(session)
            self.store.set(locations_key(session.content_hash), self.serialize(pages))
            logger.info(
                "Generated %d page boundaries for %s",
                pages.total,
                session.content_hash[:12],
            )
        session.document.load_locations(list(pages.locators))
        self._install(pages)
        return pages

    def _load_cached(self, session: DocumentSession) -> Optional[Pages]:
        key = locations_key(session.content_hash)
        payload = self.store.get(key)
        if not payload:
            return None
        try:
            locators = deserialize_locators(payload)
        except PersistenceReadError as exc:
            logger.warning("Discarding cached locations %s: %s", key, exc)
            self.store.delete(key)
            return None
        if not locators:
            self.store.delete(key)
            return None
        return Pages(session.content_hash, tuple(locators), from_cache=True)

    async def _generate(self, session: DocumentSession) -> Pages:
        try:
            locators = await session.document.generate_locations(self.per_page_budget)
        except IndexGenerationError:
            raise
        except Exception as exc:
            raise IndexGenerationError(f"Pagination failed: {exc}") from exc
        cleaned = list(dict.fromkeys(str(item) for item in (locators or []) if item))
        dropped = len(locators or []) - len(cleaned)
        if dropped:
            logger.warning(
                "Dropped %d empty or repeated locations for %s",
                dropped,
                session.content_hash[:12],
            )
        if not cleaned:
            raise IndexGenerationError(
                f"Pagination produced no locations for {session.content_hash[:12]}"
            )
        return Pages(session.content_hash, tuple(cleaned), from_cache=False)

    def _install(self, pages: Pages) -> None:
        self._pages = pages
        self._page_by_locator = {
            locator: index for index, locator in enumerate(pages.locators)
        }

    @staticmethod
    def serialize(pages: Pages) -> str:
        return serialize_locators(pages.locators)

    def reset(self, content_hash: Optional[str] = None) -> None:
        """Drop the cached index; the next `ensure` regenerates it."""
        target = content_hash or (self._pages.content_hash if self._pages else None)
        if target is None and self._session is not None:
            target = self._session.content_hash
        if target:
            self.store.delete(locations_key(target))
        self._pages = None
        self._page_by_locator = {}

    @property
    def pages(self) -> Optional[Pages]:
        return self._pages

    @property
    def is_ready(self) -> bool:
        return self._pages is not None and self._pages.total > 0

    @property
    def total_pages(self) -> int:
        return self._pages.total if self._pages is not None else 0

    def locator_of_page(self, page: int) -> Optional[Locator]:
        if self._pages is None:
            return None
        if page < 0 or page >= self._pages.total:
            return None
        locator = None
        if self._session is not None:
            # The renderer owns the mapping once `load_locations` has run.
            locator = self._session.document.location_from_index(page)
        return locator or self._pages.locators[page]

    def page_of_location(self, locator: Optional[Locator]) -> Optional[int]:
        if not locator or self._pages is None:
            return None
        index = self._page_by_locator.get(locator)
        if index is not None:
            return index
        if self._session is None:
            return None
        page = self._session.document.page_of_location(locator)
        if page is None or page < 0:
            return None
        return min(int(page), self._pages.total - 1)
