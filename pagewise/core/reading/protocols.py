"""Collaborator interfaces the reading session consumes but does not implement."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Protocol, Sequence

from .bus.events import Locator

FLOW_PAGINATED = "paginated"
FLOW_SCROLLED = "scrolled"
FLOW_MODES = (FLOW_PAGINATED, FLOW_SCROLLED)

SPREAD_AUTO = "auto"
SPREAD_NONE = "none"


@dataclass(frozen=True)
class TocEntry:
    label: str
    href: Locator


class RenditionHandle(Protocol):
    """A laid-out, navigable view of a document on one surface."""

    async def display(self, locator: Optional[Locator] = None) -> None:
        ...

    async def next(self) -> None:
        ...

    async def prev(self) -> None:
        ...

    def flow(self, mode: str) -> None:
        ...

    def spread(self, mode: str) -> None:
        ...

    def on(self, event: str, callback: Callable[[Locator], Any]) -> None:
        ...

    def current_location(self) -> Optional[Locator]:
        ...

    def apply_theme(self, rules: Mapping[str, Mapping[str, str]]) -> None:
        ...


class RenderableDocument(Protocol):
    """A decoded document package the renderer can paginate and lay out."""

    def render(self, surface: Any, flow_mode: str) -> RenditionHandle:
        ...

    async def generate_locations(self, per_page_budget: int) -> List[Locator]:
        ...

    def load_locations(self, locators: Sequence[Locator]) -> None:
        ...

    def location_from_index(self, index: int) -> Optional[Locator]:
        ...

    def page_of_location(self, locator: Locator) -> Optional[int]:
        ...

    async def table_of_contents(self) -> List[TocEntry]:
        ...


class DocumentDecoder(Protocol):
    async def decode(self, data: bytes) -> RenderableDocument:
        ...


class ContentFetcher(Protocol):
    async def fetch(self) -> bytes:
        ...
