from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

Locator = str


class IntentKind(str, Enum):
    NEXT = "next"
    PREV = "prev"
    GOTO_PAGE = "goto_page"
    GOTO_LOCATOR = "goto_locator"


@dataclass(frozen=True)
class NavigationIntent:
    """Canonical navigation request produced from any input source."""

    kind: IntentKind
    page: Optional[int] = None
    locator: Optional[Locator] = None
    source: str = ""

    def __post_init__(self) -> None:
        if self.kind is IntentKind.GOTO_PAGE:
            if self.page is None or int(self.page) < 1:
                raise ValueError("GotoPage intent requires page >= 1")
        if self.kind is IntentKind.GOTO_LOCATOR and not self.locator:
            raise ValueError("GotoLocator intent requires a locator")

    @classmethod
    def next(cls, source: str = "") -> "NavigationIntent":
        return cls(IntentKind.NEXT, source=source)

    @classmethod
    def prev(cls, source: str = "") -> "NavigationIntent":
        return cls(IntentKind.PREV, source=source)

    @classmethod
    def goto_page(cls, page: int, source: str = "") -> "NavigationIntent":
        return cls(IntentKind.GOTO_PAGE, page=int(page), source=source)

    @classmethod
    def goto_locator(cls, locator: Locator, source: str = "") -> "NavigationIntent":
        return cls(IntentKind.GOTO_LOCATOR, locator=str(locator), source=source)


@dataclass(frozen=True)
class Relocated:
    """The renderer settled on a new visible position."""

    locator: Locator


@dataclass(frozen=True)
class Resized:
    """A sampled size of the rendering surface."""

    width: int
    height: int


@dataclass(frozen=True)
class InputIntent:
    intent: NavigationIntent


ReaderEvent = Union[Relocated, Resized, InputIntent]
