from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pagewise.utils.logger import logger

from .bus.events import InputIntent, Locator, NavigationIntent
from .bus.queue import EventBus
from .constants import (
    NARROW_VIEWPORT_MAX_WIDTH,
    POINTER_ZONE_FRACTION,
    TAP_MAX_DURATION_MS,
    TAP_MAX_MOVEMENT_PX,
)

KEY_PREV = "ArrowLeft"
KEY_NEXT = "ArrowRight"


class ViewportClass(str, Enum):
    WIDE = "wide"
    NARROW = "narrow"


def classify_viewport(width: int) -> ViewportClass:
    if 0 < width <= NARROW_VIEWPORT_MAX_WIDTH:
        return ViewportClass.NARROW
    return ViewportClass.WIDE


@dataclass(frozen=True)
class TouchStart:
    x: float
    y: float
    timestamp_ms: float


def classify_tap(
    start: TouchStart,
    end_x: float,
    end_y: float,
    end_timestamp_ms: float,
    surface_width: float,
) -> Optional[NavigationIntent]:
    """Map a short, still touch to Next/Prev by which half it landed in."""
    duration = end_timestamp_ms - start.timestamp_ms
    dx = abs(end_x - start.x)
    dy = abs(end_y - start.y)
    if duration >= TAP_MAX_DURATION_MS or dx > TAP_MAX_MOVEMENT_PX or dy > TAP_MAX_MOVEMENT_PX:
        return None
    if end_x > surface_width / 2:
        return NavigationIntent.next(source="touch")
    return NavigationIntent.prev(source="touch")


class NavigationController:
    """
    Turns keyboard, pointer and touch input into navigation intents on the bus.

    Sources are independent: two sources firing for the same gesture yield two
    intents. Boundary handling is left to the renderer.
    """

    def __init__(self, bus: EventBus) -> None:
        self.bus = bus
        self.enabled = False
        self._page_input_focused = False
        self._width = 0
        self._height = 0
        self._columns = 1
        self._touch_start: Optional[TouchStart] = None

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False
        self._touch_start = None

    def set_page_input_focused(self, focused: bool) -> None:
        self._page_input_focused = bool(focused)

    def set_surface_size(self, width: int, height: int) -> None:
        self._width = max(0, int(width))
        self._height = max(0, int(height))

    def set_columns(self, columns: int) -> None:
        self._columns = int(columns)

    @property
    def viewport(self) -> ViewportClass:
        return classify_viewport(self._width)

    @property
    def pointer_zones_active(self) -> bool:
        return self.viewport is ViewportClass.WIDE and self._columns != 2

    @property
    def touch_active(self) -> bool:
        return self.viewport is ViewportClass.NARROW

    def _publish(self, intent: NavigationIntent) -> Optional[NavigationIntent]:
        if not self.enabled:
            return None
        self.bus.publish(InputIntent(intent))
        return intent

    def on_key(self, key: str) -> Optional[NavigationIntent]:
        if self._page_input_focused:
            return None
        if key == KEY_PREV:
            return self._publish(NavigationIntent.prev(source="keyboard"))
        if key == KEY_NEXT:
            return self._publish(NavigationIntent.next(source="keyboard"))
        return None

    def zone_at(self, x: float) -> Optional[str]:
        if not self.pointer_zones_active or self._width <= 0:
            return None
        zone = self._width * POINTER_ZONE_FRACTION
        if x <= zone:
            return "prev"
        if x >= self._width - zone:
            return "next"
        return None

    def on_click(self, x: float, y: float) -> Optional[NavigationIntent]:
        zone = self.zone_at(x)
        if zone == "prev":
            return self._publish(NavigationIntent.prev(source="pointer"))
        if zone == "next":
            return self._publish(NavigationIntent.next(source="pointer"))
        return None

    def on_touch_start(self, x: float, y: float, timestamp_ms: float) -> None:
        if not self.touch_active:
            return
        self._touch_start = TouchStart(float(x), float(y), float(timestamp_ms))

    def on_touch_end(
        self,
        x: float,
        y: float,
        timestamp_ms: float,
        selection_active: bool = False,
    ) -> Optional[NavigationIntent]:
        start = self._touch_start
        self._touch_start = None
        if start is None or not self.touch_active:
            return None
        # Releasing a text selection must never turn the page.
        if selection_active:
            logger.debug("Ignoring touch end with an active text selection")
            return None
        intent = classify_tap(start, x, y, timestamp_ms, self._width)
        if intent is None:
            return None
        return self._publish(intent)

    def goto_page(self, page: int) -> Optional[NavigationIntent]:
        return self._publish(NavigationIntent.goto_page(max(1, int(page)), source="top_bar"))

    def goto_locator(self, locator: Locator, source: str = "toc") -> Optional[NavigationIntent]:
        return self._publish(NavigationIntent.goto_locator(locator, source=source))
