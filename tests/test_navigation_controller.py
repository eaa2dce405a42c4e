from __future__ import annotations

from pagewise.core.reading.bus import EventBus, InputIntent, IntentKind
from pagewise.core.reading.navigation import (
    NavigationController,
    TouchStart,
    ViewportClass,
    classify_tap,
    classify_viewport,
)


def _controller(width: int = 1000, height: int = 800) -> tuple[NavigationController, EventBus]:
    bus = EventBus()
    controller = NavigationController(bus)
    controller.set_surface_size(width, height)
    controller.enable()
    return controller, bus


def _published(bus: EventBus) -> list[IntentKind]:
    kinds = []
    while not bus.events.empty():
        event = bus.events.get_nowait()
        assert isinstance(event, InputIntent)
        kinds.append(event.intent.kind)
    return kinds


def test_arrow_keys_map_to_prev_and_next() -> None:
    controller, bus = _controller()
    assert controller.on_key("ArrowLeft").kind is IntentKind.PREV
    assert controller.on_key("ArrowRight").kind is IntentKind.NEXT
    assert controller.on_key("KeyA") is None
    assert _published(bus) == [IntentKind.PREV, IntentKind.NEXT]


def test_keys_suppressed_while_page_input_has_focus() -> None:
    controller, bus = _controller()
    controller.set_page_input_focused(True)
    assert controller.on_key("ArrowRight") is None
    controller.set_page_input_focused(False)
    assert controller.on_key("ArrowRight") is not None
    assert _published(bus) == [IntentKind.NEXT]


def test_disabled_controller_publishes_nothing() -> None:
    bus = EventBus()
    controller = NavigationController(bus)
    controller.set_surface_size(1000, 800)
    assert controller.on_key("ArrowRight") is None
    assert controller.on_click(990, 400) is None
    assert bus.pending_events == 0


def test_pointer_zones_on_wide_viewport() -> None:
    controller, bus = _controller(width=1000)
    assert controller.viewport is ViewportClass.WIDE
    assert controller.on_click(10, 300).kind is IntentKind.PREV
    assert controller.on_click(995, 300).kind is IntentKind.NEXT
    assert controller.on_click(500, 300) is None
    assert _published(bus) == [IntentKind.PREV, IntentKind.NEXT]


def test_pointer_zones_inert_for_two_column_spread_and_narrow_viewport() -> None:
    controller, bus = _controller(width=1000)
    controller.set_columns(2)
    assert controller.pointer_zones_active is False
    assert controller.on_click(995, 300) is None

    controller.set_columns(1)
    controller.set_surface_size(400, 800)
    assert controller.viewport is ViewportClass.NARROW
    assert controller.on_click(395, 300) is None
    assert bus.pending_events == 0


def test_short_still_tap_on_right_half_is_next() -> None:
    controller, bus = _controller(width=400)
    controller.on_touch_start(300, 200, timestamp_ms=1000)
    intent = controller.on_touch_end(302, 201, timestamp_ms=1250)
    assert intent is not None and intent.kind is IntentKind.NEXT
    assert intent.source == "touch"

    controller.on_touch_start(100, 200, timestamp_ms=2000)
    assert controller.on_touch_end(100, 200, timestamp_ms=2100).kind is IntentKind.PREV
    assert _published(bus) == [IntentKind.NEXT, IntentKind.PREV]


def test_long_or_moving_touch_is_not_navigation() -> None:
    controller, bus = _controller(width=400)
    controller.on_touch_start(300, 200, timestamp_ms=0)
    assert controller.on_touch_end(300, 200, timestamp_ms=400) is None

    controller.on_touch_start(300, 200, timestamp_ms=0)
    assert controller.on_touch_end(305, 200, timestamp_ms=100) is None

    controller.on_touch_start(300, 200, timestamp_ms=0)
    assert controller.on_touch_end(300, 195, timestamp_ms=100) is None

    controller.on_touch_start(300, 200, timestamp_ms=0)
    assert controller.on_touch_end(300, 200, timestamp_ms=300) is None
    assert bus.pending_events == 0


def test_touch_with_active_selection_is_ignored() -> None:
    controller, bus = _controller(width=400)
    controller.on_touch_start(300, 200, timestamp_ms=0)
    assert controller.on_touch_end(301, 200, timestamp_ms=50, selection_active=True) is None
    assert bus.pending_events == 0


def test_touch_end_without_start_or_on_wide_viewport_is_ignored() -> None:
    controller, bus = _controller(width=400)
    assert controller.on_touch_end(300, 200, timestamp_ms=50) is None

    wide, wide_bus = _controller(width=1200)
    wide.on_touch_start(900, 200, timestamp_ms=0)
    assert wide.on_touch_end(900, 200, timestamp_ms=50) is None
    assert bus.pending_events == 0 and wide_bus.pending_events == 0


def test_classify_tap_thresholds() -> None:
    start = TouchStart(200.0, 100.0, 0.0)
    assert classify_tap(start, 204, 104, 299, 300).kind is IntentKind.NEXT
    assert classify_tap(start, 196, 96, 10, 500).kind is IntentKind.PREV
    assert classify_tap(start, 200, 100, 300, 300) is None
    assert classify_viewport(650) is ViewportClass.NARROW
    assert classify_viewport(651) is ViewportClass.WIDE
    assert classify_viewport(0) is ViewportClass.WIDE


def test_goto_intents() -> None:
    controller, bus = _controller()
    assert controller.goto_page(0).page == 1
    assert controller.goto_page(12).page == 12
    assert controller.goto_locator("chapter-3.xhtml").locator == "chapter-3.xhtml"
    assert _published(bus) == [
        IntentKind.GOTO_PAGE,
        IntentKind.GOTO_PAGE,
        IntentKind.GOTO_LOCATOR,
    ]
