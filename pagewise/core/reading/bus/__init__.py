"""Publish/subscribe primitives decoupling renderer, input and view models."""

from .events import (
    InputIntent,
    IntentKind,
    Locator,
    NavigationIntent,
    ReaderEvent,
    Relocated,
    Resized,
)
from .queue import EventBus

__all__ = [
    "EventBus",
    "InputIntent",
    "IntentKind",
    "Locator",
    "NavigationIntent",
    "ReaderEvent",
    "Relocated",
    "Resized",
]
