"""Core (GUI-free) reading-session engine.

The renderer, fetcher and decoder are collaborators described in
`pagewise.core.reading.protocols`; everything here talks to them through the
event bus and an injected key-value store.
"""

from .bus import (
    EventBus,
    InputIntent,
    IntentKind,
    Locator,
    NavigationIntent,
    Relocated,
    Resized,
)
from .config import ReaderSettings, ThemeColors, load_settings, save_settings
from .document import DocumentSession, SessionState
from .errors import (
    DecodeError,
    FetchError,
    IndexGenerationError,
    NavigationNoop,
    PersistenceReadError,
    ReaderError,
)
from .fetcher import LocalFileFetcher, content_hash
from .location_index import LocationIndex, Pages
from .navigation import NavigationController, ViewportClass, classify_tap
from .position import ReadingPositionTracker
from .protocols import (
    ContentFetcher,
    DocumentDecoder,
    RenderableDocument,
    RenditionHandle,
    TocEntry,
)
from .resize import LeadingEdgeDebouncer, ResizeCoordinator
from .session import ReadingSession
from .store import FileKeyValueStore, InMemoryKeyValueStore, KeyValueStore
from .top_bar import TopBarViewModel

__all__ = [
    "ContentFetcher",
    "DecodeError",
    "DocumentDecoder",
    "DocumentSession",
    "EventBus",
    "FetchError",
    "FileKeyValueStore",
    "InMemoryKeyValueStore",
    "IndexGenerationError",
    "InputIntent",
    "IntentKind",
    "KeyValueStore",
    "LeadingEdgeDebouncer",
    "LocalFileFetcher",
    "LocationIndex",
    "Locator",
    "NavigationController",
    "NavigationIntent",
    "NavigationNoop",
    "Pages",
    "PersistenceReadError",
    "ReaderError",
    "ReaderSettings",
    "ReadingPositionTracker",
    "ReadingSession",
    "Relocated",
    "RenderableDocument",
    "RenditionHandle",
    "Resized",
    "ResizeCoordinator",
    "SessionState",
    "ThemeColors",
    "TocEntry",
    "TopBarViewModel",
    "ViewportClass",
    "classify_tap",
    "content_hash",
    "load_settings",
    "save_settings",
]
