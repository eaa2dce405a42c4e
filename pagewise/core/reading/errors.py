from __future__ import annotations


class ReaderError(Exception):
    """Base class for reading-session failures."""


class FetchError(ReaderError):
    """Document bytes could not be retrieved. Fatal to session init."""


class DecodeError(ReaderError):
    """Document bytes could not be turned into a renderable document."""


class IndexGenerationError(ReaderError):
    """Pagination produced no page boundaries or failed outright."""


class PersistenceReadError(ReaderError):
    """A cached value exists but cannot be deserialized."""


class NavigationNoop(ReaderError):
    """A goto target could not be resolved to a locator."""
