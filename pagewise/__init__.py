"""Reading-session engine for reflowable-document viewers."""

from pagewise.version import __version__

__all__ = ["__version__"]
