from __future__ import annotations

import asyncio
import hashlib
from pathlib import Path

from pagewise.utils.logger import logger

from .errors import FetchError


def content_hash(data: bytes) -> str:
    """Content-addressable key for a document's bytes."""
    return hashlib.sha256(bytes(data)).hexdigest()


class LocalFileFetcher:
    """Reads a document package that is already on disk."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()

    async def fetch(self) -> bytes:
        try:
            data = await asyncio.to_thread(self.path.read_bytes)
        except OSError as exc:
            raise FetchError(f"Failed to read {self.path}: {exc}") from exc
        if not data:
            raise FetchError(f"Document is empty: {self.path}")
        logger.debug("Fetched %d bytes from %s", len(data), self.path)
        return data

    def __repr__(self) -> str:
        return f"LocalFileFetcher({str(self.path)!r})"
