from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .config.schema import ReaderSettings
from .protocols import RenderableDocument, RenditionHandle


class SessionState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"
    CLOSED = "closed"


@dataclass
class DocumentSession:
    """
    One opened document: its content hash, the decoded document, the active
    layout settings and the rendition handle it exclusively owns.
    """

    content_hash: str
    document: RenderableDocument
    settings: ReaderSettings = field(default_factory=ReaderSettings)
    rendition: Optional[RenditionHandle] = None

    @property
    def flow_mode(self) -> str:
        return self.settings.flow

    @property
    def columns(self) -> int:
        return self.settings.columns

    def require_rendition(self) -> RenditionHandle:
        if self.rendition is None:
            raise RuntimeError(
                f"Document {self.content_hash[:12]} has no rendition attached"
            )
        return self.rendition
