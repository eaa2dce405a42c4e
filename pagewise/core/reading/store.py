from __future__ import annotations

import hashlib
import os
import re
from pathlib import Path
from typing import Dict, Iterator, Optional, Protocol

from qtpy import QtCore

from pagewise.utils.logger import logger


class KeyValueStore(Protocol):
    """String key/value persistence shared by every session of the viewer."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class InMemoryKeyValueStore:
    """Dict-backed store, used by tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str]] = []

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self.writes.append((key, value))

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(dict(self._data))

    def __len__(self) -> int:
        return len(self._data)


_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def reader_state_dir() -> Path:
    root = ""
    try:
        root = str(
            QtCore.QStandardPaths.writableLocation(
                QtCore.QStandardPaths.AppDataLocation
            )
        )
    except Exception:
        root = ""
    if not root:
        root = str(Path.home() / ".pagewise")
    base = Path(root) / "reader_state"
    try:
        base.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.debug("Failed to create reader state dir %s: %s", base, exc)
    return base


def key_filename(key: str) -> str:
    """Map a store key to a filesystem-safe, collision-free file name."""
    readable = _UNSAFE_CHARS.sub("_", str(key)).strip("._")[:64] or "key"
    digest = hashlib.sha256(str(key).encode("utf-8")).hexdigest()[:12]
    return f"{readable}.{digest}.txt"


class FileKeyValueStore:
    """
    One file per key under a state directory. Writes go through a temporary
    file and `os.replace` so a crash never leaves a half-written value.
    IO failures are logged and read back as "absent".
    """

    def __init__(self, root: Optional[Path] = None) -> None:
        self.root = Path(root).expanduser() if root is not None else reader_state_dir()
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        return self.root / key_filename(key)

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.debug("Failed to read reader state %s: %s", path, exc)
            return None

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            tmp = path.with_suffix(".tmp")
            tmp.write_text(str(value), encoding="utf-8")
            os.replace(str(tmp), str(path))
        except OSError as exc:
            logger.debug("Failed to save reader state %s: %s", path, exc)

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        try:
            if path.exists():
                path.unlink()
        except OSError as exc:
            logger.debug("Failed to delete reader state %s: %s", path, exc)
