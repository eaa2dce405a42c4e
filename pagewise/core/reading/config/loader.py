from __future__ import annotations

import json
from typing import Any

from pagewise.utils.logger import logger

from ..constants import SETTINGS_KEY
from ..store import KeyValueStore
from .schema import ReaderSettings


def _camel_to_snake(name: str) -> str:
    out = []
    for i, ch in enumerate(str(name)):
        if ch.isupper() and i > 0:
            out.append("_")
        out.append(ch.lower())
    return "".join(out)


def _snake_to_camel(name: str) -> str:
    parts = str(name).split("_")
    return parts[0] + "".join(p.title() for p in parts[1:])


def convert_keys_to_snake(data: Any) -> Any:
    if isinstance(data, dict):
        return {_camel_to_snake(k): convert_keys_to_snake(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_keys_to_snake(item) for item in data]
    return data


def convert_keys_to_camel(data: Any) -> Any:
    if isinstance(data, dict):
        return {_snake_to_camel(k): convert_keys_to_camel(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_keys_to_camel(item) for item in data]
    return data


def load_settings(store: KeyValueStore, key: str = SETTINGS_KEY) -> ReaderSettings:
    raw_text = store.get(key)
    if not raw_text:
        return ReaderSettings()
    try:
        raw = json.loads(raw_text)
        if not isinstance(raw, dict):
            return ReaderSettings()
        return ReaderSettings.from_dict(convert_keys_to_snake(raw))
    except (json.JSONDecodeError, ValueError, TypeError) as exc:
        logger.error("Failed to load reader settings: %s", exc)
        return ReaderSettings()


def save_settings(
    store: KeyValueStore, settings: ReaderSettings, key: str = SETTINGS_KEY
) -> None:
    payload = convert_keys_to_camel(settings.to_dict())
    store.set(key, json.dumps(payload))
