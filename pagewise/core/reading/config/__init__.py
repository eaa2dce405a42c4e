from .loader import (
    convert_keys_to_camel,
    convert_keys_to_snake,
    load_settings,
    save_settings,
)
from .schema import DEFAULT_FONT_FAMILY, ReaderSettings, ThemeColors

__all__ = [
    "DEFAULT_FONT_FAMILY",
    "ReaderSettings",
    "ThemeColors",
    "convert_keys_to_camel",
    "convert_keys_to_snake",
    "load_settings",
    "save_settings",
]
