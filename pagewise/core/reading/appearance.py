from __future__ import annotations

import re
from typing import Dict

from .config.schema import ReaderSettings

FALLBACK_FONT_FAMILY = "Arial, sans-serif"

_ARIAL = re.compile(r"\barial\b", re.IGNORECASE)
_GENERIC_FAMILY = re.compile(r"\bserif\b|\bsans-serif\b|\bmonospace\b", re.IGNORECASE)


def effective_font_family(configured: str) -> str:
    """Font stack with a guaranteed fallback family at the end."""
    value = (configured or "").strip()
    if not value:
        return FALLBACK_FONT_FAMILY
    if _ARIAL.search(value) or _GENERIC_FAMILY.search(value):
        return value
    return f"{value}, {FALLBACK_FONT_FAMILY}"


def theme_rules(settings: ReaderSettings, dark: bool) -> Dict[str, Dict[str, str]]:
    """Selector -> declarations mapping handed to the renderer's theme hook."""
    theme = settings.dark_mode if dark else settings.light_mode
    font = effective_font_family(settings.font_family)
    return {
        "body": {
            "background": theme.background_color,
            "color": theme.text_color,
            "font-family": font,
            "font-size": settings.font_size,
            "line-height": settings.line_height,
            "margin": settings.margin,
            "padding": settings.padding,
        },
        "h1, h2, h3, h4, h5, h6": {
            "color": theme.text_color,
            "font-family": font,
        },
        "p, div, span": {
            "color": theme.text_color,
            "font-family": font,
            "font-size": settings.font_size,
            "line-height": settings.line_height,
        },
    }


def surface_background(settings: ReaderSettings, dark: bool) -> str:
    theme = settings.dark_mode if dark else settings.light_mode
    return theme.background_color
