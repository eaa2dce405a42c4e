from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from ..protocols import FLOW_MODES, FLOW_PAGINATED, SPREAD_AUTO, SPREAD_NONE

DEFAULT_FONT_FAMILY = (
    '-apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif'
)


@dataclass
class ThemeColors:
    background_color: str = "#ffffff"
    text_color: str = "#2e3338"

    @classmethod
    def from_dict(
        cls, data: Optional[Dict[str, Any]], fallback: "ThemeColors"
    ) -> "ThemeColors":
        payload = data if isinstance(data, dict) else {}
        return cls(
            background_color=str(
                payload.get("background_color") or fallback.background_color
            ),
            text_color=str(payload.get("text_color") or fallback.text_color),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "background_color": self.background_color,
            "text_color": self.text_color,
        }


def _dark_defaults() -> ThemeColors:
    return ThemeColors(background_color="#1a1a1a", text_color="#dcddde")


def _light_defaults() -> ThemeColors:
    return ThemeColors(background_color="#ffffff", text_color="#2e3338")


def _coerce_flow(value: Any) -> str:
    text = str(value or "").strip().lower()
    return text if text in FLOW_MODES else FLOW_PAGINATED


def _coerce_columns(value: Any) -> int:
    try:
        columns = int(value)
    except (TypeError, ValueError):
        return 1
    return 2 if columns == 2 else 1


@dataclass
class ReaderSettings:
    """Session-scoped layout and appearance configuration."""

    dark_mode: ThemeColors = field(default_factory=_dark_defaults)
    light_mode: ThemeColors = field(default_factory=_light_defaults)
    font_family: str = DEFAULT_FONT_FAMILY
    font_size: str = "14px"
    line_height: str = "1.5"
    flow: str = FLOW_PAGINATED
    columns: int = 1
    padding: str = "20px"
    margin: str = "0"

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ReaderSettings":
        payload = data or {}
        defaults = cls()
        return cls(
            dark_mode=ThemeColors.from_dict(payload.get("dark_mode"), defaults.dark_mode),
            light_mode=ThemeColors.from_dict(
                payload.get("light_mode"), defaults.light_mode
            ),
            font_family=str(payload.get("font_family", defaults.font_family)),
            font_size=str(payload.get("font_size") or defaults.font_size),
            line_height=str(payload.get("line_height") or defaults.line_height),
            flow=_coerce_flow(payload.get("flow")),
            columns=_coerce_columns(payload.get("columns", defaults.columns)),
            padding=str(payload.get("padding") or defaults.padding),
            margin=str(payload.get("margin", defaults.margin)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dark_mode": self.dark_mode.to_dict(),
            "light_mode": self.light_mode.to_dict(),
            "font_family": self.font_family,
            "font_size": self.font_size,
            "line_height": self.line_height,
            "flow": self.flow,
            "columns": self.columns,
            "padding": self.padding,
            "margin": self.margin,
        }

    def merged(self, **changes: Any) -> "ReaderSettings":
        """Copy with `changes` applied and flow/columns normalized."""
        updated = replace(self, **changes)
        updated.flow = _coerce_flow(updated.flow)
        updated.columns = _coerce_columns(updated.columns)
        return updated

    @property
    def is_paginated(self) -> bool:
        return self.flow == FLOW_PAGINATED

    @property
    def spread_mode(self) -> str:
        return SPREAD_AUTO if self.columns == 2 else SPREAD_NONE
