"""Immutable design tokens for chart theming."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class TypographyScale:
    family: str = "Inter, Segoe UI, Roboto, Helvetica, Arial, sans-serif"
    title: int = 20
    subtitle: int = 16
    body: int = 13
    annotation: int = 11


@dataclass(frozen=True)
class SpacingScale:
    xs: int = 8
    sm: int = 12
    md: int = 16
    lg: int = 24
    xl: int = 32


@dataclass(frozen=True)
class PanelBackgrounds:
    canvas: str = "rgba(0,0,0,0)"
    panel: str = "#1e1e1e"
    elevated: str = "#252525"


@dataclass(frozen=True)
class NeutralTextColors:
    primary: str = "#f3f4f6"
    secondary: str = "#c9d1d9"
    muted: str = "#94a3b8"


TYPOGRAPHY = TypographyScale()
SPACING = SpacingScale()
BACKGROUNDS = PanelBackgrounds()
TEXT = NeutralTextColors()
GRID_OPACITY = 0.14
GRID_LINE = f"rgba(255,255,255,{GRID_OPACITY})"

# Result palette doubles as the synergy heatmap stops: loss -> draw -> win.
OUTCOME_COLORS: Mapping[str, str] = MappingProxyType(
    {
        "win": "#22c55e",
        "draw": "#eab308",
        "loss": "#ef4444",
    }
)

MOVEMENT_COLORS: Mapping[str, str] = MappingProxyType(
    {
        "up": OUTCOME_COLORS["win"],
        "down": OUTCOME_COLORS["loss"],
        "stable": TEXT.muted,
        "new": "#a78bfa",
    }
)

MOVEMENT_GLYPHS: Mapping[str, str] = MappingProxyType(
    {
        "up": "▲",
        "down": "▼",
        "stable": "●",
        "new": "★",
    }
)

# Series accents for up to three compared players on one radar.
COMPARISON_SERIES = ("#3b82f6", "#fb923c", "#22c55e")
