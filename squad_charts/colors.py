"""Three-stop colour gradient for synergy heatmaps."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Iterable, Union

from squad_analytics.constants import HEATMAP_SCORE_CEILING, HEATMAP_SCORE_FLOOR

from .tokens import OUTCOME_COLORS

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


@dataclass(frozen=True)
class Rgb:
    r: int
    g: int
    b: int

    @classmethod
    def from_hex(cls, value: str) -> "Rgb":
        """Parse ``#rrggbb``; anything unparseable maps to black."""
        match = _HEX_RE.match(str(value or "").strip())
        if match is None:
            return cls(0, 0, 0)
        return cls(*(int(part, 16) for part in match.groups()))

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def css(self) -> str:
        return f"rgb({self.r}, {self.g}, {self.b})"


ColorLike = Union[Rgb, str, tuple]


def to_rgb(color: ColorLike) -> Rgb:
    if isinstance(color, Rgb):
        return color
    if isinstance(color, tuple) and len(color) == 3:
        return Rgb(*(int(c) for c in color))
    return Rgb.from_hex(str(color))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def lerp_rgb(start: ColorLike, end: ColorLike, t: float) -> Rgb:
    c0, c1 = to_rgb(start), to_rgb(end)
    return Rgb(
        _round_half_up(c0.r + t * (c1.r - c0.r)),
        _round_half_up(c0.g + t * (c1.g - c0.g)),
        _round_half_up(c0.b + t * (c1.b - c0.b)),
    )


def color_for(
    score: float,
    min_score: float,
    max_score: float,
    low_color: ColorLike = OUTCOME_COLORS["loss"],
    mid_color: ColorLike = OUTCOME_COLORS["draw"],
    high_color: ColorLike = OUTCOME_COLORS["win"],
) -> Rgb:
    """Map *score* onto low -> mid -> high over ``[min_score, max_score]``.

    A zero-width range returns the mid colour.
    """
    span = float(max_score) - float(min_score)
    if span == 0:
        return to_rgb(mid_color)
    normalized = min(1.0, max(0.0, (float(score) - float(min_score)) / span))
    if normalized < 0.5:
        return lerp_rgb(low_color, mid_color, normalized * 2)
    return lerp_rgb(mid_color, high_color, (normalized - 0.5) * 2)


def synergy_score_bounds(scores: Iterable[float]) -> tuple[float, float]:
    """Colour-scale bounds that always include [-1, 1] so small samples stay muted."""
    values = [float(s) for s in scores]
    return min(values + [HEATMAP_SCORE_FLOOR]), max(values + [HEATMAP_SCORE_CEILING])
