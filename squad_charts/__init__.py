"""Plotly chart helpers for squad analytics."""

from .colors import Rgb, color_for, synergy_score_bounds
from .factory import leaderboard_lollipop, radar_chart, synergy_heatmap
from .theme import apply_chart_theme

__all__ = [
    "Rgb",
    "color_for",
    "synergy_score_bounds",
    "radar_chart",
    "synergy_heatmap",
    "leaderboard_lollipop",
    "apply_chart_theme",
]
