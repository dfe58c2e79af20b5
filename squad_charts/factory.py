"""Reusable chart factories for squad comparisons."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import plotly.graph_objects as go

from squad_analytics.chemistry import PairResult
from squad_analytics.leaderboards import SquadMetric, metric_value
from squad_analytics.radar import PolygonSet
from squad_analytics.rank_tracker import RankedEntry

from .colors import color_for, synergy_score_bounds
from .theme import apply_chart_theme, semantic_color
from .tokens import GRID_LINE, MOVEMENT_COLORS, MOVEMENT_GLYPHS, TEXT

_HEATMAP_STOPS = 11


def _format_value(value: float) -> str:
    if float(value).is_integer():
        return f"{value:,.0f}"
    if abs(value) < 10:
        return f"{value:,.2f}"
    return f"{value:,.1f}"


def radar_chart(polygons: PolygonSet, *, title: str | None = None, tier: str = "support"):
    """Render a projected polygon set; geometry is used as-is, no re-normalization."""
    fig = go.Figure()
    if polygons.is_empty:
        fig.update_layout(title=title)
        return apply_chart_theme(fig, tier=tier)

    for ring in polygons.grid_rings:
        fig.add_trace(go.Scatter(
            x=[p[0] for p in ring],
            y=[p[1] for p in ring],
            mode="lines",
            line=dict(color=GRID_LINE, width=1),
            hoverinfo="skip",
            showlegend=False,
        ))

    cx, cy = polygons.center
    for label, (ex, ey) in zip(polygons.axis_labels, polygons.axis_endpoints):
        fig.add_shape(type="line", x0=cx, y0=cy, x1=ex, y1=ey, line=dict(color=GRID_LINE, width=1))
        fig.add_annotation(
            x=cx + (ex - cx) * 1.15,
            y=cy + (ey - cy) * 1.15,
            text=label,
            showarrow=False,
            font=dict(color=TEXT.secondary, size=11),
        )

    for idx, polygon in enumerate(polygons.polygons):
        color = semantic_color("series", str(idx))
        path = polygon.path
        labels = [v.label for v in polygon.vertices] + [polygon.vertices[0].label]
        values = [_format_value(v.value) for v in polygon.vertices] + [_format_value(polygon.vertices[0].value)]
        fig.add_trace(go.Scatter(
            x=[p[0] for p in path],
            y=[p[1] for p in path],
            mode="lines+markers",
            name=polygon.name,
            fill="toself",
            opacity=0.85,
            line=dict(color=color, width=2),
            marker=dict(size=6, color=color),
            customdata=np.column_stack([labels, values]),
            hovertemplate=f"<b>{polygon.name}</b><br>%{{customdata[0]}}: %{{customdata[1]}}<extra></extra>",
        ))

    # Geometry is in screen space (y grows downward), so flip y to keep axis 0 on top.
    fig.update_yaxes(autorange="reversed", scaleanchor="x", scaleratio=1, visible=False)
    fig.update_xaxes(visible=False)
    fig.update_layout(title=title)
    return apply_chart_theme(fig, tier=tier)


def _heatmap_colorscale() -> list[list[object]]:
    stops = np.linspace(0.0, 1.0, _HEATMAP_STOPS)
    return [[float(s), color_for(float(s), 0.0, 1.0).css()] for s in stops]


def synergy_heatmap(result: PairResult, players: Sequence[str] | None = None, *, title: str = "Pair Impact"):
    """Symmetric player-by-player matrix of pair impact scores."""
    names = list(players) if players is not None else list(result.top_players)
    fig = go.Figure()
    if not names or not result.all_pairs:
        fig.update_layout(title=title)
        return apply_chart_theme(fig, tier="hero")

    z: list[list[float | None]] = []
    matches: list[list[int]] = []
    for row_name in names:
        z_row, m_row = [], []
        for col_name in names:
            pair = result.lookup(row_name, col_name) if row_name != col_name else None
            z_row.append(pair.impact_score if pair else None)
            m_row.append(pair.matches_together if pair else 0)
        z.append(z_row)
        matches.append(m_row)

    zmin, zmax = synergy_score_bounds(p.impact_score for p in result.all_pairs)
    fig.add_trace(go.Heatmap(
        z=z,
        x=names,
        y=names,
        zmin=zmin,
        zmax=zmax,
        colorscale=_heatmap_colorscale(),
        customdata=matches,
        hoverongaps=False,
        hovertemplate="%{y} + %{x}<br>Impact: %{z:.2f}<br>Matches: %{customdata}<extra></extra>",
    ))
    fig.update_yaxes(autorange="reversed")
    fig.update_layout(title=title)
    return apply_chart_theme(fig, tier="hero")


def leaderboard_lollipop(entries: Sequence[RankedEntry], metric: SquadMetric | str, *, title: str | None = None):
    """Ranking lollipop with a movement glyph beside each name."""
    key = SquadMetric.parse(metric)
    fig = go.Figure()
    for entry in entries:
        player = entry.entity
        val = metric_value(player, key)
        movement = entry.movement.value
        accent = MOVEMENT_COLORS.get(movement, TEXT.muted)
        fig.add_shape(
            type="line",
            x0=0,
            x1=val,
            y0=entry.position,
            y1=entry.position,
            line=dict(color="rgba(165, 171, 184, 0.35)", width=2),
        )
        fig.add_trace(go.Scatter(
            x=[val],
            y=[entry.position],
            mode="markers+text",
            marker=dict(size=11, color="rgba(255,255,255,0.9)", line=dict(color=accent, width=2.5)),
            text=[_format_value(val)],
            textposition="middle right",
            textfont=dict(color=accent, size=11),
            hovertemplate=f"<b>{player.name}</b><br>{key.value}: %{{x}}<extra>{movement}</extra>",
            showlegend=False,
        ))

    fig.update_yaxes(
        tickmode="array",
        tickvals=[e.position for e in entries],
        ticktext=[f"{MOVEMENT_GLYPHS.get(e.movement.value, '')} {e.entity.name}" for e in entries],
        autorange="reversed",
        title=None,
    )
    fig.update_xaxes(title=key.value, rangemode="tozero")
    fig.update_layout(title=title or key.value)
    return apply_chart_theme(fig, tier="support")
