"""Radar (polar) projection of named metric profiles onto shared axes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Mapping, Sequence

import numpy as np

from squad_analytics.aggregation import SquadPlayerStats
from squad_analytics.constants import (
    RADAR_DEFAULT_LEVELS,
    RADAR_DEFAULT_RADIUS,
    RADAR_MIN_AXES,
    RADAR_MIN_AXIS_MAX,
)
from squad_analytics.leaderboards import METRIC_ACCESSORS, SquadMetric

Point = tuple[float, float]

DEFAULT_RADAR_AXES: tuple[tuple[str, SquadMetric], ...] = (
    ("G/M", SquadMetric.GOALS_PER_MATCH),
    ("A/M", SquadMetric.ASSISTS_PER_MATCH),
    ("Eff.", SquadMetric.EFFECTIVENESS),
    ("MP", SquadMetric.MATCHES_PLAYED),
    ("Min", SquadMetric.MINUTES_PLAYED),
)


@dataclass(frozen=True)
class RadarConfig:
    radius: float = RADAR_DEFAULT_RADIUS
    levels: int = RADAR_DEFAULT_LEVELS
    center: Point = (0.0, 0.0)


@dataclass(frozen=True)
class NamedMetricSet:
    name: str
    metrics: tuple[tuple[str, float], ...]

    @classmethod
    def from_mapping(cls, name: str, metrics: Mapping[str, float]) -> "NamedMetricSet":
        return cls(name=name, metrics=tuple((str(k), v) for k, v in metrics.items()))

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(label for label, _ in self.metrics)

    @property
    def values(self) -> tuple[float, ...]:
        return tuple(_as_value(value) for _, value in self.metrics)


@dataclass(frozen=True)
class RadarPoint:
    label: str
    value: float
    x: float
    y: float
    radius: float


@dataclass(frozen=True)
class EntityPolygon:
    name: str
    vertices: tuple[RadarPoint, ...]

    @property
    def path(self) -> list[Point]:
        """Closed point list: the first vertex is repeated at the end."""
        pts = [(v.x, v.y) for v in self.vertices]
        return pts + pts[:1]

    @property
    def values(self) -> tuple[float, ...]:
        return tuple(v.value for v in self.vertices)


@dataclass(frozen=True)
class PolygonSet:
    axis_labels: tuple[str, ...] = ()
    axis_maxima: tuple[float, ...] = ()
    axis_endpoints: tuple[Point, ...] = ()
    grid_rings: tuple[tuple[Point, ...], ...] = ()
    polygons: tuple[EntityPolygon, ...] = ()
    radius: float = RADAR_DEFAULT_RADIUS
    center: Point = field(default=(0.0, 0.0))

    @classmethod
    def empty(cls) -> "PolygonSet":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.polygons


def _as_value(value: object) -> float:
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(numeric) else numeric


def axis_angles(n_axes: int) -> np.ndarray:
    """Axis 0 points straight up; the rest follow clockwise on screen."""
    return -np.pi / 2 + np.arange(n_axes) * (2 * np.pi / n_axes)


def _ring(radius: float, angles: np.ndarray, center: Point) -> tuple[Point, ...]:
    cx, cy = center
    pts = [(float(cx + radius * np.cos(a)), float(cy + radius * np.sin(a))) for a in angles]
    return tuple(pts + pts[:1])


def _validate_shape(entities: Sequence[NamedMetricSet]) -> tuple[str, ...]:
    labels = entities[0].labels
    for entity in entities[1:]:
        if len(entity.labels) != len(labels):
            raise ValueError(
                f"Radar entity '{entity.name}' has {len(entity.labels)} axes; expected {len(labels)}"
            )
        if entity.labels != labels:
            raise ValueError(f"Radar entity '{entity.name}' axis order {entity.labels} != {labels}")
    return labels


def project_radar(
    entities: Sequence[NamedMetricSet],
    max_per_axis: Sequence[float] | None = None,
    *,
    config: RadarConfig | None = None,
) -> PolygonSet:
    """Project metric sets onto radar polygons.

    Without ``max_per_axis`` each axis is normalized by its largest observed
    value floored at 1. Ratios are clamped at 0 so negative values never
    invert the geometry; callers plotting differentials must shift first.

    Raises:
        ValueError: entities disagree on axes, or ``max_per_axis`` has the wrong length.
    """
    cfg = config or RadarConfig()
    if not entities:
        return PolygonSet.empty()

    labels = _validate_shape(entities)
    n_axes = len(labels)
    if n_axes < RADAR_MIN_AXES:
        return PolygonSet.empty()

    values = np.array([entity.values for entity in entities], dtype=float)
    if max_per_axis is None:
        maxima = np.maximum(values.max(axis=0), RADAR_MIN_AXIS_MAX)
    else:
        if len(max_per_axis) != n_axes:
            raise ValueError(f"max_per_axis has {len(max_per_axis)} entries; expected {n_axes}")
        maxima = np.array([_as_value(m) for m in max_per_axis], dtype=float)

    ratios = np.divide(values, maxima, out=np.zeros_like(values), where=maxima > 0)
    ratios = np.clip(ratios, 0.0, None)
    radii = ratios * float(cfg.radius)

    angles = axis_angles(n_axes)
    cos, sin = np.cos(angles), np.sin(angles)
    cx, cy = cfg.center

    polygons = []
    for e_idx, entity in enumerate(entities):
        vertices = tuple(
            RadarPoint(
                label=labels[i],
                value=float(values[e_idx, i]),
                x=float(cx + radii[e_idx, i] * cos[i]),
                y=float(cy + radii[e_idx, i] * sin[i]),
                radius=float(radii[e_idx, i]),
            )
            for i in range(n_axes)
        )
        polygons.append(EntityPolygon(name=entity.name, vertices=vertices))

    levels = max(1, int(cfg.levels))
    return PolygonSet(
        axis_labels=labels,
        axis_maxima=tuple(float(m) for m in maxima),
        axis_endpoints=tuple((float(cx + cfg.radius * c), float(cy + cfg.radius * s)) for c, s in zip(cos, sin)),
        grid_rings=tuple(_ring(cfg.radius * k / levels, angles, cfg.center) for k in range(1, levels + 1)),
        polygons=tuple(polygons),
        radius=float(cfg.radius),
        center=(float(cx), float(cy)),
    )


def player_metric_sets(
    stats: Sequence[SquadPlayerStats],
    axes: Sequence[tuple[str, SquadMetric]] = DEFAULT_RADAR_AXES,
) -> list[NamedMetricSet]:
    """Build radar inputs for players through the metric accessor table."""
    return [
        NamedMetricSet(
            name=player.name,
            metrics=tuple((label, float(METRIC_ACCESSORS[SquadMetric.parse(metric)](player))) for label, metric in axes),
        )
        for player in stats
    ]
