import math
import unittest

import pytest

from squad_analytics.aggregation import aggregate_squad_stats
from squad_analytics.radar import (
    DEFAULT_RADAR_AXES,
    NamedMetricSet,
    RadarConfig,
    axis_angles,
    player_metric_sets,
    project_radar,
)
from squad_analytics.schema import MatchRecord, PlayerAppearance

CFG = RadarConfig(radius=100.0, levels=5, center=(150.0, 150.0))


def _entity(name, **metrics):
    return NamedMetricSet.from_mapping(name, metrics)


def _distance(point, center=CFG.center):
    return math.hypot(point[0] - center[0], point[1] - center[1])


class ProjectRadarTests(unittest.TestCase):
    def test_values_at_axis_max_sit_on_full_radius(self):
        result = project_radar([_entity("Ana", goals=3, assists=5, caps=2)], config=CFG)
        (polygon,) = result.polygons
        for x, y in polygon.path:
            self.assertAlmostEqual(_distance((x, y)), 100.0)
        self.assertEqual(result.axis_maxima, (3.0, 5.0, 2.0))

    def test_first_axis_points_up_and_second_clockwise(self):
        result = project_radar([_entity("Ana", a=1, b=1, c=1, d=1)], config=CFG)
        first, second = result.polygons[0].vertices[:2]
        self.assertAlmostEqual(first.x, 150.0)
        self.assertAlmostEqual(first.y, 50.0)
        self.assertAlmostEqual(second.x, 250.0)
        self.assertAlmostEqual(second.y, 150.0)

    def test_axis_max_is_floored_at_one(self):
        result = project_radar([_entity("Ana", a=0.5, b=0.0)], config=CFG)
        half, zero = result.polygons[0].vertices
        self.assertAlmostEqual(half.radius, 50.0)
        self.assertAlmostEqual(zero.radius, 0.0)
        self.assertAlmostEqual(_distance((zero.x, zero.y)), 0.0)

    def test_equal_values_fill_the_axis(self):
        result = project_radar([_entity("Ana", a=5, b=2), _entity("Ben", a=5, b=1)], config=CFG)
        self.assertAlmostEqual(result.polygons[0].vertices[0].radius, 100.0)
        self.assertAlmostEqual(result.polygons[1].vertices[0].radius, 100.0)
        self.assertAlmostEqual(result.polygons[1].vertices[1].radius, 50.0)

    def test_negative_values_are_clamped_to_center(self):
        result = project_radar([_entity("Ana", a=-2, b=1)], config=CFG)
        self.assertEqual(result.polygons[0].vertices[0].radius, 0.0)
        self.assertEqual(result.polygons[0].vertices[0].value, -2.0)

    def test_supplied_maxima(self):
        result = project_radar([_entity("Ana", a=5, b=3, c=4)], [10, 0, 8], config=CFG)
        radii = [v.radius for v in result.polygons[0].vertices]
        self.assertEqual(radii, pytest.approx([50.0, 0.0, 50.0]))

    def test_grid_rings_and_paths_are_closed(self):
        result = project_radar([_entity("Ana", a=1, b=2, c=3)], config=CFG)
        self.assertEqual(len(result.grid_rings), 5)
        for level, ring in enumerate(result.grid_rings, start=1):
            self.assertEqual(len(ring), 4)
            self.assertEqual(ring[0], ring[-1])
            self.assertAlmostEqual(_distance(ring[0]), 100.0 * level / 5)
        path = result.polygons[0].path
        self.assertEqual(len(path), 4)
        self.assertEqual(path[0], path[-1])
        self.assertEqual(len(result.axis_endpoints), 3)

    def test_missing_values_count_as_zero(self):
        result = project_radar([_entity("Ana", a=None, b=float("nan"), c=2)], config=CFG)
        self.assertEqual(result.polygons[0].values, (0.0, 0.0, 2.0))


class DegenerateInputTests(unittest.TestCase):
    def test_no_entities(self):
        self.assertTrue(project_radar([]).is_empty)

    def test_no_axes_or_single_axis(self):
        self.assertTrue(project_radar([NamedMetricSet("Ana", ())]).is_empty)
        self.assertTrue(project_radar([_entity("Ana", a=1)]).is_empty)

    def test_mismatched_axis_count_raises(self):
        with self.assertRaises(ValueError):
            project_radar([_entity("Ana", a=1, b=2), _entity("Ben", a=1, b=2, c=3)])

    def test_mismatched_axis_order_raises(self):
        with self.assertRaises(ValueError):
            project_radar([_entity("Ana", a=1, b=2), _entity("Ben", b=2, a=1)])

    def test_wrong_length_maxima_raises(self):
        with self.assertRaises(ValueError):
            project_radar([_entity("Ana", a=1, b=2)], [1, 2, 3])


def test_axis_angles_start_at_top():
    angles = axis_angles(4)
    assert angles[0] == pytest.approx(-math.pi / 2)
    assert angles[2] == pytest.approx(math.pi / 2)


def test_player_metric_sets_use_default_axes():
    matches = [
        MatchRecord(f"m{i}", "d", "FC", "R", 2, 0, players=(PlayerAppearance("Ana", goals=1, minutes_played=90),))
        for i in range(2)
    ]
    (ana,) = player_metric_sets(aggregate_squad_stats(matches))
    assert ana.labels == tuple(label for label, _ in DEFAULT_RADAR_AXES)
    assert ana.values == (1.0, 0.0, 100.0, 2.0, 180.0)
    assert not project_radar([ana]).is_empty
