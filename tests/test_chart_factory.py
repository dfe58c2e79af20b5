import plotly.graph_objects as go

from squad_analytics.aggregation import aggregate_squad_stats
from squad_analytics.chemistry import analyze_pairs
from squad_analytics.leaderboards import SquadMetric, build_leaderboard
from squad_analytics.radar import NamedMetricSet, PolygonSet, project_radar
from squad_analytics.rank_tracker import RankHistory, RankingKind
from squad_analytics.schema import MatchRecord, PlayerAppearance
from squad_charts.factory import leaderboard_lollipop, radar_chart, synergy_heatmap
from squad_charts.tokens import MOVEMENT_GLYPHS


def _matches():
    return [
        MatchRecord(
            f"m{i}", "d", "FC", "R", 2, i % 2,
            players=(PlayerAppearance("Ana", goals=1), PlayerAppearance("Ben", assists=1), PlayerAppearance("Cai")),
        )
        for i in range(3)
    ]


def test_radar_chart_draws_rings_and_polygons():
    polygons = project_radar([
        NamedMetricSet.from_mapping("Ana", {"a": 1, "b": 2, "c": 3}),
        NamedMetricSet.from_mapping("Ben", {"a": 2, "b": 1, "c": 0}),
    ])
    fig = radar_chart(polygons, title="Compare")
    assert isinstance(fig, go.Figure)
    assert len(fig.data) == len(polygons.grid_rings) + 2
    assert [t.name for t in fig.data[-2:]] == ["Ana", "Ben"]
    assert fig.layout.yaxis.autorange == "reversed"


def test_radar_chart_empty_set():
    fig = radar_chart(PolygonSet.empty())
    assert len(fig.data) == 0


def test_synergy_heatmap_is_symmetric():
    result = analyze_pairs(_matches())
    fig = synergy_heatmap(result)
    z = fig.data[0].z
    assert list(fig.data[0].x) == result.top_players
    assert z[0][0] is None
    assert z[0][1] == z[1][0]
    assert fig.data[0].zmin <= -1.0
    assert fig.data[0].zmax >= max(p.impact_score for p in result.all_pairs)


def test_synergy_heatmap_without_pairs():
    result = analyze_pairs(_matches()[:2])
    assert len(synergy_heatmap(result).data) == 0


def test_leaderboard_lollipop_shows_movement_glyphs():
    stats = aggregate_squad_stats(_matches())
    entries = RankHistory().track(RankingKind.TOP_SCORERS, build_leaderboard(stats, "top_scorers"), lambda s: s.name)
    fig = leaderboard_lollipop(entries, SquadMetric.GOALS)
    ticktext = list(fig.layout.yaxis.ticktext)
    assert ticktext[0] == f"{MOVEMENT_GLYPHS['new']} Ana"
    assert len(fig.data) == len(entries)
