"""Squad analytics engine package."""

from squad_analytics.aggregation import MatchTally, SquadPlayerStats, aggregate_squad_stats, stats_frame
from squad_analytics.chemistry import PairAnalysisConfig, PairResult, PlayerPairStats, analyze_pairs, pairs_frame
from squad_analytics.progression import (
    MatchContribution,
    ProgressionState,
    attribute_contributions,
    compute_progression,
    progression_from_xp,
)
from squad_analytics.radar import NamedMetricSet, PolygonSet, RadarConfig, project_radar
from squad_analytics.rank_tracker import RankedEntry, RankHistory, RankingKind, RankMovement, RankSnapshot, track_movement
from squad_analytics.schema import AppearanceStatus, MatchRecord, MatchResult, PlayerAppearance, normalize_match
from squad_analytics.session import SquadAnalyticsSession, SquadReport

__all__ = [
    "MatchRecord",
    "PlayerAppearance",
    "MatchResult",
    "AppearanceStatus",
    "normalize_match",
    "MatchTally",
    "SquadPlayerStats",
    "aggregate_squad_stats",
    "stats_frame",
    "PairAnalysisConfig",
    "PairResult",
    "PlayerPairStats",
    "analyze_pairs",
    "pairs_frame",
    "RankMovement",
    "RankingKind",
    "RankedEntry",
    "RankSnapshot",
    "RankHistory",
    "track_movement",
    "NamedMetricSet",
    "PolygonSet",
    "RadarConfig",
    "project_radar",
    "MatchContribution",
    "ProgressionState",
    "compute_progression",
    "progression_from_xp",
    "attribute_contributions",
    "SquadAnalyticsSession",
    "SquadReport",
]
