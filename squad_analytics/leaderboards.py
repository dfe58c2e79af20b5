"""Deterministic squad leaderboards and table sorting over player stats."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Sequence

from squad_analytics.aggregation import SquadPlayerStats
from squad_analytics.constants import LEADERBOARD_SIZE
from squad_analytics.rank_tracker import RankedEntry, RankingKind


class SquadMetric(str, Enum):
    NAME = "name"
    MATCHES_PLAYED = "matches_played"
    GOALS = "goals"
    ASSISTS = "assists"
    MINUTES_PLAYED = "minutes_played"
    STARTS = "starts"
    SUB_APPEARANCES = "sub_appearances"
    WINS = "wins"
    DRAWS = "draws"
    LOSSES = "losses"
    POINTS = "points"
    RECORD = "record"
    CLEAN_SHEETS = "clean_sheets"
    GOALS_AGAINST = "goals_against"
    WIN_RATE = "win_rate"
    EFFECTIVENESS = "effectiveness"
    GOALS_PER_MATCH = "goals_per_match"
    ASSISTS_PER_MATCH = "assists_per_match"
    MINUTES_PERCENTAGE = "minutes_percentage"

    @classmethod
    def parse(cls, raw: object) -> "SquadMetric":
        if isinstance(raw, cls):
            return raw
        token = str(raw or "").strip()
        member = cls.__members__.get(token.upper())
        if member is not None:
            return member
        try:
            return cls(token.lower())
        except ValueError as exc:
            raise ValueError(f"unknown squad metric: {raw}") from exc


MetricAccessor = Callable[[SquadPlayerStats], float]

# Numeric metrics only; NAME is handled by sort_squad_table directly.
METRIC_ACCESSORS: Mapping[SquadMetric, MetricAccessor] = MappingProxyType({
    SquadMetric.MATCHES_PLAYED: lambda s: s.matches_played,
    SquadMetric.GOALS: lambda s: s.goals,
    SquadMetric.ASSISTS: lambda s: s.assists,
    SquadMetric.MINUTES_PLAYED: lambda s: s.minutes_played,
    SquadMetric.STARTS: lambda s: s.starts,
    SquadMetric.SUB_APPEARANCES: lambda s: s.sub_appearances,
    SquadMetric.WINS: lambda s: s.record.wins,
    SquadMetric.DRAWS: lambda s: s.record.draws,
    SquadMetric.LOSSES: lambda s: s.record.losses,
    SquadMetric.POINTS: lambda s: s.record.points,
    SquadMetric.RECORD: lambda s: s.record.points,
    SquadMetric.CLEAN_SHEETS: lambda s: s.clean_sheets,
    SquadMetric.GOALS_AGAINST: lambda s: s.goals_against,
    SquadMetric.WIN_RATE: lambda s: s.win_rate,
    SquadMetric.EFFECTIVENESS: lambda s: s.effectiveness,
    SquadMetric.GOALS_PER_MATCH: lambda s: s.goals_per_match,
    SquadMetric.ASSISTS_PER_MATCH: lambda s: s.assists_per_match,
    SquadMetric.MINUTES_PERCENTAGE: lambda s: s.minutes_percentage,
})

LOWER_IS_BETTER = frozenset({SquadMetric.LOSSES})


def metric_value(stats: SquadPlayerStats, metric: SquadMetric | str) -> float:
    key = SquadMetric.parse(metric)
    accessor = METRIC_ACCESSORS.get(key)
    if accessor is None:
        raise ValueError(f"metric {key.value} is not numeric")
    return float(accessor(stats))


@dataclass(frozen=True)
class LeaderboardRule:
    metric: SquadMetric
    goalkeepers_only: bool = False
    size: int = LEADERBOARD_SIZE


LEADERBOARDS: Mapping[RankingKind, LeaderboardRule] = MappingProxyType({
    RankingKind.TOP_SCORERS: LeaderboardRule(SquadMetric.GOALS),
    RankingKind.TOP_ASSISTERS: LeaderboardRule(SquadMetric.ASSISTS),
    RankingKind.CLEAN_SHEETS: LeaderboardRule(SquadMetric.CLEAN_SHEETS, goalkeepers_only=True),
})


def rank_players(
    stats: Iterable[SquadPlayerStats],
    metric: SquadMetric | str,
    *,
    limit: int | None = LEADERBOARD_SIZE,
    eligible: Callable[[SquadPlayerStats], bool] | None = None,
) -> list[SquadPlayerStats]:
    """Sort by *metric* descending, then matches played descending.

    The sort is stable, so full ties keep their incoming order.
    """
    key = SquadMetric.parse(metric)
    pool = [s for s in stats if eligible is None or eligible(s)]
    ranked = sorted(pool, key=lambda s: (-metric_value(s, key), -s.matches_played))
    return ranked if limit is None else ranked[: max(0, int(limit))]


def build_leaderboard(stats: Iterable[SquadPlayerStats], kind: RankingKind | str) -> list[SquadPlayerStats]:
    """Ranking for one leaderboard kind, before zero-value entries are hidden."""
    ranking_kind = RankingKind.parse(kind)
    rule = LEADERBOARDS.get(ranking_kind)
    if rule is None:
        raise ValueError(f"{ranking_kind.value} is not a player leaderboard")
    eligible = (lambda s: s.is_goalkeeper) if rule.goalkeepers_only else None
    return rank_players(stats, rule.metric, limit=rule.size, eligible=eligible)


def visible_entries(
    entries: Sequence[RankedEntry[SquadPlayerStats]],
    kind: RankingKind | str,
) -> list[RankedEntry[SquadPlayerStats]]:
    """Drop entries whose leaderboard metric is 0."""
    rule = LEADERBOARDS[RankingKind.parse(kind)]
    return [e for e in entries if metric_value(e.entity, rule.metric) > 0]


def sort_squad_table(
    stats: Iterable[SquadPlayerStats],
    metric: SquadMetric | str = SquadMetric.MATCHES_PLAYED,
    *,
    descending: bool = True,
) -> list[SquadPlayerStats]:
    """Sort the squad table by any column; ties fall back to matches played descending."""
    key = SquadMetric.parse(metric)
    base = sorted(stats, key=lambda s: s.matches_played, reverse=True)
    if key is SquadMetric.NAME:
        return sorted(base, key=lambda s: s.name.casefold(), reverse=descending)
    return sorted(base, key=lambda s: metric_value(s, key), reverse=descending)


def comparison_leaders(
    stats: Sequence[SquadPlayerStats],
    metrics: Iterable[SquadMetric | str],
) -> dict[SquadMetric, float | None]:
    """Best value per metric across a player selection (lowest for losses)."""
    out: dict[SquadMetric, float | None] = {}
    for metric in metrics:
        key = SquadMetric.parse(metric)
        values = [metric_value(s, key) for s in stats]
        if not values:
            out[key] = None
        elif key in LOWER_IS_BETTER:
            out[key] = min(values)
        else:
            out[key] = max(values)
    return out
