"""Pair chemistry: joint performance and impact score for players who shared matches."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from functools import cmp_to_key
from itertools import combinations
from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from squad_analytics.aggregation import SquadPlayerStats, aggregate_squad_stats
from squad_analytics.constants import (
    IMPACT_TIE_TOLERANCE,
    IMPACT_WEIGHT_ASSISTS,
    IMPACT_WEIGHT_GOALS,
    IMPACT_WEIGHT_POINTS,
    MATRIX_PLAYER_LIMIT,
    MAX_POINTS_PER_MATCH,
    PAIR_MIN_MATCHES,
    PAIR_MIN_SHARED_MATCHES,
    POINTS_PER_DRAW,
    POINTS_PER_WIN,
)
from squad_analytics.rank_tracker import RankMovement
from squad_analytics.schema import MatchRecord, MatchResult, normalize_matches
from squad_analytics.utils import pair_key

logger = logging.getLogger(__name__)

PAIR_COLUMNS = [
    "player1",
    "player2",
    "matches_together",
    "points",
    "wins",
    "goals",
    "assists",
    "minutes",
    "impact_score",
    "win_rate",
    "effectiveness",
    "rank_movement",
]


@dataclass(frozen=True)
class PairAnalysisConfig:
    min_matches: int = PAIR_MIN_MATCHES
    min_shared_matches: int = PAIR_MIN_SHARED_MATCHES
    exclude_goalkeepers: bool = False
    matrix_player_limit: int = MATRIX_PLAYER_LIMIT
    points_weight: float = IMPACT_WEIGHT_POINTS
    goals_weight: float = IMPACT_WEIGHT_GOALS
    assists_weight: float = IMPACT_WEIGHT_ASSISTS


@dataclass(frozen=True)
class PlayerPairStats:
    player1: str
    player2: str
    matches_together: int
    points: int
    wins: int
    goals: int
    assists: int
    minutes: int
    impact_score: float
    win_rate: float
    effectiveness: float
    rank_movement: RankMovement | None = None

    @property
    def key(self) -> tuple[str, str]:
        return pair_key(self.player1, self.player2)

    @property
    def label(self) -> str:
        return f"{self.player1} + {self.player2}"

    def involves(self, name: str) -> bool:
        return name in (self.player1, self.player2)

    def as_dict(self) -> dict[str, object]:
        out = asdict(self)
        out["rank_movement"] = self.rank_movement.value if self.rank_movement else None
        return out


@dataclass(frozen=True)
class PairResult:
    """``pairs`` is the ranked, thresholded list; the rest feed matrix views."""

    pairs: list[PlayerPairStats] = field(default_factory=list)
    top_players: list[str] = field(default_factory=list)
    all_pairs: list[PlayerPairStats] = field(default_factory=list)
    all_players: list[str] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "PairResult":
        return cls()

    def lookup(self, name_a: str, name_b: str) -> PlayerPairStats | None:
        key = pair_key(name_a, name_b)
        for pair in self.all_pairs:
            if pair.key == key:
                return pair
        return None


def _pair_occurrences(matches: Sequence[MatchRecord], cfg: PairAnalysisConfig) -> pd.DataFrame:
    rows: list[dict[str, object]] = []
    for match in matches:
        result = match.result
        points = POINTS_PER_WIN if result is MatchResult.WIN else POINTS_PER_DRAW if result is MatchResult.DRAW else 0
        for p1, p2 in combinations(match.players, 2):
            if not p1.is_named or not p2.is_named or p1.name == p2.name:
                continue
            if cfg.exclude_goalkeepers and (p1.is_goalkeeper or p2.is_goalkeeper):
                continue
            first, second = pair_key(p1.name, p2.name)
            rows.append({
                "player1": first,
                "player2": second,
                "points": points,
                "wins": int(result is MatchResult.WIN),
                "goals": p1.goals + p2.goals,
                "assists": p1.assists + p2.assists,
                "minutes": min(p1.minutes_played, p2.minutes_played),
            })
    return pd.DataFrame(rows)


def _summarize_pairs(occurrences: pd.DataFrame, cfg: PairAnalysisConfig) -> pd.DataFrame:
    summary = occurrences.groupby(["player1", "player2"], sort=False).agg(
        matches_together=("points", "size"),
        points=("points", "sum"),
        wins=("wins", "sum"),
        goals=("goals", "sum"),
        assists=("assists", "sum"),
        minutes=("minutes", "sum"),
    ).reset_index()

    n = summary["matches_together"].to_numpy(dtype=float)
    summary["impact_score"] = (
        cfg.points_weight * summary["points"].to_numpy(dtype=float) / n
        + cfg.goals_weight * summary["goals"].to_numpy(dtype=float) / n
        + cfg.assists_weight * summary["assists"].to_numpy(dtype=float) / n
    )
    summary["win_rate"] = summary["wins"].to_numpy(dtype=float) / n * 100.0
    summary["effectiveness"] = summary["points"].to_numpy(dtype=float) / (n * MAX_POINTS_PER_MATCH) * 100.0
    return summary


def _to_pairs(summary: pd.DataFrame) -> list[PlayerPairStats]:
    return [
        PlayerPairStats(
            player1=str(row.player1),
            player2=str(row.player2),
            matches_together=int(row.matches_together),
            points=int(row.points),
            wins=int(row.wins),
            goals=int(row.goals),
            assists=int(row.assists),
            minutes=int(row.minutes),
            impact_score=float(row.impact_score),
            win_rate=float(row.win_rate),
            effectiveness=float(row.effectiveness),
        )
        for row in summary.itertuples(index=False)
    ]


def _order_by_best_pair(raw_pairs: Sequence[PlayerPairStats], squad_stats: Sequence[SquadPlayerStats]) -> list[str]:
    best_impact: dict[str, float] = {}
    for pair in raw_pairs:
        for name in (pair.player1, pair.player2):
            best_impact[name] = max(best_impact.get(name, -np.inf), pair.impact_score)

    def _compare(a: SquadPlayerStats, b: SquadPlayerStats) -> int:
        impact_a = best_impact.get(a.name, -np.inf)
        impact_b = best_impact.get(b.name, -np.inf)
        if abs(impact_a - impact_b) > IMPACT_TIE_TOLERANCE:
            return -1 if impact_a > impact_b else 1
        return b.matches_played - a.matches_played

    eligible = [s for s in squad_stats if s.name in best_impact]
    return [s.name for s in sorted(eligible, key=cmp_to_key(_compare))]


def top_players_by_appearances(squad_stats: Sequence[SquadPlayerStats], limit: int = MATRIX_PLAYER_LIMIT) -> list[str]:
    ranked = sorted(squad_stats, key=lambda s: s.matches_played, reverse=True)
    return [s.name for s in ranked[: max(0, int(limit))]]


def analyze_pairs(
    matches: Iterable[MatchRecord],
    *,
    squad_stats: Sequence[SquadPlayerStats] | None = None,
    config: PairAnalysisConfig | None = None,
) -> PairResult:
    """Rank every player pair that shared enough matches by impact score.

    Fewer than ``config.min_matches`` matches yields an empty result; this is a
    sample-size floor, not an error. The ranking sort is stable so equal impact
    scores keep the order in which the pairs were first seen.
    """
    cfg = config or PairAnalysisConfig()
    records = normalize_matches(matches)
    if len(records) < cfg.min_matches:
        logger.debug("Pair analysis skipped: %s matches < %s", len(records), cfg.min_matches)
        return PairResult.empty()

    stats = list(squad_stats) if squad_stats is not None else aggregate_squad_stats(records)
    top_players = top_players_by_appearances(stats, cfg.matrix_player_limit)

    occurrences = _pair_occurrences(records, cfg)
    if occurrences.empty:
        return PairResult(top_players=top_players)

    summary = _summarize_pairs(occurrences, cfg)
    all_pairs = _to_pairs(summary)

    ranked = summary[summary["matches_together"] > cfg.min_shared_matches]
    ranked = ranked.sort_values("impact_score", ascending=False, kind="mergesort")
    pairs = _to_pairs(ranked)

    logger.debug("Pair analysis: %s raw pairs, %s above %s shared matches", len(all_pairs), len(pairs), cfg.min_shared_matches)
    return PairResult(
        pairs=pairs,
        top_players=top_players,
        all_pairs=all_pairs,
        all_players=_order_by_best_pair(all_pairs, stats),
    )


def pairs_frame(pairs: Sequence[PlayerPairStats]) -> pd.DataFrame:
    """Tabular view of pair stats for the rendering layer."""
    if not pairs:
        return pd.DataFrame(columns=PAIR_COLUMNS)
    return pd.DataFrame([p.as_dict() for p in pairs])[PAIR_COLUMNS]
