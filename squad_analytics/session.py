"""Long-lived analytics session that owns rank snapshots across recomputations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable

from squad_analytics.aggregation import SquadPlayerStats, aggregate_squad_stats
from squad_analytics.chemistry import PairAnalysisConfig, PairResult, PlayerPairStats, analyze_pairs
from squad_analytics.leaderboards import LEADERBOARDS, build_leaderboard, visible_entries
from squad_analytics.rank_tracker import RankedEntry, RankHistory, RankingKind
from squad_analytics.schema import MatchRecord, normalize_matches

logger = logging.getLogger(__name__)


def _player_key(stats: SquadPlayerStats) -> str:
    return stats.name


def _pair_key(pair: PlayerPairStats) -> str:
    return "-".join(pair.key)


@dataclass(frozen=True)
class SquadReport:
    squad: list[SquadPlayerStats]
    leaderboards: dict[RankingKind, list[RankedEntry[SquadPlayerStats]]] = field(default_factory=dict)
    pairs: PairResult = field(default_factory=PairResult.empty)

    def leaderboard(self, kind: RankingKind | str) -> list[RankedEntry[SquadPlayerStats]]:
        return self.leaderboards.get(RankingKind.parse(kind), [])


class SquadAnalyticsSession:
    """Recomputes squad analytics and tags rank movement against the previous refresh.

    One session per view. Refreshes of the same session must not run
    concurrently.
    """

    def __init__(self, *, pair_config: PairAnalysisConfig | None = None, history: RankHistory | None = None) -> None:
        self.pair_config = pair_config or PairAnalysisConfig()
        self.history = history or RankHistory()

    def refresh(self, matches: Iterable[MatchRecord]) -> SquadReport:
        records = normalize_matches(matches)
        squad = aggregate_squad_stats(records)

        boards: dict[RankingKind, list[RankedEntry[SquadPlayerStats]]] = {}
        for kind in LEADERBOARDS:
            ranking = build_leaderboard(squad, kind)
            entries = self.history.track(kind, ranking, _player_key)
            boards[kind] = visible_entries(entries, kind)

        pair_result = analyze_pairs(records, squad_stats=squad, config=self.pair_config)
        pair_entries = self.history.track(RankingKind.PAIRS, pair_result.pairs, _pair_key)
        pairs = replace(
            pair_result,
            pairs=[replace(e.entity, rank_movement=e.movement) for e in pair_entries],
        )

        logger.info(
            "Squad refresh: %s matches, %s players, %s ranked pairs",
            len(records), len(squad), len(pairs.pairs),
        )
        return SquadReport(squad=squad, leaderboards=boards, pairs=pairs)

    def reset(self, kind: RankingKind | str | None = None) -> None:
        """Forget previous rankings, e.g. when the view switches to another team."""
        self.history.reset(kind)
