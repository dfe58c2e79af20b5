"""Per-player squad statistics folded from the raw match log."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from squad_analytics.constants import MAX_POINTS_PER_MATCH, POINTS_PER_DRAW, POINTS_PER_WIN
from squad_analytics.schema import (
    STARTING_STATUSES,
    AppearanceStatus,
    MatchRecord,
    MatchResult,
    appearance_frame,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchTally:
    wins: int = 0
    draws: int = 0
    losses: int = 0

    @property
    def points(self) -> int:
        return self.wins * POINTS_PER_WIN + self.draws * POINTS_PER_DRAW

    @property
    def played(self) -> int:
        return self.wins + self.draws + self.losses


@dataclass(frozen=True)
class SquadPlayerStats:
    """Derived per-player totals and rates. Recomputed from scratch, never persisted."""

    name: str
    matches_played: int
    goals: int
    assists: int
    minutes_played: int
    starts: int
    sub_appearances: int
    record: MatchTally
    clean_sheets: int
    is_goalkeeper: bool
    goals_against: int
    win_rate: float
    effectiveness: float
    goals_per_match: float
    assists_per_match: float
    minutes_percentage: float

    @property
    def points(self) -> int:
        return self.record.points

    def as_dict(self) -> dict[str, object]:
        out = asdict(self)
        record = out.pop("record")
        out.update(record)
        out["points"] = self.points
        return out


STATS_COLUMNS = [
    "name",
    "matches_played",
    "goals",
    "assists",
    "minutes_played",
    "starts",
    "sub_appearances",
    "wins",
    "draws",
    "losses",
    "points",
    "clean_sheets",
    "is_goalkeeper",
    "goals_against",
    "win_rate",
    "effectiveness",
    "goals_per_match",
    "assists_per_match",
    "minutes_percentage",
]


def _rate(numerator: pd.Series, denominator: pd.Series, scale: float = 1.0) -> np.ndarray:
    num = numerator.to_numpy(dtype=float)
    den = denominator.to_numpy(dtype=float)
    out = np.divide(num, den, out=np.zeros_like(num), where=den > 0)
    return out * scale


def aggregate_squad_frame(matches: Iterable[MatchRecord]) -> pd.DataFrame:
    """Fold matches into one row per named player, in first-appearance order."""
    frame = appearance_frame(matches)
    if frame.empty:
        return pd.DataFrame(columns=STATS_COLUMNS)

    is_keeper = frame["status"] == AppearanceStatus.GOALKEEPER.value
    frame = frame.assign(
        win=(frame["result"] == MatchResult.WIN.value).astype(int),
        draw=(frame["result"] == MatchResult.DRAW.value).astype(int),
        loss=(frame["result"] == MatchResult.LOSS.value).astype(int),
        clean_sheet=(frame["opponent_score"] == 0).astype(int),
        start=frame["status"].isin(STARTING_STATUSES).astype(int),
        sub=(frame["status"] == AppearanceStatus.SUBSTITUTE.value).astype(int),
        keeper=is_keeper.astype(int),
        conceded=frame["opponent_score"].where(is_keeper, 0),
    )

    summary = frame.groupby("player", sort=False).agg(
        matches_played=("match_index", "size"),
        goals=("goals", "sum"),
        assists=("assists", "sum"),
        minutes_played=("minutes_played", "sum"),
        starts=("start", "sum"),
        sub_appearances=("sub", "sum"),
        wins=("win", "sum"),
        draws=("draw", "sum"),
        losses=("loss", "sum"),
        clean_sheets=("clean_sheet", "sum"),
        keeper_apps=("keeper", "sum"),
        goals_against=("conceded", "sum"),
    )
    summary = summary.reset_index().rename(columns={"player": "name"})

    summary["points"] = summary["wins"] * POINTS_PER_WIN + summary["draws"] * POINTS_PER_DRAW
    summary["is_goalkeeper"] = summary["keeper_apps"] > 0
    summary["win_rate"] = _rate(summary["wins"], summary["matches_played"], 100.0)
    summary["effectiveness"] = _rate(summary["points"], summary["matches_played"] * MAX_POINTS_PER_MATCH, 100.0)
    summary["goals_per_match"] = _rate(summary["goals"], summary["matches_played"])
    summary["assists_per_match"] = _rate(summary["assists"], summary["matches_played"])

    # Second pass: minutes relative to the squad's busiest player.
    max_minutes = int(summary["minutes_played"].max())
    summary["minutes_percentage"] = (
        _rate(summary["minutes_played"], pd.Series(max_minutes, index=summary.index), 100.0)
        if max_minutes > 0
        else 0.0
    )

    logger.debug("Aggregated %s appearances into %s players", len(frame), len(summary))
    return summary[STATS_COLUMNS]


def aggregate_squad_stats(matches: Iterable[MatchRecord]) -> list[SquadPlayerStats]:
    """Per-player cumulative statistics. Empty input gives an empty list."""
    summary = aggregate_squad_frame(matches)
    return [
        SquadPlayerStats(
            name=str(row.name),
            matches_played=int(row.matches_played),
            goals=int(row.goals),
            assists=int(row.assists),
            minutes_played=int(row.minutes_played),
            starts=int(row.starts),
            sub_appearances=int(row.sub_appearances),
            record=MatchTally(wins=int(row.wins), draws=int(row.draws), losses=int(row.losses)),
            clean_sheets=int(row.clean_sheets),
            is_goalkeeper=bool(row.is_goalkeeper),
            goals_against=int(row.goals_against),
            win_rate=float(row.win_rate),
            effectiveness=float(row.effectiveness),
            goals_per_match=float(row.goals_per_match),
            assists_per_match=float(row.assists_per_match),
            minutes_percentage=float(row.minutes_percentage),
        )
        for row in summary.itertuples(index=False)
    ]


def stats_frame(stats: Sequence[SquadPlayerStats]) -> pd.DataFrame:
    """Tabular view of player stats for the rendering layer."""
    if not stats:
        return pd.DataFrame(columns=STATS_COLUMNS)
    return pd.DataFrame([s.as_dict() for s in stats])[STATS_COLUMNS]
