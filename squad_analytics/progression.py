"""Experience and level progression over a player's match history."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from squad_analytics.constants import (
    LEVEL_BASE_COST,
    LEVEL_COST_GROWTH,
    XP_PER_ASSIST,
    XP_PER_GOAL,
    XP_PER_MATCH,
)
from squad_analytics.schema import MatchRecord, normalize_matches
from squad_analytics.utils import as_count


@dataclass(frozen=True)
class ProgressionConfig:
    xp_per_match: int = XP_PER_MATCH
    xp_per_goal: int = XP_PER_GOAL
    xp_per_assist: int = XP_PER_ASSIST
    base_cost: int = LEVEL_BASE_COST
    growth: float = LEVEL_COST_GROWTH


@dataclass(frozen=True)
class MatchContribution:
    """Goals and assists attributed to the tracked player in one match."""

    goals: int = 0
    assists: int = 0


@dataclass(frozen=True)
class ProgressionState:
    total_xp: int
    level: int
    xp_in_level: int
    xp_to_next_level: int
    progress: float


def level_cost(level: int, *, config: ProgressionConfig | None = None) -> int:
    """XP needed to go from *level* to ``level + 1``."""
    cfg = config or ProgressionConfig()
    if level < 1:
        return 0
    return int(math.floor(cfg.base_cost * cfg.growth ** (level - 1)))


def match_xp(contribution: MatchContribution, *, config: ProgressionConfig | None = None) -> int:
    cfg = config or ProgressionConfig()
    return (
        cfg.xp_per_match
        + cfg.xp_per_goal * as_count(contribution.goals)
        + cfg.xp_per_assist * as_count(contribution.assists)
    )


def progression_from_xp(total_xp: int, *, config: ProgressionConfig | None = None) -> ProgressionState:
    """Walk the cost curve from level 1 while the remaining XP affords the next level."""
    cfg = config or ProgressionConfig()
    total = as_count(total_xp)
    level = 1
    spent = 0
    next_cost = level_cost(level, config=cfg)
    # A zero cost would never consume XP; the guard keeps the walk finite.
    while next_cost > 0 and total >= spent + next_cost:
        spent += next_cost
        level += 1
        next_cost = level_cost(level, config=cfg)

    xp_in_level = total - spent
    progress = (xp_in_level / next_cost) * 100.0 if next_cost > 0 else 100.0
    return ProgressionState(
        total_xp=total,
        level=level,
        xp_in_level=xp_in_level,
        xp_to_next_level=next_cost,
        progress=min(progress, 100.0),
    )


def compute_progression(
    contributions: Iterable[MatchContribution],
    *,
    config: ProgressionConfig | None = None,
) -> ProgressionState:
    cfg = config or ProgressionConfig()
    total = sum(match_xp(c, config=cfg) for c in contributions)
    return progression_from_xp(total, config=cfg)


def attribute_contributions(matches: Iterable[MatchRecord], player_name: str) -> list[MatchContribution]:
    """Per-match goals/assists of *player_name*, for matches where they appeared."""
    name = (player_name or "").strip()
    out = []
    if not name:
        return out
    for match in normalize_matches(matches):
        appearances = [p for p in match.players if p.name == name]
        if not appearances:
            continue
        out.append(MatchContribution(
            goals=sum(p.goals for p in appearances),
            assists=sum(p.assists for p in appearances),
        ))
    return out
