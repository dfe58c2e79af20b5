from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Mapping, Sequence

import pandas as pd

from squad_analytics.utils import as_count, as_score

logger = logging.getLogger(__name__)


class MatchResult(str, Enum):
    WIN = "WIN"
    DRAW = "DRAW"
    LOSS = "LOSS"

    @classmethod
    def from_scores(cls, team_score: int, opponent_score: int) -> "MatchResult":
        if team_score > opponent_score:
            return cls.WIN
        if team_score < opponent_score:
            return cls.LOSS
        return cls.DRAW

    @classmethod
    def parse(cls, raw: object) -> "MatchResult":
        if isinstance(raw, cls):
            return raw
        if raw is None:
            raise ValueError("match result is missing")

        token = str(raw).strip()
        if not token:
            raise ValueError("match result is empty")
        if token.startswith("MatchResult."):
            token = token.split(".", 1)[1]

        member = _RESULT_ALIASES.get(token.upper())
        if member is None:
            raise ValueError(f"unknown match result: {raw}")
        return member


# Legacy labels written by earlier versions of the record-keeper.
_RESULT_ALIASES = {
    "WIN": MatchResult.WIN,
    "W": MatchResult.WIN,
    "VICTORIA": MatchResult.WIN,
    "DRAW": MatchResult.DRAW,
    "D": MatchResult.DRAW,
    "EMPATE": MatchResult.DRAW,
    "LOSS": MatchResult.LOSS,
    "L": MatchResult.LOSS,
    "DERROTA": MatchResult.LOSS,
}


class AppearanceStatus(str, Enum):
    STARTER = "starter"
    SUBSTITUTE = "substitute"
    GOALKEEPER = "goalkeeper"


STARTING_STATUSES = frozenset({AppearanceStatus.STARTER.value, AppearanceStatus.GOALKEEPER.value})


@dataclass(frozen=True)
class PlayerAppearance:
    """One player's participation in one match.

    ``status`` keeps whatever string the caller supplied; values outside
    :class:`AppearanceStatus` still count as an appearance.
    """

    name: str
    goals: int = 0
    assists: int = 0
    minutes_played: int = 0
    status: str = AppearanceStatus.STARTER.value

    @property
    def is_named(self) -> bool:
        return bool(self.name and self.name.strip())

    @property
    def is_goalkeeper(self) -> bool:
        return self.status == AppearanceStatus.GOALKEEPER.value


@dataclass(frozen=True)
class MatchRecord:
    """One played match. ``result`` and ``goal_difference`` derive from the scores."""

    match_id: str
    date: str
    team_name: str
    opponent_name: str
    team_score: int
    opponent_score: int
    players: tuple[PlayerAppearance, ...] = field(default_factory=tuple)
    tournament: str | None = None

    @property
    def result(self) -> MatchResult:
        return MatchResult.from_scores(self.team_score, self.opponent_score)

    @property
    def goal_difference(self) -> int:
        return int(self.team_score) - int(self.opponent_score)

    @property
    def is_clean_sheet(self) -> bool:
        return int(self.opponent_score) == 0

    def with_scores(self, team_score: int, opponent_score: int) -> "MatchRecord":
        return replace(self, team_score=as_score(team_score), opponent_score=as_score(opponent_score))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object]) -> "MatchRecord":
        return normalize_match(raw)


# ── Boundary normalization ──────────────────────────────────────────────

def _get(raw: Mapping[str, object], candidates: Sequence[str], default: object = None) -> object:
    for name in candidates:
        if name in raw and raw[name] is not None:
            return raw[name]
    return default


def normalize_appearance(raw: Mapping[str, object] | PlayerAppearance) -> PlayerAppearance:
    """Turn a loosely-typed appearance into a typed one.

    Missing or unparseable numbers become 0, a missing status becomes
    ``starter`` and names are stripped (empty stays empty).
    """
    if isinstance(raw, PlayerAppearance):
        return PlayerAppearance(
            name=(raw.name or "").strip(),
            goals=as_count(raw.goals),
            assists=as_count(raw.assists),
            minutes_played=as_count(raw.minutes_played),
            status=str(raw.status or AppearanceStatus.STARTER.value).strip().lower(),
        )
    return PlayerAppearance(
        name=str(_get(raw, ["name", "player", "playerName"], "") or "").strip(),
        goals=as_count(_get(raw, ["goals"], 0)),
        assists=as_count(_get(raw, ["assists"], 0)),
        minutes_played=as_count(_get(raw, ["minutes_played", "minutesPlayed", "minutes"], 0)),
        status=str(_get(raw, ["status"], AppearanceStatus.STARTER.value) or AppearanceStatus.STARTER.value).strip().lower(),
    )


def normalize_match(raw: Mapping[str, object]) -> MatchRecord:
    """Build a :class:`MatchRecord` from a raw mapping (snake_case or camelCase keys)."""
    team_score = as_score(_get(raw, ["team_score", "teamScore"], 0))
    opponent_score = as_score(_get(raw, ["opponent_score", "opponentScore"], 0))
    players = tuple(normalize_appearance(p) for p in (_get(raw, ["players"], ()) or ()))
    tournament = _get(raw, ["tournament"], None)

    record = MatchRecord(
        match_id=str(_get(raw, ["match_id", "id"], "")),
        date=str(_get(raw, ["date"], "")),
        team_name=str(_get(raw, ["team_name", "teamName"], "")),
        opponent_name=str(_get(raw, ["opponent_name", "opponentName"], "")),
        team_score=team_score,
        opponent_score=opponent_score,
        players=players,
        tournament=str(tournament) if tournament else None,
    )

    stored = _get(raw, ["result"], None)
    if stored is not None:
        try:
            stored_result = MatchResult.parse(stored)
        except ValueError:
            stored_result = None
        if stored_result is not record.result:
            logger.warning(
                "Match %s stored result %s disagrees with score %s-%s; using %s",
                record.match_id, stored, team_score, opponent_score, record.result.value,
            )
    return record


def normalize_matches(raw_matches: Iterable[Mapping[str, object] | MatchRecord]) -> list[MatchRecord]:
    out = []
    for raw in raw_matches or ():
        if isinstance(raw, MatchRecord):
            out.append(replace(
                raw,
                team_score=as_score(raw.team_score),
                opponent_score=as_score(raw.opponent_score),
                players=tuple(normalize_appearance(p) for p in raw.players),
            ))
        else:
            out.append(normalize_match(raw))
    return out


# ── Tabular view ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TableContract:
    name: str
    columns: Mapping[str, str]

    def empty(self) -> pd.DataFrame:
        return pd.DataFrame({col: pd.Series(dtype=dtype) for col, dtype in self.columns.items()})


APPEARANCE_CONTRACT = TableContract(
    name="appearance",
    columns={
        "match_index": "int64",
        "match_id": "object",
        "player": "object",
        "goals": "int64",
        "assists": "int64",
        "minutes_played": "int64",
        "status": "object",
        "result": "object",
        "opponent_score": "int64",
    },
)


def appearance_frame(matches: Iterable[MatchRecord]) -> pd.DataFrame:
    """Long-form table with one row per named appearance, in match order.

    This is the single place where absent numbers default to 0 and
    unassigned players are dropped before aggregation.
    """
    rows = []
    for idx, match in enumerate(normalize_matches(matches)):
        result = match.result.value
        for appearance in match.players:
            if not appearance.is_named:
                continue
            rows.append({
                "match_index": idx,
                "match_id": match.match_id,
                "player": appearance.name,
                "goals": appearance.goals,
                "assists": appearance.assists,
                "minutes_played": appearance.minutes_played,
                "status": appearance.status,
                "result": result,
                "opponent_score": match.opponent_score,
            })
    if not rows:
        return APPEARANCE_CONTRACT.empty()
    frame = pd.DataFrame(rows)
    return frame[list(APPEARANCE_CONTRACT.columns.keys())].astype(dict(APPEARANCE_CONTRACT.columns))
