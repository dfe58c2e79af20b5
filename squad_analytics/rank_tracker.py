"""Positional rank movement between successive computations of one ranking."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Sequence, TypeVar

T = TypeVar("T")


class RankMovement(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"
    NEW = "new"


class RankingKind(str, Enum):
    TOP_SCORERS = "top_scorers"
    TOP_ASSISTERS = "top_assisters"
    CLEAN_SHEETS = "clean_sheets"
    PAIRS = "pairs"

    @classmethod
    def parse(cls, raw: object) -> "RankingKind":
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError as exc:
            raise ValueError(f"unknown ranking kind: {raw}") from exc


@dataclass(frozen=True)
class RankedEntry(Generic[T]):
    entity: T
    position: int
    movement: RankMovement
    previous_position: int | None = None


@dataclass(frozen=True)
class RankSnapshot:
    """Ordered keys of a ranking as it was last computed."""

    keys: tuple[str, ...] = ()

    @classmethod
    def from_ranking(cls, ranking: Sequence[T], key_of: Callable[[T], str]) -> "RankSnapshot":
        return cls(tuple(key_of(item) for item in ranking))

    def position_of(self, key: str) -> int | None:
        # First occurrence wins, matching a linear search over the old ranking.
        try:
            return self.keys.index(key)
        except ValueError:
            return None


def classify_movement(position: int, previous_position: int | None) -> RankMovement:
    """Rank 0 is best, so a smaller previous index means the entity was ahead before."""
    if previous_position is None:
        return RankMovement.NEW
    if position < previous_position:
        return RankMovement.UP
    if position > previous_position:
        return RankMovement.DOWN
    return RankMovement.STABLE


def track_movement(
    current: Sequence[T],
    previous: Sequence[T] | RankSnapshot,
    key_of: Callable[[T], str],
) -> list[RankedEntry[T]]:
    """Tag every entity in *current* with its movement relative to *previous*.

    Only positions are compared; score deltas are ignored.
    """
    snapshot = previous if isinstance(previous, RankSnapshot) else RankSnapshot.from_ranking(previous or (), key_of)
    entries = []
    for position, entity in enumerate(current):
        previous_position = snapshot.position_of(key_of(entity))
        entries.append(RankedEntry(
            entity=entity,
            position=position,
            movement=classify_movement(position, previous_position),
            previous_position=previous_position,
        ))
    return entries


class RankHistory:
    """Owns one previous-ranking snapshot per :class:`RankingKind`.

    Single writer: callers refreshing the same history from several threads
    must serialize those calls.
    """

    def __init__(self) -> None:
        self._snapshots: dict[RankingKind, RankSnapshot] = {}

    def snapshot(self, kind: RankingKind | str) -> RankSnapshot:
        return self._snapshots.get(RankingKind.parse(kind), RankSnapshot())

    def track(self, kind: RankingKind | str, ranking: Sequence[T], key_of: Callable[[T], str]) -> list[RankedEntry[T]]:
        """Classify *ranking* against the stored snapshot, then store it as the new snapshot."""
        ranking_kind = RankingKind.parse(kind)
        entries = track_movement(ranking, self.snapshot(ranking_kind), key_of)
        self._snapshots[ranking_kind] = RankSnapshot.from_ranking(ranking, key_of)
        return entries

    def reset(self, kind: RankingKind | str | None = None) -> None:
        if kind is None:
            self._snapshots.clear()
        else:
            self._snapshots.pop(RankingKind.parse(kind), None)

    def __contains__(self, kind: object) -> bool:
        try:
            return RankingKind.parse(kind) in self._snapshots
        except ValueError:
            return False
