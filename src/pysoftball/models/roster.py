"""Immutable roster container and attendance resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Sequence, Tuple

from .player import Gender, Player


logger = logging.getLogger(__name__)


class RosterError(ValueError):
    """Raised when roster input cannot form a valid roster."""


@dataclass(frozen=True)
class AttendanceReport:
    """Outcome of matching attendance names against the roster."""

    requested: int
    matched: Tuple[str, ...]
    unknown_names: Tuple[str, ...] = ()
    duplicate_names: Tuple[str, ...] = ()

    @property
    def clean(self) -> bool:
        return not self.unknown_names and not self.duplicate_names


@dataclass(frozen=True)
class Roster:
    players: Tuple[Player, ...]
    _by_name: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        lookup: dict[str, Player] = {}
        for player in self.players:
            if player.name in lookup:
                raise RosterError(f"Duplicate player name {player.name!r} in roster")
            lookup[player.name] = player
        object.__setattr__(self, "_by_name", lookup)

    @classmethod
    def from_players(cls, players: Iterable[Player]) -> "Roster":
        return cls(tuple(players))

    def __iter__(self) -> Iterator[Player]:
        return iter(self.players)

    def __len__(self) -> int:
        return len(self.players)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def names(self) -> List[str]:
        return [player.name for player in self.players]

    def get(self, name: str) -> Player:
        """Fetch a player by name, raising KeyError if missing."""

        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"No player named {name!r} on the roster") from None

    def find(self, name: str) -> Player | None:
        return self._by_name.get(name)

    def gender_of(self, name: str) -> Gender:
        return self.get(name).gender

    def attending(self, names: Iterable[str]) -> tuple[List[Player], AttendanceReport]:
        """Resolve attendance names into players, in roster order.

        Unknown names are dropped and reported rather than raised.
        """

        requested: list[str] = [name.strip() for name in names if name and name.strip()]
        seen: set[str] = set()
        duplicates: list[str] = []
        unknown: list[str] = []
        for name in requested:
            if name in seen:
                duplicates.append(name)
                continue
            seen.add(name)
            if name not in self._by_name:
                unknown.append(name)

        players = [player for player in self.players if player.name in seen]
        if unknown:
            logger.warning("Ignoring %s unknown attendee(s): %s", len(unknown), ", ".join(unknown))
        report = AttendanceReport(
            requested=len(requested),
            matched=tuple(player.name for player in players),
            unknown_names=tuple(unknown),
            duplicate_names=tuple(duplicates),
        )
        return players, report


def split_by_gender(players: Sequence[Player]) -> tuple[List[Player], List[Player]]:
    """Return (males, females) preserving input order."""

    males = [player for player in players if player.gender is Gender.MALE]
    females = [player for player in players if player.gender is Gender.FEMALE]
    return males, females
