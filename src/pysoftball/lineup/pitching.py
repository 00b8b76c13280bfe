"""Pitcher rotation keyed to the batting order."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from pysoftball.models import Player


logger = logging.getLogger(__name__)

NO_PITCHER_LABEL = "No pitcher available"
EMERGENCY_SUFFIX = " (Emergency)"

_PRIORITY_LABELS = {1: "Primary", 2: "Secondary", 3: "Tertiary"}


@dataclass(frozen=True)
class PitchingAssignment:
    """Who pitches while the batter in ``batting_position`` (1-based) is up."""

    batting_position: int
    batter: str
    pitcher: Optional[str]
    emergency: bool = False

    @property
    def label(self) -> str:
        if self.pitcher is None:
            return NO_PITCHER_LABEL
        if self.emergency:
            return f"{self.pitcher}{EMERGENCY_SUFFIX}"
        return self.pitcher

    def to_dict(self) -> dict:
        return {
            "battingPosition": self.batting_position,
            "batter": self.batter,
            "pitcher": self.label,
        }


def priority_label(priority: int) -> str:
    return _PRIORITY_LABELS.get(priority, "Emergency")


def unavailable_slots(batting_index: int, order_length: int, window: int) -> set[int]:
    """Slots a pitcher batting at ``batting_index`` cannot cover."""

    if order_length <= 0:
        return set()
    return {(batting_index + offset) % order_length for offset in range(window + 1)}


def pitcher_available(
    pitcher: str,
    slot: int,
    batting_order: Sequence[str],
    window: int,
) -> bool:
    try:
        batting_index = list(batting_order).index(pitcher)
    except ValueError:
        return True
    return slot not in unavailable_slots(batting_index, len(batting_order), window)


def assign_pitchers(
    batting_order: Sequence[str],
    players: Iterable[Player],
    *,
    exclusion_window: int = 3,
) -> List[PitchingAssignment]:
    """Pick a pitcher for every batting slot.

    Pitchers are attendees with ``pitching_priority > 0``. A pitcher sits out
    their own slot and the ``exclusion_window`` slots after it (wrapping).
    The lowest priority value wins, ties go to whoever has pitched least.
    When nobody is free the top-priority pitcher covers as an emergency.
    """

    pitchers = sorted(
        (player for player in players if player.is_pitcher),
        key=lambda player: player.pitching_priority,
    )
    if not batting_order:
        return []
    if not pitchers:
        logger.warning("No pitchers attending; %s slot(s) left uncovered", len(batting_order))
        return [
            PitchingAssignment(batting_position=index + 1, batter=batter, pitcher=None)
            for index, batter in enumerate(batting_order)
        ]

    positions = {name: index for index, name in enumerate(batting_order)}
    usage: Dict[str, int] = {player.name: 0 for player in pitchers}
    schedule: List[PitchingAssignment] = []
    for slot, batter in enumerate(batting_order):
        available = [
            player
            for player in pitchers
            if player.name not in positions
            or slot not in unavailable_slots(positions[player.name], len(batting_order), exclusion_window)
        ]
        if available:
            chosen = min(available, key=lambda player: (player.pitching_priority, usage[player.name]))
            emergency = False
        else:
            chosen = pitchers[0]
            emergency = True
            logger.warning(
                "No pitcher free for slot %s (%s); %s pitches as emergency",
                slot + 1,
                batter,
                chosen.name,
            )
        usage[chosen.name] += 1
        schedule.append(
            PitchingAssignment(
                batting_position=slot + 1,
                batter=batter,
                pitcher=chosen.name,
                emergency=emergency,
            )
        )
    return schedule


def pitching_usage(schedule: Iterable[PitchingAssignment]) -> Dict[str, int]:
    """Number of batting slots each pitcher covers, emergencies included."""

    counts = Counter(assignment.pitcher for assignment in schedule if assignment.pitcher)
    return dict(counts)


def pitching_violations(
    schedule: Sequence[PitchingAssignment],
    batting_order: Sequence[str],
    *,
    exclusion_window: int = 3,
) -> List[str]:
    """Describe non-emergency assignments that break the availability window."""

    issues: List[str] = []
    for assignment in schedule:
        if assignment.pitcher is None or assignment.emergency:
            continue
        slot = assignment.batting_position - 1
        if not pitcher_available(assignment.pitcher, slot, batting_order, exclusion_window):
            issues.append(
                f"{assignment.pitcher} pitches to slot {assignment.batting_position} "
                f"({assignment.batter}) inside their batting window"
            )
    return issues
