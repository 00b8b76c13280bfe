"""High-level orchestration for building and editing a game plan."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Sequence, Tuple

from pysoftball.config import DEFAULT_RULES, GameRules
from pysoftball.models import AttendanceReport, Player, Roster

from .batting import generate_batting_order
from .edits import Slot, move_batter, swap_slots
from .fielding import InningAssignment, generate_fielding
from .issues import PlanIssue
from .pitching import PitchingAssignment, assign_pitchers


logger = logging.getLogger(__name__)


@dataclass
class GamePlan:
    attendance: List[str]
    batting_order: List[str]
    pitching: List[PitchingAssignment]
    fielding: List[InningAssignment]
    issues: List[PlanIssue] = field(default_factory=list)
    seed: Optional[int] = None
    attendance_report: Optional[AttendanceReport] = None

    def to_dict(self) -> dict:
        payload = {
            "attendance": list(self.attendance),
            "batting_order": list(self.batting_order),
            "pitching": [assignment.to_dict() for assignment in self.pitching],
            "fielding": [inning.to_dict() for inning in self.fielding],
            "issues": [issue.to_dict() for issue in self.issues],
            "seed": self.seed,
        }
        if self.attendance_report is not None:
            payload["unknown_attendees"] = list(self.attendance_report.unknown_names)
        return payload


def attending_players(roster: Roster, attendance: Optional[Iterable[str]]) -> Tuple[List[Player], AttendanceReport]:
    """Resolve attendance names; ``None`` means the whole roster is present."""

    names = roster.names if attendance is None else list(attendance)
    return roster.attending(names)


def build_game_plan(
    roster: Roster,
    attendance: Optional[Iterable[str]] = None,
    *,
    seed: Optional[int] = None,
    rules: GameRules = DEFAULT_RULES,
) -> GamePlan:
    """Generate batting order, pitching and fielding for one game.

    A single ``random.Random(seed)`` drives all three generators in a fixed
    order, so equal seeds reproduce equal plans.
    """

    players, report = attending_players(roster, attendance)
    rng = random.Random(seed)

    batting_order = generate_batting_order(players, rng, max_attempts=rules.batting_attempts)
    pitching = assign_pitchers(batting_order, players, exclusion_window=rules.pitcher_exclusion_window)
    fielding = generate_fielding(players, rng, rules=rules)

    logger.info(
        "Built plan for %s attendee(s): %s innings, %s issue(s)",
        len(players),
        len(fielding.innings),
        len(fielding.issues),
    )
    return GamePlan(
        attendance=[player.name for player in players],
        batting_order=batting_order,
        pitching=pitching,
        fielding=fielding.innings,
        issues=list(fielding.issues),
        seed=seed,
        attendance_report=report,
    )


def apply_swap(plan: GamePlan, source: Slot, target: Slot) -> GamePlan:
    """Return a plan with two fielding slots swapped; raises PlanEditError."""

    return replace(plan, fielding=swap_slots(plan.fielding, source, target))


def apply_batting_move(
    plan: GamePlan,
    players: Sequence[Player],
    from_index: int,
    to_index: int,
    *,
    rules: GameRules = DEFAULT_RULES,
) -> GamePlan:
    """Move a batter and rebuild the pitching schedule for the new order."""

    order = move_batter(plan.batting_order, from_index, to_index)
    pitching = assign_pitchers(order, players, exclusion_window=rules.pitcher_exclusion_window)
    return replace(plan, batting_order=order, pitching=pitching)
