"""Lineup generation: batting order, pitching rotation and fielding."""

from .batting import (
    BattingViolation,
    batting_order_floor,
    batting_order_score,
    batting_order_violations,
    generate_batting_order,
)
from .edits import BENCH, PlanEditError, Slot, move_batter, swap_slots
from .eligibility import can_play, eligible_players, is_preferred_position, uncoverable_positions
from .fielding import (
    FieldingResult,
    InningAssignment,
    PlayerCounters,
    generate_fielding,
    plan_inning,
    select_bench,
)
from .issues import IssueKind, PlanIssue
from .pitching import (
    EMERGENCY_SUFFIX,
    NO_PITCHER_LABEL,
    PitchingAssignment,
    assign_pitchers,
    pitching_usage,
    priority_label,
)
from .service import GamePlan, apply_batting_move, apply_swap, attending_players, build_game_plan

__all__ = [
    "BENCH",
    "BattingViolation",
    "EMERGENCY_SUFFIX",
    "FieldingResult",
    "GamePlan",
    "InningAssignment",
    "IssueKind",
    "NO_PITCHER_LABEL",
    "PitchingAssignment",
    "PlanEditError",
    "PlanIssue",
    "PlayerCounters",
    "Slot",
    "apply_batting_move",
    "apply_swap",
    "assign_pitchers",
    "attending_players",
    "batting_order_floor",
    "batting_order_score",
    "batting_order_violations",
    "build_game_plan",
    "can_play",
    "eligible_players",
    "generate_batting_order",
    "generate_fielding",
    "is_preferred_position",
    "move_batter",
    "pitching_usage",
    "plan_inning",
    "priority_label",
    "select_bench",
    "swap_slots",
    "uncoverable_positions",
]
