import pytest

from pysoftball.lineup import (
    BENCH,
    InningAssignment,
    PlanEditError,
    Slot,
    apply_batting_move,
    build_game_plan,
    move_batter,
    swap_slots,
)
from pysoftball.models import Position, Roster

from .factories import flexible_players


def _innings():
    first = InningAssignment(
        positions={position: f"P{index}" for index, position in enumerate(Position)},
        bench=["B1", "B2"],
    )
    second = InningAssignment(
        positions={position: f"P{index}" for index, position in enumerate(Position)},
        bench=["B1", "B2"],
    )
    return [first, second]


def test_field_swap_within_inning():
    innings = _innings()

    edited = swap_slots(innings, Slot(0, Position.CATCHER), Slot(0, Position.LEFT_FIELD))

    assert edited[0].positions[Position.CATCHER] == "P8"
    assert edited[0].positions[Position.LEFT_FIELD] == "P0"
    assert innings[0].positions[Position.CATCHER] == "P0"
    assert edited[1] is innings[1]


def test_field_bench_swap_keeps_everyone_once():
    innings = _innings()

    edited = swap_slots(innings, Slot(0, BENCH, "B2"), Slot(0, Position.SHORTSTOP))

    assert edited[0].positions[Position.SHORTSTOP] == "B2"
    assert edited[0].bench == ["B1", "P5"]
    assert sorted(edited[0].names()) == sorted(innings[0].names())


def test_swap_across_innings_rejected():
    with pytest.raises(PlanEditError):
        swap_slots(_innings(), Slot(0, Position.CATCHER), Slot(1, Position.CATCHER))


def test_bench_slot_must_name_benched_player():
    with pytest.raises(PlanEditError):
        swap_slots(_innings(), Slot(0, BENCH, "P3"), Slot(0, Position.CATCHER))
    with pytest.raises(PlanEditError):
        swap_slots(_innings(), Slot(0, BENCH), Slot(0, Position.CATCHER))


def test_two_bench_slots_rejected():
    with pytest.raises(PlanEditError):
        swap_slots(_innings(), Slot(0, BENCH, "B1"), Slot(0, BENCH, "B2"))


def test_unknown_inning_rejected():
    with pytest.raises(PlanEditError):
        swap_slots(_innings(), Slot(5, Position.CATCHER), Slot(5, Position.ROVER))


def test_move_batter_reinserts():
    assert move_batter(["a", "b", "c", "d"], 0, 2) == ["b", "c", "a", "d"]
    assert move_batter(["a", "b", "c", "d"], 3, 0) == ["d", "a", "b", "c"]
    with pytest.raises(PlanEditError):
        move_batter(["a", "b"], 0, 2)


def test_batting_move_rebuilds_pitching():
    players = flexible_players(5, 4, pitchers=2)
    plan = build_game_plan(Roster.from_players(players), seed=3)

    edited = apply_batting_move(plan, players, 0, 8)

    assert edited.batting_order[-1] == plan.batting_order[0]
    assert [assignment.batter for assignment in edited.pitching] == edited.batting_order
    assert edited.fielding == plan.fielding
