import logging
import random

from pysoftball.lineup import (
    NO_PITCHER_LABEL,
    assign_pitchers,
    build_game_plan,
    generate_batting_order,
    pitching_usage,
    priority_label,
)
from pysoftball.lineup.pitching import pitching_violations, unavailable_slots
from pysoftball.models import Roster

from .factories import flexible_players, make_player


def test_window_wraps_around_order():
    assert unavailable_slots(7, 9, 3) == {7, 8, 0, 1}


def test_pitchers_rotate_around_their_batting_windows():
    order = ["P1", "B1", "B2", "B3", "P2", "B4", "B5", "B6", "B7"]
    players = [make_player("P1", priority=1), make_player("P2", priority=2)] + [
        make_player(name) for name in order if name.startswith("B")
    ]

    schedule = assign_pitchers(order, players)

    pitchers = [assignment.pitcher for assignment in schedule]
    assert pitchers == ["P2"] * 4 + ["P1"] * 5
    assert not any(assignment.emergency for assignment in schedule)
    assert [assignment.batting_position for assignment in schedule] == list(range(1, 10))


def test_emergency_when_nobody_is_free():
    order = ["Ace", "B1", "B2", "B3"]
    players = [make_player("Ace", priority=1)] + [make_player(name) for name in order[1:]]

    schedule = assign_pitchers(order, players)

    assert all(assignment.emergency for assignment in schedule)
    assert schedule[0].label == "Ace (Emergency)"


def test_no_pitchers_gives_placeholder(caplog):
    order = ["B1", "B2"]

    with caplog.at_level(logging.WARNING):
        schedule = assign_pitchers(order, [make_player(name) for name in order])

    assert [assignment.pitcher for assignment in schedule] == [None, None]
    assert schedule[0].label == NO_PITCHER_LABEL
    assert "No pitchers" in caplog.text


def test_non_batting_pitchers_share_work():
    order = ["B1", "B2", "B3", "B4"]
    players = [make_player(name) for name in order] + [
        make_player("Lefty", priority=1),
        make_player("Righty", priority=1),
    ]

    usage = pitching_usage(assign_pitchers(order, players))

    assert usage == {"Lefty": 2, "Righty": 2}


def test_priority_labels():
    assert [priority_label(value) for value in (1, 2, 3, 4)] == ["Primary", "Secondary", "Tertiary", "Emergency"]


def test_generated_schedules_respect_windows():
    players = flexible_players(7, 5, pitchers=3)

    for seed in range(50):
        order = generate_batting_order(players, random.Random(seed))
        schedule = assign_pitchers(order, players)
        assert len(schedule) == len(order)
        assert pitching_violations(schedule, order) == []


def test_plan_pitching_follows_batting_order():
    plan = build_game_plan(Roster.from_players(flexible_players(5, 4, pitchers=2)), seed=9)

    assert [assignment.batter for assignment in plan.pitching] == plan.batting_order
