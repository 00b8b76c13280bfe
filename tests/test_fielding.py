import logging
import random
from collections import Counter
from pathlib import Path

from pysoftball.config import GameRules
from pysoftball.ingest import load_roster
from pysoftball.lineup import IssueKind, build_game_plan, generate_fielding, plan_inning, select_bench
from pysoftball.lineup.eligibility import can_play
from pysoftball.lineup.fielding import PlayerCounters, initial_counters
from pysoftball.models import FIELD_POSITIONS, Position

from .factories import flexible_players, make_player


SAMPLE_ROSTER = Path(__file__).resolve().parents[1] / "data" / "sample_roster.csv"


def _assert_full_coverage(innings, players):
    names = sorted(player.name for player in players)
    for inning in innings:
        assert set(inning.positions) == set(FIELD_POSITIONS)
        assert sorted(inning.names()) == names


def _bench_turns(innings):
    return Counter(name for inning in innings for name in inning.bench)


def test_nine_players_never_sit():
    players = flexible_players(5, 4)

    result = generate_fielding(players, random.Random(1))

    assert len(result.innings) == 7
    assert all(inning.bench == [] for inning in result.innings)
    _assert_full_coverage(result.innings, players)
    assert result.issues == []


def test_twelve_players_share_the_bench_evenly():
    players = flexible_players(6, 6)

    for seed in range(25):
        result = generate_fielding(players, random.Random(seed))
        turns = _bench_turns(result.innings)
        assert all(len(inning.bench) == 3 for inning in result.innings)
        assert sum(turns.values()) == 21
        assert all(1 <= turns[player.name] <= 2 for player in players)
        _assert_full_coverage(result.innings, players)


def test_coverage_holds_for_many_sizes():
    for males, females in [(6, 4), (7, 4), (8, 5), (9, 6)]:
        players = flexible_players(males, females)
        for seed in range(10):
            result = generate_fielding(players, random.Random(seed))
            _assert_full_coverage(result.innings, players)
            assert all(len(inning.bench) == males + females - 9 for inning in result.innings)


def test_women_floor_keeps_scarce_women_on_field():
    players = flexible_players(9, 3)
    women = {player.name for player in players if player.is_female}

    result = generate_fielding(players, random.Random(4))

    for inning in result.innings:
        assert not women.intersection(inning.bench)
        assert sum(1 for name in inning.positions.values() if name in women) == 3


def test_preferred_positions_used_when_unique():
    players = flexible_players(5, 4)

    result = generate_fielding(players, random.Random(2))

    for inning in result.innings:
        for player in players:
            assert inning.positions[player.preferred_position] == player.name


def test_insufficient_players_reported():
    result = generate_fielding(flexible_players(4, 4), random.Random(0))

    assert result.innings == []
    assert [issue.kind for issue in result.issues] == [IssueKind.INSUFFICIENT_PLAYERS]


def test_uncoverable_position_reported():
    players = [make_player(f"P{index}", playable="1B|2B|3B|SS|Rover|LF|CF|RF") for index in range(10)]

    result = generate_fielding(players, random.Random(0))

    assert result.innings == []
    assert result.issues[0].kind is IssueKind.UNCOVERABLE_POSITION
    assert result.issues[0].position is Position.CATCHER


def _specialists(*skip):
    """One player locked to each position not in ``skip``."""

    return [
        make_player(f"S-{position.name}", preferred=position, playable="")
        for position in FIELD_POSITIONS
        if position not in skip
    ]


def test_direct_swap_fills_open_position():
    players = _specialists(Position.CATCHER, Position.FIRST_BASE) + [
        make_player("Alex", preferred="Catcher", playable="1B"),
        make_player("Blake", playable="Catcher"),
    ]

    assignment, _, issues = plan_inning(0, players, initial_counters(players), random.Random(0))

    assert issues == []
    assert assignment.positions[Position.CATCHER] == "Blake"
    assert assignment.positions[Position.FIRST_BASE] == "Alex"


def test_two_hop_swap_fills_open_position():
    players = _specialists(Position.CATCHER, Position.FIRST_BASE, Position.THIRD_BASE) + [
        make_player("Alex", preferred="Catcher", playable="1B"),
        make_player("Casey", preferred="3B", playable="Catcher"),
        make_player("Uma", playable="3B"),
    ]

    assignment, _, issues = plan_inning(0, players, initial_counters(players), random.Random(0))

    assert issues == []
    assert assignment.positions[Position.FIRST_BASE] == "Alex"
    assert assignment.positions[Position.CATCHER] == "Casey"
    assert assignment.positions[Position.THIRD_BASE] == "Uma"


def test_long_swap_chain_fills_open_position():
    players = _specialists(Position.CATCHER, Position.FIRST_BASE, Position.THIRD_BASE, Position.SHORTSTOP) + [
        make_player("Alex", preferred="Catcher", playable="1B"),
        make_player("Casey", preferred="3B", playable="Catcher"),
        make_player("Dee", preferred="SS", playable="3B"),
        make_player("Uma", playable="SS"),
    ]

    assignment, _, issues = plan_inning(0, players, initial_counters(players), random.Random(0))

    assert issues == []
    assert assignment.positions[Position.FIRST_BASE] == "Alex"
    assert assignment.positions[Position.CATCHER] == "Casey"
    assert assignment.positions[Position.THIRD_BASE] == "Dee"
    assert assignment.positions[Position.SHORTSTOP] == "Uma"


def test_forced_placement_is_flagged(caplog):
    players = _specialists(Position.FIRST_BASE) + [make_player("Zed", playable="")]

    with caplog.at_level(logging.ERROR):
        assignment, _, issues = plan_inning(0, players, initial_counters(players), random.Random(0))

    assert assignment.positions[Position.FIRST_BASE] == "Zed"
    assert len(issues) == 1
    assert issues[0].kind is IssueKind.CONSTRAINT_VIOLATION
    assert issues[0].position is Position.FIRST_BASE
    assert "Zed" in caplog.text


def test_plan_inning_returns_new_counters():
    players = flexible_players(6, 5)
    state = initial_counters(players)
    snapshot = dict(state)

    assignment, new_state, _ = plan_inning(0, players, state, random.Random(0))

    assert state == snapshot
    for name in assignment.bench:
        assert new_state[name].bench_turns == 1
        assert new_state[name].last_bench_inning == 0
    for name in assignment.positions.values():
        assert new_state[name].playing_turns == 1


def test_corrective_swap_mixes_bench_genders():
    players = flexible_players(6, 5)
    tie_order = {player.name: index for index, player in enumerate(players)}

    bench = select_bench(0, players, initial_counters(players), tie_order=tie_order)

    assert [player.name for player in bench] == ["M1", "F1"]


def test_corrective_swap_never_trades_bench_fairness():
    players = flexible_players(6, 5)
    tie_order = {player.name: index for index, player in enumerate(players)}
    state = {
        player.name: PlayerCounters(bench_turns=1 if player.is_female else 0, last_bench_inning=0 if player.is_female else -1)
        for player in players
    }

    bench = select_bench(1, players, state, tie_order=tie_order)

    assert [player.name for player in bench] == ["M1", "M2"]


def test_min_women_rule_is_configurable():
    players = flexible_players(8, 4)
    rules = GameRules(min_women_on_field=4)
    women = {player.name for player in players if player.is_female}

    result = generate_fielding(players, random.Random(5), rules=rules)

    for inning in result.innings:
        assert not women.intersection(inning.bench)


def _has_legal_arrangement(fielders, positions=FIELD_POSITIONS) -> bool:
    seated = {}

    def seat(player, tried):
        for position in positions:
            if position in tried or not can_play(player, position):
                continue
            tried.add(position)
            if position not in seated or seat(seated[position], tried):
                seated[position] = player
                return True
        return False

    return all(seat(player, set()) for player in fielders)


def test_sample_roster_only_forces_when_unavoidable():
    roster = load_roster(SAMPLE_ROSTER)

    for seed in range(40):
        plan = build_game_plan(roster, seed=seed)
        for inning in plan.fielding:
            fielders = [roster.get(name) for name in inning.positions.values()]
            if not _has_legal_arrangement(fielders):
                continue
            misplaced = [
                f"{name}@{position.value}"
                for position, name in inning.positions.items()
                if not can_play(roster.get(name), position)
            ]
            assert misplaced == [], f"seed {seed}"
