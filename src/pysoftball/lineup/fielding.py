"""Per-inning fielding assignments.

Generation is a fold over innings: each call to :func:`plan_inning` takes the
counters accumulated so far and returns the inning's assignment together with
fresh counters. Nothing is mutated across innings.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from pysoftball.config import DEFAULT_RULES, GameRules
from pysoftball.models import Player, Position, normalize_position, split_by_gender

from .eligibility import can_play, eligible_players, is_preferred_position, uncoverable_positions
from .issues import IssueKind, PlanIssue


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerCounters:
    bench_turns: int = 0
    playing_turns: int = 0
    preferred_turns: int = 0
    last_bench_inning: int = -1


@dataclass
class InningAssignment:
    positions: Dict[Position, str] = field(default_factory=dict)
    bench: List[str] = field(default_factory=list)

    def player_at(self, position: Position) -> Optional[str]:
        return self.positions.get(position)

    def position_of(self, name: str) -> Optional[Position]:
        for position, player in self.positions.items():
            if player == name:
                return position
        return None

    def names(self) -> List[str]:
        return list(self.positions.values()) + list(self.bench)

    def copy(self) -> "InningAssignment":
        return InningAssignment(positions=dict(self.positions), bench=list(self.bench))

    def to_dict(self) -> dict:
        payload: dict = {position.value: self.positions[position] for position in Position if position in self.positions}
        payload["bench"] = list(self.bench)
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "InningAssignment":
        """Rebuild an inning from its serialized form.

        Raises ``ValueError`` for unknown position labels or non-string names.
        """

        positions: Dict[Position, str] = {}
        bench: List[str] = []
        for key, value in data.items():
            if key == "bench":
                if not isinstance(value, list) or not all(isinstance(name, str) for name in value):
                    raise ValueError("bench must be a list of names")
                bench = list(value)
                continue
            position = normalize_position(key)
            if position is None:
                raise ValueError(f"invalid position key {key!r}")
            if not isinstance(value, str):
                raise ValueError(f"player for {position.value} must be a name")
            positions[position] = value
        return cls(positions=positions, bench=bench)


@dataclass
class FieldingResult:
    innings: List[InningAssignment]
    issues: List[PlanIssue] = field(default_factory=list)
    counters: Dict[str, PlayerCounters] = field(default_factory=dict)


def initial_counters(players: Iterable[Player]) -> Dict[str, PlayerCounters]:
    return {player.name: PlayerCounters() for player in players}


def _rank_for_bench(
    inning: int,
    players: Sequence[Player],
    state: Mapping[str, PlayerCounters],
    tie_order: Mapping[str, int],
) -> List[Player]:
    # Fewest bench turns first, then longest since last benched.
    return sorted(
        players,
        key=lambda player: (
            state[player.name].bench_turns,
            -(inning - state[player.name].last_bench_inning),
            tie_order[player.name],
        ),
    )


def select_bench(
    inning: int,
    players: Sequence[Player],
    state: Mapping[str, PlayerCounters],
    *,
    rules: GameRules = DEFAULT_RULES,
    tie_order: Optional[Mapping[str, int]] = None,
) -> List[Player]:
    """Choose who sits for ``inning`` (0-based)."""

    bench_size = max(0, len(players) - rules.players_on_field)
    if not bench_size:
        return []
    tie_order = tie_order or {player.name: index for index, player in enumerate(players)}
    males, females = split_by_gender(players)
    max_females_on_bench = len(females) - rules.min_women_for(len(females))

    ranked = _rank_for_bench(inning, players, state, tie_order)
    bench: List[Player] = []
    females_on_bench = 0
    for player in ranked:
        if len(bench) >= bench_size:
            break
        if player.is_female:
            if females_on_bench >= max_females_on_bench:
                continue
            females_on_bench += 1
        bench.append(player)

    if len(bench) > 1 and males and females:
        if females_on_bench == 0 and max_females_on_bench > 0:
            wanted = True
        elif females_on_bench == len(bench):
            wanted = False
        else:
            return bench
        benched = {player.name for player in bench}
        outgoing = bench[-1]
        incoming = next(
            (player for player in ranked if player.name not in benched and player.is_female is wanted),
            None,
        )
        if incoming is not None and state[incoming.name].bench_turns <= state[outgoing.name].bench_turns:
            logger.debug("Inning %s: benching %s instead of %s to mix genders", inning + 1, incoming.name, outgoing.name)
            bench[-1] = incoming
    return bench


def _reseat(
    position: Position,
    assigned: Dict[Position, Player],
    unassigned: Sequence[Player],
    order: Sequence[Position],
    depth: int,
    visited: set[Position],
) -> Optional[Player]:
    """Fill ``position`` by shifting at most ``depth`` fielders along a chain.

    Each step moves a fielder who can play the vacancy into it and reopens
    their old spot; the chain ends when an unassigned player can take the
    last reopened spot. Returns that player, or ``None`` with ``assigned``
    untouched.
    """

    for candidate in unassigned:
        if can_play(candidate, position):
            assigned[position] = candidate
            return candidate
    if depth == 0:
        return None
    for held in order:
        current = assigned.get(held)
        if held in visited or current is None or not can_play(current, position):
            continue
        visited.add(held)
        entrant = _reseat(held, assigned, unassigned, order, depth - 1, visited)
        if entrant is not None:
            assigned[position] = current
            return entrant
    return None


def _fill_by_reseating(
    position: Position,
    assigned: Dict[Position, Player],
    unassigned: Sequence[Player],
    order: Sequence[Position],
) -> Tuple[Optional[Player], int]:
    # Shortest chain first: a direct swap, then two hops, and so on.
    for depth in range(1, len(order) + 1):
        entrant = _reseat(position, assigned, unassigned, order, depth, set())
        if entrant is not None:
            return entrant, depth
    return None, 0


def plan_inning(
    inning: int,
    players: Sequence[Player],
    state: Mapping[str, PlayerCounters],
    rng: random.Random,
    *,
    rules: GameRules = DEFAULT_RULES,
    tie_order: Optional[Mapping[str, int]] = None,
) -> Tuple[InningAssignment, Dict[str, PlayerCounters], List[PlanIssue]]:
    """Assign one inning and return it with the updated counters."""

    tie_order = tie_order or {player.name: index for index, player in enumerate(players)}
    order = rules.field_positions
    label = inning + 1
    issues: List[PlanIssue] = []

    bench = select_bench(inning, players, state, rules=rules, tie_order=tie_order)
    benched = {player.name for player in bench}
    playing = [
        player
        for player in _rank_for_bench(inning, players, state, tie_order)
        if player.name not in benched
    ]

    assigned: Dict[Position, Player] = {}
    rank_index = {player.name: index for index, player in enumerate(playing)}
    for player in sorted(playing, key=lambda p: (state[p.name].preferred_turns, rank_index[p.name])):
        preferred = player.preferred_position
        if preferred is not None and preferred in order and preferred not in assigned:
            assigned[preferred] = player

    placed = {player.name for player in assigned.values()}
    unassigned = [player for player in playing if player.name not in placed]
    open_positions = [position for position in order if position not in assigned]

    while open_positions and unassigned:
        position = min(
            open_positions,
            key=lambda pos: (len(eligible_players(unassigned, pos)), order.index(pos)),
        )
        open_positions.remove(position)
        candidates = eligible_players(unassigned, position)
        if candidates:
            fewest = min(state[candidate.name].playing_turns for candidate in candidates)
            tied = [candidate for candidate in candidates if state[candidate.name].playing_turns == fewest]
            chosen = tied[0] if len(tied) == 1 else rng.choice(tied)
            assigned[position] = chosen
            unassigned.remove(chosen)
            continue

        moved, hops = _fill_by_reseating(position, assigned, unassigned, order)
        if moved is None:
            continue
        logger.info(
            "Inning %s: filled %s by shifting %s fielder(s) to make room for %s",
            label,
            position.value,
            hops,
            moved.name,
        )
        unassigned.remove(moved)

    for position in [pos for pos in order if pos not in assigned]:
        if not unassigned:
            logger.error("Inning %s: cannot fill %s, no players left", label, position.value)
            issues.append(
                PlanIssue(
                    IssueKind.CONSTRAINT_VIOLATION,
                    f"Inning {label}: {position.value} left empty",
                    inning=label,
                    position=position,
                )
            )
            continue
        forced = unassigned.pop(0)
        assigned[position] = forced
        logger.error(
            "Inning %s: forcing %s to %s (not an eligible position)",
            label,
            forced.name,
            position.value,
        )
        issues.append(
            PlanIssue(
                IssueKind.CONSTRAINT_VIOLATION,
                f"Inning {label}: {forced.name} forced to {position.value} without eligibility",
                inning=label,
                position=position,
            )
        )

    if unassigned:
        logger.warning("Inning %s: %s extra player(s) moved to the bench", label, len(unassigned))
        bench = bench + unassigned

    _, females = split_by_gender(players)
    min_women = rules.min_women_for(len(females))
    women_on_field = sum(1 for player in assigned.values() if player.is_female)
    if women_on_field < min_women:
        logger.error("Inning %s: only %s women on the field, need %s", label, women_on_field, min_women)
        issues.append(
            PlanIssue(
                IssueKind.CONSTRAINT_VIOLATION,
                f"Inning {label}: only {women_on_field} women on the field (minimum {min_women})",
                inning=label,
            )
        )

    new_state = dict(state)
    for position, player in assigned.items():
        counters = new_state[player.name]
        new_state[player.name] = replace(
            counters,
            playing_turns=counters.playing_turns + 1,
            preferred_turns=counters.preferred_turns + (1 if is_preferred_position(player, position) else 0),
        )
    for player in bench:
        counters = new_state[player.name]
        new_state[player.name] = replace(
            counters,
            bench_turns=counters.bench_turns + 1,
            last_bench_inning=inning,
        )

    assignment = InningAssignment(
        positions={position: assigned[position].name for position in order if position in assigned},
        bench=[player.name for player in bench],
    )
    return assignment, new_state, issues


def generate_fielding(
    players: Sequence[Player],
    rng: Optional[random.Random] = None,
    *,
    rules: GameRules = DEFAULT_RULES,
) -> FieldingResult:
    """Assign fielding positions and bench spots for every inning."""

    rng = rng or random.Random()
    players = list(players)
    if len(players) < rules.players_on_field:
        message = f"Need at least {rules.players_on_field} players to field a team, have {len(players)}"
        logger.warning(message)
        return FieldingResult(innings=[], issues=[PlanIssue(IssueKind.INSUFFICIENT_PLAYERS, message)])

    missing = uncoverable_positions(players, rules.field_positions)
    if missing:
        labels = ", ".join(position.value for position in missing)
        message = f"No attending player can play: {labels}"
        logger.warning(message)
        return FieldingResult(
            innings=[],
            issues=[
                PlanIssue(IssueKind.UNCOVERABLE_POSITION, message, position=missing[0] if len(missing) == 1 else None)
            ],
        )

    shuffled = list(players)
    rng.shuffle(shuffled)
    tie_order = {player.name: index for index, player in enumerate(shuffled)}

    state = initial_counters(players)
    innings: List[InningAssignment] = []
    issues: List[PlanIssue] = []
    for inning in range(rules.innings):
        assignment, state, inning_issues = plan_inning(
            inning, players, state, rng, rules=rules, tie_order=tie_order
        )
        innings.append(assignment)
        issues.extend(inning_issues)

    bench_counts = [counters.bench_turns for counters in state.values()]
    logger.info(
        "Fielding plan: %s innings, %s players, bench turns %s-%s, %s issue(s)",
        len(innings),
        len(players),
        min(bench_counts),
        max(bench_counts),
        len(issues),
    )
    return FieldingResult(innings=innings, issues=issues, counters=state)
