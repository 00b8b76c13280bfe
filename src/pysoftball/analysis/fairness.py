"""Post-hoc fairness statistics and rule checks for a plan."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence

from pysoftball.config import DEFAULT_RULES, GameRules
from pysoftball.lineup.batting import batting_order_floor, batting_order_score, batting_order_violations
from pysoftball.lineup.eligibility import can_play, is_preferred_position
from pysoftball.lineup.fielding import InningAssignment
from pysoftball.lineup.pitching import pitching_violations
from pysoftball.models import Gender, Player, split_by_gender

if TYPE_CHECKING:
    from pysoftball.lineup.service import GamePlan


logger = logging.getLogger(__name__)

BALANCE_THRESHOLD = 0.5


@dataclass(frozen=True)
class PlayerStat:
    name: str
    bench_turns: int
    playing_turns: int
    preferred_position_turns: int
    total_turns: int

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "bench_turns": self.bench_turns,
            "playing_turns": self.playing_turns,
            "preferred_position_turns": self.preferred_position_turns,
            "total_turns": self.total_turns,
        }


@dataclass(frozen=True)
class InningBenchBalance:
    inning: int
    males_on_bench: int
    females_on_bench: int

    @property
    def total_on_bench(self) -> int:
        return self.males_on_bench + self.females_on_bench

    @property
    def male_ratio(self) -> float:
        return self.males_on_bench / self.total_on_bench if self.total_on_bench else 0.0

    @property
    def female_ratio(self) -> float:
        return self.females_on_bench / self.total_on_bench if self.total_on_bench else 0.0

    def to_dict(self) -> dict:
        return {
            "inning": self.inning,
            "males_on_bench": self.males_on_bench,
            "females_on_bench": self.females_on_bench,
            "total_on_bench": self.total_on_bench,
            "male_ratio": self.male_ratio,
            "female_ratio": self.female_ratio,
        }


@dataclass(frozen=True)
class BenchGenderBalance:
    average_male_ratio: float
    average_female_ratio: float
    innings: List[InningBenchBalance]
    is_balanced: bool
    worst_imbalance: float

    def to_dict(self) -> dict:
        return {
            "average_male_ratio": self.average_male_ratio,
            "average_female_ratio": self.average_female_ratio,
            "innings": [inning.to_dict() for inning in self.innings],
            "is_balanced": self.is_balanced,
            "worst_imbalance": self.worst_imbalance,
        }


@dataclass
class ValidationReport:
    issues: List[str] = field(default_factory=list)
    stats: List[PlayerStat] = field(default_factory=list)
    gender_balance: Optional[BenchGenderBalance] = None

    @property
    def is_valid(self) -> bool:
        return not self.issues

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "issues": list(self.issues),
            "stats": [stat.to_dict() for stat in self.stats],
            "gender_balance": self.gender_balance.to_dict() if self.gender_balance else None,
        }


def calculate_player_stats(
    innings: Sequence[InningAssignment],
    players: Sequence[Player],
) -> List[PlayerStat]:
    """Bench, playing and preferred-position counts per attendee."""

    bench = Counter()
    playing = Counter()
    preferred = Counter()
    by_name = {player.name: player for player in players}
    for inning in innings:
        bench.update(name for name in inning.bench if name in by_name)
        for position, name in inning.positions.items():
            player = by_name.get(name)
            if player is None:
                continue
            playing[name] += 1
            if is_preferred_position(player, position):
                preferred[name] += 1
    return [
        PlayerStat(
            name=player.name,
            bench_turns=bench[player.name],
            playing_turns=playing[player.name],
            preferred_position_turns=preferred[player.name],
            total_turns=len(innings),
        )
        for player in players
    ]


def analyze_bench_gender_balance(
    innings: Sequence[InningAssignment],
    players: Sequence[Player],
) -> BenchGenderBalance:
    """Compare each inning's bench gender mix with the team's.

    Only benches holding two or more players count toward the averages and
    the worst deviation; a lone bench player cannot be mixed.
    """

    genders = {player.name: player.gender for player in players}
    breakdown = [
        InningBenchBalance(
            inning=index,
            males_on_bench=sum(1 for name in inning.bench if genders.get(name) is Gender.MALE),
            females_on_bench=sum(1 for name in inning.bench if genders.get(name) is Gender.FEMALE),
        )
        for index, inning in enumerate(innings, start=1)
    ]
    scored = [inning for inning in breakdown if inning.total_on_bench > 1]
    if not scored or not players:
        return BenchGenderBalance(0.0, 0.0, breakdown, True, 0.0)

    males, females = split_by_gender(players)
    team_male_ratio = len(males) / len(players)
    team_female_ratio = len(females) / len(players)
    worst = max(
        abs(inning.male_ratio - team_male_ratio) + abs(inning.female_ratio - team_female_ratio)
        for inning in scored
    )
    return BenchGenderBalance(
        average_male_ratio=sum(inning.male_ratio for inning in scored) / len(scored),
        average_female_ratio=sum(inning.female_ratio for inning in scored) / len(scored),
        innings=breakdown,
        is_balanced=worst < BALANCE_THRESHOLD,
        worst_imbalance=worst,
    )


def _coverage_issues(
    innings: Sequence[InningAssignment],
    players: Sequence[Player],
    rules: GameRules,
) -> List[str]:
    issues: List[str] = []
    attendees = {player.name for player in players}
    for index, inning in enumerate(innings, start=1):
        for position in rules.field_positions:
            if not inning.positions.get(position):
                issues.append(f"Inning {index}: {position.value} is empty")
        seen = Counter(inning.names())
        for name, count in seen.items():
            if name not in attendees:
                issues.append(f"Inning {index}: {name} is not attending")
            elif count > 1:
                issues.append(f"Inning {index}: {name} appears {count} times")
        for name in sorted(attendees - set(seen)):
            issues.append(f"Inning {index}: {name} is missing from the field and bench")
    return issues


def validate_fielding(
    innings: Sequence[InningAssignment],
    players: Sequence[Player],
    rules: GameRules = DEFAULT_RULES,
) -> ValidationReport:
    """Check a fielding plan, including one changed by manual edits."""

    stats = calculate_player_stats(innings, players)
    balance = analyze_bench_gender_balance(innings, players)
    report = ValidationReport(stats=stats, gender_balance=balance)
    if not innings:
        return report

    report.issues.extend(_coverage_issues(innings, players, rules))

    bench_turns = [stat.bench_turns for stat in stats]
    if bench_turns and max(bench_turns) - min(bench_turns) > 1:
        report.issues.append(
            f"Uneven bench distribution: {min(bench_turns)}-{max(bench_turns)} turns (max difference should be 1)"
        )

    if not balance.is_balanced:
        report.issues.append(f"Gender imbalance on bench (worst deviation: {balance.worst_imbalance * 100:.1f}%)")

    males, females = split_by_gender(players)
    if males and females:
        for inning in balance.innings:
            if inning.total_on_bench <= 1:
                continue
            if not inning.males_on_bench:
                report.issues.append(
                    f"Inning {inning.inning}: All bench players are female ({inning.females_on_bench} players)"
                )
            elif not inning.females_on_bench:
                report.issues.append(
                    f"Inning {inning.inning}: All bench players are male ({inning.males_on_bench} players)"
                )

    by_name = {player.name: player for player in players}
    min_women = rules.min_women_for(len(females))
    for index, inning in enumerate(innings, start=1):
        on_field = [by_name[name] for name in inning.positions.values() if name in by_name]
        women = sum(1 for player in on_field if player.is_female)
        if women < min_women:
            report.issues.append(f"Inning {index}: Only {women} women on field (need {min_women})")
        for position, name in inning.positions.items():
            player = by_name.get(name)
            if player is not None and not can_play(player, position):
                report.issues.append(f"Inning {index}: {name} cannot play {position.value}")

    if report.issues:
        logger.info("Fielding plan has %s issue(s)", len(report.issues))
    return report


def validate_game_plan(
    plan: "GamePlan",
    players: Sequence[Player],
    rules: GameRules = DEFAULT_RULES,
) -> ValidationReport:
    """Fielding checks plus batting-order and pitching-window checks."""

    report = validate_fielding(plan.fielding, players, rules)
    genders = {player.name: player.gender for player in players}
    order = [name for name in plan.batting_order if name in genders]
    if len(order) != len(plan.batting_order):
        unknown = [name for name in plan.batting_order if name not in genders]
        report.issues.append(f"Batting order names non-attendees: {', '.join(unknown)}")

    males, females = split_by_gender(players)
    floor = batting_order_floor(len(males), len(females))
    if batting_order_score(order, genders) > floor:
        for violation in batting_order_violations(order, genders):
            report.issues.append(violation.describe())

    report.issues.extend(
        pitching_violations(plan.pitching, plan.batting_order, exclusion_window=rules.pitcher_exclusion_window)
    )
    return report
