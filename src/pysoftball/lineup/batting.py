"""Batting order generation under cyclic gender-adjacency constraints.

The order is treated as a ring: the last batter is followed by the first.
Two soft rules apply around the whole ring:

* no back-to-back female batters;
* no run of three or more male batters.

A candidate is scored by counting every back-to-back female pair once and
every male run of length ``L >= 3`` as ``L - 2``. The constructor follows a
greedy cadence (two men, one woman) and checks each choice against an exact
lookahead of the best score the remaining batters can still reach, so a
clean order is always found when the gender mix allows one. Mixes that make
violations unavoidable end with the least-bad order instead of looping.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Mapping, Optional, Sequence, Tuple

from pysoftball.models import Gender, Player, split_by_gender


logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 100
# Remaining-count difference at which the larger group is placed first.
_SKEW_THRESHOLD = 3
_MAX_RUN = 2

BACK_TO_BACK_FEMALES = "back_to_back_females"
MALE_RUN = "male_run"


@dataclass(frozen=True)
class BattingViolation:
    kind: str
    slots: Tuple[int, ...]
    players: Tuple[str, ...]
    weight: int = 1

    def describe(self) -> str:
        slots = "-".join(str(slot) for slot in self.slots)
        if self.kind == BACK_TO_BACK_FEMALES:
            return f"Back-to-back females at slots {slots}: {' → '.join(self.players)}"
        return f"{len(self.players)} consecutive males at slots {slots}: {' → '.join(self.players)}"


def batting_order_violations(
    order: Sequence[str],
    genders: Mapping[str, Gender],
) -> List[BattingViolation]:
    """Find every cyclic constraint breach in ``order`` (slots are 1-based)."""

    n = len(order)
    if n < 2:
        return []
    is_female = [genders[name] is Gender.FEMALE for name in order]
    violations: List[BattingViolation] = []

    edges = range(n) if n > 2 else range(n - 1)
    for i in edges:
        j = (i + 1) % n
        if is_female[i] and is_female[j]:
            violations.append(
                BattingViolation(BACK_TO_BACK_FEMALES, (i + 1, j + 1), (order[i], order[j]))
            )

    if not any(is_female):
        if n > _MAX_RUN:
            violations.append(
                BattingViolation(MALE_RUN, tuple(range(1, n + 1)), tuple(order), weight=n - _MAX_RUN)
            )
        return violations

    start = is_female.index(True)
    run: list[int] = []
    for step in range(1, n + 1):
        idx = (start + step) % n
        if not is_female[idx]:
            run.append(idx)
            continue
        if len(run) > _MAX_RUN:
            violations.append(
                BattingViolation(
                    MALE_RUN,
                    tuple(i + 1 for i in run),
                    tuple(order[i] for i in run),
                    weight=len(run) - _MAX_RUN,
                )
            )
        run = []
    return violations


def batting_order_score(order: Sequence[str], genders: Mapping[str, Gender]) -> int:
    return sum(violation.weight for violation in batting_order_violations(order, genders))


# --- lookahead -----------------------------------------------------------
#
# State while building left to right: ``run`` is the trailing male run,
# ``lead`` the male run before the first female, both capped at _MAX_RUN;
# ``started`` is whether a female has been placed. Costs match
# batting_order_score for mixed-gender orders of three or more.


def _male_cost(run: int, lead: int, started: bool) -> int:
    if started:
        return 1 if run >= _MAX_RUN else 0
    return 1 if lead >= _MAX_RUN else 0


def _after_male(run: int, lead: int, started: bool) -> tuple[int, int, bool]:
    run = min(run + 1, _MAX_RUN)
    if not started:
        lead = min(lead + 1, _MAX_RUN)
    return run, lead, started


def _female_cost(run: int, started: bool) -> int:
    return 1 if started and run == 0 else 0


def _closing_cost(run: int, lead: int, started: bool) -> int:
    if not started:
        return 0
    back_to_back = 1 if run == 0 and lead == 0 else 0
    return back_to_back + max(0, run + lead - _MAX_RUN)


@lru_cache(maxsize=None)
def _best_remaining(males: int, females: int, run: int, lead: int, started: bool) -> int:
    if males == 0 and females == 0:
        return _closing_cost(run, lead, started)
    options: list[int] = []
    if males:
        options.append(_male_cost(run, lead, started) + _best_remaining(males - 1, females, *_after_male(run, lead, started)))
    if females:
        options.append(_female_cost(run, started) + _best_remaining(males, females - 1, 0, lead, True))
    return min(options)


def batting_order_floor(male_count: int, female_count: int) -> int:
    """Lowest score any order of this gender mix can reach."""

    total = male_count + female_count
    if female_count == 0:
        return max(0, male_count - _MAX_RUN)
    if male_count == 0:
        # Every ring edge joins two women; two batters share a single edge.
        return female_count if total > 2 else female_count - 1
    return _best_remaining(male_count, female_count, 0, 0, False)


# --- construction --------------------------------------------------------


def _heuristic_gender(index: int, phase: int, males_left: int, females_left: int, last_female: bool) -> Gender:
    if last_female and males_left:
        return Gender.MALE
    cadence = Gender.FEMALE if (index + phase) % 3 == 2 else Gender.MALE
    if cadence is Gender.FEMALE and 0 < males_left < females_left - 1:
        return Gender.MALE
    if males_left - females_left >= _SKEW_THRESHOLD:
        return Gender.MALE
    if females_left - males_left >= _SKEW_THRESHOLD:
        return Gender.FEMALE
    return cadence


def _construct(males: Sequence[Player], females: Sequence[Player], rng: random.Random) -> List[str]:
    phase = rng.randrange(3)
    order: List[str] = []
    mi = fi = 0
    run = lead = 0
    started = False

    def outlook(gender: Gender) -> int:
        males_left = len(males) - mi
        females_left = len(females) - fi
        if gender is Gender.MALE:
            return _male_cost(run, lead, started) + _best_remaining(
                males_left - 1, females_left, *_after_male(run, lead, started)
            )
        return _female_cost(run, started) + _best_remaining(males_left, females_left - 1, 0, lead, True)

    while mi < len(males) or fi < len(females):
        males_left = len(males) - mi
        females_left = len(females) - fi
        last_female = started and run == 0
        choice = _heuristic_gender(len(order), phase, males_left, females_left, last_female)
        if choice is Gender.MALE and not males_left:
            choice = Gender.FEMALE
        elif choice is Gender.FEMALE and not females_left:
            choice = Gender.MALE
        elif males_left and females_left:
            other = Gender.FEMALE if choice is Gender.MALE else Gender.MALE
            if outlook(other) < outlook(choice):
                choice = other

        if choice is Gender.MALE:
            order.append(males[mi].name)
            mi += 1
            run, lead, started = _after_male(run, lead, started)
        else:
            order.append(females[fi].name)
            fi += 1
            run, started = 0, True
    return order


def _repair_wraparound(
    order: List[str],
    genders: Mapping[str, Gender],
    score: int,
) -> tuple[List[str], int]:
    """Swap a male into the slots either side of the ring seam when that helps."""

    n = len(order)
    for boundary in (n - 1, 0):
        if genders[order[boundary]] is Gender.MALE:
            continue
        for idx in range(1, n - 1):
            if genders[order[idx]] is not Gender.MALE:
                continue
            trial = list(order)
            trial[boundary], trial[idx] = trial[idx], trial[boundary]
            trial_score = batting_order_score(trial, genders)
            if trial_score < score:
                order, score = trial, trial_score
                break
    return order, score


def generate_batting_order(
    players: Sequence[Player],
    rng: Optional[random.Random] = None,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> List[str]:
    """Build a batting order for the attending players.

    Never fails for non-empty attendance; returns ``[]`` for no players.
    """

    rng = rng or random.Random()
    if not players:
        return []

    males, females = split_by_gender(players)
    if not males or not females:
        pool = [player.name for player in (males or females)]
        rng.shuffle(pool)
        logger.info("Single-gender attendance (%s players); batting order is a plain shuffle", len(pool))
        return pool

    genders = {player.name: player.gender for player in players}
    floor = batting_order_floor(len(males), len(females))
    best: List[str] = []
    best_score = 0
    attempts = 0
    for attempts in range(1, max(1, max_attempts) + 1):
        shuffled_males = list(males)
        shuffled_females = list(females)
        rng.shuffle(shuffled_males)
        rng.shuffle(shuffled_females)
        candidate = _construct(shuffled_males, shuffled_females, rng)
        score = batting_order_score(candidate, genders)
        if score > floor:
            candidate, score = _repair_wraparound(candidate, genders, score)
        if not best or score < best_score:
            best, best_score = candidate, score
        if best_score <= floor:
            break

    if best_score:
        logger.warning(
            "Batting order keeps %s unavoidable violation point(s) for %sM/%sF after %s attempt(s)",
            best_score,
            len(males),
            len(females),
            attempts,
        )
    else:
        logger.info("Batting order for %sM/%sF built in %s attempt(s)", len(males), len(females), attempts)
    return best
