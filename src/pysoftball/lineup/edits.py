"""Manual edits applied on top of a generated plan.

Edits never mutate their inputs. Field positions are swapped rather than
overwritten, so every attendee still appears exactly once per inning.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from pysoftball.models import Position

from .fielding import InningAssignment


BENCH = "bench"


class PlanEditError(ValueError):
    """Raised when a manual edit cannot be applied."""


@dataclass(frozen=True)
class Slot:
    """A field position, or a specific player on the bench, in one inning (0-based)."""

    inning: int
    position: Union[Position, str]
    player: Optional[str] = None

    @property
    def is_bench(self) -> bool:
        return self.position == BENCH


def _check_slot(innings: Sequence[InningAssignment], slot: Slot) -> None:
    if not 0 <= slot.inning < len(innings):
        raise PlanEditError(f"inning {slot.inning + 1} is not in the plan")
    inning = innings[slot.inning]
    if slot.is_bench:
        if not slot.player:
            raise PlanEditError("a bench slot must name the benched player")
        if slot.player not in inning.bench:
            raise PlanEditError(f"{slot.player} is not on the bench in inning {slot.inning + 1}")
        return
    if not isinstance(slot.position, Position):
        raise PlanEditError(f"unknown slot position {slot.position!r}")
    if slot.position not in inning.positions:
        raise PlanEditError(f"{slot.position.value} is empty in inning {slot.inning + 1}")


def swap_slots(
    innings: Sequence[InningAssignment],
    source: Slot,
    target: Slot,
) -> List[InningAssignment]:
    """Swap the occupants of two slots within the same inning.

    Returns a new list of innings; only the edited inning is copied.
    """

    if source.inning != target.inning:
        raise PlanEditError("players can only be swapped within the same inning")
    _check_slot(innings, source)
    _check_slot(innings, target)
    if source.is_bench and target.is_bench:
        raise PlanEditError("swapping two bench players changes nothing")

    edited = innings[source.inning].copy()
    if not source.is_bench and not target.is_bench:
        first = edited.positions[source.position]
        edited.positions[source.position] = edited.positions[target.position]
        edited.positions[target.position] = first
    else:
        field_slot, bench_slot = (target, source) if source.is_bench else (source, target)
        fielder = edited.positions[field_slot.position]
        edited.positions[field_slot.position] = bench_slot.player
        edited.bench[edited.bench.index(bench_slot.player)] = fielder

    result = list(innings)
    result[source.inning] = edited
    return result


def move_batter(order: Sequence[str], from_index: int, to_index: int) -> List[str]:
    """Move the batter at ``from_index`` so they bat at ``to_index`` (0-based)."""

    size = len(order)
    if not 0 <= from_index < size or not 0 <= to_index < size:
        raise PlanEditError(f"batting slots must be between 1 and {size}")
    result = list(order)
    batter = result.pop(from_index)
    result.insert(to_index, batter)
    return result
