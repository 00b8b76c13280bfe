"""CSV export helpers for game plans."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Mapping, Sequence

from pysoftball.lineup.fielding import InningAssignment
from pysoftball.lineup.pitching import PitchingAssignment
from pysoftball.models import FIELD_POSITIONS, Gender, Position


class PlanExportError(RuntimeError):
    """Raised when a plan cannot be written out."""


def export_plan_to_csv(
    innings: Sequence[InningAssignment],
    *,
    positions: Sequence[Position] = FIELD_POSITIONS,
) -> str:
    """One row per position plus a bench row, one column per inning."""

    if not innings:
        raise PlanExportError("plan has no innings to export")

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(["Position", *[f"Inning {index}" for index in range(1, len(innings) + 1)]])
    for position in positions:
        writer.writerow([position.value, *[inning.positions.get(position, "") for inning in innings]])
    writer.writerow(["Bench", *[", ".join(inning.bench) for inning in innings]])
    return buffer.getvalue()


def export_batting_to_csv(
    batting_order: Sequence[str],
    pitching: Sequence[PitchingAssignment],
    genders: Mapping[str, Gender],
) -> str:
    """Slot, batter, gender and the pitcher covering that slot."""

    labels = {assignment.batting_position: assignment.label for assignment in pitching}
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(["Slot", "Batter", "Gender", "Pitcher"])
    for slot, batter in enumerate(batting_order, start=1):
        gender = genders.get(batter)
        writer.writerow([slot, batter, gender.value if gender else "", labels.get(slot, "")])
    return buffer.getvalue()


__all__ = [
    "PlanExportError",
    "export_batting_to_csv",
    "export_plan_to_csv",
]
