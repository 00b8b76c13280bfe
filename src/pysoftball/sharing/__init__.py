"""Share-link encoding of a game plan.

A shared plan travels as four query parameters, each a URL-quoted JSON
document: ``attendance`` (names), ``batting`` (names in order), ``pitching``
(``battingPosition``/``batter``/``pitcher`` rows) and ``positions`` (one
inning map per inning). Decoding is forgiving: a malformed parameter is
dropped on its own and reported, names not on the roster are filtered out.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Sequence
from urllib.parse import quote

from pysoftball.lineup.fielding import InningAssignment
from pysoftball.lineup.issues import IssueKind, PlanIssue
from pysoftball.lineup.pitching import EMERGENCY_SUFFIX, NO_PITCHER_LABEL, PitchingAssignment
from pysoftball.models import Roster

if TYPE_CHECKING:
    from pysoftball.lineup.service import GamePlan


logger = logging.getLogger(__name__)

SHARE_PARAMS = ("attendance", "batting", "pitching", "positions")


class SharedStateError(ValueError):
    """Raised when one shared parameter cannot be decoded."""


@dataclass
class SharedState:
    attendance: List[str]
    batting_order: List[str] = field(default_factory=list)
    pitching: List[PitchingAssignment] = field(default_factory=list)
    fielding: List[InningAssignment] = field(default_factory=list)
    issues: List[PlanIssue] = field(default_factory=list)

    @classmethod
    def from_plan(cls, plan: "GamePlan") -> "SharedState":
        return cls(
            attendance=list(plan.attendance),
            batting_order=list(plan.batting_order),
            pitching=list(plan.pitching),
            fielding=[inning.copy() for inning in plan.fielding],
        )

    def to_dict(self) -> dict:
        return {
            "attendance": list(self.attendance),
            "batting_order": list(self.batting_order),
            "pitching": [assignment.to_dict() for assignment in self.pitching],
            "fielding": [inning.to_dict() for inning in self.fielding],
            "issues": [issue.to_dict() for issue in self.issues],
        }


def _dump(document: Any) -> str:
    return json.dumps(document, separators=(",", ":"))


def encode_shared_state(state: SharedState) -> Dict[str, str]:
    """Map each share parameter to its JSON value, before URL quoting."""

    return {
        "attendance": _dump(list(state.attendance)),
        "batting": _dump(list(state.batting_order)),
        "pitching": _dump([assignment.to_dict() for assignment in state.pitching]),
        "positions": _dump([inning.to_dict() for inning in state.fielding]),
    }


def build_share_query(state: SharedState) -> str:
    """Query string with every value URL-quoted exactly once."""

    encoded = encode_shared_state(state)
    return "&".join(f"{key}={quote(encoded[key], safe='')}" for key in SHARE_PARAMS)


def _load(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SharedStateError(f"not valid JSON: {exc.msg}") from exc


def _string_list(document: Any, label: str) -> List[str]:
    if not isinstance(document, list) or not all(isinstance(item, str) for item in document):
        raise SharedStateError(f"{label} must be a list of names")
    return document


def _parse_attendance(document: Any, roster: Roster) -> List[str]:
    names = _string_list(document, "attendance")
    known = {name for name in names if name in roster}
    dropped = [name for name in names if name not in roster]
    if dropped:
        logger.warning("Dropping %s unknown shared attendee(s): %s", len(dropped), ", ".join(dropped))
    return [name for name in roster.names if name in known]


def _parse_batting(document: Any, attendance: Sequence[str]) -> List[str]:
    attending = set(attendance)
    order: List[str] = []
    for name in _string_list(document, "batting"):
        if name in attending and name not in order:
            order.append(name)
    return order


def parse_pitcher_label(label: str) -> tuple[Optional[str], bool]:
    """Split a pitcher label into ``(name, emergency)``."""

    if label == NO_PITCHER_LABEL:
        return None, False
    if label.endswith(EMERGENCY_SUFFIX):
        return label[: -len(EMERGENCY_SUFFIX)], True
    return label, False


def _parse_pitching(document: Any, attendance: Sequence[str]) -> List[PitchingAssignment]:
    if not isinstance(document, list):
        raise SharedStateError("pitching must be a list")
    attending = set(attendance)
    schedule: List[PitchingAssignment] = []
    for row in document:
        if not isinstance(row, Mapping):
            raise SharedStateError("pitching rows must be objects")
        position = row.get("battingPosition")
        batter = row.get("batter")
        label = row.get("pitcher")
        if not isinstance(position, int) or not isinstance(batter, str) or not isinstance(label, str):
            raise SharedStateError("pitching rows need battingPosition, batter and pitcher")
        pitcher, emergency = parse_pitcher_label(label)
        if batter not in attending or (pitcher is not None and pitcher not in attending):
            continue
        schedule.append(
            PitchingAssignment(batting_position=position, batter=batter, pitcher=pitcher, emergency=emergency)
        )
    return schedule


def _parse_positions(document: Any, attendance: Sequence[str]) -> List[InningAssignment]:
    if not isinstance(document, list):
        raise SharedStateError("positions must be a list of innings")
    attending = set(attendance)
    innings: List[InningAssignment] = []
    for entry in document:
        if not isinstance(entry, Mapping):
            raise SharedStateError("each inning must be an object")
        try:
            inning = InningAssignment.from_dict(entry)
        except ValueError as exc:
            raise SharedStateError(str(exc)) from exc
        innings.append(
            InningAssignment(
                positions={position: name for position, name in inning.positions.items() if name in attending},
                bench=[name for name in inning.bench if name in attending],
            )
        )
    return innings


def decode_shared_state(params: Mapping[str, str], roster: Roster) -> Optional[SharedState]:
    """Rebuild shared state from already-decoded query parameters.

    Returns ``None`` when no usable attendance remains, in which case the
    caller falls back to its default state.
    """

    issues: List[PlanIssue] = []

    def field_value(key: str, parser: Callable[[Any], Any], default: Any) -> Any:
        raw = params.get(key)
        if not raw:
            return default
        try:
            return parser(_load(raw))
        except SharedStateError as exc:
            logger.warning("Discarding shared %s: %s", key, exc)
            issues.append(PlanIssue(IssueKind.MALFORMED_SHARED_STATE, f"Shared {key} discarded: {exc}"))
            return default

    attendance = field_value("attendance", lambda doc: _parse_attendance(doc, roster), [])
    if not attendance:
        logger.info("Shared link has no usable attendance; ignoring it")
        return None

    return SharedState(
        attendance=attendance,
        batting_order=field_value("batting", lambda doc: _parse_batting(doc, attendance), []),
        pitching=field_value("pitching", lambda doc: _parse_pitching(doc, attendance), []),
        fielding=field_value("positions", lambda doc: _parse_positions(doc, attendance), []),
        issues=issues,
    )


__all__ = [
    "SHARE_PARAMS",
    "SharedState",
    "SharedStateError",
    "build_share_query",
    "decode_shared_state",
    "encode_shared_state",
    "parse_pitcher_label",
]
