"""Command-line interface for building a game plan from a roster file."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace
from pathlib import Path

from pysoftball.analysis import export_batting_to_csv, export_plan_to_csv, validate_game_plan
from pysoftball.config import rules_from_env
from pysoftball.config_loader import RosterColumnProfile
from pysoftball.ingest import load_roster
from pysoftball.lineup import attending_players, build_game_plan, priority_label
from pysoftball.models import RosterError
from pysoftball.sharing import SharedState, build_share_query


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a softball batting order, pitching rotation and fielding plan")
    parser.add_argument("roster", type=Path, help="Path to roster CSV or JSON")
    parser.add_argument(
        "--attend",
        nargs="*",
        default=None,
        help="Names of attending players (default: the whole roster)",
    )
    parser.add_argument(
        "--absent",
        nargs="*",
        default=None,
        help="Names of roster players who are not attending",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible plan")
    parser.add_argument(
        "--min-women",
        type=int,
        default=None,
        help="Minimum women on the field each inning (default 3 or PYSOFTBALL_MIN_WOMEN_ON_FIELD)",
    )
    parser.add_argument(
        "--roster-column",
        action="append",
        default=[],
        help="Mapping for roster CSV columns (e.g., name=Player)",
    )
    parser.add_argument("--load-profile", type=Path, help="Load column mapping JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save column mapping JSON", default=None)
    parser.add_argument("--output", type=Path, default=None, help="Fielding CSV output path")
    parser.add_argument("--batting-output", type=Path, default=None, help="Batting/pitching CSV output path")
    parser.add_argument("--json", dest="json_path", type=Path, default=None, help="Write the full plan as JSON")
    parser.add_argument("--share", action="store_true", help="Print a share-link query string")
    parser.add_argument("--verbose", action="store_true", help="Log generation details")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        mapping = _parse_mapping(args.roster_column)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    if args.load_profile:
        profile = RosterColumnProfile.load(args.load_profile)
        mapping = profile.roster_mapping | mapping

    try:
        roster = load_roster(args.roster, mapping=mapping or None)
    except RosterError as exc:
        raise SystemExit(f"Could not load roster: {exc}") from exc
    if args.save_profile:
        RosterColumnProfile(mapping).save(args.save_profile)
        print(f"Saved mapping profile to {args.save_profile}")

    attendance = args.attend if args.attend else roster.names
    if args.absent:
        absent = set(args.absent)
        attendance = [name for name in attendance if name not in absent]

    rules = rules_from_env()
    if args.min_women is not None:
        rules = replace(rules, min_women_on_field=max(0, args.min_women))

    plan = build_game_plan(roster, attendance, seed=args.seed, rules=rules)
    players, _ = attending_players(roster, plan.attendance)
    if plan.attendance_report and plan.attendance_report.unknown_names:
        print(f"Unknown players ignored: {', '.join(plan.attendance_report.unknown_names)}")

    genders = {player.name: player.gender for player in players}
    pitchers = {player.name: player.pitching_priority for player in players}
    print(f"Batting order ({len(plan.batting_order)} players):")
    for assignment in plan.pitching:
        role = ""
        if assignment.pitcher is not None:
            role = f" [{priority_label(pitchers.get(assignment.pitcher, 0))}]"
        print(
            f"{assignment.batting_position:>3}. {assignment.batter} ({genders[assignment.batter].value[0]})"
            f"  pitcher: {assignment.label}{role}"
        )

    for issue in plan.issues:
        print(f"Issue: {issue.message}")

    validation = validate_game_plan(plan, players, rules)
    if validation.issues:
        print(f"Validation found {len(validation.issues)} issue(s):")
        for message in validation.issues:
            print(f"  - {message}")
    elif plan.fielding:
        print("Plan passes all fairness and eligibility checks")

    if args.output and plan.fielding:
        args.output.write_text(export_plan_to_csv(plan.fielding, positions=rules.field_positions), encoding="utf-8")
        print(f"Wrote fielding plan to {args.output}")
    if args.batting_output:
        args.batting_output.write_text(
            export_batting_to_csv(plan.batting_order, plan.pitching, genders),
            encoding="utf-8",
        )
        print(f"Wrote batting order to {args.batting_output}")
    if args.json_path:
        args.json_path.write_text(json.dumps(plan.to_dict(), indent=2), encoding="utf-8")
        print(f"Wrote plan JSON to {args.json_path}")
    if args.share:
        print(f"Share query: {build_share_query(SharedState.from_plan(plan))}")


if __name__ == "__main__":
    main()
