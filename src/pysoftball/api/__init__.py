"""REST API for the pysoftball lineup planner."""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import List

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import Response

from pysoftball.analysis import (
    PlanExportError,
    ValidationReport,
    export_batting_to_csv,
    export_plan_to_csv,
    validate_game_plan,
)
from pysoftball.api.schemas import (
    BattingMoveRequest,
    EditRequest,
    PlanPayload,
    PlanRequest,
    PlanResponse,
    PlayerResponse,
    RosterResponse,
    ShareResponse,
    SharedStateResponse,
    SlotPayload,
    ValidationResponse,
)
from pysoftball.config import GameRules, rules_from_env
from pysoftball.ingest import load_roster
from pysoftball.lineup import (
    BENCH,
    GamePlan,
    InningAssignment,
    IssueKind,
    PitchingAssignment,
    PlanEditError,
    PlanIssue,
    Slot,
    apply_batting_move,
    apply_swap,
    build_game_plan,
)
from pysoftball.models import Player, Roster, RosterError, normalize_position
from pysoftball.sharing import SharedState, build_share_query, decode_shared_state, encode_shared_state, parse_pitcher_label


logger = logging.getLogger(__name__)

ROSTER_ENV = "PYSOFTBALL_ROSTER"


def _roster_from_env() -> Roster:
    path = os.getenv(ROSTER_ENV)
    if not path:
        raise RosterError(f"Set {ROSTER_ENV} to a roster CSV or JSON file")
    return load_roster(Path(path))


def _plan_from_payload(payload: PlanPayload) -> GamePlan:
    try:
        fielding = [InningAssignment.from_dict(entry) for entry in payload.fielding]
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid fielding: {exc}") from exc

    pitching: List[PitchingAssignment] = []
    for row in payload.pitching:
        pitcher, emergency = parse_pitcher_label(row.pitcher)
        pitching.append(
            PitchingAssignment(
                batting_position=row.batting_position,
                batter=row.batter,
                pitcher=pitcher,
                emergency=emergency,
            )
        )

    issues: List[PlanIssue] = []
    for issue in payload.issues:
        try:
            kind = IssueKind(issue.kind)
            position = normalize_position(issue.position) if issue.position else None
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"Invalid issue: {exc}") from exc
        issues.append(PlanIssue(kind, issue.message, inning=issue.inning, position=position))

    return GamePlan(
        attendance=list(payload.attendance),
        batting_order=list(payload.batting_order),
        pitching=pitching,
        fielding=fielding,
        issues=issues,
        seed=payload.seed,
    )


def _slot_from_payload(slot: SlotPayload) -> Slot:
    if slot.position.strip().lower() == BENCH:
        return Slot(inning=slot.inning - 1, position=BENCH, player=slot.player)
    try:
        position = normalize_position(slot.position)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if position is None:
        raise HTTPException(status_code=400, detail="slot position is required")
    return Slot(inning=slot.inning - 1, position=position)


def _validation_response(report: ValidationReport) -> ValidationResponse:
    return ValidationResponse.model_validate(report.to_dict())


def create_app(roster: Roster | None = None, rules: GameRules | None = None) -> FastAPI:
    roster = roster if roster is not None else _roster_from_env()
    rules = rules or rules_from_env()
    app = FastAPI(title="pysoftball lineup planner")
    app.state.roster = roster
    app.state.rules = rules
    logger.info("Serving roster of %s players", len(roster))

    def attending(names: List[str]) -> List[Player]:
        players, _ = roster.attending(names)
        return players

    def plan_response(plan: GamePlan, plan_rules: GameRules = rules) -> PlanResponse:
        report = validate_game_plan(plan, attending(plan.attendance), plan_rules)
        return PlanResponse(
            plan=PlanPayload.model_validate(plan.to_dict()),
            validation=_validation_response(report),
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/roster", response_model=RosterResponse)
    async def get_roster() -> RosterResponse:
        return RosterResponse(players=[PlayerResponse.from_player(player) for player in roster])

    @app.post("/plans", response_model=PlanResponse)
    async def create_plan(request: PlanRequest) -> PlanResponse:
        plan_rules = rules
        if request.min_women_on_field is not None:
            plan_rules = replace(rules, min_women_on_field=request.min_women_on_field)
        plan = build_game_plan(roster, request.attendance, seed=request.seed, rules=plan_rules)
        if not plan.attendance:
            raise HTTPException(status_code=400, detail="No attending players match the roster")
        return plan_response(plan, plan_rules)

    @app.post("/plans/validate", response_model=ValidationResponse)
    async def validate_plan(payload: PlanPayload) -> ValidationResponse:
        plan = _plan_from_payload(payload)
        return _validation_response(validate_game_plan(plan, attending(plan.attendance), rules))

    @app.post("/plans/edit", response_model=PlanResponse)
    async def edit_plan(request: EditRequest) -> PlanResponse:
        plan = _plan_from_payload(request.plan)
        try:
            edited = apply_swap(plan, _slot_from_payload(request.source), _slot_from_payload(request.target))
        except PlanEditError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return plan_response(edited)

    @app.post("/plans/batting/move", response_model=PlanResponse)
    async def move_batting(request: BattingMoveRequest) -> PlanResponse:
        plan = _plan_from_payload(request.plan)
        try:
            edited = apply_batting_move(
                plan,
                attending(plan.attendance),
                request.from_slot - 1,
                request.to_slot - 1,
                rules=rules,
            )
        except PlanEditError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return plan_response(edited)

    @app.post("/plans/share", response_model=ShareResponse)
    async def share_plan(payload: PlanPayload) -> ShareResponse:
        state = SharedState.from_plan(_plan_from_payload(payload))
        return ShareResponse(query=build_share_query(state), params=encode_shared_state(state))

    @app.get("/shared", response_model=SharedStateResponse)
    async def load_shared(request: Request) -> SharedStateResponse:
        state = decode_shared_state(request.query_params, roster)
        if state is None:
            return SharedStateResponse(source="default", attendance=roster.names)
        return SharedStateResponse.model_validate({"source": "shared", **state.to_dict()})

    @app.post("/plans/export.csv")
    async def export_fielding(payload: PlanPayload):
        plan = _plan_from_payload(payload)
        try:
            csv_text = export_plan_to_csv(plan.fielding, positions=rules.field_positions)
        except PlanExportError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return Response(
            content=csv_text,
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=fielding.csv"},
        )

    @app.post("/plans/batting.csv")
    async def export_batting(payload: PlanPayload):
        plan = _plan_from_payload(payload)
        genders = {player.name: player.gender for player in attending(plan.attendance)}
        return Response(
            content=export_batting_to_csv(plan.batting_order, plan.pitching, genders),
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=batting.csv"},
        )

    return app
