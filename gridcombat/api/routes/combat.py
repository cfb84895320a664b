"""POST /api/v1/combat/{simulate,boost}: run a scenario to completion."""

from __future__ import annotations

import dataclasses
import logging

from fastapi import APIRouter, Depends, HTTPException

from gridcombat.api.dependencies import get_config
from gridcombat.api.schemas import (
    BoostRequest,
    BoostResponse,
    CombatResponse,
    EventSchema,
    SimulateRequest,
    UnitSchema,
)
from gridcombat.config import CombatConfig
from gridcombat.core.board import Scenario, format_board, parse_scenario
from gridcombat.core.errors import CombatStalledError, MapParseError, NoQualifyingBoostError
from gridcombat.core.grid import GridMap
from gridcombat.engine.boost import BoostSearch
from gridcombat.engine.simulator import CombatResult, simulate
from gridcombat.utils.event_log import EventLog

logger = logging.getLogger(__name__)

router = APIRouter()


def _parse(text: str, cfg: CombatConfig) -> Scenario:
    try:
        return parse_scenario(text, hit_points=cfg.hit_points, attack_power=cfg.attack_power)
    except MapParseError as exc:
        logger.debug("Rejected scenario: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _serialize(grid: GridMap, result: CombatResult, events: EventLog | None = None) -> CombatResponse:
    units = result.units
    return CombatResponse(
        state=result.state.name.lower(),
        completed_rounds=result.completed_rounds,
        hit_points=result.hit_points,
        outcome=result.outcome,
        winner=result.winner.name.lower() if result.winner is not None else None,
        elf_deaths=result.elf_deaths,
        goblin_deaths=result.goblin_deaths,
        survivors=[
            UnitSchema(
                id=u.id, faction=u.faction.name.lower(),
                row=u.pos.row, col=u.pos.col, hp=u.hp, attack=u.attack,
            )
            for u in (units[i] for i in units.living_in_reading_order())
        ],
        board=format_board(grid, units).splitlines(),
        events=[
            EventSchema(round=e.round, category=e.category, message=e.message, unit_ids=list(e.unit_ids))
            for e in (events.all() if events is not None else [])
        ],
    )


@router.post("/combat/simulate", response_model=CombatResponse)
def simulate_combat(
    request: SimulateRequest,
    cfg: CombatConfig = Depends(get_config),
) -> CombatResponse:
    scenario = _parse(request.map, cfg)
    events = EventLog() if request.include_events else None
    try:
        result = simulate(scenario.grid, scenario.units, cfg, events=events)
    except CombatStalledError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return _serialize(scenario.grid, result, events)


@router.post("/combat/boost", response_model=BoostResponse)
def boost_combat(
    request: BoostRequest,
    cfg: CombatConfig = Depends(get_config),
) -> BoostResponse:
    scenario = _parse(request.map, cfg)
    overrides = {}
    if request.strategy is not None:
        overrides["boost_strategy"] = request.strategy
    if request.workers is not None:
        overrides["boost_workers"] = request.workers
    if overrides:
        cfg = dataclasses.replace(cfg, **overrides)

    try:
        found = BoostSearch(scenario.grid, scenario.units, cfg).search()
    except (NoQualifyingBoostError, CombatStalledError) as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return BoostResponse(
        boost=found.boost,
        elf_attack=found.elf_attack,
        trials=found.trials,
        combat=_serialize(scenario.grid, found.result),
    )
