"""Pydantic request and response models for the REST API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


# --- Requests ---

class SimulateRequest(BaseModel):
    map: str = Field(description="Scenario rows using # . G E, one row per line")
    include_events: bool = False


class BoostRequest(BaseModel):
    map: str = Field(description="Scenario rows using # . G E, one row per line")
    strategy: Literal["linear", "binary"] | None = None
    workers: int | None = Field(None, ge=1, le=32)


# --- Combat ---

class UnitSchema(BaseModel):
    id: int
    faction: str
    row: int
    col: int
    hp: int
    attack: int


class EventSchema(BaseModel):
    round: int
    category: str
    message: str
    unit_ids: list[int] = Field(default_factory=list)


class CombatResponse(BaseModel):
    state: str
    completed_rounds: int
    hit_points: int
    outcome: int
    winner: str | None = None
    elf_deaths: int = 0
    goblin_deaths: int = 0
    survivors: list[UnitSchema] = Field(default_factory=list)
    board: list[str] = Field(default_factory=list)
    events: list[EventSchema] = Field(default_factory=list)


class BoostResponse(BaseModel):
    boost: int
    elf_attack: int
    trials: int
    combat: CombatResponse


# --- Config ---

class CombatConfigResponse(BaseModel):
    hit_points: int
    attack_power: int
    max_rounds: int
    verify_invariants: bool
    boost_strategy: str
    boost_workers: int
