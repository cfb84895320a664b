"""GET /api/v1/config: expose the active combat configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from gridcombat.api.dependencies import get_config
from gridcombat.api.schemas import CombatConfigResponse
from gridcombat.config import CombatConfig

router = APIRouter()


@router.get("/config", response_model=CombatConfigResponse)
def read_config(cfg: CombatConfig = Depends(get_config)) -> CombatConfigResponse:
    return CombatConfigResponse(
        hit_points=cfg.hit_points,
        attack_power=cfg.attack_power,
        max_rounds=cfg.max_rounds,
        verify_invariants=cfg.verify_invariants,
        boost_strategy=cfg.boost_strategy,
        boost_workers=cfg.boost_workers,
    )
