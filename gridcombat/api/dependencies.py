"""FastAPI dependency injection: provides the active CombatConfig."""

from __future__ import annotations

from gridcombat.config import CombatConfig

_config: CombatConfig | None = None


def set_config(config: CombatConfig) -> None:
    global _config
    _config = config


def get_config() -> CombatConfig:
    if _config is None:
        raise RuntimeError("CombatConfig not initialized: server not started correctly.")
    return _config
