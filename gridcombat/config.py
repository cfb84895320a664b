"""Combat configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass

BOOST_STRATEGIES = ("linear", "binary")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class CombatConfig:
    """Immutable configuration for a combat run."""

    # Units
    hit_points: int = 200
    attack_power: int = 3

    # Simulation
    max_rounds: int = 10_000          # guard against sides that can never meet
    verify_invariants: bool = True    # check the occupancy index every round

    # Boost search
    boost_strategy: str = "linear"    # "linear" | "binary"
    boost_workers: int = 1            # >1 evaluates boost windows on a thread pool

    # Logging
    log_level: str = "INFO"
    replay_file: str | None = None

    def __post_init__(self) -> None:
        if self.boost_strategy not in BOOST_STRATEGIES:
            raise ValueError(
                f"boost_strategy must be one of {BOOST_STRATEGIES}, got {self.boost_strategy!r}"
            )
        if self.boost_workers < 1:
            raise ValueError("boost_workers must be at least 1")
        if self.max_rounds < 1:
            raise ValueError("max_rounds must be at least 1")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {self.log_level!r}")
