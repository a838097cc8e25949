"""
Configuration - Environment-driven settings.

Environment variables:
    CCBALANCE_ENV                          development | production
    CCBALANCE_DIFFICULTY                   Default AI difficulty (1-4)
    CCBALANCE_CONCENTRATION_COOLDOWN_MS    Base cooldown for dosing a species
    CCBALANCE_HEAT_COOLDOWN_MS             Base cooldown for heat
    CCBALANCE_COOL_COOLDOWN_MS             Base cooldown for cool
    CCBALANCE_PRESSURIZE_COOLDOWN_MS       Base cooldown for pressurize
    CCBALANCE_DEPRESSURIZE_COOLDOWN_MS     Base cooldown for depressurize
    CCBALANCE_ALLOWED_ORIGINS              Comma-separated CORS origins
    CCBALANCE_LOG_LEVEL                    Log level name
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import os

from .engine_core.action import ActionKind, BASE_COOLDOWNS_MS


DEFAULT_DIFFICULTY = 2

_COOLDOWN_ENV = {
    ActionKind.ADD_SPECIES: "CCBALANCE_CONCENTRATION_COOLDOWN_MS",
    ActionKind.HEAT: "CCBALANCE_HEAT_COOLDOWN_MS",
    ActionKind.COOL: "CCBALANCE_COOL_COOLDOWN_MS",
    ActionKind.PRESSURIZE: "CCBALANCE_PRESSURIZE_COOLDOWN_MS",
    ActionKind.DEPRESSURIZE: "CCBALANCE_DEPRESSURIZE_COOLDOWN_MS",
}


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass
class Settings:
    """Process-wide settings."""
    env: str = "development"
    difficulty: int = DEFAULT_DIFFICULTY
    cooldowns_ms: dict[ActionKind, int] = field(
        default_factory=lambda: dict(BASE_COOLDOWNS_MS)
    )
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from the environment."""
        return cls(
            env=os.getenv("CCBALANCE_ENV", "development"),
            difficulty=_int_env("CCBALANCE_DIFFICULTY", DEFAULT_DIFFICULTY),
            cooldowns_ms={
                kind: _int_env(var, BASE_COOLDOWNS_MS[kind])
                for kind, var in _COOLDOWN_ENV.items()
            },
            allowed_origins=os.getenv("CCBALANCE_ALLOWED_ORIGINS", "*").split(","),
            log_level=os.getenv("CCBALANCE_LOG_LEVEL", "INFO").upper(),
        )


class DifficultySettings:
    """
    Mutable holder for the AI difficulty.

    Passed to the cooldown scheduler as its difficulty source, so a
    difficulty change mid-match applies to the next AI cooldown.
    An unset difficulty (0) reads as DEFAULT_DIFFICULTY.
    """

    def __init__(self, difficulty: int = DEFAULT_DIFFICULTY):
        self._difficulty = difficulty

    def get_difficulty(self) -> int:
        return self._difficulty or DEFAULT_DIFFICULTY

    def set_difficulty(self, difficulty: int):
        self._difficulty = difficulty


def configure_logging(level: str = "INFO"):
    """Configure root logging once for CLI and HTTP entry points."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
