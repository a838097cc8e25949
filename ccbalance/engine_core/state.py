"""
Chemical State - The shared mutable state both actors act on.

Design principles:
- One mutable ChemicalState per match, owned by the match session
- LevelConfig is immutable for the whole match
- Bounds are enforced by the actions (clamp, never overshoot)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
from copy import deepcopy
from enum import Enum


TEMPERATURE_MIN = 200.0  # K
TEMPERATURE_MAX = 500.0
PRESSURE_MIN = 10.0  # kPa
PRESSURE_MAX = 500.0

STANDARD_PRESSURE = 101.325
STANDARD_TEMPERATURE = 298.15
DEFAULT_VOLUME = 1.0  # L


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(value, upper))


class ContainerType(Enum):
    """Vessel model. Rigid: fixed volume, pressure varies. Flexible: the reverse."""
    RIGID = "rigid"
    FLEXIBLE = "flexible"


@dataclass(frozen=True)
class LevelConfig:
    """
    Per-match level configuration.

    Supplied by the level loader; assumed well-formed.
    """
    level_id: str
    container_type: ContainerType
    has_gas: bool = False
    gas_species: frozenset[str] = frozenset()
    initial_concentrations: dict[str, float] = field(default_factory=dict)

    # Starting conditions
    initial_temperature: float = STANDARD_TEMPERATURE
    initial_pressure: float = STANDARD_PRESSURE
    initial_volume: float = DEFAULT_VOLUME

    name: str = ""
    description: str = ""

    def is_gas(self, species: str) -> bool:
        return species in self.gas_species

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LevelConfig:
        """
        Build a level from its camelCase level-file form.

        A level without an explicit containerType gets a rigid vessel
        when it has gases, otherwise a flexible one.

        Called by the external level loader, which hands the result to
        MatchManager.create_match(level=...). No CLI or HTTP path reads
        level files.
        """
        has_gas = bool(data.get("hasGas", False))
        container = data.get("containerType") or ("rigid" if has_gas else "flexible")
        return cls(
            level_id=str(data.get("id", "custom")),
            container_type=ContainerType(container),
            has_gas=has_gas,
            gas_species=frozenset(data.get("gasSpecies") or ()),
            initial_concentrations=dict(data.get("initialConcentrations") or {}),
            initial_temperature=float(data.get("temperature", STANDARD_TEMPERATURE)),
            initial_pressure=float(data.get("pressure", STANDARD_PRESSURE)),
            initial_volume=float(data.get("volume", DEFAULT_VOLUME)),
            name=data.get("name", ""),
            description=data.get("description", ""),
        )


@dataclass
class StateSnapshot:
    """Read-only copy of the values presentation layers display."""
    K: float | None
    Q: float | None
    concentrations: dict[str, float]
    temperature: float
    pressure: float
    volume: float


@dataclass
class ChemicalState:
    """
    Complete chemical state at a point in time.

    Mutated in place by the action executor only.
    """
    concentrations: dict[str, float] = field(default_factory=dict)
    temperature: float = STANDARD_TEMPERATURE
    pressure: float = STANDARD_PRESSURE
    volume: float = DEFAULT_VOLUME

    # Dose baselines; falls back to the level's initial concentrations
    base_concentrations: dict[str, float] = field(default_factory=dict)

    # Latest solver output
    equilibrium_constant: float | None = None
    reaction_quotient: float | None = None

    @classmethod
    def from_level(cls, level: LevelConfig) -> ChemicalState:
        """Fresh state for the start of a match."""
        return cls(
            concentrations=dict(level.initial_concentrations),
            temperature=clamp(level.initial_temperature, TEMPERATURE_MIN, TEMPERATURE_MAX),
            pressure=clamp(level.initial_pressure, PRESSURE_MIN, PRESSURE_MAX),
            volume=level.initial_volume,
            base_concentrations=dict(level.initial_concentrations),
        )

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot(
            K=self.equilibrium_constant,
            Q=self.reaction_quotient,
            concentrations=dict(self.concentrations),
            temperature=self.temperature,
            pressure=self.pressure,
            volume=self.volume,
        )

    def clone(self) -> ChemicalState:
        """Deep copy the state."""
        return deepcopy(self)
