"""
Action System - Action kinds, actors, and results.

Actions represent the five moves either side can make against the
shared chemical state:
1. Dose a species (add reactant)
2. Heat / cool
3. Pressurize / depressurize

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


class Actor(Enum):
    """Who requested an action. Cooldowns are tracked per actor."""
    PLAYER = "player"
    AI = "ai"


class ActionKind(Enum):
    """Types of actions in the system."""
    ADD_SPECIES = "add_species"
    HEAT = "heat"
    COOL = "cool"
    PRESSURIZE = "pressurize"
    DEPRESSURIZE = "depressurize"


# Base cooldown durations in milliseconds, before AI difficulty scaling.
BASE_COOLDOWNS_MS: dict[ActionKind, int] = {
    ActionKind.ADD_SPECIES: 3000,
    ActionKind.HEAT: 5000,
    ActionKind.COOL: 5000,
    ActionKind.PRESSURIZE: 5000,
    ActionKind.DEPRESSURIZE: 5000,
}


@dataclass(frozen=True)
class Action:
    """
    A requested move.

    Hashable, and doubles as the cooldown key: dosing is gated per
    species, every other kind is gated by kind alone.
    """
    kind: ActionKind
    species: str | None = None

    def __post_init__(self):
        if self.kind == ActionKind.ADD_SPECIES and not self.species:
            raise ValueError("add_species requires a species")
        if self.kind != ActionKind.ADD_SPECIES and self.species is not None:
            raise ValueError(f"{self.kind.value} does not take a species")

    @classmethod
    def add_species(cls, species: str) -> Action:
        """Factory for dosing a species."""
        return cls(ActionKind.ADD_SPECIES, species)

    @classmethod
    def heat(cls) -> Action:
        return cls(ActionKind.HEAT)

    @classmethod
    def cool(cls) -> Action:
        return cls(ActionKind.COOL)

    @classmethod
    def pressurize(cls) -> Action:
        return cls(ActionKind.PRESSURIZE)

    @classmethod
    def depressurize(cls) -> Action:
        return cls(ActionKind.DEPRESSURIZE)

    @classmethod
    def parse(cls, name: str, species: str | None = None) -> Action:
        """
        Build an action from its wire name.

        Accepts "add_species" with a species, or the shorthand
        "add:<species>" used by the CLI.
        """
        if name.startswith("add:"):
            return cls.add_species(name[len("add:"):])
        try:
            kind = ActionKind(name)
        except ValueError:
            raise ValueError(f"Unknown action: {name}")
        return cls(kind, species if kind == ActionKind.ADD_SPECIES else None)

    @property
    def control_id(self) -> str:
        """Id of the player control that triggers this action."""
        if self.kind == ActionKind.ADD_SPECIES:
            return f"btn-species-{self.species}"
        return f"btn-{self.kind.value}"

    def __str__(self) -> str:
        if self.species:
            return f"{self.kind.value}({self.species})"
        return self.kind.value


@dataclass(frozen=True)
class ActionResult:
    """
    Result of executing an action.

    Contains:
    - Whether the action was accepted
    - Rejection reason (if rejected)
    - Human-readable changes (for toasts/logs)
    """
    success: bool
    reason: str | None = None
    changes: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def ok(cls, *changes: str) -> ActionResult:
        return cls(success=True, changes=changes)

    @classmethod
    def cooling_down(cls) -> ActionResult:
        """Rejection result; shared instance so the rejection path stays cheap."""
        return COOLING_DOWN


COOLING_DOWN = ActionResult(success=False, reason="cooling down")
