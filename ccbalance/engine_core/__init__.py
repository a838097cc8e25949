"""
Engine Core - Chemical state management and action execution.

The engine is the runtime that:
1. Holds the ChemicalState for a LevelConfig
2. Gates actions per actor with the CooldownScheduler
3. Applies actions via the ActionExecutor
4. Applies container physics side effects
5. Publishes presentation events
"""

from .state import ChemicalState, LevelConfig, ContainerType, StateSnapshot
from .action import Action, ActionKind, ActionResult, Actor, BASE_COOLDOWNS_MS
from .cooldown import CooldownScheduler, CooldownEntry, effective_duration
from .container import ContainerEffect, container_effect, apply_container_effect, rescale_gases
from .chemistry import ChemistryEngine, EquilibriumReading, MassActionEngine, Reaction
from .events import EventBus, StateUpdated, AIActed, AudioCueRequested, ControlStateChanged
from .executor import ActionExecutor

__all__ = [
    "ChemicalState",
    "LevelConfig",
    "ContainerType",
    "StateSnapshot",
    "Action",
    "ActionKind",
    "ActionResult",
    "Actor",
    "BASE_COOLDOWNS_MS",
    "CooldownScheduler",
    "CooldownEntry",
    "effective_duration",
    "ContainerEffect",
    "container_effect",
    "apply_container_effect",
    "rescale_gases",
    "ChemistryEngine",
    "EquilibriumReading",
    "MassActionEngine",
    "Reaction",
    "EventBus",
    "StateUpdated",
    "AIActed",
    "AudioCueRequested",
    "ControlStateChanged",
    "ActionExecutor",
]
