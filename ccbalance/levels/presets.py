"""
Level Presets

Hand-authored levels shipped with the engine. Custom levels come from the
level loader as LevelConfig.from_dict(...) and are assumed well-formed.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..engine_core.state import LevelConfig, ContainerType
from ..engine_core.chemistry import Reaction, MassActionEngine


class UnknownLevelError(ValueError):
    """Raised when a level id has no preset."""


@dataclass(frozen=True)
class LevelPreset:
    config: LevelConfig
    reaction: Reaction

    @property
    def level_id(self) -> str:
        return self.config.level_id

    def create_engine(self) -> MassActionEngine:
        return MassActionEngine(self.reaction)


def _haber() -> LevelPreset:
    return LevelPreset(
        config=LevelConfig(
            level_id="haber",
            name="Haber Process",
            description="Ammonia synthesis in a sealed steel vessel.",
            container_type=ContainerType.RIGID,
            has_gas=True,
            gas_species=frozenset({"N2", "H2", "NH3"}),
            initial_concentrations={"N2": 1.0, "H2": 3.0, "NH3": 0.5},
            initial_temperature=400.0,
        ),
        reaction=Reaction(
            reactants={"N2": 1, "H2": 3},
            products={"NH3": 2},
            k_ref=6.0e5,
            delta_h=-92_200.0,
        ),
    )


def _esterification() -> LevelPreset:
    return LevelPreset(
        config=LevelConfig(
            level_id="esterification",
            name="Fischer Esterification",
            description="Acetic acid and ethanol in an open flask.",
            container_type=ContainerType.FLEXIBLE,
            has_gas=False,
            initial_concentrations={
                "CH3COOH": 1.0,
                "C2H5OH": 1.0,
                "CH3COOC2H5": 0.5,
                "H2O": 0.5,
            },
        ),
        reaction=Reaction(
            reactants={"CH3COOH": 1, "C2H5OH": 1},
            products={"CH3COOC2H5": 1, "H2O": 1},
            k_ref=4.0,
            delta_h=-2_000.0,
        ),
    )


def _no2_dimerization() -> LevelPreset:
    return LevelPreset(
        config=LevelConfig(
            level_id="no2_dimerization",
            name="Nitrogen Dioxide Dimerization",
            description="Brown NO2 and colourless N2O4 in a sealed tube.",
            container_type=ContainerType.RIGID,
            has_gas=True,
            gas_species=frozenset({"NO2", "N2O4"}),
            initial_concentrations={"NO2": 0.2, "N2O4": 0.1},
        ),
        reaction=Reaction(
            reactants={"NO2": 2},
            products={"N2O4": 1},
            k_ref=170.0,
            delta_h=-57_200.0,
        ),
    )


PRESETS: dict[str, LevelPreset] = {
    preset.level_id: preset
    for preset in (_haber(), _esterification(), _no2_dimerization())
}


def get_level(level_id: str) -> LevelPreset:
    """Look up a preset by id."""
    preset = PRESETS.get(level_id)
    if not preset:
        raise UnknownLevelError(f"Unknown level: {level_id}")
    return preset


def list_levels() -> list[LevelPreset]:
    return list(PRESETS.values())
