"""
Chemistry Engine - Equilibrium constant and reaction quotient.

The executor only depends on the ChemistryEngine interface. MassActionEngine
is the default for single-reaction levels:

    Q = prod([P]^nu) / prod([R]^nu)
    K(T) = K_ref * exp(-dH/R * (1/T - 1/T_ref))     (van't Hoff)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import math


GAS_CONSTANT = 8.314462618  # J/(mol*K)


@dataclass(frozen=True)
class EquilibriumReading:
    K: float
    Q: float


class ChemistryEngine(ABC):
    """Interface for equilibrium solvers."""

    @abstractmethod
    def recompute_equilibrium(
        self, concentrations: dict[str, float], temperature: float
    ) -> EquilibriumReading:
        """Return K at `temperature` and Q for `concentrations`. Must be pure."""
        pass


@dataclass(frozen=True)
class Reaction:
    """
    A single reversible reaction with stoichiometric coefficients.

    Example (Haber):
        Reaction(reactants={"N2": 1, "H2": 3}, products={"NH3": 2},
                 k_ref=6.0e5, delta_h=-92_200.0)
    """
    reactants: dict[str, int]
    products: dict[str, int]
    k_ref: float = 1.0
    delta_h: float = 0.0  # J/mol, negative = exothermic
    t_ref: float = 298.15

    @property
    def species(self) -> list[str]:
        return list(self.reactants) + list(self.products)

    def equation(self) -> str:
        def side(terms: dict[str, int]) -> str:
            return " + ".join(f"{n if n != 1 else ''}{s}" for s, n in terms.items())
        return f"{side(self.reactants)} <=> {side(self.products)}"


@dataclass
class MassActionEngine(ChemistryEngine):
    reaction: Reaction

    def equilibrium_constant(self, temperature: float) -> float:
        r = self.reaction
        exponent = -r.delta_h / GAS_CONSTANT * (1.0 / temperature - 1.0 / r.t_ref)
        return r.k_ref * math.exp(exponent)

    def reaction_quotient(self, concentrations: dict[str, float]) -> float:
        numerator = _activity_product(concentrations, self.reaction.products)
        denominator = _activity_product(concentrations, self.reaction.reactants)
        if denominator == 0:
            return math.inf if numerator > 0 else 0.0
        return numerator / denominator

    def recompute_equilibrium(
        self, concentrations: dict[str, float], temperature: float
    ) -> EquilibriumReading:
        return EquilibriumReading(
            K=self.equilibrium_constant(temperature),
            Q=self.reaction_quotient(concentrations),
        )


def _activity_product(concentrations: dict[str, float], terms: dict[str, int]) -> float:
    product = 1.0
    for species, coeff in terms.items():
        product *= concentrations.get(species, 0.0) ** coeff
    return product
