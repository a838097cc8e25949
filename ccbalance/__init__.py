"""
CCBalance - Chemical Equilibrium Duel Engine

A rules engine for an educational game where a player and an AI opponent
take turns perturbing a chemical equilibrium. The engine provides:
- Chemical state and level configuration
- Per-actor cooldown scheduling
- Container physics (flexible vs. rigid vessels)
- Action execution with presentation notifications
"""

__version__ = "0.1.0"
