"""
Dice system module for the Dungeon Dice Tactician engine.

This module contains die faces, dice, the per-class dice sets and the
rolling primitives.
"""

from .dice import DiceSet, Die, DieFace, reset_all, roll

__all__ = [
    "DiceSet",
    "Die",
    "DieFace",
    "reset_all",
    "roll",
]
