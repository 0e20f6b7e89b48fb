"""
Core system module for the Dungeon Dice Tactician engine.

This module contains the fundamental components shared by every other
subsystem: rule constants and enumerations, logging, error reporting,
console helpers, the content repository and the best-runs store.
"""

from .constants import (
    ClassName,
    DiceSlot,
    EnemyActionType,
    EnemyCategory,
    FaceKind,
    GameState,
    LogKind,
    MerchantKind,
    Rarity,
)
from .error_handling import ActionResult, accept, reject
from .logging import get_logger, setup_logging
from .utils import Singleton, cprint, crule, floor_int, make_bar

__all__ = [
    "ClassName",
    "DiceSlot",
    "EnemyActionType",
    "EnemyCategory",
    "FaceKind",
    "GameState",
    "LogKind",
    "MerchantKind",
    "Rarity",
    "ActionResult",
    "accept",
    "reject",
    "get_logger",
    "setup_logging",
    "Singleton",
    "cprint",
    "crule",
    "floor_int",
    "make_bar",
]
