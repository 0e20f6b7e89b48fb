"""
Character system module for the Dungeon Dice Tactician engine.

This module handles the combatants: the shared actor primitives, the
player, the enemies and the catalog description of the playable classes.
"""

from .actor import Actor
from .character_class import CharacterClass
from .enemy import Enemy
from .player import Player

__all__ = [
    # Import from actor.py
    "Actor",
    # Import from character_class.py
    "CharacterClass",
    # Import from enemy.py
    "Enemy",
    # Import from player.py
    "Player",
]
