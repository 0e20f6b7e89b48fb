"""
Dungeon Dice Tactician engine.

This package contains the turn resolution engine of a single-player
roguelike dice game: dice, actors, status effects, class abilities, enemy
behaviour, progression, merchants and the game session state machine.
"""

__version__ = "0.1.0"
