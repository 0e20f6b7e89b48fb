"""
Combat system module for the Dungeon Dice Tactician engine.

This module handles enemy decision making, enemy spawning and scaling,
and the turn-based resolution of a round against the current enemy.
"""
