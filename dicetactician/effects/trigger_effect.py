"""
Trigger effect module for the engine.

Defines effects that fire on specific turn events: when the owner
attacks, when the next attack lands, when the enemy is about to act, and
when a new enemy spawns.
"""

from typing import Literal

from pydantic import Field

from .base_effect import Effect


class LifeOnHitEffect(Effect):
    """Heals the owner every time it lands an attack."""

    effect_type: Literal["LifeOnHitEffect"] = "LifeOnHitEffect"

    heal_on_attack: int = Field(
        description="HP restored whenever the owner deals attack damage.",
    )

    @property
    def color(self) -> str:
        return "bold red"

    @property
    def emoji(self) -> str:
        return "🩸"


class PoisonOnHitEffect(Effect):
    """Poisons the target every time the owner lands an attack."""

    effect_type: Literal["PoisonOnHitEffect"] = "PoisonOnHitEffect"

    poison_damage: int = Field(
        description="Per-turn damage of the poison applied on hit.",
    )

    @property
    def color(self) -> str:
        return "bold green"

    @property
    def emoji(self) -> str:
        return "🧪"


class GuaranteedCritEffect(Effect):
    """Forces the owner's next attack to be a critical strike, then expires."""

    effect_type: Literal["GuaranteedCritEffect"] = "GuaranteedCritEffect"

    @property
    def color(self) -> str:
        return "bold yellow"

    @property
    def emoji(self) -> str:
        return "🎯"


class ExtraActionEffect(Effect):
    """Makes the enemy lose its next action."""

    effect_type: Literal["ExtraActionEffect"] = "ExtraActionEffect"

    @property
    def color(self) -> str:
        return "bold cyan"

    @property
    def emoji(self) -> str:
        return "⏳"


class CombatBlessingEffect(Effect):
    """Grants a random boon every time a new enemy appears."""

    effect_type: Literal["CombatBlessingEffect"] = "CombatBlessingEffect"

    @property
    def color(self) -> str:
        return "bold magenta"

    @property
    def emoji(self) -> str:
        return "🔮"
