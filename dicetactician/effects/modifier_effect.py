"""
Modifier effect module for the engine.

Defines effects that modify stats: flat attack/defense bonuses on the
carrier, and the attack reduction applied to a frozen enemy.
"""

from typing import Any, Literal

from pydantic import Field

from .base_effect import Effect


class StatModifierEffect(Effect):
    """
    Adds flat attack and/or defense to its owner while active.

    Used by buffs such as Stoneform, Haste and Spirit Guardian.
    """

    effect_type: Literal["StatModifierEffect"] = "StatModifierEffect"

    attack: int = Field(
        0,
        description="Bonus added to the owner's attack.",
    )
    defense: int = Field(
        0,
        description="Bonus added to the owner's defense.",
    )

    @property
    def color(self) -> str:
        return "bold yellow"

    @property
    def emoji(self) -> str:
        return "💪"

    def attack_contribution(self) -> int:
        return self.attack

    def defense_contribution(self) -> int:
        return self.defense


class AttackReductionEffect(Effect):
    """
    Scales down the damage of the owner's attack actions.

    The reduction is a fraction in [0, 1]; an attack of value V is reported as
    floor(V * (1 - reduction)).
    """

    effect_type: Literal["AttackReductionEffect"] = "AttackReductionEffect"

    attack_reduction: float = Field(
        description="Fraction of the attack value removed.",
    )

    @property
    def color(self) -> str:
        return "bold cyan"

    @property
    def emoji(self) -> str:
        return "🧊"

    def model_post_init(self, _: Any) -> None:
        super().model_post_init(_)
        if not 0.0 <= self.attack_reduction <= 1.0:
            raise ValueError(
                f"attack_reduction must be within [0, 1], got {self.attack_reduction}."
            )
