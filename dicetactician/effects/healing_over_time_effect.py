"""
Healing over time effect module for the engine.

Defines effects that restore HP every turn, such as regeneration.
"""

from typing import Any, Literal

from pydantic import Field

from .base_effect import Effect, EffectTick


class HealingOverTimeEffect(Effect):
    """Restores a fixed amount of HP to its owner every tick."""

    effect_type: Literal["HealingOverTimeEffect"] = "HealingOverTimeEffect"

    heal_per_turn: int = Field(
        description="HP restored to the owner each turn.",
    )

    @property
    def color(self) -> str:
        return "bold green"

    @property
    def emoji(self) -> str:
        return "💚"

    def model_post_init(self, _: Any) -> None:
        super().model_post_init(_)
        if self.heal_per_turn < 0:
            raise ValueError(
                f"heal_per_turn must be non-negative, got {self.heal_per_turn}."
            )

    def tick(self, owner: Any) -> EffectTick:
        return EffectTick(effect_name=self.name, healing=owner.heal(self.heal_per_turn))
