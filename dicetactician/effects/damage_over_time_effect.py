"""
Damage over time effect module for the engine.

Defines effects that deal damage every turn, such as poison and burn.
"""

from typing import Any, Literal

from pydantic import Field

from dicetactician.core.logging import log_debug

from .base_effect import Effect, EffectTick


class DamageOverTimeEffect(Effect):
    """
    Deals a fixed amount of damage to its owner every tick.

    The damage goes through the owner's take-damage primitive, so an enemy's
    flat defense also reduces it.
    """

    effect_type: Literal["DamageOverTimeEffect"] = "DamageOverTimeEffect"

    damage_per_turn: int = Field(
        description="Damage dealt to the owner each turn.",
    )

    @property
    def color(self) -> str:
        return "bold magenta"

    @property
    def emoji(self) -> str:
        return "❣️"

    def model_post_init(self, _: Any) -> None:
        super().model_post_init(_)
        if self.damage_per_turn < 0:
            raise ValueError(
                f"damage_per_turn must be non-negative, got {self.damage_per_turn}."
            )

    def tick(self, owner: Any) -> EffectTick:
        taken = owner.take_damage(self.damage_per_turn)
        log_debug(
            f"{self.name} ticks on {owner.name}",
            {"damage": self.damage_per_turn, "taken": taken},
        )
        return EffectTick(effect_name=self.name, damage=taken)
