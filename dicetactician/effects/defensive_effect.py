"""
Defensive effect module for the engine.

Defines effects that intercept incoming enemy attacks (flat block, dodge,
absorb pools and thorns) and the ones that protect the owner outright
(revive and immunity).
"""

from typing import Any, Literal

from pydantic import Field

from .base_effect import Effect


class DamageBlockEffect(Effect):
    """Subtracts a flat amount from every incoming enemy attack."""

    effect_type: Literal["DamageBlockEffect"] = "DamageBlockEffect"

    block_amount: int = Field(
        description="Damage removed from each incoming attack.",
    )

    @property
    def color(self) -> str:
        return "bold blue"

    @property
    def emoji(self) -> str:
        return "🛡️"


class DodgeEffect(Effect):
    """Gives a chance to avoid an incoming enemy attack entirely."""

    effect_type: Literal["DodgeEffect"] = "DodgeEffect"

    dodge_chance: float = Field(
        description="Probability in [0, 1] of dodging an attack.",
    )

    @property
    def color(self) -> str:
        return "bold white"

    @property
    def emoji(self) -> str:
        return "💨"

    def model_post_init(self, _: Any) -> None:
        super().model_post_init(_)
        if not 0.0 <= self.dodge_chance <= 1.0:
            raise ValueError(
                f"dodge_chance must be within [0, 1], got {self.dodge_chance}."
            )


class ReflectEffect(Effect):
    """
    Reflects a fraction of the damage dealt back at the enemy.

    The reflected amount is narrated only; it never deals extra damage.
    """

    effect_type: Literal["ReflectEffect"] = "ReflectEffect"

    reflect_fraction: float = Field(
        description="Fraction of the damage dealt that is reported as reflected.",
    )

    @property
    def color(self) -> str:
        return "green"

    @property
    def emoji(self) -> str:
        return "🌵"


class AbsorbShieldEffect(Effect):
    """A pool of hit points consumed before the owner's own HP."""

    effect_type: Literal["AbsorbShieldEffect"] = "AbsorbShieldEffect"

    absorb: int = Field(
        description="Remaining damage the shield can absorb.",
    )

    @property
    def color(self) -> str:
        return "bold yellow"

    @property
    def emoji(self) -> str:
        return "✨"

    def model_post_init(self, _: Any) -> None:
        super().model_post_init(_)
        if self.absorb < 0:
            raise ValueError(f"absorb must be non-negative, got {self.absorb}.")

    def consume(self, damage: int) -> int:
        """
        Absorbs as much of the damage as the pool allows.

        Args:
            damage (int):
                The incoming damage.

        Returns:
            int:
                The amount absorbed, already removed from the pool.

        """
        absorbed = min(self.absorb, max(0, damage))
        self.absorb -= absorbed
        return absorbed

    def is_depleted(self) -> bool:
        return self.absorb <= 0


class ReviveEffect(Effect):
    """Brings the owner back once when its HP reaches zero."""

    effect_type: Literal["ReviveEffect"] = "ReviveEffect"

    revive_fraction: float = Field(
        description="Fraction of max HP restored on revive.",
    )

    @property
    def color(self) -> str:
        return "bold red"

    @property
    def emoji(self) -> str:
        return "🔥"


class ImmunityEffect(Effect):
    """Prevents effects with the listed names from being attached to the owner."""

    effect_type: Literal["ImmunityEffect"] = "ImmunityEffect"

    immune_to: list[str] = Field(
        default_factory=list,
        description="Names of the effects the owner cannot receive.",
    )

    @property
    def color(self) -> str:
        return "bold green"

    @property
    def emoji(self) -> str:
        return "🐲"

    def blocks(self, effect: Effect) -> bool:
        return effect.name in self.immune_to
