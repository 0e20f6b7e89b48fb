"""
Actor module for the engine.

Defines the state shared by the player and the enemies: hit points and
the list of active status effects, together with the primitives that
mutate them.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, Field

from dicetactician.core.logging import log_debug
from dicetactician.core.utils import make_bar
from dicetactician.effects.base_effect import Effect, EffectTick
from dicetactician.effects.defensive_effect import ImmunityEffect
from dicetactician.effects.effect_factory import ValidEffect

E = TypeVar("E", bound=Effect)


class Actor(BaseModel):
    """
    Common shape of every combatant.

    Hit points always stay within [0, max_hp]: the primitives clamp rather
    than reject out-of-range amounts.
    """

    name: str = Field(
        description="The name of the actor.",
    )
    hp: int = Field(
        description="Current hit points.",
    )
    max_hp: int = Field(
        description="Maximum hit points.",
    )
    effects: list[ValidEffect] = Field(
        default_factory=list,
        description="Active status effects, in insertion order.",
    )

    def model_post_init(self, _: Any) -> None:
        if self.max_hp <= 0:
            raise ValueError(f"max_hp of '{self.name}' must be positive, got {self.max_hp}.")
        self.hp = max(0, min(self.hp, self.max_hp))

    # ============================================================================
    # HIT POINTS
    # ============================================================================

    def take_damage(self, amount: int) -> int:
        """
        Removes hit points from the actor.

        Args:
            amount (int):
                The damage to apply. Negative amounts count as zero.

        Returns:
            int:
                The damage actually applied.

        """
        amount = max(0, amount)
        applied = min(amount, self.hp)
        self.hp -= applied
        return applied

    def heal(self, amount: int) -> int:
        """
        Restores hit points, capped at max HP.

        Args:
            amount (int):
                The amount to heal. Negative amounts count as zero.

        Returns:
            int:
                The amount actually healed.

        """
        amount = max(0, amount)
        healed = min(amount, self.max_hp - self.hp)
        self.hp += healed
        return healed

    def set_max_hp(self, value: int) -> None:
        """Changes max HP, clamping the current HP into the new range."""
        self.max_hp = max(1, value)
        self.hp = min(self.hp, self.max_hp)

    def is_alive(self) -> bool:
        return self.hp > 0

    def hp_percentage(self) -> float:
        """Returns the current HP as a fraction of max HP, in [0, 1]."""
        return self.hp / self.max_hp

    @property
    def hp_bar(self) -> str:
        return make_bar(self.hp, self.max_hp, color="green")

    # ============================================================================
    # EFFECTS
    # ============================================================================

    def add_effect(self, effect: Effect) -> bool:
        """
        Attaches an effect to the actor.

        Args:
            effect (Effect):
                The effect to attach. Duplicates by name are allowed.

        Returns:
            bool:
                False if an immunity of the actor blocked the effect.

        """
        for immunity in self.get_effects_of_type(ImmunityEffect):
            if immunity.blocks(effect):
                log_debug(
                    f"{self.name} is immune to {effect.name}",
                    {"immunity": immunity.name},
                )
                return False
        self.effects.append(effect)
        return True

    def remove_effect(self, name: str) -> int:
        """
        Removes every effect with the given name.

        Returns:
            int:
                The number of removed effects.

        """
        before = len(self.effects)
        self.effects = [effect for effect in self.effects if effect.name != name]
        return before - len(self.effects)

    def has_effect(self, name: str) -> bool:
        return any(effect.name == name for effect in self.effects)

    def get_effect(self, name: str) -> Effect | None:
        """Returns the first effect with the given name, if any."""
        for effect in self.effects:
            if effect.name == name:
                return effect
        return None

    def get_effects_of_type(self, effect_class: type[E]) -> list[E]:
        """Returns every active effect of the given variant, in insertion order."""
        return [effect for effect in self.effects if isinstance(effect, effect_class)]

    def get_effect_of_type(self, effect_class: type[E]) -> E | None:
        """Returns the first active effect of the given variant, if any."""
        for effect in self.effects:
            if isinstance(effect, effect_class):
                return effect
        return None

    def effects_attack_bonus(self) -> int:
        return sum(effect.attack_contribution() for effect in self.effects)

    def effects_defense_bonus(self) -> int:
        return sum(effect.defense_contribution() for effect in self.effects)

    def tick_effects(self) -> list[EffectTick]:
        """
        Runs one end-of-turn pass over the active effects.

        Every payload (damage then healing) is applied in insertion order
        first; afterwards finite durations are decremented and the effects
        that reach zero are dropped.

        Returns:
            list[EffectTick]:
                What each effect with a payload did.

        """
        ticks: list[EffectTick] = []
        for effect in list(self.effects):
            tick = effect.tick(self)
            if tick is not None:
                ticks.append(tick)
        self.effects = [effect for effect in self.effects if effect.advance_duration()]
        return ticks
