"""
Player module for the engine.

Defines the player character: class identity, dice, gold, class counters,
critical strike stats, rerolls and the items bought during the run.
"""

from typing import Any

from pydantic import Field

from dicetactician.core.constants import (
    CLASS_COUNTERS,
    PLAYER_BASE_CRIT_MULTIPLIER,
    PLAYER_BASE_HP,
    ClassName,
)
from dicetactician.dice.dice import DiceSet
from dicetactician.effects.dice_effect import SymbolMultiplierEffect
from dicetactician.effects.economy_effect import (
    GoldMultiplierEffect,
    PriceMultiplierEffect,
)

from .actor import Actor


class Player(Actor):
    """
    The player character.

    Attack and defense bonuses are split between a base part, changed by
    permanent items, and the contributions of the active effects.
    """

    class_name: ClassName = Field(
        description="The class of the player, selects dice and abilities.",
    )
    gold: int = Field(
        0,
        description="Gold available to spend at merchants.",
    )
    dice_set: DiceSet = Field(
        description="The dice owned by the player.",
    )
    special_counters: dict[str, int] = Field(
        default_factory=dict,
        description="Per-class counters such as momentum or stored power.",
    )
    crit_chance: float = Field(
        0.0,
        description="Critical strike chance, in percentage points.",
    )
    crit_multiplier: float = Field(
        PLAYER_BASE_CRIT_MULTIPLIER,
        description="Multiplier applied to the attack on a critical strike.",
    )
    rerolls_per_round: int = Field(
        0,
        description="Rerolls granted every round.",
    )
    rerolls_used: int = Field(
        0,
        description="Rerolls spent in the current round.",
    )
    attack_bonus: int = Field(
        0,
        description="Base attack bonus granted by items.",
    )
    defense_bonus: int = Field(
        0,
        description="Base defense bonus granted by items.",
    )
    items: list[str] = Field(
        default_factory=list,
        description="Names of the items bought during the run.",
    )

    def model_post_init(self, _: Any) -> None:
        super().model_post_init(_)
        if self.gold < 0:
            raise ValueError(f"Gold must be non-negative, got {self.gold}.")
        if not self.special_counters:
            self.special_counters = dict(CLASS_COUNTERS[self.class_name])

    @classmethod
    def create(cls, class_name: ClassName, dice_set: DiceSet) -> "Player":
        """
        Creates a fresh player for a new run.

        Args:
            class_name (ClassName): The chosen class.
            dice_set (DiceSet): The class dice.

        Returns:
            Player: The new player, at full health with no gold.

        """
        return cls(
            name=class_name.display_name,
            hp=PLAYER_BASE_HP,
            max_hp=PLAYER_BASE_HP,
            class_name=class_name,
            dice_set=dice_set,
        )

    # ============================================================================
    # STATS
    # ============================================================================

    def total_attack_bonus(self) -> int:
        """Returns the base attack bonus plus every effect contribution."""
        return self.attack_bonus + self.effects_attack_bonus()

    def total_defense_bonus(self) -> int:
        """Returns the base defense bonus plus every effect contribution."""
        return self.defense_bonus + self.effects_defense_bonus()

    def get_counter(self, name: str) -> int:
        return self.special_counters.get(name, 0)

    def set_counter(self, name: str, value: int) -> None:
        self.special_counters[name] = value

    def add_counter(self, name: str, amount: int) -> int:
        """Adds to a class counter and returns the new value."""
        self.special_counters[name] = self.get_counter(name) + amount
        return self.special_counters[name]

    # ============================================================================
    # GOLD AND REROLLS
    # ============================================================================

    def add_gold(self, amount: int) -> None:
        self.gold += max(0, amount)

    def spend_gold(self, amount: int) -> bool:
        """
        Spends gold if the player can afford it.

        Returns:
            bool: False, leaving gold untouched, if the player is short.

        """
        if amount < 0 or amount > self.gold:
            return False
        self.gold -= amount
        return True

    def rerolls_left(self) -> int:
        return max(0, self.rerolls_per_round - self.rerolls_used)

    def gold_multiplier(self) -> float:
        multiplier = 1.0
        for effect in self.get_effects_of_type(GoldMultiplierEffect):
            multiplier *= effect.gold_multiplier
        return multiplier

    def price_multiplier(self) -> float:
        multiplier = 1.0
        for effect in self.get_effects_of_type(PriceMultiplierEffect):
            multiplier *= effect.price_multiplier
        return multiplier

    def symbol_multiplier(self) -> int:
        """Returns how many times each special symbol counts."""
        effect = self.get_effect_of_type(SymbolMultiplierEffect)
        return effect.symbol_multiplier if effect else 1
