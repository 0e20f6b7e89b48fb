"""
Item module for the engine.

Defines the Item class sold by merchants. An item is data: flat stat
changes, one-shot resources and the effects it attaches, applied exactly
once to the buyer at purchase time.
"""

import random
from typing import Any

from pydantic import BaseModel, Field

from dicetactician.character.player import Player
from dicetactician.core.constants import Rarity
from dicetactician.core.logging import log_debug
from dicetactician.dice.dice import DieFace
from dicetactician.effects.effect_factory import ValidEffect


class Item(BaseModel):
    """
    Represents an item that can be bought from a merchant.

    Permanent items change bonus fields or attach effects without a duration;
    consumables (potions, gold) apply a one-shot change.
    """

    name: str = Field(
        description="The name of the item.",
    )
    description: str = Field(
        description="A brief description of the item.",
    )
    cost: int = Field(
        description="The base price in gold.",
        ge=0,
    )
    rarity: Rarity = Field(
        Rarity.COMMON,
        description="The rarity of the item, drives merchant draws.",
    )
    attack_bonus: int = Field(
        0,
        description="Added to the player's base attack bonus.",
    )
    defense_bonus: int = Field(
        0,
        description="Added to the player's base defense bonus.",
    )
    max_hp: int = Field(
        0,
        description="Added to the player's max HP (may be negative).",
    )
    heal: int = Field(
        0,
        description="HP restored immediately.",
    )
    gold: int = Field(
        0,
        description="Gold granted immediately.",
        ge=0,
    )
    rerolls: int = Field(
        0,
        description="Extra rerolls granted every round.",
        ge=0,
    )
    crit_chance: float = Field(
        0.0,
        description="Added to the player's critical strike chance.",
    )
    crit_multiplier: float | None = Field(
        None,
        description="Replaces the player's critical strike multiplier.",
    )
    upgrade_face: int = Field(
        0,
        description="Value added to a random attack or defense face of the player's dice.",
        ge=0,
    )
    effects: list[ValidEffect] = Field(
        default_factory=list,
        description="Effects attached to the player on purchase.",
    )

    @property
    def colored_name(self) -> str:
        """Returns the item name colored by rarity."""
        return self.rarity.colorize(self.name)

    @property
    def is_permanent(self) -> bool:
        """True if the item changes the player for the rest of the run."""
        return bool(
            self.attack_bonus
            or self.defense_bonus
            or self.max_hp
            or self.rerolls
            or self.crit_chance
            or self.crit_multiplier
            or self.upgrade_face
            or any(effect.is_permanent() for effect in self.effects)
        )

    def model_post_init(self, _: Any) -> None:
        assert self.name, "Item name must not be empty."
        if self.crit_multiplier is not None and self.crit_multiplier < 1.0:
            raise ValueError(
                f"crit_multiplier of '{self.name}' must be at least 1.0, got {self.crit_multiplier}."
            )

    def apply(self, player: Player, rng: random.Random) -> list[str]:
        """
        Applies the item to the player.

        Args:
            player (Player):
                The buyer.
            rng (random.Random):
                The random source, used by the dice upgrade.

        Returns:
            list[str]:
                Notes about what happened, for narration.

        """
        notes: list[str] = []
        player.attack_bonus += self.attack_bonus
        player.defense_bonus += self.defense_bonus
        if self.max_hp:
            player.set_max_hp(player.max_hp + self.max_hp)
        if self.heal:
            player.heal(self.heal)
        if self.gold:
            player.add_gold(self.gold)
        player.rerolls_per_round += self.rerolls
        player.crit_chance += self.crit_chance
        if self.crit_multiplier is not None:
            player.crit_multiplier = self.crit_multiplier
        if self.upgrade_face:
            note = self._upgrade_random_face(player, rng)
            if note:
                notes.append(note)
        for effect in self.effects:
            # Each purchase owns its own copy of the effect.
            if not player.add_effect(effect.model_copy(deep=True)):
                notes.append(f"{player.name} is immune to {effect.name}.")
        player.items.append(self.name)
        log_debug(f"Applied {self.name} to {player.name}", {"cost": self.cost})
        return notes

    def _upgrade_random_face(self, player: Player, rng: random.Random) -> str | None:
        candidates = [
            (die_index, face_index, face)
            for die_index, die in enumerate(player.dice_set.dice)
            for face_index, face in enumerate(die.faces)
            if face.is_numeric
        ]
        if not candidates:
            return None
        die_index, face_index, face = rng.choice(candidates)
        upgraded = DieFace(kind=face.kind, value=face.value + self.upgrade_face)
        player.dice_set.replace_face(die_index, face_index, upgraded)
        return f"Die {die_index + 1}: {face} upgraded to {upgraded}."
