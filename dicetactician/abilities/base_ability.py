"""
Base ability module for the engine.

Defines the context handed to class abilities, the uniform outcome they
return and the interface every class implements.
"""

import random
from abc import ABC, abstractmethod

from pydantic import BaseModel, Field

from dicetactician.character.player import Player
from dicetactician.core.constants import ClassName, FaceKind
from dicetactician.dice.dice import DieFace
from dicetactician.effects.effect_factory import ValidEffect


class AbilityContext(BaseModel):
    """The turn values a class ability reads."""

    attack_value: int = Field(
        0,
        description="Attack value after dice and passive bonuses.",
    )
    defense_value: int = Field(
        0,
        description="Defense value after dice and passive bonuses.",
    )
    special_faces: list[DieFace] = Field(
        default_factory=list,
        description="The rolled faces of the dice in the Special slot.",
    )
    round: int = Field(
        1,
        description="The current round.",
    )
    symbol_multiplier: int = Field(
        1,
        description="How many times each symbol counts.",
    )

    def symbol_count(self, *symbols: str) -> int:
        """Counts the special faces showing any of the given symbols."""
        count = sum(1 for face in self.special_faces if face.symbol in symbols)
        return count * self.symbol_multiplier

    def has_symbol(self, symbol: str) -> bool:
        return any(face.symbol == symbol for face in self.special_faces)

    def face_count(self, kind: FaceKind) -> int:
        """Counts the special faces of the given kind."""
        return sum(1 for face in self.special_faces if face.kind == kind)


class AbilityOutcome(BaseModel):
    """
    What a passive or special did.

    Side effects on the player (self damage, healing, counters, self effects)
    are already applied when the outcome is returned; the fields here are the
    parts the turn engine folds into the turn.
    """

    bonus_damage: int = Field(
        0,
        description="Damage added to the attack value.",
    )
    set_damage: int | None = Field(
        None,
        description="Replaces the attack value when set.",
    )
    bonus_defense: int = Field(
        0,
        description="Defense added to the defense value.",
    )
    is_guaranteed_crit: bool = Field(
        False,
        description="Forces the critical strike multiplier.",
    )
    success: bool = Field(
        False,
        description="Whether a special activated. Passives leave it False.",
    )
    message: str | None = Field(
        None,
        description="Narration of the outcome.",
    )
    apply_effect_to_enemy: ValidEffect | None = Field(
        None,
        description="Effect attached to the enemy.",
    )
    skip_enemy_turn: bool = Field(
        False,
        description="Whether the enemy loses its action this turn.",
    )


class ClassAbility(ABC):
    """Interface of the passive and special of one character class."""

    class_name: ClassName

    @abstractmethod
    def apply_passive(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        """
        Evaluates the passive for the turn.

        Args:
            player (Player):
                The player, mutated in place for self effects.
            context (AbilityContext):
                The turn values.
            rng (random.Random):
                The random source.

        Returns:
            AbilityOutcome:
                The bonuses to fold into the turn.

        """

    @abstractmethod
    def try_activate_special(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        """
        Attempts the special; returns an unsuccessful empty outcome when the
        activation condition is not met.
        """


def failed() -> AbilityOutcome:
    """The outcome of a special whose condition is not met."""
    return AbilityOutcome(success=False)
