"""
Dice effect module for the engine.

Defines effects that alter how dice roll or how much their faces are
worth, and the amplifiers of the class abilities fed by the Special slot.
"""

from typing import Literal

from pydantic import Field

from .base_effect import Effect


class DiceBonusEffect(Effect):
    """Adds a flat bonus to every numeric face read from the Attack or Defense slot."""

    effect_type: Literal["DiceBonusEffect"] = "DiceBonusEffect"

    dice_bonus: int = Field(
        description="Bonus added to attack and defense face values.",
    )

    @property
    def emoji(self) -> str:
        return "🍀"


class LoadedDiceEffect(Effect):
    """The first roll of each round lands every die on its highest face."""

    effect_type: Literal["LoadedDiceEffect"] = "LoadedDiceEffect"

    @property
    def emoji(self) -> str:
        return "🎲"


class SymbolChanceEffect(Effect):
    """Chance for a die that rolled a plain face to land on a symbol instead."""

    effect_type: Literal["SymbolChanceEffect"] = "SymbolChanceEffect"

    symbol_chance: float = Field(
        description="Probability in [0, 1] of turning a plain roll into a symbol.",
    )

    @property
    def emoji(self) -> str:
        return "🔣"


class SymbolMultiplierEffect(Effect):
    """Every symbol in the Special slot counts this many times."""

    effect_type: Literal["SymbolMultiplierEffect"] = "SymbolMultiplierEffect"

    symbol_multiplier: int = Field(
        2,
        description="How many times each symbol counts.",
    )

    @property
    def emoji(self) -> str:
        return "♊"


class MagicAmplifierEffect(Effect):
    """Extra damage for every magic face placed in the Special slot."""

    effect_type: Literal["MagicAmplifierEffect"] = "MagicAmplifierEffect"

    magic_bonus: int = Field(
        description="Damage added per magic face.",
    )

    @property
    def color(self) -> str:
        return "bold magenta"

    @property
    def emoji(self) -> str:
        return "🔮"


class AbilityAmplifierEffect(Effect):
    """Scales the damage of successful class specials."""

    effect_type: Literal["AbilityAmplifierEffect"] = "AbilityAmplifierEffect"

    ability_bonus: float = Field(
        description="Fractional increase applied to special damage.",
    )

    @property
    def color(self) -> str:
        return "bold cyan"

    @property
    def emoji(self) -> str:
        return "🧠"
