"""
Economy effect module for the engine.

Defines effects that change how much gold the owner earns and spends.
"""

from typing import Literal

from pydantic import Field

from .base_effect import Effect


class GoldMultiplierEffect(Effect):
    """Multiplies the gold awarded for defeated enemies."""

    effect_type: Literal["GoldMultiplierEffect"] = "GoldMultiplierEffect"

    gold_multiplier: float = Field(
        description="Multiplier applied to enemy gold rewards.",
    )

    @property
    def color(self) -> str:
        return "bold yellow"

    @property
    def emoji(self) -> str:
        return "🧲"


class PriceMultiplierEffect(Effect):
    """Multiplies the price of every merchant item."""

    effect_type: Literal["PriceMultiplierEffect"] = "PriceMultiplierEffect"

    price_multiplier: float = Field(
        description="Multiplier applied to item costs.",
    )

    @property
    def color(self) -> str:
        return "yellow"

    @property
    def emoji(self) -> str:
        return "🏷️"
