"""
Factory module for creating and serializing Effect instances.

Holds the closed union of every effect variant, the dictionary
conversions built on top of it, and named constructors for the effects
the engine creates itself (burn, poison, frozen and the class buffs).
"""

from typing import Annotated, Any

from pydantic import Field, TypeAdapter

from dicetactician.core.constants import ENEMY_DOT_DURATION

from .damage_over_time_effect import DamageOverTimeEffect
from .defensive_effect import (
    AbsorbShieldEffect,
    DamageBlockEffect,
    DodgeEffect,
    ImmunityEffect,
    ReflectEffect,
    ReviveEffect,
)
from .dice_effect import (
    AbilityAmplifierEffect,
    DiceBonusEffect,
    LoadedDiceEffect,
    MagicAmplifierEffect,
    SymbolChanceEffect,
    SymbolMultiplierEffect,
)
from .economy_effect import GoldMultiplierEffect, PriceMultiplierEffect
from .healing_over_time_effect import HealingOverTimeEffect
from .modifier_effect import AttackReductionEffect, StatModifierEffect
from .trigger_effect import (
    CombatBlessingEffect,
    ExtraActionEffect,
    GuaranteedCritEffect,
    LifeOnHitEffect,
    PoisonOnHitEffect,
)

ValidEffect = Annotated[
    StatModifierEffect
    | DamageOverTimeEffect
    | HealingOverTimeEffect
    | AttackReductionEffect
    | DamageBlockEffect
    | DodgeEffect
    | ReflectEffect
    | AbsorbShieldEffect
    | ReviveEffect
    | ImmunityEffect
    | GoldMultiplierEffect
    | PriceMultiplierEffect
    | LifeOnHitEffect
    | PoisonOnHitEffect
    | DiceBonusEffect
    | LoadedDiceEffect
    | SymbolChanceEffect
    | SymbolMultiplierEffect
    | MagicAmplifierEffect
    | AbilityAmplifierEffect
    | GuaranteedCritEffect
    | ExtraActionEffect
    | CombatBlessingEffect,
    Field(discriminator="effect_type"),
]

_EFFECT_ADAPTER: TypeAdapter = TypeAdapter(ValidEffect)

# Names the engine looks effects up by.
BURN = "Burn"
POISON = "Poison"
FROZEN = "Frozen"
REGENERATION = "Regeneration"
STONEFORM = "Stoneform"
HASTE = "Haste"
SPIRIT_GUARDIAN = "Spirit Guardian"
DIVINE_SHIELD = "Divine Shield"
CHAOS_BOON = "Chaos Boon"


class EffectFactory:
    """Factory class for creating Effect instances from dictionaries."""

    @staticmethod
    def from_dict(data: dict[str, Any]) -> Any:
        """
        Creates an Effect instance from a dictionary representation.

        Args:
            data (dict[str, Any]): The dictionary representation of the effect,
                carrying its `effect_type` tag.

        Returns:
            Effect: An instance of the matching Effect subclass.

        Raises:
            ValueError: If the effect type is unknown or a field is invalid.

        """
        assert data is not None, "Data must not be None."
        return _EFFECT_ADAPTER.validate_python(data)

    @staticmethod
    def to_dict(effect: Any) -> dict[str, Any]:
        """Converts an Effect instance to its dictionary representation."""
        return _EFFECT_ADAPTER.dump_python(effect, mode="json")


def burn(damage_per_turn: int, duration: int = ENEMY_DOT_DURATION) -> DamageOverTimeEffect:
    return DamageOverTimeEffect(
        name=BURN,
        description=f"Takes {damage_per_turn} fire damage each turn.",
        duration=duration,
        damage_per_turn=damage_per_turn,
    )


def poison(damage_per_turn: int, duration: int = ENEMY_DOT_DURATION) -> DamageOverTimeEffect:
    return DamageOverTimeEffect(
        name=POISON,
        description=f"Takes {damage_per_turn} poison damage each turn.",
        duration=duration,
        damage_per_turn=damage_per_turn,
    )


def frozen(attack_reduction: float = 0.5, duration: int = 2) -> AttackReductionEffect:
    return AttackReductionEffect(
        name=FROZEN,
        description=f"Attacks deal {int(attack_reduction * 100)}% less damage.",
        duration=duration,
        attack_reduction=attack_reduction,
    )


def regeneration(heal_per_turn: int, duration: int | None = None) -> HealingOverTimeEffect:
    return HealingOverTimeEffect(
        name=REGENERATION,
        description=f"Restores {heal_per_turn} HP each turn.",
        duration=duration,
        heal_per_turn=heal_per_turn,
    )


def stat_buff(
    name: str, attack: int, defense: int, duration: int | None
) -> StatModifierEffect:
    parts = []
    if attack:
        parts.append(f"{attack:+d} attack")
    if defense:
        parts.append(f"{defense:+d} defense")
    return StatModifierEffect(
        name=name,
        description=", ".join(parts),
        duration=duration,
        attack=attack,
        defense=defense,
    )


def divine_shield(absorb: int = 30) -> AbsorbShieldEffect:
    return AbsorbShieldEffect(
        name=DIVINE_SHIELD,
        description=f"Absorbs up to {absorb} damage.",
        absorb=absorb,
    )
