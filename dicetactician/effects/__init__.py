"""
Effects system module for the engine.

This module contains all status effects: stat modifiers, damage and
healing over time, defensive interceptors, dice and ability amplifiers,
economy modifiers and event triggers.
"""

# Import base classes
from .base_effect import Effect, EffectTick

# Import modifier-based effects
from .modifier_effect import AttackReductionEffect, StatModifierEffect

# Import damage effects
from .damage_over_time_effect import DamageOverTimeEffect

# Import healing effects
from .healing_over_time_effect import HealingOverTimeEffect

# Import defensive effects
from .defensive_effect import (
    AbsorbShieldEffect,
    DamageBlockEffect,
    DodgeEffect,
    ImmunityEffect,
    ReflectEffect,
    ReviveEffect,
)

# Import dice and ability effects
from .dice_effect import (
    AbilityAmplifierEffect,
    DiceBonusEffect,
    LoadedDiceEffect,
    MagicAmplifierEffect,
    SymbolChanceEffect,
    SymbolMultiplierEffect,
)

# Import economy effects
from .economy_effect import GoldMultiplierEffect, PriceMultiplierEffect

# Import trigger effects
from .trigger_effect import (
    CombatBlessingEffect,
    ExtraActionEffect,
    GuaranteedCritEffect,
    LifeOnHitEffect,
    PoisonOnHitEffect,
)

# Import the factory and the closed union.
from .effect_factory import EffectFactory, ValidEffect

__all__ = [
    # Base classes
    "Effect",
    "EffectTick",
    # Modifier-based effects
    "StatModifierEffect",
    "AttackReductionEffect",
    # Damage effects
    "DamageOverTimeEffect",
    # Healing effects
    "HealingOverTimeEffect",
    # Defensive effects
    "AbsorbShieldEffect",
    "DamageBlockEffect",
    "DodgeEffect",
    "ImmunityEffect",
    "ReflectEffect",
    "ReviveEffect",
    # Dice and ability effects
    "AbilityAmplifierEffect",
    "DiceBonusEffect",
    "LoadedDiceEffect",
    "MagicAmplifierEffect",
    "SymbolChanceEffect",
    "SymbolMultiplierEffect",
    # Economy effects
    "GoldMultiplierEffect",
    "PriceMultiplierEffect",
    # Trigger effects
    "CombatBlessingEffect",
    "ExtraActionEffect",
    "GuaranteedCritEffect",
    "LifeOnHitEffect",
    "PoisonOnHitEffect",
    # Factory
    "EffectFactory",
    "ValidEffect",
]
