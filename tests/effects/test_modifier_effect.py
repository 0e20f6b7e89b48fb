"""
Tests for modifier effects in the effects system.
"""

import pytest

from dicetactician.character.actor import Actor
from dicetactician.effects.effect_factory import FROZEN, STONEFORM, frozen, stat_buff
from dicetactician.effects.modifier_effect import (
    AttackReductionEffect,
    StatModifierEffect,
)


@pytest.fixture
def actor():
    return Actor(name="Hero", hp=100, max_hp=100)


def test_stat_modifier_contributes_to_bonuses(actor):
    """
    Test that stat modifiers add to the owner's attack and defense bonuses.
    """
    actor.add_effect(stat_buff("Haste", 10, 10, 2))
    actor.add_effect(stat_buff(STONEFORM, 0, 25, 1))
    assert actor.effects_attack_bonus() == 10
    assert actor.effects_defense_bonus() == 35


def test_stat_modifier_description():
    assert stat_buff("Spirit Guardian", 8, 15, 2).description == "+8 attack, +15 defense"
    assert stat_buff(STONEFORM, 0, 25, 1).description == "+25 defense"


def test_stat_modifier_expires(actor):
    """
    Test that a one-round buff stops contributing after a single tick.
    """
    actor.add_effect(stat_buff(STONEFORM, 0, 25, 1))
    actor.tick_effects()
    assert actor.effects_defense_bonus() == 0
    assert not actor.has_effect(STONEFORM)


def test_permanent_stat_modifier(actor):
    """
    Test that a modifier without duration survives ticks.
    """
    actor.add_effect(StatModifierEffect(name="Sharpened", attack=2))
    for _ in range(5):
        actor.tick_effects()
    assert actor.effects_attack_bonus() == 2


def test_attack_reduction_bounds():
    """
    Test that the attack reduction must be a fraction.
    """
    with pytest.raises(ValueError):
        AttackReductionEffect(name=FROZEN, duration=1, attack_reduction=1.5)
    with pytest.raises(ValueError):
        AttackReductionEffect(name=FROZEN, duration=1, attack_reduction=-0.1)


def test_frozen_defaults():
    effect = frozen()
    assert effect.name == FROZEN
    assert effect.attack_reduction == 0.5
    assert effect.duration == 2
    assert effect.attack_contribution() == 0
