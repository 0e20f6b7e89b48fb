"""
Tests for the ability resolver.
"""

import random

import pytest

from dicetactician.abilities.base_ability import AbilityContext
from dicetactician.abilities.resolver import (
    ABILITY_REGISTRY,
    apply_passive,
    build_context,
    try_activate_special,
)
from dicetactician.character.player import Player
from dicetactician.core.constants import ClassName, FaceKind
from dicetactician.dice.dice import DieFace
from dicetactician.effects.dice_effect import (
    AbilityAmplifierEffect,
    MagicAmplifierEffect,
    SymbolMultiplierEffect,
)


@pytest.fixture
def pyromantic(content):
    character_class = content.get_class(ClassName.PYROMANTIC)
    return Player.create(ClassName.PYROMANTIC, character_class.build_dice_set())


def test_every_class_has_an_ability():
    assert set(ABILITY_REGISTRY) == set(ClassName)


def test_special_needs_special_dice(pyromantic):
    """
    Test that no special fires without dice in the Special slot.
    """
    pyromantic.set_counter("flame_stacks", 10)
    outcome = try_activate_special(pyromantic, AbilityContext(), random.Random(0))
    assert not outcome.success


def test_symbol_multiplier_doubles_symbols(pyromantic):
    """
    Test that the symbol multiplier makes two flames count as four.
    """
    pyromantic.add_effect(SymbolMultiplierEffect(name="Twin Rune"))
    flames = [DieFace(kind=FaceKind.SPECIAL, symbol="flame")] * 2
    context = build_context(pyromantic, special_faces=flames)
    assert context.symbol_count("flame") == 4
    assert try_activate_special(pyromantic, context, random.Random(0)).success


def test_magic_amplifier_adds_damage(pyromantic):
    pyromantic.add_effect(MagicAmplifierEffect(name="Magic Amplifier", magic_bonus=5))
    magic = [DieFace(kind=FaceKind.MAGIC), DieFace(kind=FaceKind.MAGIC)]
    outcome = apply_passive(pyromantic, build_context(pyromantic, special_faces=magic), random.Random(0))
    assert outcome.bonus_damage == 10
    assert outcome.message == "🔮 Magic Amplifier: +10 damage!"


def test_ability_amplifier_scales_special_damage(pyromantic):
    """
    Test that a successful special has its damage scaled and floored.
    """
    pyromantic.add_effect(AbilityAmplifierEffect(name="Focus", ability_bonus=0.3))
    flames = [DieFace(kind=FaceKind.SPECIAL, symbol="flame")] * 3
    outcome = try_activate_special(
        pyromantic, build_context(pyromantic, special_faces=flames), random.Random(0)
    )
    assert outcome.bonus_damage == 52
