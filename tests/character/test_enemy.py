"""
Tests for enemies.
"""

import pytest

from dicetactician.character.enemy import Enemy
from dicetactician.core.constants import EnemyCategory


@pytest.fixture
def crab():
    return Enemy(
        name="Giant Crab",
        hp=30,
        max_hp=30,
        archetype_name="Giant Crab",
        category=EnemyCategory.MINION,
        base_attack=8,
        attack=9,
        defense=3,
    )


def test_defense_reduces_damage(crab):
    """
    Test that the flat defense is subtracted from every hit.
    """
    assert crab.take_damage(10) == 7
    assert crab.hp == 23


def test_defense_never_heals(crab):
    """
    Test that a hit weaker than the defense deals no damage.
    """
    assert crab.take_damage(2) == 0
    assert crab.hp == 30


def test_gold_reward_defaults_to_category(crab):
    assert crab.gold_reward == 10
    boss = Enemy(
        name="Void Lord",
        hp=100,
        max_hp=100,
        archetype_name="Void Lord",
        category=EnemyCategory.BOSS,
        base_attack=26,
        attack=30,
    )
    assert boss.gold_reward == 50
    assert boss.behaviour.kind == "basic"


def test_negative_defense_is_rejected():
    with pytest.raises(ValueError):
        Enemy(
            name="Glass",
            hp=10,
            max_hp=10,
            archetype_name="Glass",
            category=EnemyCategory.MINION,
            base_attack=1,
            attack=1,
            defense=-1,
        )
