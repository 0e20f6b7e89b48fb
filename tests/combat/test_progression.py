"""
Tests for enemy scaling and spawning.
"""

import random

import pytest

from dicetactician.combat.progression import (
    create_enemy,
    scale_stats,
    select_category,
    spawn_enemy,
)
from dicetactician.core.constants import EnemyCategory


@pytest.mark.parametrize(
    "round_number, expected",
    [(1, (34, 9)), (3, (43, 11)), (10, (75, 20))],
)
def test_scale_stats(round_number, expected):
    """
    Test that stats grow by 15% per round and are floored.
    """
    assert scale_stats(30, 8, round_number) == expected


@pytest.mark.parametrize(
    "round_number, category",
    [
        (1, EnemyCategory.MINION),
        (4, EnemyCategory.MINION),
        (5, EnemyCategory.ELITE),
        (10, EnemyCategory.BOSS),
        (15, EnemyCategory.ELITE),
        (20, EnemyCategory.BOSS),
    ],
)
def test_select_category(round_number, category):
    assert select_category(round_number) == category


def test_create_enemy(content):
    """
    Test that a created enemy is scaled, at full health, with its own behaviour copy.
    """
    template = content.get_enemy("Goblin")
    enemy = create_enemy(template, 1)
    assert enemy.name == "Goblin"
    assert enemy.hp == enemy.max_hp == 34
    assert enemy.attack == 9
    assert enemy.base_attack == 8
    assert enemy.turn_counter == 0
    assert enemy.behaviour is not template.behaviour


def test_spawn_enemy_matches_round_category(content):
    rng = random.Random(8)
    roster = content.get_roster()
    for round_number in range(1, 21):
        enemy = spawn_enemy(round_number, roster, rng)
        assert enemy.category == select_category(round_number)


def test_spawn_enemy_without_templates():
    with pytest.raises(ValueError):
        spawn_enemy(5, {EnemyCategory.MINION: []}, random.Random(0))
