"""
Progression module for the engine.

Defines enemy templates, the per-round scaling formula, the category
selection by round and the spawning of a scaled enemy.
"""

import random

from pydantic import BaseModel, Field

from dicetactician.character.enemy import Enemy
from dicetactician.core.constants import (
    BOSS_ROUND_INTERVAL,
    ELITE_ROUND_INTERVAL,
    ENEMY_SCALING_PER_ROUND,
    EnemyCategory,
)
from dicetactician.core.logging import log_debug
from dicetactician.core.utils import floor_int

from .enemy_ai import BasicBehaviour, ValidBehaviour


class EnemyTemplate(BaseModel):
    """An enemy archetype as described by the catalog."""

    name: str = Field(
        description="The archetype name, e.g. 'Goblin'.",
    )
    category: EnemyCategory = Field(
        description="Minion, elite or boss.",
    )
    base_hp: int = Field(
        description="HP before round scaling.",
        gt=0,
    )
    base_attack: int = Field(
        description="Attack before round scaling.",
        ge=0,
    )
    defense: int = Field(
        0,
        description="Flat damage reduction, not scaled.",
        ge=0,
    )
    behaviour: ValidBehaviour = Field(
        default_factory=BasicBehaviour,
        description="The decision function of the archetype.",
    )


def scale_stats(base_hp: int, base_attack: int, round_number: int) -> tuple[int, int]:
    """
    Scales the base stats of an archetype to a round.

    Args:
        base_hp (int): Base HP of the archetype.
        base_attack (int): Base attack of the archetype.
        round_number (int): The round the enemy spawns in.

    Returns:
        tuple[int, int]: The scaled (hp, attack), both floored.

    """
    multiplier = 1 + round_number * ENEMY_SCALING_PER_ROUND
    return floor_int(base_hp * multiplier), floor_int(base_attack * multiplier)


def select_category(round_number: int) -> EnemyCategory:
    """Returns the category of the enemy fought in the given round."""
    if round_number > 0 and round_number % BOSS_ROUND_INTERVAL == 0:
        return EnemyCategory.BOSS
    if round_number > 0 and round_number % ELITE_ROUND_INTERVAL == 0:
        return EnemyCategory.ELITE
    return EnemyCategory.MINION


def create_enemy(template: EnemyTemplate, round_number: int) -> Enemy:
    """Builds an enemy from a template, scaled to the round."""
    hp, attack = scale_stats(template.base_hp, template.base_attack, round_number)
    return Enemy(
        name=template.name,
        hp=hp,
        max_hp=hp,
        archetype_name=template.name,
        category=template.category,
        base_attack=template.base_attack,
        attack=attack,
        defense=template.defense,
        behaviour=template.behaviour.model_copy(deep=True),
    )


def spawn_enemy(
    round_number: int,
    roster: dict[EnemyCategory, list[EnemyTemplate]],
    rng: random.Random,
) -> Enemy:
    """
    Spawns the enemy for a round.

    Args:
        round_number (int):
            The round the enemy spawns in.
        roster (dict[EnemyCategory, list[EnemyTemplate]]):
            The available archetypes, per category.
        rng (random.Random):
            The random source.

    Returns:
        Enemy:
            An archetype of the round's category, chosen uniformly.

    Raises:
        ValueError: If the roster has no archetype for the category.

    """
    category = select_category(round_number)
    templates = roster.get(category)
    if not templates:
        raise ValueError(f"No enemy templates for category {category}.")
    enemy = create_enemy(rng.choice(templates), round_number)
    log_debug(
        f"Spawned {enemy.name}",
        {"round": round_number, "category": category, "hp": enemy.hp, "attack": enemy.attack},
    )
    return enemy
