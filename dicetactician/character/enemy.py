"""
Enemy module for the engine.

Defines the enemy combatant: archetype, category, scaled attack, flat
defense and the counters its behaviour reads.
"""

from typing import Any

from pydantic import Field

from dicetactician.combat.enemy_ai import BasicBehaviour, ValidBehaviour
from dicetactician.core.constants import EnemyCategory

from .actor import Actor


class Enemy(Actor):
    """
    An enemy spawned for one round.

    Unlike the player, an enemy mitigates incoming damage itself: its flat
    defense is subtracted inside take_damage.
    """

    archetype_name: str = Field(
        description="The name of the enemy template, e.g. 'Goblin'.",
    )
    category: EnemyCategory = Field(
        description="Minion, elite or boss.",
    )
    base_attack: int = Field(
        description="Unscaled attack of the archetype.",
    )
    attack: int = Field(
        description="Attack scaled to the round the enemy spawned in.",
    )
    defense: int = Field(
        0,
        description="Flat damage reduction applied to every hit.",
    )
    turn_counter: int = Field(
        0,
        description="Number of actions the enemy has taken.",
    )
    charge_counter: int = Field(
        0,
        description="Turns spent charging a big attack.",
    )
    phase: int = Field(
        1,
        description="Current behaviour phase for multi-phase bosses.",
    )
    has_revived: bool = Field(
        False,
        description="Whether the one-time revive was used.",
    )
    has_healed: bool = Field(
        False,
        description="Whether the one-time desperate heal was used.",
    )
    gold_reward: int = Field(
        0,
        description="Gold awarded when the enemy is defeated.",
    )
    behaviour: ValidBehaviour = Field(
        default_factory=BasicBehaviour,
        description="The decision function of the enemy.",
    )

    def model_post_init(self, _: Any) -> None:
        super().model_post_init(_)
        if self.defense < 0:
            raise ValueError(f"Defense of '{self.name}' must be non-negative.")
        if self.gold_reward <= 0:
            self.gold_reward = self.category.gold_reward

    @property
    def colored_name(self) -> str:
        return self.category.colorize(self.name)

    def take_damage(self, amount: int) -> int:
        """
        Applies damage after subtracting the flat defense.

        Args:
            amount (int):
                The raw incoming damage.

        Returns:
            int:
                The damage actually applied.

        """
        return super().take_damage(max(0, amount - self.defense))
