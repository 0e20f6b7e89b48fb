"""
Enemy AI module for the engine.

Enemy archetypes are data: each one carries a behaviour variant, tagged by
`kind`, that decides the next action from the enemy's counters and HP.
"""

import copy
import random
from typing import TYPE_CHECKING, Annotated, Any, Literal

from pydantic import BaseModel, Field

from dicetactician.core.constants import EnemyActionType
from dicetactician.core.logging import log_debug
from dicetactician.core.utils import floor_int
from dicetactician.effects.modifier_effect import AttackReductionEffect

if TYPE_CHECKING:
    from dicetactician.character.enemy import Enemy

# =============================================================================
# Actions
# =============================================================================


class EnemyAction(BaseModel):
    """What the enemy does on its turn."""

    type: EnemyActionType = Field(
        description="The kind of action.",
    )
    value: int = Field(
        0,
        description="Damage for attacks, HP for heals.",
    )
    message: str | None = Field(
        None,
        description="Flavor text of the action.",
    )
    poison: int = Field(
        0,
        description="Per-turn poison applied to the player on an attack.",
    )
    burn: int = Field(
        0,
        description="Per-turn burn applied to the player on an attack.",
    )
    life_steal: float = Field(
        0.0,
        description="Fraction of the attack value the enemy heals.",
    )


class AttackPattern(BaseModel):
    """A parametrized attack: a multiplier on the enemy attack plus payloads."""

    multiplier: float = Field(
        1.0,
        description="Multiplier applied to the enemy attack.",
    )
    message: str | None = Field(
        None,
        description="Flavor text of the attack.",
    )
    poison: int = Field(
        0,
        description="Per-turn poison applied on hit.",
    )
    burn: int = Field(
        0,
        description="Per-turn burn applied on hit.",
    )
    life_steal: float = Field(
        0.0,
        description="Fraction of the attack value the enemy heals.",
    )

    def to_action(self, enemy: "Enemy", bonus: int = 0, message: str | None = None) -> EnemyAction:
        return EnemyAction(
            type=EnemyActionType.ATTACK,
            value=max(0, floor_int(enemy.attack * self.multiplier) + bonus),
            message=message if message is not None else self.message,
            poison=self.poison,
            burn=self.burn,
            life_steal=self.life_steal,
        )


# =============================================================================
# Behaviours
# =============================================================================


class BasicBehaviour(BaseModel):
    """Always performs the same attack."""

    kind: Literal["basic"] = "basic"

    attack: AttackPattern = Field(
        default_factory=AttackPattern,
        description="The attack performed every turn.",
    )

    def decide(self, enemy: "Enemy", rng: random.Random) -> EnemyAction:
        return self.attack.to_action(enemy)


class PeriodicBehaviour(BaseModel):
    """Every N-th turn performs a special attack, otherwise the default one."""

    kind: Literal["periodic"] = "periodic"

    period: int = Field(
        description="The special attack happens when turn_counter % period == 0.",
    )
    special: AttackPattern = Field(
        description="The periodic attack.",
    )
    default: AttackPattern = Field(
        default_factory=AttackPattern,
        description="The attack of the other turns.",
    )

    def decide(self, enemy: "Enemy", rng: random.Random) -> EnemyAction:
        if enemy.turn_counter % self.period == 0:
            return self.special.to_action(enemy)
        return self.default.to_action(enemy)


class PeriodicActionBehaviour(BaseModel):
    """Every N-th turn heals or defends instead of attacking."""

    kind: Literal["periodic_action"] = "periodic_action"

    period: int = Field(
        description="The action happens when turn_counter % period == 0.",
    )
    action: EnemyActionType = Field(
        description="The non-attack action, heal or defend.",
    )
    value: int = Field(
        description="HP healed, or the nominal value of the defend action.",
    )
    message: str | None = Field(
        None,
        description="Flavor text of the action.",
    )
    default: AttackPattern = Field(
        default_factory=AttackPattern,
        description="The attack of the other turns.",
    )

    def model_post_init(self, _: Any) -> None:
        if self.action not in (EnemyActionType.HEAL, EnemyActionType.DEFEND):
            raise ValueError(f"Periodic action must be heal or defend, got {self.action}.")

    def decide(self, enemy: "Enemy", rng: random.Random) -> EnemyAction:
        if enemy.turn_counter % self.period == 0:
            return EnemyAction(type=self.action, value=self.value, message=self.message)
        return self.default.to_action(enemy)


class ChargeBehaviour(BaseModel):
    """Builds a charge counter every turn and releases a big attack when full."""

    kind: Literal["charge"] = "charge"

    charge_turns: int = Field(
        description="Turns needed to release the charged attack.",
    )
    release: AttackPattern = Field(
        description="The charged attack.",
    )
    charging: AttackPattern = Field(
        default_factory=AttackPattern,
        description="The attack performed while charging.",
    )

    def decide(self, enemy: "Enemy", rng: random.Random) -> EnemyAction:
        enemy.charge_counter += 1
        if enemy.charge_counter >= self.charge_turns:
            enemy.charge_counter = 0
            return self.release.to_action(enemy)
        return self.charging.to_action(enemy)


class RageBehaviour(BaseModel):
    """Adds a fraction of its attack as bonus once below an HP threshold."""

    kind: Literal["rage"] = "rage"

    hp_threshold: float = Field(
        0.5,
        description="HP fraction below which the rage bonus applies.",
    )
    bonus_fraction: float = Field(
        0.5,
        description="Fraction of the attack added as bonus.",
    )

    def decide(self, enemy: "Enemy", rng: random.Random) -> EnemyAction:
        bonus = 0
        if enemy.hp_percentage() < self.hp_threshold:
            bonus = floor_int(enemy.attack * self.bonus_fraction)
        return AttackPattern().to_action(enemy, bonus=bonus)


class VarianceBehaviour(BaseModel):
    """Attacks with a random offset drawn uniformly in [low, high]."""

    kind: Literal["variance"] = "variance"

    low: int = Field(
        -3,
        description="Lowest offset added to the attack.",
    )
    high: int = Field(
        2,
        description="Highest offset added to the attack.",
    )

    def decide(self, enemy: "Enemy", rng: random.Random) -> EnemyAction:
        return AttackPattern().to_action(enemy, bonus=rng.randint(self.low, self.high))


class DesperateHealBehaviour(BaseModel):
    """Heals once when HP drops below a threshold, otherwise attacks."""

    kind: Literal["desperate_heal"] = "desperate_heal"

    hp_threshold: float = Field(
        0.3,
        description="HP fraction below which the heal triggers.",
    )
    heal: int = Field(
        10,
        description="HP restored by the one-time heal.",
    )
    message: str | None = Field(
        None,
        description="Flavor text of the heal.",
    )
    default: AttackPattern = Field(
        default_factory=AttackPattern,
        description="The attack of the other turns.",
    )

    def decide(self, enemy: "Enemy", rng: random.Random) -> EnemyAction:
        if enemy.hp_percentage() < self.hp_threshold and not enemy.has_healed:
            enemy.has_healed = True
            return EnemyAction(type=EnemyActionType.HEAL, value=self.heal, message=self.message)
        return self.default.to_action(enemy)


class ReviveBehaviour(BaseModel):
    """Comes back once with a fraction of its HP when defeated."""

    kind: Literal["revive"] = "revive"

    revive_fraction: float = Field(
        0.5,
        description="Fraction of max HP restored by the revive.",
    )
    message: str = Field(
        "rises from the ashes!",
        description="Flavor text of the revive.",
    )
    default: AttackPattern = Field(
        default_factory=AttackPattern,
        description="The attack performed every turn.",
    )

    def can_revive(self, enemy: "Enemy") -> bool:
        return enemy.hp <= 0 and not enemy.has_revived

    def revive(self, enemy: "Enemy") -> EnemyAction:
        enemy.has_revived = True
        enemy.hp = max(1, floor_int(enemy.max_hp * self.revive_fraction))
        return EnemyAction(
            type=EnemyActionType.REVIVE,
            value=enemy.hp,
            message=f"{enemy.name} {self.message}",
        )

    def decide(self, enemy: "Enemy", rng: random.Random) -> EnemyAction:
        if self.can_revive(enemy):
            return self.revive(enemy)
        return self.default.to_action(enemy)


class PhaseBehaviour(BaseModel):
    """
    Switches to a harder pattern below an HP threshold.

    With `once` set, crossing the threshold fires the phase attack a single
    time and moves the enemy to phase 2 for good; otherwise the phase attack
    is used on every turn spent below the threshold.
    """

    kind: Literal["phase"] = "phase"

    hp_threshold: float = Field(
        description="HP fraction below which the phase attack fires.",
    )
    once: bool = Field(
        True,
        description="Whether the phase attack fires only on the transition.",
    )
    phase_attack: AttackPattern = Field(
        description="The attack fired by the phase trigger.",
    )
    period: int = Field(
        0,
        description="Period of the special attack, 0 to disable it.",
    )
    special: AttackPattern = Field(
        default_factory=AttackPattern,
        description="The periodic attack.",
    )
    default: AttackPattern = Field(
        default_factory=AttackPattern,
        description="The attack of the other turns.",
    )

    def decide(self, enemy: "Enemy", rng: random.Random) -> EnemyAction:
        if enemy.hp_percentage() < self.hp_threshold:
            if not self.once:
                return self.phase_attack.to_action(enemy)
            if enemy.phase == 1:
                enemy.phase = 2
                return self.phase_attack.to_action(enemy)
        if self.period and enemy.turn_counter % self.period == 0:
            return self.special.to_action(enemy)
        return self.default.to_action(enemy)


class RotationBehaviour(BaseModel):
    """Cycles through a list of named spells, one per turn."""

    kind: Literal["rotation"] = "rotation"

    spells: list[str] = Field(
        description="The names of the spells, indexed by turn_counter.",
    )
    attack: AttackPattern = Field(
        default_factory=AttackPattern,
        description="The attack shared by every spell.",
    )

    def decide(self, enemy: "Enemy", rng: random.Random) -> EnemyAction:
        spell = self.spells[enemy.turn_counter % len(self.spells)]
        return self.attack.to_action(enemy, message=f"{spell}!")


ValidBehaviour = Annotated[
    BasicBehaviour
    | PeriodicBehaviour
    | PeriodicActionBehaviour
    | ChargeBehaviour
    | RageBehaviour
    | VarianceBehaviour
    | DesperateHealBehaviour
    | ReviveBehaviour
    | PhaseBehaviour
    | RotationBehaviour,
    Field(discriminator="kind"),
]

# =============================================================================
# Action execution
# =============================================================================


def apply_frozen(enemy: "Enemy", action: EnemyAction) -> EnemyAction:
    """
    Scales an attack action down by the enemy's attack reduction, if any.

    Args:
        enemy (Enemy): The acting enemy.
        action (EnemyAction): The action returned by the behaviour.

    Returns:
        EnemyAction: The mitigated action.

    """
    if action.type != EnemyActionType.ATTACK:
        return action
    reduction = enemy.get_effect_of_type(AttackReductionEffect)
    if reduction is None:
        return action
    action.value = floor_int(action.value * (1 - reduction.attack_reduction))
    return action


def execute_enemy_action(enemy: "Enemy", rng: random.Random) -> EnemyAction:
    """
    Advances the enemy by one action.

    The turn counter is incremented exactly once before the behaviour
    decides, whatever action is chosen.

    Args:
        enemy (Enemy): The acting enemy.
        rng (random.Random): The random source.

    Returns:
        EnemyAction: The action to resolve, after mitigation.

    """
    enemy.turn_counter += 1
    action = apply_frozen(enemy, enemy.behaviour.decide(enemy, rng))
    log_debug(
        f"{enemy.name} decides {action.type.display_name}",
        {"turn": enemy.turn_counter, "value": action.value},
    )
    return action


def preview_next_action(enemy: "Enemy", rng: random.Random) -> EnemyAction:
    """Computes the next action on copies, leaving enemy and random source untouched."""
    return execute_enemy_action(copy.deepcopy(enemy), copy.deepcopy(rng))


def try_revive(enemy: "Enemy") -> EnemyAction | None:
    """
    Gives a defeated enemy the chance to use its one-time revive.

    Returns:
        EnemyAction | None: The revive action, or None if the enemy stays down.

    """
    behaviour = enemy.behaviour
    if isinstance(behaviour, ReviveBehaviour) and behaviour.can_revive(enemy):
        return behaviour.revive(enemy)
    return None
