"""
Ability resolver for the engine.

Dispatches passives and specials to the ClassAbility registered for the
player's class, and folds in the item amplifiers that act on abilities.
"""

import random

from dicetactician.character.player import Player
from dicetactician.core.constants import ClassName, FaceKind
from dicetactician.core.logging import log_debug
from dicetactician.core.utils import floor_int
from dicetactician.effects.dice_effect import (
    AbilityAmplifierEffect,
    MagicAmplifierEffect,
)

from .base_ability import AbilityContext, AbilityOutcome, ClassAbility, failed
from .class_abilities import ALL_ABILITIES

ABILITY_REGISTRY: dict[ClassName, ClassAbility] = {
    ability.class_name: ability for ability in ALL_ABILITIES
}

_missing = [c.display_name for c in ClassName if c not in ABILITY_REGISTRY]
if _missing:
    raise RuntimeError(f"No ability registered for: {', '.join(_missing)}")


def get_ability(class_name: ClassName) -> ClassAbility:
    return ABILITY_REGISTRY[class_name]


def build_context(player: Player, **values) -> AbilityContext:
    """Builds an ability context, honouring the player's symbol multiplier."""
    return AbilityContext(symbol_multiplier=player.symbol_multiplier(), **values)


def apply_passive(
    player: Player, context: AbilityContext, rng: random.Random
) -> AbilityOutcome:
    """
    Evaluates the class passive, plus the magic amplifier bonus for every
    magic face in the Special slot.

    Args:
        player (Player):
            The acting player.
        context (AbilityContext):
            The turn values.
        rng (random.Random):
            The random source.

    Returns:
        AbilityOutcome:
            The passive outcome.

    """
    outcome = get_ability(player.class_name).apply_passive(player, context, rng)

    magic_faces = context.face_count(FaceKind.MAGIC)
    amplifiers = player.get_effects_of_type(MagicAmplifierEffect)
    if magic_faces and amplifiers:
        bonus = magic_faces * sum(a.magic_bonus for a in amplifiers)
        text = f"🔮 Magic Amplifier: +{bonus} damage!"
        outcome = outcome.model_copy(
            update={
                "bonus_damage": outcome.bonus_damage + bonus,
                "message": f"{outcome.message} {text}" if outcome.message else text,
            }
        )

    log_debug(
        f"Passive of {player.class_name.display_name}",
        {"bonus_damage": outcome.bonus_damage, "bonus_defense": outcome.bonus_defense},
    )
    return outcome


def try_activate_special(
    player: Player, context: AbilityContext, rng: random.Random
) -> AbilityOutcome:
    """
    Attempts the class special. Nothing happens without special dice.

    A successful special has its damage scaled by the ability amplifiers
    the player carries.
    """
    if not context.special_faces:
        return failed()

    outcome = get_ability(player.class_name).try_activate_special(player, context, rng)
    if not outcome.success:
        log_debug(f"Special of {player.class_name.display_name} did not activate")
        return outcome

    amplifiers = player.get_effects_of_type(AbilityAmplifierEffect)
    if amplifiers:
        factor = 1.0 + sum(a.ability_bonus for a in amplifiers)
        update: dict = {"bonus_damage": floor_int(outcome.bonus_damage * factor)}
        if outcome.set_damage is not None:
            update["set_damage"] = floor_int(outcome.set_damage * factor)
        outcome = outcome.model_copy(update=update)

    log_debug(
        f"Special of {player.class_name.display_name} activated",
        {"bonus_damage": outcome.bonus_damage, "set_damage": outcome.set_damage},
    )
    return outcome
