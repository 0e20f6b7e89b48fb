"""
Class abilities module for the engine.

One ClassAbility implementation per playable class. Passives read the
symbols in the Special slot (or, for the Blade Dancer, whether an attack
was made) and specials fire only when their symbol or counter threshold
is met.
"""

import random

from dicetactician.character.player import Player
from dicetactician.core.constants import ClassName, FaceKind
from dicetactician.core.utils import floor_int
from dicetactician.effects.effect_factory import (
    DIVINE_SHIELD,
    HASTE,
    SPIRIT_GUARDIAN,
    STONEFORM,
    burn,
    divine_shield,
    frozen,
    regeneration,
    stat_buff,
)

from .base_ability import AbilityContext, AbilityOutcome, ClassAbility, failed


class BladeDancerAbility(ClassAbility):
    """Momentum builds with every consecutive attack."""

    class_name = ClassName.BLADE_DANCER

    def apply_passive(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        if context.attack_value <= 0:
            player.set_counter("momentum", 0)
            return AbilityOutcome()
        momentum = player.add_counter("momentum", 1)
        return AbilityOutcome(
            bonus_damage=momentum,
            message=f"Momentum +{momentum} damage!",
        )

    def try_activate_special(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        if context.face_count(FaceKind.CRIT) < 2:
            return failed()
        return AbilityOutcome(
            success=True,
            set_damage=floor_int(context.attack_value * 3),
            message="⚔️ Cyclone Slash! 300% damage!",
        )


class GeomancerAbility(ClassAbility):
    class_name = ClassName.GEOMANCER

    def apply_passive(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        if not all(context.has_symbol(s) for s in ("earth", "stone", "crystal")):
            return AbilityOutcome()
        return AbilityOutcome(
            bonus_damage=10,
            bonus_defense=10,
            message="🌍 Earthshatter! +10 attack and defense!",
        )

    def try_activate_special(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        if context.symbol_count("stone") < 1:
            return failed()
        player.add_effect(stat_buff(STONEFORM, attack=0, defense=25, duration=1))
        return AbilityOutcome(
            success=True,
            message="🗿 Stoneform! +25 defense!",
        )


class ShadowPriestAbility(ClassAbility):
    """Darkness symbols store power, released in one sacrifice."""

    class_name = ClassName.SHADOW_PRIEST

    def apply_passive(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        count = context.symbol_count("darkness", "void", "shadow")
        if count == 0:
            return AbilityOutcome()
        total = player.add_counter("darkness_stacks", count * 2)
        return AbilityOutcome(
            message=f"🌑 Deepening Void: +{count * 2} power stored (Total: {total})",
        )

    def try_activate_special(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        stored = player.get_counter("darkness_stacks")
        if stored < 5:
            return failed()
        player.take_damage(5)
        player.set_counter("darkness_stacks", 0)
        bonus = 20 + stored
        return AbilityOutcome(
            success=True,
            bonus_damage=bonus,
            message=f"👥 Sacrifice! Lost 5 HP, +{bonus} damage!",
        )


class PyromanticAbility(ClassAbility):
    class_name = ClassName.PYROMANTIC

    def apply_passive(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        count = context.symbol_count("flame")
        if count == 0:
            return AbilityOutcome()
        player.add_counter("flame_stacks", count)
        return AbilityOutcome(
            bonus_damage=count * 2,
            message=f"🔥 Burning Fury: +{count * 2} fire damage!",
        )

    def try_activate_special(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        if context.symbol_count("flame") < 3:
            return failed()
        player.set_counter("burn_damage", 3)
        return AbilityOutcome(
            success=True,
            bonus_damage=40,
            apply_effect_to_enemy=burn(3, duration=3),
            message="🔥 INFERNO! 40 instant damage + 3 burn damage for 3 rounds!",
        )


class FrostWeaverAbility(ClassAbility):
    class_name = ClassName.FROST_WEAVER

    def apply_passive(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        count = context.symbol_count("frost")
        if count == 0:
            return AbilityOutcome()
        player.add_counter("frost_stacks", count)
        return AbilityOutcome(
            bonus_defense=count * 3,
            message=f"❄️ Frost Armor: +{count * 3} defense!",
        )

    def try_activate_special(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        if context.symbol_count("frost") < 2:
            return failed()
        return AbilityOutcome(
            success=True,
            apply_effect_to_enemy=frozen(attack_reduction=0.5, duration=2),
            message="❄️ Frozen Prison! Enemy attack reduced by 50% for 2 rounds!",
        )


class StormCallerAbility(ClassAbility):
    """Lightning permanently sharpens the critical strike chance."""

    class_name = ClassName.STORM_CALLER

    def apply_passive(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        count = context.symbol_count("lightning")
        if count == 0:
            return AbilityOutcome()
        player.add_counter("lightning_charge", count)
        player.crit_chance += count * 10
        return AbilityOutcome(
            message=f"⚡ Lightning Charge: +{count * 10}% crit chance!",
        )

    def try_activate_special(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        if context.symbol_count("lightning") < 2:
            return failed()
        return AbilityOutcome(
            success=True,
            bonus_damage=35,
            is_guaranteed_crit=True,
            message="⚡ THUNDERSTRIKE! 35 guaranteed critical damage!",
        )


class NatureShamanAbility(ClassAbility):
    class_name = ClassName.NATURE_SHAMAN

    def apply_passive(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        count = context.symbol_count("nature")
        if count == 0:
            return AbilityOutcome()
        healed = player.heal(count * 3)
        return AbilityOutcome(
            message=f"🌿 Nature's Blessing: Healed {healed} HP!",
        )

    def try_activate_special(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        if context.symbol_count("nature") < 3:
            return failed()
        healed = player.heal(25)
        player.add_effect(regeneration(5, duration=3))
        return AbilityOutcome(
            success=True,
            message=f"🌿 Wild Growth! Healed {healed} HP + 5 HP regen for 3 rounds!",
        )


class BloodKnightAbility(ClassAbility):
    class_name = ClassName.BLOOD_KNIGHT

    def apply_passive(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        count = context.symbol_count("blood")
        if count == 0 or context.attack_value <= 0:
            return AbilityOutcome()
        life_steal = floor_int(context.attack_value * 0.3 * count)
        healed = player.heal(life_steal)
        return AbilityOutcome(
            message=f"🩸 Blood Pact: Healed {healed} HP from life steal!",
        )

    def try_activate_special(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        if context.symbol_count("blood") < 2:
            return failed()
        player.take_damage(15)
        return AbilityOutcome(
            success=True,
            bonus_damage=50,
            message="🩸 Blood Sacrifice! Lost 15 HP for 50 extra damage!",
        )


class HolyPaladinAbility(ClassAbility):
    """Holy symbols fortify the paladin and charge the Divine Shield."""

    class_name = ClassName.HOLY_PALADIN

    def apply_passive(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        count = context.symbol_count("holy")
        if count == 0:
            return AbilityOutcome()
        player.add_counter("holy_power", count)
        return AbilityOutcome(
            bonus_defense=count * 4,
            message=f"✝️ Divine Protection: +{count * 4} defense!",
        )

    def try_activate_special(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        if context.symbol_count("holy") < 2 or player.get_counter("holy_power") < 5:
            return failed()
        healed = player.heal(20)
        # A fresh shield replaces whatever is left of the previous one.
        player.remove_effect(DIVINE_SHIELD)
        player.add_effect(divine_shield(30))
        player.set_counter("holy_power", 0)
        return AbilityOutcome(
            success=True,
            message=f"✝️ Divine Shield! Healed {healed} HP + absorb 30 damage!",
        )


# (bonus damage, bonus defense, self damage, message)
CHAOS_OUTCOMES: list[tuple[int, int, int, str]] = [
    (15, 0, 0, "🌀 Chaos Surge: +15 damage!"),
    (0, 15, 0, "🌀 Chaos Ward: +15 defense!"),
    (25, 0, 5, "🌀 Wild Magic: +25 damage, -5 HP!"),
    (10, 20, 0, "🌀 Chaos Balance: +10 damage, +20 defense!"),
]


class ChaosMageAbility(ClassAbility):
    class_name = ClassName.CHAOS_MAGE

    def apply_passive(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        if context.symbol_count("chaos") == 0:
            return AbilityOutcome()
        damage, defense, self_damage, message = rng.choice(CHAOS_OUTCOMES)
        if self_damage:
            player.take_damage(self_damage)
        player.add_counter("chaos_stacks", 1)
        return AbilityOutcome(
            bonus_damage=damage,
            bonus_defense=defense,
            message=message,
        )

    def try_activate_special(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        if context.symbol_count("chaos") < 2:
            return failed()
        value = rng.randint(20, 80)
        return AbilityOutcome(
            success=True,
            bonus_damage=value,
            message=f"🌀 CHAOS BOLT! {value} random damage!",
        )


class TimeWeaverAbility(ClassAbility):
    class_name = ClassName.TIME_WEAVER

    def apply_passive(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        count = context.symbol_count("time")
        if count == 0:
            return AbilityOutcome()
        total = player.add_counter("time_stacks", count)
        return AbilityOutcome(
            message=f"⏰ Time Dilation: Stored {count} time stacks (Total: {total})",
        )

    def try_activate_special(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        if context.symbol_count("time") < 3 or player.get_counter("time_stacks") < 6:
            return failed()
        player.set_counter("time_stacks", 0)
        player.add_effect(stat_buff(HASTE, attack=10, defense=10, duration=2))
        return AbilityOutcome(
            success=True,
            skip_enemy_turn=True,
            message="⏰ TIME WARP! +10 attack and defense for 2 rounds + enemy skip next turn!",
        )


class SpiritSummonerAbility(ClassAbility):
    """Spirits accumulate for the whole run and each adds damage."""

    class_name = ClassName.SPIRIT_SUMMONER

    def apply_passive(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        count = context.symbol_count("spirit")
        if count == 0:
            return AbilityOutcome()
        spirits = player.add_counter("spirit_count", count)
        return AbilityOutcome(
            bonus_damage=spirits * 2,
            message=f"👻 Spirit Power: +{spirits * 2} damage from {spirits} spirits!",
        )

    def try_activate_special(
        self, player: Player, context: AbilityContext, rng: random.Random
    ) -> AbilityOutcome:
        if context.symbol_count("spirit") < 3:
            return failed()
        player.add_effect(stat_buff(SPIRIT_GUARDIAN, attack=8, defense=15, duration=2))
        return AbilityOutcome(
            success=True,
            bonus_damage=30,
            message=(
                "👻 SPIRIT GUARDIAN! 30 damage + summon guardian "
                "(+8 attack, +15 defense for 2 rounds)!"
            ),
        )


ALL_ABILITIES: list[ClassAbility] = [
    BladeDancerAbility(),
    GeomancerAbility(),
    ShadowPriestAbility(),
    PyromanticAbility(),
    FrostWeaverAbility(),
    StormCallerAbility(),
    NatureShamanAbility(),
    BloodKnightAbility(),
    HolyPaladinAbility(),
    ChaosMageAbility(),
    TimeWeaverAbility(),
    SpiritSummonerAbility(),
]
