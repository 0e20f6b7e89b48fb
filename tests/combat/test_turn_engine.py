"""
Tests for the turn engine operations.
"""

import pytest

from dicetactician.combat.progression import create_enemy
from dicetactician.combat.turn_engine import (
    GameSession,
    assign_die,
    can_execute_turn,
    execute_turn,
    leave_merchant,
    purchase_item,
    reroll_dice,
    reset,
    roll_dice,
    start_run,
    unassign_die,
)
from dicetactician.core.constants import (
    ClassName,
    DiceSlot,
    FaceKind,
    GameState,
)
from dicetactician.dice.dice import DieFace
from dicetactician.effects.defensive_effect import (
    DodgeEffect,
    ReviveEffect,
)
from dicetactician.effects.dice_effect import DiceBonusEffect, LoadedDiceEffect
from dicetactician.effects.economy_effect import GoldMultiplierEffect
from dicetactician.effects.effect_factory import CHAOS_BOON, DIVINE_SHIELD, divine_shield
from dicetactician.effects.trigger_effect import (
    CombatBlessingEffect,
    ExtraActionEffect,
    GuaranteedCritEffect,
    PoisonOnHitEffect,
)

ATK = {value: DieFace(kind=FaceKind.ATTACK, value=value) for value in range(0, 21)}
DEF = {value: DieFace(kind=FaceKind.DEFENSE, value=value) for value in range(0, 21)}


def messages(result) -> list[str]:
    return [entry.message for entry in result.log]


@pytest.fixture
def blade_dancer(new_session):
    return new_session(ClassName.BLADE_DANCER)


def attack_with(session, show_faces, face):
    """Shows `face` on the first die and assigns it to the Attack slot."""
    ids = show_faces(session, face, DEF[3], DEF[4])
    assert assign_die(session, ids[0], DiceSlot.ATTACK).success
    return ids


# =============================================================================
# Lifecycle
# =============================================================================


def test_start_run(content, scripted):
    """
    Test that starting a run creates the player and spawns the first enemy.
    """
    session = GameSession.from_content(content, rng=scripted())
    result = start_run(session, ClassName.GEOMANCER)
    assert result.success
    assert result.message == "Your adventure as a Geomancer begins!"
    assert session.game_state == GameState.COMBAT
    assert session.current_round == 1
    assert session.player.hp == 100
    assert session.enemy.name == "Goblin"
    assert session.enemy.hp == 34
    assert session.log[0].message == "A Goblin appears!"


def test_start_run_rejected_during_a_run(blade_dancer):
    result = start_run(blade_dancer, ClassName.GEOMANCER)
    assert not result.success
    assert blade_dancer.player.class_name == ClassName.BLADE_DANCER


def test_reset_goes_back_to_menu(blade_dancer):
    blade_dancer.current_round = 4
    assert reset(blade_dancer).success
    assert blade_dancer.game_state == GameState.MENU
    assert blade_dancer.current_round == 1
    assert blade_dancer.player is None
    assert blade_dancer.enemy is None


# =============================================================================
# Dice
# =============================================================================


def test_roll_requires_combat(content, scripted):
    session = GameSession.from_content(content, rng=scripted())
    result = roll_dice(session)
    assert not result.success
    assert not session.has_rolled


def test_roll_dice(blade_dancer):
    """
    Test that rolling shows a face on every die and a second roll is rejected.
    """
    result = roll_dice(blade_dancer)
    assert result.success
    assert len(result.dice) == 3
    assert all(die.is_rolled for die in blade_dancer.player.dice_set.dice)
    assert [d.current_face for d in result.dice] == [ATK[8], ATK[6], ATK[7]]
    assert not roll_dice(blade_dancer).success


def test_loaded_dice_roll_highest_faces(blade_dancer):
    blade_dancer.player.add_effect(LoadedDiceEffect(name="Loaded Dice"))
    roll_dice(blade_dancer)
    faces = [d.current_face for d in blade_dancer.player.dice_set.dice]
    assert faces == [ATK[10], ATK[9], ATK[8]]


def test_reroll_needs_rerolls(blade_dancer):
    """
    Test that a reroll spends a reroll token and clears the assignment.
    """
    roll_dice(blade_dancer)
    assert reroll_dice(blade_dancer).message == "No rerolls remaining!"
    blade_dancer.player.rerolls_per_round = 1
    die_id = blade_dancer.player.dice_set.dice[0].id
    assign_die(blade_dancer, die_id, DiceSlot.ATTACK)
    assert reroll_dice(blade_dancer).success
    assert blade_dancer.assignment.is_empty()
    assert blade_dancer.player.rerolls_left() == 0
    assert not reroll_dice(blade_dancer).success


def test_reroll_before_roll_is_rejected(blade_dancer):
    blade_dancer.player.rerolls_per_round = 1
    assert not reroll_dice(blade_dancer).success
    assert blade_dancer.player.rerolls_used == 0


def test_assign_die(blade_dancer, show_faces):
    """
    Test that a die moves between slots and a slot holds a single die.
    """
    first, second, third = show_faces(blade_dancer, ATK[8], ATK[6], DEF[4])
    assert assign_die(blade_dancer, first, DiceSlot.ATTACK).success
    assert assign_die(blade_dancer, second, DiceSlot.ATTACK).success
    assert blade_dancer.assignment.attack == second
    assert assign_die(blade_dancer, second, DiceSlot.SPECIAL).success
    assert blade_dancer.assignment.attack is None
    assert blade_dancer.assignment.special == [second]
    assert assign_die(blade_dancer, third, DiceSlot.DEFENSE).success
    assert blade_dancer.assignment.defense == third


def test_assign_rejections(blade_dancer):
    die_id = blade_dancer.player.dice_set.dice[0].id
    assert assign_die(blade_dancer, die_id, DiceSlot.ATTACK).message == "Roll the dice first."
    roll_dice(blade_dancer)
    assert not assign_die(blade_dancer, "die_missing", DiceSlot.ATTACK).success
    assert blade_dancer.assignment.is_empty()


def test_unassign_die(blade_dancer, show_faces):
    ids = show_faces(blade_dancer, ATK[8], ATK[6], DEF[4])
    assign_die(blade_dancer, ids[0], DiceSlot.SPECIAL)
    assert can_execute_turn(blade_dancer)
    assert unassign_die(blade_dancer, ids[0]).success
    assert not can_execute_turn(blade_dancer)
    assert not unassign_die(blade_dancer, ids[0]).success


# =============================================================================
# Turn resolution
# =============================================================================


def test_execute_turn_rejections(blade_dancer, show_faces):
    """
    Test that a turn cannot run before rolling or with nothing assigned.
    """
    assert execute_turn(blade_dancer).message == "Roll the dice first."
    show_faces(blade_dancer, ATK[8], ATK[6], DEF[4])
    result = execute_turn(blade_dancer)
    assert result.message == "Assign at least one die before executing turn."
    assert blade_dancer.enemy.hp == 34
    assert blade_dancer.has_rolled


def test_turn_clears_dice(blade_dancer, show_faces):
    attack_with(blade_dancer, show_faces, ATK[8])
    execute_turn(blade_dancer)
    assert not blade_dancer.has_rolled
    assert blade_dancer.assignment.is_empty()
    assert not any(d.is_rolled for d in blade_dancer.player.dice_set.dice)


def test_wrong_face_kind_contributes_nothing(blade_dancer, show_faces):
    """
    Test that a defense face in the Attack slot adds no attack.
    """
    blade_dancer.player.set_counter("momentum", 3)
    attack_with(blade_dancer, show_faces, DEF[5])
    result = execute_turn(blade_dancer)
    assert "You defend." in messages(result)
    assert blade_dancer.enemy.hp == 34
    assert blade_dancer.player.get_counter("momentum") == 0


def test_defense_reduces_enemy_attack(blade_dancer, show_faces):
    ids = show_faces(blade_dancer, ATK[8], ATK[6], DEF[4])
    assign_die(blade_dancer, ids[2], DiceSlot.DEFENSE)
    result = execute_turn(blade_dancer)
    assert blade_dancer.player.hp == 95
    assert "Goblin attacks for 5 damage!" in messages(result)


def test_dice_bonus(blade_dancer, show_faces):
    blade_dancer.player.add_effect(DiceBonusEffect(name="Lucky", dice_bonus=2))
    attack_with(blade_dancer, show_faces, ATK[8])
    execute_turn(blade_dancer)
    assert blade_dancer.enemy.hp == 23


def test_guaranteed_crit_is_consumed(blade_dancer, show_faces):
    """
    Test that a marked attack crits once and the mark is removed.
    """
    blade_dancer.player.add_effect(GuaranteedCritEffect(name="Guaranteed Crit"))
    attack_with(blade_dancer, show_faces, ATK[8])
    result = execute_turn(blade_dancer)
    assert "💥 CRITICAL HIT!" in messages(result)
    assert blade_dancer.enemy.hp == 16
    assert blade_dancer.player.get_effect_of_type(GuaranteedCritEffect) is None


def test_crit_chance_uses_the_random_source(new_session, scripted, show_faces):
    session = new_session(ClassName.BLADE_DANCER, rng=scripted(randoms=[0.05]))
    session.player.crit_chance = 10
    attack_with(session, show_faces, ATK[8])
    execute_turn(session)
    assert session.enemy.hp == 16


def test_poison_on_hit_ticks_on_the_enemy(blade_dancer, show_faces):
    blade_dancer.player.add_effect(PoisonOnHitEffect(name="Poison Vial", poison_damage=3))
    attack_with(blade_dancer, show_faces, ATK[8])
    result = execute_turn(blade_dancer)
    assert blade_dancer.enemy.hp == 22
    assert "Goblin takes 3 damage from Poison!" in messages(result)
    assert blade_dancer.statistics.damage_dealt == 12


def test_time_warp_skips_the_enemy(blade_dancer, show_faces):
    """
    Test that the enemy loses its action once and the amulet is spent.
    """
    blade_dancer.player.add_effect(ExtraActionEffect(name="Time Warp"))
    attack_with(blade_dancer, show_faces, ATK[8])
    execute_turn(blade_dancer)
    assert blade_dancer.player.hp == 100
    assert blade_dancer.enemy.turn_counter == 0
    assert not blade_dancer.player.has_effect("Time Warp")


def test_dodge(new_session, scripted, show_faces):
    session = new_session(ClassName.BLADE_DANCER, rng=scripted(randoms=[0.99, 0.1]))
    session.player.add_effect(DodgeEffect(name="Evasion", dodge_chance=0.2))
    attack_with(session, show_faces, ATK[8])
    result = execute_turn(session)
    assert "You dodged the attack!" in messages(result)
    assert session.player.hp == 100


def test_dodge_roll_is_drawn_even_when_defense_blocks(new_session, scripted, show_faces):
    """
    Test that the dodge roll is consumed on every enemy attack, including one
    the player's defense already stops.
    """
    session = new_session(ClassName.BLADE_DANCER, rng=scripted(randoms=[0.99, 0.1, 0.42]))
    session.player.add_effect(DodgeEffect(name="Evasion", dodge_chance=0.2))
    ids = show_faces(session, ATK[1], DEF[10], DEF[4])
    assign_die(session, ids[0], DiceSlot.ATTACK)
    assign_die(session, ids[1], DiceSlot.DEFENSE)

    result = execute_turn(session)

    assert "You blocked all damage!" in messages(result)
    assert "You dodged the attack!" not in messages(result)
    assert session.player.hp == 100
    assert session.rng.randoms == [0.42]


def test_absorb_shield_soaks_damage(new_session, show_faces):
    session = new_session(ClassName.HOLY_PALADIN)
    session.player.add_effect(divine_shield(30))
    attack_with(session, show_faces, ATK[8])
    result = execute_turn(session)
    assert session.player.hp == 100
    assert session.player.get_effect(DIVINE_SHIELD).absorb == 21
    assert "Divine Shield absorbs 9 damage!" in messages(result)


def test_enemy_poison_payload(new_session, content, show_faces):
    """
    Test that a poisonous attack poisons the player, who takes the tick at end of turn.
    """
    session = new_session(ClassName.BLADE_DANCER, enemy="Poison Mushroom")
    attack_with(session, show_faces, ATK[8])
    result = execute_turn(session)
    assert "You are poisoned! (2 damage/turn)" in messages(result)
    assert session.player.hp == 100 - 6 - 2
    assert session.statistics.damage_taken == 8


def test_enemy_life_steal(new_session, show_faces):
    session = new_session(ClassName.BLADE_DANCER, enemy="Vampire Bat")
    attack_with(session, show_faces, ATK[8])
    result = execute_turn(session)
    assert session.enemy.hp == 25 - 9 + 2
    assert "Vampire Bat heals 2 HP!" in messages(result)


def test_phoenix_feather_revives_the_player(new_session, show_faces):
    session = new_session(ClassName.GEOMANCER)
    session.player.hp = 5
    session.player.add_effect(ReviveEffect(name="Phoenix Feather", revive_fraction=0.5))
    attack_with(session, show_faces, ATK[1])
    execute_turn(session)
    assert session.game_state == GameState.COMBAT
    assert session.player.hp == 50
    assert not session.player.has_effect("Phoenix Feather")


def test_enemy_revive(new_session, show_faces):
    """
    Test that a reviving enemy survives its first defeat.
    """
    session = new_session(ClassName.BLADE_DANCER, enemy="Phoenix")
    session.enemy.hp = 1
    attack_with(session, show_faces, ATK[8])
    result = execute_turn(session)
    assert not result.enemy_defeated
    assert session.enemy.has_revived
    assert session.enemy.hp > 0
    assert "Phoenix rises from the ashes!" in messages(result)


def test_gold_multiplier_on_defeat(blade_dancer, show_faces):
    blade_dancer.player.add_effect(GoldMultiplierEffect(name="Gold Magnet", gold_multiplier=1.5))
    blade_dancer.enemy.hp = 1
    attack_with(blade_dancer, show_faces, ATK[8])
    result = execute_turn(blade_dancer)
    assert result.enemy_defeated
    assert blade_dancer.player.gold == 15
    assert "Goblin defeated! +15 gold" in messages(result)
    assert blade_dancer.current_round == 2
    assert blade_dancer.enemy.name == "Goblin"
    assert blade_dancer.enemy.hp == blade_dancer.enemy.max_hp


def test_chaos_crystal_blesses_each_spawn(blade_dancer, show_faces):
    """
    Test that a new enemy brings a chaos boon that lasts for the fight only.
    """
    blade_dancer.current_round = 3
    blade_dancer.player.add_effect(CombatBlessingEffect(name="Chaos Crystal"))
    blade_dancer.enemy.hp = 1
    attack_with(blade_dancer, show_faces, ATK[8])
    result = execute_turn(blade_dancer)
    assert "💠 Chaos Crystal: +8 attack for this fight!" in messages(result)
    assert blade_dancer.player.total_attack_bonus() == 8
    blade_dancer.enemy.hp = 1
    attack_with(blade_dancer, show_faces, ATK[8])
    execute_turn(blade_dancer)
    assert len([e for e in blade_dancer.player.effects if e.name == CHAOS_BOON]) == 1


# =============================================================================
# Merchant
# =============================================================================


@pytest.fixture
def at_merchant(blade_dancer, show_faces):
    blade_dancer.current_round = 2
    blade_dancer.enemy.hp = 1
    attack_with(blade_dancer, show_faces, ATK[8])
    execute_turn(blade_dancer)
    assert blade_dancer.game_state == GameState.MERCHANT
    return blade_dancer


def test_merchant_operations_need_a_merchant(blade_dancer):
    assert purchase_item(blade_dancer, 0).message == "There is no merchant here."
    assert not leave_merchant(blade_dancer).success


def test_no_dice_at_the_merchant(at_merchant):
    assert not roll_dice(at_merchant).success
    assert not execute_turn(at_merchant).success


def test_purchase_item(at_merchant):
    """
    Test that an item can be bought once and is counted in the statistics.
    """
    at_merchant.player.gold = 100
    result = purchase_item(at_merchant, 0)
    assert result.success
    assert result.message.startswith(f"Purchased {at_merchant.merchant.inventory[0].name}")
    assert at_merchant.statistics.items_purchased == 1
    assert purchase_item(at_merchant, 0).message == "Item already sold."
    assert purchase_item(at_merchant, 99).message == "Invalid item."
    assert at_merchant.statistics.items_purchased == 1


def test_purchase_without_gold(at_merchant):
    at_merchant.player.gold = 0
    assert purchase_item(at_merchant, 0).message == "Not enough gold!"
    assert at_merchant.player.items == []
