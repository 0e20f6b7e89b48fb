"""
Turn engine for the Dungeon Dice Tactician.

The whole run lives in an explicit GameSession. Every entry point takes the
session, mutates it in place and reports back through an ActionResult (or
one of its richer subclasses). Invalid use never raises: the operation is
rejected, the session is left untouched and a warning is logged.
"""

import random
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dicetactician.abilities.resolver import (
    apply_passive,
    build_context,
    try_activate_special,
)
from dicetactician.character.character_class import CharacterClass
from dicetactician.character.enemy import Enemy
from dicetactician.character.player import Player
from dicetactician.core.best_runs import BestRunStore, InMemoryBestRunStore, RunSummary
from dicetactician.core.constants import (
    ENEMY_DOT_DURATION,
    MERCHANT_ROUND_INTERVAL,
    ClassName,
    DiceSlot,
    EnemyActionType,
    EnemyCategory,
    FaceKind,
    GameState,
    LogKind,
)
from dicetactician.core.error_handling import ActionResult, accept, reject
from dicetactician.core.logging import log_debug, log_info
from dicetactician.core.utils import floor_int
from dicetactician.dice.dice import Die
from dicetactician.effects.defensive_effect import (
    AbsorbShieldEffect,
    DamageBlockEffect,
    DodgeEffect,
    ReflectEffect,
    ReviveEffect,
)
from dicetactician.effects.dice_effect import (
    DiceBonusEffect,
    LoadedDiceEffect,
    SymbolChanceEffect,
)
from dicetactician.effects.effect_factory import (
    CHAOS_BOON,
    burn,
    poison,
    stat_buff,
)
from dicetactician.effects.trigger_effect import (
    CombatBlessingEffect,
    ExtraActionEffect,
    GuaranteedCritEffect,
    LifeOnHitEffect,
    PoisonOnHitEffect,
)
from dicetactician.items.item import Item
from dicetactician.items.merchant import Merchant

from .enemy_ai import (
    EnemyAction,
    execute_enemy_action,
    preview_next_action,
    try_revive,
)
from .progression import EnemyTemplate, spawn_enemy

# =============================================================================
# Session state
# =============================================================================


class LogEntry(BaseModel):
    """One line of the combat log."""

    kind: LogKind = Field(
        description="Who or what the line is about.",
    )
    message: str = Field(
        description="The narration.",
    )


class RunStatistics(BaseModel):
    """Counters accumulated over a run."""

    enemies_defeated: int = 0
    damage_dealt: int = 0
    damage_taken: int = 0
    gold_earned: int = 0
    items_purchased: int = 0
    highest_round: int = 1


class DiceAssignment(BaseModel):
    """
    The dice placed for the current turn, by id: at most one die in the
    Attack slot, at most one in the Defense slot, any number in Special.
    """

    attack: str | None = None
    defense: str | None = None
    special: list[str] = Field(default_factory=list)

    def remove(self, die_id: str) -> bool:
        """Takes a die out of every slot; returns True if it was placed."""
        removed = False
        if self.attack == die_id:
            self.attack = None
            removed = True
        if self.defense == die_id:
            self.defense = None
            removed = True
        if die_id in self.special:
            self.special = [i for i in self.special if i != die_id]
            removed = True
        return removed

    def is_empty(self) -> bool:
        return self.attack is None and self.defense is None and not self.special

    def clear(self) -> None:
        self.attack = None
        self.defense = None
        self.special = []


class GameSession(BaseModel):
    """
    The complete state of a run.

    The catalogs the run draws from (classes, enemy roster, items), the
    best-runs store and the random source travel with the session, so the
    engine functions need nothing else.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    classes: dict[ClassName, CharacterClass] = Field(
        default_factory=dict,
        description="The playable classes.",
    )
    roster: dict[EnemyCategory, list[EnemyTemplate]] = Field(
        default_factory=dict,
        description="The enemy archetypes, per category.",
    )
    catalog: list[Item] = Field(
        default_factory=list,
        description="Every item a merchant can sell.",
    )
    best_runs: BestRunStore = Field(
        default_factory=InMemoryBestRunStore,
        exclude=True,
        description="Where finished runs are recorded.",
    )
    rng: random.Random = Field(
        default_factory=random.Random,
        exclude=True,
        description="The single random source of the run.",
    )

    game_state: GameState = GameState.MENU
    current_round: int = 1
    merchant_encounters: int = 0
    player: Player | None = None
    enemy: Enemy | None = None
    merchant: Merchant | None = None
    merchant_greeting: str | None = None
    merchant_pitches: list[str] = Field(
        default_factory=list,
        description="The merchant's sales line for each inventory item.",
    )
    assignment: DiceAssignment = Field(default_factory=DiceAssignment)
    has_rolled: bool = False
    statistics: RunStatistics = Field(default_factory=RunStatistics)
    log: list[LogEntry] = Field(
        default_factory=list,
        description="Narration of the last operation that produced any.",
    )

    @classmethod
    def from_content(
        cls,
        content: Any,
        rng: random.Random | None = None,
        best_runs: BestRunStore | None = None,
    ) -> "GameSession":
        """
        Creates a session over the catalogs of a content repository.

        Args:
            content (ContentRepository):
                The loaded catalogs.
            rng (random.Random | None):
                The random source, seed it for reproducible runs.
            best_runs (BestRunStore | None):
                The leaderboard storage, in memory when omitted.

        Returns:
            GameSession:
                A session in the menu state.

        """
        return cls(
            classes=dict(content.classes),
            roster=content.get_roster(),
            catalog=content.all_items(),
            best_runs=best_runs or InMemoryBestRunStore(),
            rng=rng or random.Random(),
        )


class RollResult(ActionResult):
    dice: list[Die] = Field(
        default_factory=list,
        description="The rolled dice.",
    )


class TurnResult(ActionResult):
    """The outcome of a resolved turn."""

    log: list[LogEntry] = Field(
        default_factory=list,
        description="Narration of the turn, in order.",
    )
    player_hp: int = 0
    enemy_hp: int | None = None
    enemy_defeated: bool = False
    player_defeated: bool = False
    game_state: GameState = GameState.COMBAT
    statistics: RunStatistics | None = Field(
        None,
        description="Final statistics, set when the run ends.",
    )


class GameStateSnapshot(BaseModel):
    """A read-only copy of everything a front end needs to draw the game."""

    game_state: GameState
    current_round: int
    player: Player | None = None
    enemy: Enemy | None = None
    enemy_next_action: EnemyAction | None = None
    merchant: Merchant | None = None
    merchant_greeting: str | None = None
    merchant_pitches: list[str] = Field(default_factory=list)
    merchant_prices: list[int] = Field(default_factory=list)
    assignment: DiceAssignment
    has_rolled: bool
    can_execute: bool
    rerolls_left: int = 0
    statistics: RunStatistics
    log: list[LogEntry] = Field(default_factory=list)


# =============================================================================
# Helpers
# =============================================================================


class _TurnLog:
    """Collects the log entries of one operation."""

    def __init__(self) -> None:
        self.entries: list[LogEntry] = []

    def add(self, kind: LogKind, message: str) -> None:
        self.entries.append(LogEntry(kind=kind, message=message))
        log_debug(f"[{kind.display_name}] {message}")


def _clear_dice(session: GameSession) -> None:
    session.has_rolled = False
    session.assignment.clear()
    if session.player is not None:
        session.player.dice_set.reset_all()
        session.player.rerolls_used = 0


def _spawn(session: GameSession, log: _TurnLog) -> None:
    """Spawns the enemy of the current round and grants any spawn blessing."""
    player = session.player
    assert player is not None
    session.enemy = spawn_enemy(session.current_round, session.roster, session.rng)
    log.add(LogKind.INFO, f"A {session.enemy.name} appears!")

    if player.get_effect_of_type(CombatBlessingEffect) is None:
        return
    player.remove_effect(CHAOS_BOON)
    boon = session.rng.randrange(3)
    if boon == 0:
        player.add_effect(stat_buff(CHAOS_BOON, attack=8, defense=0, duration=None))
        log.add(LogKind.SPECIAL, "💠 Chaos Crystal: +8 attack for this fight!")
    elif boon == 1:
        player.add_effect(stat_buff(CHAOS_BOON, attack=0, defense=8, duration=None))
        log.add(LogKind.SPECIAL, "💠 Chaos Crystal: +8 defense for this fight!")
    else:
        healed = player.heal(15)
        log.add(LogKind.SPECIAL, f"💠 Chaos Crystal: healed {healed} HP!")


def _slot_value(die: Die | None, kind: FaceKind, player: Player) -> int:
    """
    Reads a numeric slot. A face of the wrong kind contributes nothing, a
    face of the right kind gets the dice bonuses of the player.
    """
    if die is None or die.face_kind != kind:
        return 0
    bonus = sum(e.dice_bonus for e in player.get_effects_of_type(DiceBonusEffect))
    return die.face_value + bonus


def _damage_enemy(session: GameSession, amount: int) -> int:
    assert session.enemy is not None
    dealt = session.enemy.take_damage(amount)
    session.statistics.damage_dealt += dealt
    return dealt


def _enemy_survives(session: GameSession, log: _TurnLog) -> bool:
    """Checks a defeated enemy for its one-time revive."""
    assert session.enemy is not None
    if session.enemy.is_alive():
        return True
    action = try_revive(session.enemy)
    if action is None:
        return False
    log.add(LogKind.ENEMY, action.message or f"{session.enemy.name} revives!")
    return True


def _player_survives(session: GameSession, log: _TurnLog) -> bool:
    """Checks a fallen player for a Phoenix Feather."""
    player = session.player
    assert player is not None
    if player.is_alive():
        return True
    feather = player.get_effect_of_type(ReviveEffect)
    if feather is None:
        return False
    player.hp = max(1, floor_int(player.max_hp * feather.revive_fraction))
    player.remove_effect(feather.name)
    log.add(LogKind.SPECIAL, f"🪶 {feather.name}! You rise again with {player.hp} HP!")
    return True


def _result(session: GameSession, log: _TurnLog, message: str = "", **kwargs) -> TurnResult:
    session.log = list(log.entries)
    return TurnResult(
        success=True,
        message=message,
        log=log.entries,
        player_hp=session.player.hp if session.player else 0,
        enemy_hp=session.enemy.hp if session.enemy else None,
        game_state=session.game_state,
        **kwargs,
    )


# =============================================================================
# Run lifecycle
# =============================================================================


def start_run(session: GameSession, class_name: ClassName) -> ActionResult:
    """
    Starts a fresh run with the given class.

    Allowed from the menu or after a game over. The player starts at full
    health with the class dice, and the round 1 enemy is spawned.
    """
    if session.game_state not in (GameState.MENU, GameState.GAME_OVER):
        return reject("A run is already in progress.", {"state": session.game_state})
    character_class = session.classes.get(class_name)
    if character_class is None:
        return reject(f"Unknown class: {class_name.display_name}.")

    log = _TurnLog()
    session.player = Player.create(class_name, character_class.build_dice_set())
    session.current_round = 1
    session.merchant_encounters = 0
    session.merchant = None
    session.merchant_greeting = None
    session.merchant_pitches = []
    session.statistics = RunStatistics()
    session.game_state = GameState.COMBAT
    _clear_dice(session)
    _spawn(session, log)
    session.log = log.entries
    log_info(f"Started a run as {class_name.display_name}")
    return accept(f"Your adventure as a {class_name.display_name} begins!")


def reset(session: GameSession) -> ActionResult:
    """Abandons the run and goes back to the menu."""
    session.game_state = GameState.MENU
    session.current_round = 1
    session.merchant_encounters = 0
    session.player = None
    session.enemy = None
    session.merchant = None
    session.merchant_greeting = None
    session.merchant_pitches = []
    session.assignment = DiceAssignment()
    session.has_rolled = False
    session.statistics = RunStatistics()
    session.log = []
    return accept("Back to the menu.")


def get_best_runs(session: GameSession) -> list[RunSummary]:
    return session.best_runs.load()


# =============================================================================
# Dice
# =============================================================================


def _roll(session: GameSession, fresh: bool) -> RollResult:
    player = session.player
    assert player is not None
    rng = session.rng

    session.assignment.clear()
    player.dice_set.roll_all(rng)
    if fresh and player.get_effect_of_type(LoadedDiceEffect) is not None:
        for die in player.dice_set.dice:
            die.show(die.highest_face())
    symbol_chance = player.get_effect_of_type(SymbolChanceEffect)
    if symbol_chance is not None:
        for die in player.dice_set.dice:
            specials = die.special_faces()
            if die.face_kind == FaceKind.SPECIAL or not specials:
                continue
            if rng.random() < symbol_chance.symbol_chance:
                die.show(rng.choice(specials))
    session.has_rolled = True

    faces = ", ".join(str(die.current_face) for die in player.dice_set.dice)
    return RollResult(
        success=True,
        message=f"Rolled {faces}.",
        dice=[die.model_copy(deep=True) for die in player.dice_set.dice],
    )


def roll_dice(session: GameSession) -> RollResult | ActionResult:
    """Rolls all the dice for the turn. Further rolls in the same turn use rerolls."""
    if session.game_state != GameState.COMBAT or session.player is None:
        return reject("Cannot roll dice now.", {"state": session.game_state})
    if session.has_rolled:
        return reject("Dice already rolled this turn. Use a reroll.")
    return _roll(session, fresh=True)


def reroll_dice(session: GameSession) -> RollResult | ActionResult:
    """Spends one reroll to roll all the dice again, clearing the slots."""
    if session.game_state != GameState.COMBAT or session.player is None:
        return reject("Cannot roll dice now.", {"state": session.game_state})
    if not session.has_rolled:
        return reject("Roll the dice first.")
    if session.player.rerolls_left() <= 0:
        return reject("No rerolls remaining!")
    session.player.rerolls_used += 1
    return _roll(session, fresh=False)


def assign_die(session: GameSession, die_id: str, slot: DiceSlot) -> ActionResult:
    """
    Places a rolled die in a slot, taking it out of any slot it was in.

    The Attack and Defense slots hold a single die: the die already there
    goes back to the pool.
    """
    if session.game_state != GameState.COMBAT or session.player is None:
        return reject("Cannot assign dice now.", {"state": session.game_state})
    if not session.has_rolled:
        return reject("Roll the dice first.")
    die = session.player.dice_set.get_die(die_id)
    if die is None or not die.is_rolled:
        return reject("Invalid die.", {"die_id": die_id})

    session.assignment.remove(die_id)
    if slot == DiceSlot.ATTACK:
        session.assignment.attack = die_id
    elif slot == DiceSlot.DEFENSE:
        session.assignment.defense = die_id
    else:
        session.assignment.special.append(die_id)
    return accept(f"Die {die.current_face} assigned to {slot.display_name}.")


def unassign_die(session: GameSession, die_id: str) -> ActionResult:
    """Takes a die out of its slot."""
    if session.game_state != GameState.COMBAT:
        return reject("Cannot assign dice now.", {"state": session.game_state})
    if not session.assignment.remove(die_id):
        return reject("Die is not assigned.", {"die_id": die_id})
    return accept("Die unassigned.")


def can_execute_turn(session: GameSession) -> bool:
    return (
        session.game_state == GameState.COMBAT
        and session.has_rolled
        and not session.assignment.is_empty()
    )


# =============================================================================
# Turn resolution
# =============================================================================


def execute_turn(session: GameSession) -> TurnResult | ActionResult:
    """
    Resolves one turn.

    The player's dice, passive and special are folded into an attack and a
    defense value, the attack is dealt to the enemy, and if the enemy is
    still standing it ticks its effects and acts. The player's effects tick
    last. Defeating the enemy advances the round (and may open a merchant);
    losing ends the run.

    Args:
        session (GameSession):
            The session, in combat with rolled and assigned dice.

    Returns:
        TurnResult | ActionResult:
            The narrated outcome, or a rejection when the turn cannot run.

    """
    if session.game_state != GameState.COMBAT:
        return reject("Cannot execute a turn now.", {"state": session.game_state})
    if not session.has_rolled:
        return reject("Roll the dice first.")
    if session.assignment.is_empty():
        return reject("Assign at least one die before executing turn.")

    player, enemy, rng = session.player, session.enemy, session.rng
    assert player is not None and enemy is not None
    log = _TurnLog()
    dice = player.dice_set

    # Dice values plus the standing bonuses.
    attack_die = dice.get_die(session.assignment.attack) if session.assignment.attack else None
    defense_die = dice.get_die(session.assignment.defense) if session.assignment.defense else None
    special_dice = [d for d in (dice.get_die(i) for i in session.assignment.special) if d]

    attack_bonus = player.total_attack_bonus()
    defense_bonus = player.total_defense_bonus()
    attack_value = _slot_value(attack_die, FaceKind.ATTACK, player) + attack_bonus
    defense_value = _slot_value(defense_die, FaceKind.DEFENSE, player) + defense_bonus

    context = build_context(
        player,
        attack_value=attack_value,
        defense_value=defense_value,
        special_faces=[d.current_face for d in special_dice if d.current_face],
        round=session.current_round,
    )

    # Passive.
    passive = apply_passive(player, context, rng)
    if passive.message:
        log.add(LogKind.PLAYER, passive.message)
    attack_value += passive.bonus_damage
    defense_value += passive.bonus_defense

    # Special.
    skip_enemy_turn = False
    if special_dice:
        special = try_activate_special(player, context, rng)
        if special.success:
            log.add(LogKind.SPECIAL, special.message or "Special ability activated!")
            attack_value += special.bonus_damage
            if special.set_damage is not None:
                attack_value = special.set_damage
            defense_value += special.bonus_defense
            if special.is_guaranteed_crit:
                attack_value = floor_int(attack_value * player.crit_multiplier)
            if special.apply_effect_to_enemy is not None:
                enemy.add_effect(special.apply_effect_to_enemy)
            if special.skip_enemy_turn:
                skip_enemy_turn = True
                log.add(LogKind.INFO, "Enemy is frozen in time!")

    # Critical strike, forced once by a marked target.
    mark = player.get_effect_of_type(GuaranteedCritEffect)
    crit_roll = rng.random() * 100
    if attack_value > 0 and (mark is not None or crit_roll < player.crit_chance):
        attack_value = floor_int(attack_value * player.crit_multiplier)
        log.add(LogKind.SPECIAL, "💥 CRITICAL HIT!")
        if mark is not None:
            player.remove_effect(mark.name)

    # Player attack.
    if attack_value > 0:
        dealt = _damage_enemy(session, attack_value)
        log.add(LogKind.PLAYER, f"You deal {dealt} damage!")
        for thorns in player.get_effects_of_type(ReflectEffect):
            reflected = floor_int(dealt * thorns.reflect_fraction)
            log.add(LogKind.PLAYER, f"{thorns.name} reflect {reflected} damage!")
        for life in player.get_effects_of_type(LifeOnHitEffect):
            healed = player.heal(life.heal_on_attack)
            if healed > 0:
                log.add(LogKind.PLAYER, f"{life.name} heals {healed} HP!")
        for venom in player.get_effects_of_type(PoisonOnHitEffect):
            if enemy.is_alive() and enemy.add_effect(poison(venom.poison_damage)):
                log.add(LogKind.PLAYER, f"{enemy.name} is poisoned!")
    else:
        log.add(LogKind.INFO, "You defend.")

    if not _enemy_survives(session, log):
        if not _player_survives(session, log):
            return _handle_player_defeat(session, log)
        return _handle_enemy_defeat(session, log)

    # Enemy effects.
    for tick in enemy.tick_effects():
        if tick.damage:
            session.statistics.damage_dealt += tick.damage
            log.add(LogKind.ENEMY, f"{enemy.name} takes {tick.damage} damage from {tick.effect_name}!")
        if tick.healing:
            log.add(LogKind.ENEMY, f"{enemy.name} recovers {tick.healing} HP from {tick.effect_name}!")
    if not _enemy_survives(session, log):
        if not _player_survives(session, log):
            return _handle_player_defeat(session, log)
        return _handle_enemy_defeat(session, log)

    # Enemy action.
    time_warp = player.get_effect_of_type(ExtraActionEffect)
    if not skip_enemy_turn and time_warp is not None:
        player.remove_effect(time_warp.name)
        skip_enemy_turn = True
        log.add(LogKind.SPECIAL, f"⏳ {time_warp.name}! {enemy.name} loses its turn.")
    if not skip_enemy_turn:
        # Buffs gained this turn count against the incoming attack.
        defense_value += player.total_defense_bonus() - defense_bonus
        _resolve_enemy_action(session, execute_enemy_action(enemy, rng), defense_value, log)

    # Player effects.
    for tick in player.tick_effects():
        if tick.damage:
            session.statistics.damage_taken += tick.damage
            log.add(LogKind.ENEMY, f"You take {tick.damage} damage from {tick.effect_name}!")
        if tick.healing:
            log.add(LogKind.PLAYER, f"{tick.effect_name} heals {tick.healing} HP!")

    if not _player_survives(session, log):
        return _handle_player_defeat(session, log)

    _clear_dice(session)
    return _result(session, log)


def _resolve_enemy_action(
    session: GameSession, action: EnemyAction, defense_value: int, log: _TurnLog
) -> None:
    player, enemy, rng = session.player, session.enemy, session.rng
    assert player is not None and enemy is not None

    if action.type == EnemyActionType.HEAL:
        healed = enemy.heal(action.value)
        log.add(LogKind.ENEMY, f"{action.message or f'{enemy.name} heals'} for {healed} HP!")
        return
    if action.type in (EnemyActionType.DEFEND, EnemyActionType.REVIVE):
        log.add(LogKind.ENEMY, action.message or f"{enemy.name} defends")
        return

    damage = max(0, action.value - defense_value)
    for block in player.get_effects_of_type(DamageBlockEffect):
        damage = max(0, damage - block.block_amount)

    # Every attack draws the dodge roll, blocked or not.
    dodge = player.get_effect_of_type(DodgeEffect)
    dodged = dodge is not None and rng.random() < dodge.dodge_chance
    if dodged and damage > 0:
        damage = 0
        log.add(LogKind.PLAYER, "You dodged the attack!")
    elif damage > 0:
        for shield in player.get_effects_of_type(AbsorbShieldEffect):
            absorbed = shield.consume(damage)
            if absorbed:
                damage -= absorbed
                log.add(LogKind.PLAYER, f"{shield.name} absorbs {absorbed} damage!")
            if shield.is_depleted():
                player.remove_effect(shield.name)
            if damage == 0:
                break
        if damage > 0:
            taken = player.take_damage(damage)
            session.statistics.damage_taken += taken
            log.add(LogKind.ENEMY, f"{action.message or f'{enemy.name} attacks'} for {taken} damage!")
        else:
            log.add(LogKind.PLAYER, "You blocked all damage!")
    else:
        log.add(LogKind.PLAYER, "You blocked all damage!")

    if action.poison and player.add_effect(poison(action.poison, ENEMY_DOT_DURATION)):
        log.add(LogKind.ENEMY, f"You are poisoned! ({action.poison} damage/turn)")
    if action.burn and player.add_effect(burn(action.burn, ENEMY_DOT_DURATION)):
        log.add(LogKind.ENEMY, f"You are burning! ({action.burn} damage/turn)")
    if action.life_steal:
        healed = enemy.heal(floor_int(action.value * action.life_steal))
        log.add(LogKind.ENEMY, f"{enemy.name} heals {healed} HP!")


def _handle_enemy_defeat(session: GameSession, log: _TurnLog) -> TurnResult:
    player, enemy = session.player, session.enemy
    assert player is not None and enemy is not None

    gold = floor_int(enemy.gold_reward * player.gold_multiplier())
    player.add_gold(gold)
    session.statistics.enemies_defeated += 1
    session.statistics.gold_earned += gold
    log.add(LogKind.INFO, f"{enemy.name} defeated! +{gold} gold")
    player.remove_effect(CHAOS_BOON)

    session.current_round += 1
    session.statistics.highest_round = max(
        session.statistics.highest_round, session.current_round
    )
    log_info(f"Round {session.current_round}", {"gold": player.gold, "hp": player.hp})

    _clear_dice(session)
    if session.current_round % MERCHANT_ROUND_INTERVAL == 0:
        session.merchant_encounters += 1
        session.merchant = Merchant.generate(
            session.merchant_encounters, session.catalog, player.gold, session.rng
        )
        session.merchant_greeting = session.merchant.contextual_dialogue(player, session.rng)
        session.merchant_pitches = [
            session.merchant.pitch(item, session.rng) for item in session.merchant.inventory
        ]
        session.enemy = None
        session.game_state = GameState.MERCHANT
        log.add(LogKind.INFO, f"A {session.merchant.name} appears!")
    else:
        _spawn(session, log)
    return _result(session, log, enemy_defeated=True)


def _handle_player_defeat(session: GameSession, log: _TurnLog) -> TurnResult:
    player = session.player
    assert player is not None

    session.game_state = GameState.GAME_OVER
    session.best_runs.record_run(
        RunSummary(
            class_name=player.class_name.display_name,
            rounds=max(0, session.current_round - 1),
            enemies_defeated=session.statistics.enemies_defeated,
            damage_dealt=session.statistics.damage_dealt,
            gold=session.statistics.gold_earned,
        )
    )
    log.add(LogKind.ENEMY, "You have been defeated...")
    log_info("Run over", session.statistics.model_dump())
    return _result(
        session,
        log,
        player_defeated=True,
        statistics=session.statistics.model_copy(),
    )


# =============================================================================
# Merchant
# =============================================================================


def purchase_item(session: GameSession, index: int) -> ActionResult:
    if session.game_state != GameState.MERCHANT or session.merchant is None:
        return reject("There is no merchant here.", {"state": session.game_state})
    assert session.player is not None
    result = session.merchant.purchase(index, session.player, session.rng)
    if result.success:
        session.statistics.items_purchased += 1
    return result


def leave_merchant(session: GameSession) -> ActionResult:
    """Says goodbye to the merchant and spawns the enemy of the current round."""
    if session.game_state != GameState.MERCHANT or session.merchant is None:
        return reject("There is no merchant here.", {"state": session.game_state})
    log = _TurnLog()
    farewell = session.merchant.farewell(session.rng)
    session.merchant = None
    session.merchant_greeting = None
    session.merchant_pitches = []
    session.game_state = GameState.COMBAT
    _clear_dice(session)
    _spawn(session, log)
    session.log = log.entries
    return accept(farewell)


# =============================================================================
# Queries
# =============================================================================


def get_game_state(session: GameSession) -> GameStateSnapshot:
    """
    Takes a snapshot of the session.

    The enemy's next action is previewed on copies, so calling this any
    number of times changes nothing.
    """
    player = session.player
    next_action = None
    if session.enemy is not None and session.game_state == GameState.COMBAT:
        next_action = preview_next_action(session.enemy, session.rng)
    prices: list[int] = []
    if session.merchant is not None and player is not None:
        prices = [
            session.merchant.price_for(i, player)
            for i in range(len(session.merchant.inventory))
        ]
    return GameStateSnapshot(
        game_state=session.game_state,
        current_round=session.current_round,
        player=player.model_copy(deep=True) if player else None,
        enemy=session.enemy.model_copy(deep=True) if session.enemy else None,
        enemy_next_action=next_action,
        merchant=session.merchant.model_copy(deep=True) if session.merchant else None,
        merchant_greeting=session.merchant_greeting,
        merchant_pitches=list(session.merchant_pitches),
        merchant_prices=prices,
        assignment=session.assignment.model_copy(deep=True),
        has_rolled=session.has_rolled,
        can_execute=can_execute_turn(session),
        rerolls_left=player.rerolls_left() if player else 0,
        statistics=session.statistics.model_copy(),
        log=list(session.log),
    )
