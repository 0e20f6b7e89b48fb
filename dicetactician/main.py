"""
Main entry point for the Dungeon Dice Tactician.

Plays a run on its own with a simple greedy strategy and renders the
combat log with rich. Useful to watch the engine at work:

    dicetactician --class "Frost Weaver" --seed 7
"""

import argparse
import logging
import random

from dicetactician.combat.turn_engine import GameStateSnapshot, TurnResult
from dicetactician.core.constants import ClassName, DiceSlot, FaceKind, GameState
from dicetactician.core.logging import setup_logging
from dicetactician.core.utils import cprint, crule
from dicetactician.game_manager import GameManager


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dicetactician",
        description="Auto-play a Dungeon Dice Tactician run.",
    )
    parser.add_argument(
        "--class",
        dest="class_name",
        default=None,
        help="Class to play, e.g. 'Blade Dancer'. Random when omitted.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    parser.add_argument(
        "--max-turns",
        type=int,
        default=200,
        help="Stop after this many turns.",
    )
    parser.add_argument(
        "--best-runs",
        default=None,
        help="JSON file keeping the leaderboard.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug traces.")
    return parser.parse_args(argv)


def print_status(state: GameStateSnapshot) -> None:
    player, enemy = state.player, state.enemy
    if player is not None:
        effects = ", ".join(e.colored_name for e in player.effects) or "-"
        cprint(
            f"  🧙 {player.name:<16} {player.hp_bar} {player.hp:>3}/{player.max_hp:<3}"
            f" 💰 {player.gold:<4} [{effects}]"
        )
    if enemy is not None:
        effects = ", ".join(e.colored_name for e in enemy.effects) or "-"
        intent = state.enemy_next_action
        intent_text = f" next: {intent.type.display_name} {intent.value}" if intent else ""
        cprint(
            f"  {enemy.category.emoji} {enemy.colored_name:<16} {enemy.hp_bar}"
            f" {enemy.hp:>3}/{enemy.max_hp:<3}{intent_text} [{effects}]"
        )


def plan_assignment(manager: GameManager) -> None:
    """Greedy placement: best attack face, best defense face, every symbol to Special."""
    player = manager.session.player
    assert player is not None
    dice = list(player.dice_set.dice)
    attack = [d for d in dice if d.face_kind == FaceKind.ATTACK]
    defense = [d for d in dice if d.face_kind == FaceKind.DEFENSE]
    if attack:
        manager.assign_die(max(attack, key=lambda d: d.face_value).id, DiceSlot.ATTACK)
    if defense:
        manager.assign_die(max(defense, key=lambda d: d.face_value).id, DiceSlot.DEFENSE)
    for die in dice:
        if die.face_kind in (FaceKind.SPECIAL, FaceKind.CRIT, FaceKind.MAGIC):
            manager.assign_die(die.id, DiceSlot.SPECIAL)
    if not manager.can_execute_turn():
        manager.assign_die(dice[0].id, DiceSlot.ATTACK)


def visit_merchant(manager: GameManager) -> None:
    state = manager.get_game_state()
    merchant = state.merchant
    assert merchant is not None
    crule(f"🛒 {merchant.name}", style="bold yellow")
    cprint(f'  "{state.merchant_greeting}"', style="italic")
    for index, (item, price) in enumerate(zip(merchant.inventory, state.merchant_prices)):
        cprint(f"  [{index}] {item.colored_name} ({price} gold) - {item.description}")
        if index < len(state.merchant_pitches):
            cprint(f'      "{state.merchant_pitches[index]}"', style="italic")
    # Cheapest first, as long as the gold lasts.
    order = sorted(range(len(merchant.inventory)), key=lambda i: state.merchant_prices[i])
    for index in order:
        result = manager.purchase_item(index)
        if result.success:
            cprint(f"  {result.message}", style="green")
    cprint(f'  "{manager.leave_merchant().message}"', style="italic")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    rng = random.Random(args.seed)
    manager = GameManager(rng=rng, best_runs=args.best_runs)
    if args.class_name:
        class_name = ClassName.from_name(args.class_name)
        if class_name is None:
            cprint(f"Unknown class '{args.class_name}'.", style="bold red")
            return 1
    else:
        class_name = rng.choice(list(ClassName))

    crule("🎲 Dungeon Dice Tactician", style="bold green")
    cprint(manager.start_run(class_name).message, style="bold blue")

    try:
        for _ in range(args.max_turns):
            state = manager.get_game_state()
            if state.game_state == GameState.GAME_OVER:
                break
            if state.game_state == GameState.MERCHANT:
                visit_merchant(manager)
                continue
            crule(f"Round {state.current_round}", style="cyan")
            print_status(state)
            roll = manager.roll_dice()
            cprint(f"  🎲 {roll.message}")
            plan_assignment(manager)
            result = manager.execute_turn()
            if isinstance(result, TurnResult):
                for entry in result.log:
                    cprint(f"    {entry.kind.colorize(entry.message)}")
    except KeyboardInterrupt:
        cprint("")
        crule("Run Interrupted", style="bold red")
        return 130

    stats = manager.get_game_state().statistics
    crule("Run Finished", style="bold green")
    cprint(
        f"  Highest round {stats.highest_round}, {stats.enemies_defeated} enemies defeated, "
        f"{stats.damage_dealt} damage dealt, {stats.gold_earned} gold earned."
    )
    for rank, run in enumerate(manager.get_best_runs(), start=1):
        cprint(f"  #{rank:<2} {run.class_name:<16} {run.rounds:>3} rounds  {run.date}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
