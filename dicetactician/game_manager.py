"""
Game manager for the Dungeon Dice Tactician.

A thin object facade over the turn engine: it owns one GameSession and
forwards every entry point to the engine function of the same name, so a
front end can hold a single object for the whole game.
"""

import random
from pathlib import Path

from dicetactician.combat import turn_engine
from dicetactician.combat.turn_engine import (
    GameSession,
    GameStateSnapshot,
    RollResult,
    TurnResult,
)
from dicetactician.core.best_runs import (
    BestRunStore,
    JsonFileBestRunStore,
    RunSummary,
)
from dicetactician.core.constants import ClassName, DiceSlot
from dicetactician.core.content import ContentRepository
from dicetactician.core.error_handling import ActionResult


class GameManager:
    """Runs games over the packaged catalogs."""

    def __init__(
        self,
        content: ContentRepository | None = None,
        rng: random.Random | None = None,
        best_runs: BestRunStore | Path | str | None = None,
    ) -> None:
        """
        Initialize the GameManager.

        Args:
            content (ContentRepository | None):
                The catalogs; the packaged ones when omitted.
            rng (random.Random | None):
                The random source; seed it for reproducible games.
            best_runs (BestRunStore | Path | str | None):
                A store, or the path of a JSON leaderboard file. The
                leaderboard is kept in memory when omitted.

        """
        if isinstance(best_runs, (str, Path)):
            best_runs = JsonFileBestRunStore(best_runs)
        self.session: GameSession = GameSession.from_content(
            content or ContentRepository(),
            rng=rng,
            best_runs=best_runs,
        )

    def start_run(self, class_name: ClassName) -> ActionResult:
        return turn_engine.start_run(self.session, class_name)

    def roll_dice(self) -> RollResult | ActionResult:
        return turn_engine.roll_dice(self.session)

    def reroll_dice(self) -> RollResult | ActionResult:
        return turn_engine.reroll_dice(self.session)

    def assign_die(self, die_id: str, slot: DiceSlot) -> ActionResult:
        return turn_engine.assign_die(self.session, die_id, slot)

    def unassign_die(self, die_id: str) -> ActionResult:
        return turn_engine.unassign_die(self.session, die_id)

    def can_execute_turn(self) -> bool:
        return turn_engine.can_execute_turn(self.session)

    def execute_turn(self) -> TurnResult | ActionResult:
        return turn_engine.execute_turn(self.session)

    def purchase_item(self, index: int) -> ActionResult:
        return turn_engine.purchase_item(self.session, index)

    def leave_merchant(self) -> ActionResult:
        return turn_engine.leave_merchant(self.session)

    def get_game_state(self) -> GameStateSnapshot:
        return turn_engine.get_game_state(self.session)

    def get_best_runs(self) -> list[RunSummary]:
        return turn_engine.get_best_runs(self.session)

    def reset(self) -> ActionResult:
        return turn_engine.reset(self.session)
