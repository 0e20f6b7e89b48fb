"""
Shared fixtures for the engine tests.
"""

import random

import pytest

from dicetactician.combat.progression import create_enemy
from dicetactician.combat.turn_engine import GameSession, start_run
from dicetactician.core.constants import ClassName
from dicetactician.core.content import ContentRepository
from dicetactician.dice.dice import DieFace


class ScriptedRandom(random.Random):
    """
    A random source that replays scripted values.

    Once a script runs out it falls back to fixed answers: random() gives
    0.99 (no crit, no dodge), randint() gives the lower bound, choice() and
    randrange() pick the first option.
    """

    def __init__(self, randoms=(), ints=(), picks=()) -> None:
        super().__init__(0)
        self.randoms = list(randoms)
        self.ints = list(ints)
        self.picks = list(picks)

    def getrandbits(self, k: int) -> int:
        # Integer draws (sample, shuffle) stay on the seeded generator.
        return super().getrandbits(k)

    def random(self) -> float:
        return self.randoms.pop(0) if self.randoms else 0.99

    def randint(self, a: int, b: int) -> int:
        return self.ints.pop(0) if self.ints else a

    def randrange(self, start, stop=None, step=1):
        if stop is None:
            start = 0
        return self.picks.pop(0) if self.picks else start

    def choice(self, seq):
        return seq[self.picks.pop(0) if self.picks else 0]


@pytest.fixture
def content():
    return ContentRepository()


@pytest.fixture
def scripted():
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def new_session(content):
    """
    Factory for a session in combat: the run is started with the given class
    and the enemy replaced by the named archetype, scaled to round 1.
    """

    def _make(class_name: ClassName, rng=None, enemy: str | None = "Goblin") -> GameSession:
        session = GameSession.from_content(content, rng=rng or ScriptedRandom())
        result = start_run(session, class_name)
        assert result.success
        if enemy is not None:
            session.enemy = create_enemy(content.get_enemy(enemy), session.current_round)
        return session

    return _make


@pytest.fixture
def show_faces():
    """Sets the rolled faces of the player's dice, in order, as if rolled."""

    def _show(session: GameSession, *faces: DieFace) -> list[str]:
        dice = session.player.dice_set.dice
        for die, face in zip(dice, faces):
            die.show(face)
        session.has_rolled = True
        return [die.id for die in dice]

    return _show
