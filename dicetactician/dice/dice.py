"""
Dice module for the engine.

Defines die faces, dice and dice sets, and the random face selection used
when the player rolls.
"""

import random
import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dicetactician.core.constants import SYMBOL_ICONS, FaceKind


class DieFace(BaseModel):
    """
    A single printed outcome of a die.

    Attack and defense faces carry a numeric value. Crit and magic faces carry
    0 and only matter when assigned to the Special slot. Special faces carry a
    class symbol (e.g. "flame") that drives the class abilities.
    """

    model_config = ConfigDict(frozen=True)

    kind: FaceKind = Field(
        description="The kind of the face.",
    )
    value: int = Field(
        0,
        description="Numeric value, meaningful for attack and defense faces.",
    )
    symbol: str | None = Field(
        None,
        description="Class symbol, present only on special faces.",
    )

    def model_post_init(self, _: Any) -> None:
        if self.value < 0:
            raise ValueError(f"Die face value must be non-negative, got {self.value}.")
        if self.kind == FaceKind.SPECIAL and not self.symbol:
            raise ValueError("Special faces must carry a symbol.")
        if self.kind != FaceKind.SPECIAL and self.symbol is not None:
            raise ValueError(f"Only special faces carry a symbol, got {self.kind}.")

    @property
    def is_numeric(self) -> bool:
        """True for attack and defense faces."""
        return self.kind in (FaceKind.ATTACK, FaceKind.DEFENSE)

    @property
    def icon(self) -> str:
        if self.kind == FaceKind.SPECIAL and self.symbol:
            return SYMBOL_ICONS.get(self.symbol, FaceKind.SPECIAL.emoji)
        return self.kind.emoji

    def __str__(self) -> str:
        if self.is_numeric:
            return f"{self.kind.emoji}{self.value}"
        return self.icon


def _generate_die_id() -> str:
    return f"die_{uuid.uuid4().hex[:12]}"


class Die(BaseModel):
    """A die: an ordered list of faces and the face shown by the last roll."""

    id: str = Field(
        default_factory=_generate_die_id,
        description="Unique id, stable across rolls for the whole run.",
    )
    faces: list[DieFace] = Field(
        description="The faces of the die. Faces need not be unique.",
    )
    current_face: DieFace | None = Field(
        None,
        description="The outcome of the last roll, None when not rolled.",
    )
    is_rolled: bool = Field(
        False,
        description="Whether the die currently shows a rolled face.",
    )

    def model_post_init(self, _: Any) -> None:
        if not 4 <= len(self.faces) <= 8:
            raise ValueError(f"A die must have 4 to 8 faces, got {len(self.faces)}.")

    @property
    def face_kind(self) -> FaceKind | None:
        return self.current_face.kind if self.current_face else None

    @property
    def face_value(self) -> int:
        return self.current_face.value if self.current_face else 0

    @property
    def face_symbol(self) -> str | None:
        return self.current_face.symbol if self.current_face else None

    def show(self, face: DieFace) -> DieFace:
        """Sets the given face as the rolled outcome."""
        self.current_face = face
        self.is_rolled = True
        return face

    def reset(self) -> None:
        """Clears the rolled state."""
        self.current_face = None
        self.is_rolled = False

    def highest_face(self) -> DieFace:
        """Returns the face with the highest numeric value (first one on ties)."""
        return max(self.faces, key=lambda face: face.value)

    def special_faces(self) -> list[DieFace]:
        """Returns the faces that carry a class symbol."""
        return [face for face in self.faces if face.kind == FaceKind.SPECIAL]


def roll(die: Die, rng: random.Random) -> DieFace:
    """
    Rolls a die, selecting one of its faces uniformly at random.

    Args:
        die (Die):
            The die to roll.
        rng (random.Random):
            The random source.

    Returns:
        DieFace:
            The rolled face, also stored as the die's current face.

    """
    return die.show(rng.choice(die.faces))


class DiceSet(BaseModel):
    """The ordered dice owned by one character class."""

    class_name: str = Field(
        description="Display name of the class owning the dice.",
    )
    dice: list[Die] = Field(
        default_factory=list,
        description="The dice of the set.",
    )

    def roll_all(self, rng: random.Random) -> list[DieFace]:
        """Rolls every die of the set."""
        return [roll(die, rng) for die in self.dice]

    def reset_all(self) -> None:
        """Clears the rolled state of every die."""
        for die in self.dice:
            die.reset()

    def get_die(self, die_id: str) -> Die | None:
        """Returns the die with the given id, or None."""
        for die in self.dice:
            if die.id == die_id:
                return die
        return None

    def replace_face(self, die_index: int, face_index: int, face: DieFace) -> bool:
        """
        Replaces one face of one die. Out of range indices are ignored.

        Returns:
            bool: True if a face was replaced.

        """
        if not 0 <= die_index < len(self.dice):
            return False
        die = self.dice[die_index]
        if not 0 <= face_index < len(die.faces):
            return False
        die.faces[face_index] = face
        return True


def reset_all(dice_set: DiceSet) -> None:
    """Clears the rolled state for every die of the set."""
    dice_set.reset_all()
