"""
Character class module for the engine.

Defines the catalog entry of a playable class: its descriptive text and
the faces of its three dice.
"""

from typing import Any

from pydantic import BaseModel, Field

from dicetactician.core.constants import ClassName
from dicetactician.dice.dice import DiceSet, Die, DieFace


class CharacterClass(BaseModel):
    """A playable class as described by the catalog."""

    name: ClassName = Field(
        description="The class identity.",
    )
    description: str = Field(
        "",
        description="Short flavor description of the class.",
    )
    passive: str = Field(
        "",
        description="Description of the passive ability.",
    )
    special: str = Field(
        "",
        description="Description of the special ability.",
    )
    dice: list[list[DieFace]] = Field(
        description="The faces of each of the class dice.",
    )

    def model_post_init(self, _: Any) -> None:
        if len(self.dice) != 3:
            raise ValueError(f"Class '{self.name}' must have 3 dice, got {len(self.dice)}.")

    def build_dice_set(self) -> DiceSet:
        """
        Creates fresh dice for a new run.

        Returns:
            DiceSet: Unrolled dice with new ids, owning copies of the faces.

        """
        return DiceSet(
            class_name=self.name.display_name,
            dice=[Die(faces=list(faces)) for faces in self.dice],
        )
