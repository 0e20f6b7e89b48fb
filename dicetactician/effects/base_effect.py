"""
Base effect module for the engine.

Defines the base class shared by every status effect and the report
produced when an effect ticks at the end of a turn.
"""

from typing import Any

from pydantic import BaseModel, Field


class EffectTick(BaseModel):
    """What a single effect did to its owner during one tick."""

    effect_name: str = Field(
        description="The name of the effect that ticked.",
    )
    damage: int = Field(
        0,
        description="Damage actually dealt to the owner.",
    )
    healing: int = Field(
        0,
        description="HP actually restored to the owner.",
    )


class Effect(BaseModel):
    """
    Base class for all status effects that can be attached to an actor.

    The name is the identity key used by has/remove lookups. A missing
    duration means the effect lasts for the whole run; otherwise the
    duration counts the remaining rounds and is decremented once per tick.
    """

    name: str = Field(
        description="The name of the effect.",
    )
    description: str = Field(
        "",
        description="A brief description of the effect.",
    )
    duration: int | None = Field(
        default=None,
        description="Remaining rounds, None for effects that last the whole run.",
    )

    @property
    def color(self) -> str:
        """Returns the color string associated with this effect type."""
        return "dim white"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this effect type."""
        return "❔"

    @property
    def colored_name(self) -> str:
        """Returns the effect name with color formatting applied."""
        return self.colorize(self.name)

    def colorize(self, message: str) -> str:
        """Applies effect color formatting to a message."""
        return f"[{self.color}]{message}[/]"

    def model_post_init(self, _: Any) -> None:
        if not self.name:
            raise ValueError("Effect name must not be empty.")
        if self.duration is not None and self.duration <= 0:
            raise ValueError(
                f"Duration of '{self.name}' must be positive or None, got {self.duration}."
            )

    def is_permanent(self) -> bool:
        """
        Check if the effect lasts for the whole run.

        Returns:
            bool: True if the effect has no duration.

        """
        return self.duration is None

    def attack_contribution(self) -> int:
        """Returns the bonus this effect adds to its owner's attack."""
        return 0

    def defense_contribution(self) -> int:
        """Returns the bonus this effect adds to its owner's defense."""
        return 0

    def tick(self, owner: Any) -> EffectTick | None:
        """
        Applies the per-turn payload of the effect to its owner.

        Args:
            owner (Actor):
                The actor carrying the effect.

        Returns:
            EffectTick | None:
                What the effect did, or None for effects without a payload.

        """
        return None

    def advance_duration(self) -> bool:
        """
        Consumes one round of the effect duration.

        Returns:
            bool:
                True if the effect is still active afterwards.

        """
        if self.duration is None:
            return True
        self.duration -= 1
        return self.duration > 0
