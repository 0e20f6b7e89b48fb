from .base_ability import AbilityContext, AbilityOutcome, ClassAbility
from .resolver import (
    ABILITY_REGISTRY,
    apply_passive,
    build_context,
    get_ability,
    try_activate_special,
)

__all__ = [
    "ABILITY_REGISTRY",
    "AbilityContext",
    "AbilityOutcome",
    "ClassAbility",
    "apply_passive",
    "build_context",
    "get_ability",
    "try_activate_special",
]
