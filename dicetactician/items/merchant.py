"""
Merchant module for the engine.

Defines the merchant variants, how each builds and prices its inventory,
the purchase flow and the merchant's lines of dialogue.
"""

import random

from pydantic import BaseModel, Field

from dicetactician.character.player import Player
from dicetactician.core.constants import (
    MERCHANT_CADENCE,
    MERCHANT_INVENTORY_SIZE,
    RARITY_GOLD_THRESHOLDS,
    RARITY_WEIGHTS,
    MerchantKind,
    Rarity,
)
from dicetactician.core.error_handling import ActionResult, accept, reject
from dicetactician.core.logging import log_debug, log_info
from dicetactician.core.utils import floor_int

from .item import Item

GREETINGS = [
    "Welcome, brave adventurer! What catches your eye?",
    "Ah, a customer! I have just what you need!",
    "These wares won't last long at these prices!",
    "Looking for something special? You've come to the right place!",
    "My goods are the finest in the land!",
    "Step right up! Everything must go!",
    "Treasures from far and wide, all for you!",
    "Your gold is welcome here, friend!",
    "I've been waiting for someone like you!",
    "Rare items, fair prices!",
]

VARIANT_GREETINGS: dict[MerchantKind, str] = {
    MerchantKind.BLACK_MARKET: (
        "Psst... looking for something special? "
        "I've got the goods... for the right price."
    ),
    MerchantKind.DISCOUNT: "Special sale today! Everything at a discount!",
    MerchantKind.MYSTERIOUS: (
        "Fate has brought you to me... Let's see what destiny has in store."
    ),
}

FAREWELLS = [
    "Come back soon!",
    "Safe travels, adventurer!",
    "May fortune smile upon you!",
    "Good luck on your journey!",
    "Until we meet again!",
    "Spend that gold wisely!",
    "May your blade stay sharp!",
    "The road ahead is dangerous, be prepared!",
    "I'll have new stock next time!",
    "Farewell, and may the gods watch over you!",
]

PITCHES: dict[Rarity, list[str]] = {
    Rarity.COMMON: [
        "A solid choice for any adventurer!",
        "You won't regret this purchase!",
        "Simple, but effective!",
        "A reliable piece of equipment!",
    ],
    Rarity.RARE: [
        "Ah, you have a good eye!",
        "This is one of my better pieces!",
        "Not many can afford this quality!",
        "A rare find indeed!",
    ],
    Rarity.EPIC: [
        "Now THIS is a legendary piece!",
        "Only for the most discerning customers!",
        "You won't find this anywhere else!",
        "A true masterwork!",
    ],
    Rarity.LEGENDARY: [
        "By the gods, you've found my best item!",
        "Forged by ancient masters!",
        "This could turn the tide of any battle!",
        "A once-in-a-lifetime opportunity!",
    ],
}


def select_merchant_kind(encounter: int) -> MerchantKind:
    """
    Picks the merchant variant for the given merchant encounter number.

    The intervals are checked from the rarest to the most common, so
    encounter 36 meets the Mysterious Merchant rather than the Shady Dealer.
    """
    if encounter > 0:
        for interval, kind in MERCHANT_CADENCE:
            if encounter % interval == 0:
                return kind
    return MerchantKind.NORMAL


def create_random_item(
    catalog: list[Item], player_gold: int, rng: random.Random
) -> Item:
    """
    Draws a random item, weighting rarities by the gold the player holds.

    Args:
        catalog (list[Item]):
            Every item that can be sold.
        player_gold (int):
            Gold used to unlock the rarer rarities.
        rng (random.Random):
            The random source.

    Returns:
        Item:
            A fresh copy of the drawn item.

    """
    rarities = [r for r in Rarity if player_gold >= RARITY_GOLD_THRESHOLDS[r]]
    weights = [RARITY_WEIGHTS[r] for r in rarities]
    rarity = rng.choices(rarities, weights=weights)[0]
    pool = [item for item in catalog if item.rarity == rarity]
    if not pool:
        pool = [item for item in catalog if item.rarity == Rarity.COMMON]
    return rng.choice(pool).model_copy(deep=True)


def create_inventory(catalog: list[Item], count: int, rng: random.Random) -> list[Item]:
    """Draws `count` distinct items uniformly from the catalog."""
    picked = rng.sample(catalog, min(count, len(catalog)))
    return [item.model_copy(deep=True) for item in picked]


class Merchant(BaseModel):
    """
    A merchant met between fights.

    Sold items stay in the inventory so they can still be displayed; their
    indices are recorded in `sold`.
    """

    kind: MerchantKind = Field(
        MerchantKind.NORMAL,
        description="The merchant variant.",
    )
    encounter: int = Field(
        1,
        description="Which merchant encounter of the run this is.",
    )
    inventory: list[Item] = Field(
        default_factory=list,
        description="Items on offer, with their variant-adjusted costs.",
    )
    sold: set[int] = Field(
        default_factory=set,
        description="Indices of the items already purchased.",
    )

    @property
    def name(self) -> str:
        return self.kind.display_name

    @classmethod
    def generate(
        cls,
        encounter: int,
        catalog: list[Item],
        player_gold: int,
        rng: random.Random,
    ) -> "Merchant":
        """
        Creates the merchant of the given encounter and stocks its inventory.

        Args:
            encounter (int):
                The merchant encounter number, starting at 1.
            catalog (list[Item]):
                Every item that can be sold.
            player_gold (int):
                The player's gold, which unlocks rarer draws.
            rng (random.Random):
                The random source.

        Returns:
            Merchant:
                The stocked merchant.

        """
        kind = select_merchant_kind(encounter)
        if kind == MerchantKind.DISCOUNT:
            inventory = create_inventory(catalog, MERCHANT_INVENTORY_SIZE + 1, rng)
            for item in inventory:
                item.cost = floor_int(item.cost * 0.8)
        elif kind == MerchantKind.BLACK_MARKET:
            inventory = [
                create_random_item(catalog, player_gold + 50, rng)
                for _ in range(MERCHANT_INVENTORY_SIZE)
            ]
            for item in inventory:
                item.cost = floor_int(item.cost * 1.2)
        elif kind == MerchantKind.MYSTERIOUS:
            inventory = [
                create_random_item(catalog, player_gold, rng)
                for _ in range(MERCHANT_INVENTORY_SIZE)
            ]
            for item in inventory:
                item.cost = floor_int(item.cost * (0.7 + rng.random() * 0.6))
        else:
            inventory = create_inventory(catalog, MERCHANT_INVENTORY_SIZE, rng)
        log_debug(
            f"{kind.display_name} stocked",
            {"encounter": encounter, "items": [item.name for item in inventory]},
        )
        return cls(kind=kind, encounter=encounter, inventory=inventory)

    def is_sold(self, index: int) -> bool:
        return index in self.sold

    def available_items(self) -> list[Item]:
        return [item for i, item in enumerate(self.inventory) if i not in self.sold]

    def price_for(self, index: int, player: Player) -> int:
        """Returns the price the player pays for an item, after discounts."""
        return floor_int(self.inventory[index].cost * player.price_multiplier())

    def purchase(self, index: int, player: Player, rng: random.Random) -> ActionResult:
        """
        Sells an item to the player.

        The item is applied exactly once and stays listed as sold. A rejected
        purchase leaves both the merchant and the player untouched.

        Args:
            index (int):
                Index of the item in the inventory.
            player (Player):
                The buyer.
            rng (random.Random):
                The random source handed to the item.

        Returns:
            ActionResult:
                The outcome of the purchase.

        """
        if index < 0 or index >= len(self.inventory):
            return reject("Invalid item.", {"index": index})
        if index in self.sold:
            return reject("Item already sold.", {"index": index})
        item = self.inventory[index]
        price = self.price_for(index, player)
        if not player.spend_gold(price):
            return reject("Not enough gold!", {"price": price, "gold": player.gold})
        notes = item.apply(player, rng)
        self.sold.add(index)
        log_info(f"Purchased {item.name}", {"price": price, "gold_left": player.gold})
        message = " ".join([f"Purchased {item.name} for {price} gold!", *notes])
        return accept(message)

    # ============================================================================
    # DIALOGUE
    # ============================================================================

    def greeting(self, rng: random.Random) -> str:
        if self.kind in VARIANT_GREETINGS:
            return VARIANT_GREETINGS[self.kind]
        return rng.choice(GREETINGS)

    def farewell(self, rng: random.Random) -> str:
        return rng.choice(FAREWELLS)

    def pitch(self, item: Item, rng: random.Random) -> str:
        return rng.choice(PITCHES.get(item.rarity, PITCHES[Rarity.COMMON]))

    def contextual_dialogue(self, player: Player, rng: random.Random) -> str:
        """Picks the line the merchant opens with, based on the player's state."""
        if player.hp < player.max_hp * 0.3:
            return "You look hurt! Perhaps a healing potion?"
        if player.gold > 100:
            return "My, my! Someone's been successful! Let me show you my premium items!"
        if player.gold < 15:
            return "A bit short on gold, eh? Come back when you've had more luck!"
        if self.encounter == 1:
            return "First time seeing you! Let me show you what I've got!"
        return self.greeting(rng)
