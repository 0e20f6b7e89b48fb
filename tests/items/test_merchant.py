"""
Tests for merchants: variants, inventories, pricing, purchases and dialogue.
"""

import random

import pytest

from dicetactician.character.player import Player
from dicetactician.core.constants import ClassName, MerchantKind, Rarity
from dicetactician.effects.economy_effect import PriceMultiplierEffect
from dicetactician.items.merchant import (
    FAREWELLS,
    GREETINGS,
    VARIANT_GREETINGS,
    Merchant,
    create_random_item,
    select_merchant_kind,
)


@pytest.fixture
def catalog(content):
    return content.all_items()


@pytest.fixture
def player(content):
    character_class = content.get_class(ClassName.NATURE_SHAMAN)
    player = Player.create(ClassName.NATURE_SHAMAN, character_class.build_dice_set())
    player.gold = 40
    return player


@pytest.mark.parametrize(
    "encounter, kind",
    [
        (1, MerchantKind.NORMAL),
        (6, MerchantKind.DISCOUNT),
        (9, MerchantKind.BLACK_MARKET),
        (12, MerchantKind.MYSTERIOUS),
        (18, MerchantKind.BLACK_MARKET),
        (24, MerchantKind.MYSTERIOUS),
        (30, MerchantKind.DISCOUNT),
    ],
)
def test_select_merchant_kind(encounter, kind):
    assert select_merchant_kind(encounter) == kind


def test_normal_inventory_is_distinct(catalog):
    merchant = Merchant.generate(1, catalog, 0, random.Random(3))
    names = [item.name for item in merchant.inventory]
    assert len(names) == 3
    assert len(set(names)) == 3


def test_discount_merchant(catalog):
    """
    Test that the discount merchant offers four items at 80% of their price.
    """
    merchant = Merchant.generate(6, catalog, 0, random.Random(3))
    assert merchant.kind == MerchantKind.DISCOUNT
    assert len(merchant.inventory) == 4
    base = {item.name: item.cost for item in catalog}
    for item in merchant.inventory:
        assert item.cost == int(base[item.name] * 0.8)


def test_black_market_prices(catalog):
    merchant = Merchant.generate(9, catalog, 0, random.Random(3))
    base = {item.name: item.cost for item in catalog}
    assert len(merchant.inventory) == 3
    for item in merchant.inventory:
        assert item.cost == int(base[item.name] * 1.2)


def test_generation_never_alters_the_catalog(catalog):
    before = [item.cost for item in catalog]
    Merchant.generate(6, catalog, 0, random.Random(1))
    Merchant.generate(12, catalog, 0, random.Random(1))
    assert [item.cost for item in catalog] == before


def test_poor_players_only_see_common_items(catalog):
    """
    Test that rarer items stay locked until the player holds enough gold.
    """
    rng = random.Random(11)
    for _ in range(50):
        assert create_random_item(catalog, 0, rng).rarity == Rarity.COMMON


def test_purchase(catalog, player):
    """
    Test that a purchase spends gold, applies the item and marks it sold.
    """
    merchant = Merchant.generate(1, catalog, player.gold, random.Random(3))
    price = merchant.price_for(0, player)
    player.gold = price
    result = merchant.purchase(0, player, random.Random(0))
    assert result.success
    assert result.message.startswith(f"Purchased {merchant.inventory[0].name} for {price} gold!")
    assert merchant.is_sold(0)
    assert len(merchant.available_items()) == 2
    assert merchant.inventory[0].name in player.items


def test_rejected_purchase_changes_nothing(catalog, player):
    merchant = Merchant.generate(1, catalog, player.gold, random.Random(3))
    player.gold = merchant.price_for(0, player) - 1
    gold = player.gold
    assert merchant.purchase(0, player, random.Random(0)).message == "Not enough gold!"
    assert player.gold == gold
    assert not merchant.is_sold(0)
    assert merchant.purchase(-1, player, random.Random(0)).message == "Invalid item."


def test_price_multiplier(catalog, player):
    merchant = Merchant.generate(1, catalog, player.gold, random.Random(3))
    full = merchant.price_for(0, player)
    player.add_effect(PriceMultiplierEffect(name="Discount", price_multiplier=0.8))
    assert merchant.price_for(0, player) == int(full * 0.8)


def test_contextual_dialogue(catalog, player):
    """
    Test that the opening line follows the player's health and wealth.
    """
    rng = random.Random(0)
    first = Merchant.generate(1, catalog, 0, rng)
    later = Merchant.generate(2, catalog, 0, rng)
    assert first.contextual_dialogue(player, rng).startswith("First time seeing you!")
    assert later.contextual_dialogue(player, rng) in GREETINGS
    player.gold = 150
    assert later.contextual_dialogue(player, rng).startswith("My, my!")
    player.gold = 5
    assert later.contextual_dialogue(player, rng).startswith("A bit short on gold")
    player.hp = 20
    assert later.contextual_dialogue(player, rng) == "You look hurt! Perhaps a healing potion?"


def test_variant_greetings(catalog):
    rng = random.Random(0)
    shady = Merchant.generate(9, catalog, 0, rng)
    assert shady.name == "Shady Dealer"
    assert shady.greeting(rng) == VARIANT_GREETINGS[MerchantKind.BLACK_MARKET]
    assert shady.farewell(rng) in FAREWELLS
