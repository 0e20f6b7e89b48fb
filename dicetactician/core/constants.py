"""
Constants and enumerations for the engine.

Defines the tunable rule constants, and the enumerations for die faces,
character classes, enemy categories, game states, dice slots, merchant
variants and item rarities used throughout the engine.
"""

from enum import Enum

# Player base statistics.
PLAYER_BASE_HP = 100
PLAYER_BASE_CRIT_MULTIPLIER = 2.0

# Enemy scaling: every round inflates base HP and attack by this fraction.
ENEMY_SCALING_PER_ROUND = 0.15
# Round cadence for elite and boss encounters.
ELITE_ROUND_INTERVAL = 5
BOSS_ROUND_INTERVAL = 10

# A merchant appears whenever the new round is a multiple of this value.
MERCHANT_ROUND_INTERVAL = 3
# Number of items in a regular merchant inventory.
MERCHANT_INVENTORY_SIZE = 3

# Number of entries kept in the best-runs leaderboard.
BEST_RUNS_LIMIT = 10

# Poison and burn payloads of enemy attacks last this many rounds.
ENEMY_DOT_DURATION = 3


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.lower().capitalize()


class FaceKind(NiceEnum):
    """Defines the kind of a die face."""

    ATTACK = "attack"
    DEFENSE = "defense"
    CRIT = "crit"
    MAGIC = "magic"
    SPECIAL = "special"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this face kind."""
        return {
            FaceKind.ATTACK: "⚔️",
            FaceKind.DEFENSE: "🛡️",
            FaceKind.CRIT: "💥",
            FaceKind.MAGIC: "✨",
            FaceKind.SPECIAL: "⭐",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this face kind."""
        return {
            FaceKind.ATTACK: "bold red",
            FaceKind.DEFENSE: "bold blue",
            FaceKind.CRIT: "bold yellow",
            FaceKind.MAGIC: "bold magenta",
            FaceKind.SPECIAL: "bold cyan",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies face kind color formatting to a message."""
        return f"[{self.color}]{message}[/]"


# Icons for the class-specific symbols printed on special faces.
SYMBOL_ICONS: dict[str, str] = {
    "earth": "🌍",
    "stone": "🗿",
    "crystal": "💎",
    "darkness": "🌑",
    "void": "🕳️",
    "shadow": "👥",
    "flame": "🔥",
    "frost": "❄️",
    "lightning": "⚡",
    "wind": "💨",
    "nature": "🌿",
    "blood": "🩸",
    "holy": "✝️",
    "chaos": "🌀",
    "time": "⏰",
    "spirit": "👻",
    "poison": "☠️",
    "blade": "🗡️",
}


class ClassName(NiceEnum):
    """Defines the playable character classes."""

    BLADE_DANCER = "Blade Dancer"
    GEOMANCER = "Geomancer"
    SHADOW_PRIEST = "Shadow Priest"
    PYROMANTIC = "Pyromantic"
    FROST_WEAVER = "Frost Weaver"
    STORM_CALLER = "Storm Caller"
    NATURE_SHAMAN = "Nature Shaman"
    BLOOD_KNIGHT = "Blood Knight"
    HOLY_PALADIN = "Holy Paladin"
    CHAOS_MAGE = "Chaos Mage"
    TIME_WEAVER = "Time Weaver"
    SPIRIT_SUMMONER = "Spirit Summoner"

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "ClassName | None":
        """
        Looks up a class by its display name (case insensitive).

        Args:
            name (str): The display name, e.g. "Blade Dancer".

        Returns:
            ClassName | None: The matching class, or None if unknown.

        """
        wanted = name.strip().lower()
        for class_name in cls:
            if class_name.value.lower() == wanted:
                return class_name
        return None


# Initial special counters of every class.
CLASS_COUNTERS: dict[ClassName, dict[str, int]] = {
    ClassName.BLADE_DANCER: {"momentum": 0},
    ClassName.GEOMANCER: {"earth_count": 0, "stone_count": 0, "crystal_count": 0},
    ClassName.SHADOW_PRIEST: {"darkness_stacks": 0, "void_power": 0},
    ClassName.PYROMANTIC: {"flame_stacks": 0, "burn_damage": 0},
    ClassName.FROST_WEAVER: {"frost_stacks": 0, "chill_duration": 0},
    ClassName.STORM_CALLER: {"lightning_charge": 0, "wind_stacks": 0},
    ClassName.NATURE_SHAMAN: {"growth_stacks": 0, "healing_power": 0},
    ClassName.BLOOD_KNIGHT: {"blood_stacks": 0, "life_steal": 0},
    ClassName.HOLY_PALADIN: {"holy_power": 0},
    ClassName.CHAOS_MAGE: {"chaos_stacks": 0, "wild_magic": 0},
    ClassName.TIME_WEAVER: {"time_stacks": 0, "haste_effect": 0},
    ClassName.SPIRIT_SUMMONER: {"spirit_count": 0, "summon_power": 0},
}


class EnemyCategory(NiceEnum):
    """Defines the category of an enemy."""

    MINION = "minion"
    ELITE = "elite"
    BOSS = "boss"

    @property
    def gold_reward(self) -> int:
        """Returns the base gold reward for defeating an enemy of this category."""
        return {
            EnemyCategory.MINION: 10,
            EnemyCategory.ELITE: 25,
            EnemyCategory.BOSS: 50,
        }[self]

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this enemy category."""
        return {
            EnemyCategory.MINION: "👹",
            EnemyCategory.ELITE: "👺",
            EnemyCategory.BOSS: "🐉",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this enemy category."""
        return {
            EnemyCategory.MINION: "red",
            EnemyCategory.ELITE: "bold magenta",
            EnemyCategory.BOSS: "bold red",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies enemy category color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class GameState(NiceEnum):
    """Defines the state of the run state machine."""

    MENU = "menu"
    COMBAT = "combat"
    MERCHANT = "merchant"
    GAME_OVER = "game_over"


class DiceSlot(NiceEnum):
    """Defines the slots a rolled die can be assigned to."""

    ATTACK = "attack"
    DEFENSE = "defense"
    SPECIAL = "special"


class EnemyActionType(NiceEnum):
    """Defines the kinds of action an enemy can take."""

    ATTACK = "attack"
    HEAL = "heal"
    DEFEND = "defend"
    REVIVE = "revive"


class LogKind(NiceEnum):
    """Defines the kind of a combat log entry."""

    PLAYER = "player"
    ENEMY = "enemy"
    SPECIAL = "special"
    INFO = "info"

    @property
    def color(self) -> str:
        """Returns the color string associated with this log kind."""
        return {
            LogKind.PLAYER: "bold green",
            LogKind.ENEMY: "bold red",
            LogKind.SPECIAL: "bold yellow",
            LogKind.INFO: "cyan",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies log kind color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class Rarity(NiceEnum):
    """Defines the rarity of an item."""

    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"

    @property
    def color(self) -> str:
        """Returns the color string associated with this rarity."""
        return {
            Rarity.COMMON: "white",
            Rarity.RARE: "bold blue",
            Rarity.EPIC: "bold magenta",
            Rarity.LEGENDARY: "bold yellow",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies rarity color formatting to a message."""
        return f"[{self.color}]{message}[/]"


# Relative weight of each rarity when drawing a random item, and the gold
# the player must hold for the rarity to enter the pool.
RARITY_WEIGHTS: dict[Rarity, int] = {
    Rarity.COMMON: 50,
    Rarity.RARE: 30,
    Rarity.EPIC: 15,
    Rarity.LEGENDARY: 5,
}
RARITY_GOLD_THRESHOLDS: dict[Rarity, int] = {
    Rarity.COMMON: 0,
    Rarity.RARE: 20,
    Rarity.EPIC: 30,
    Rarity.LEGENDARY: 50,
}


class MerchantKind(NiceEnum):
    """Defines the merchant variants."""

    NORMAL = "normal"
    DISCOUNT = "discount"
    BLACK_MARKET = "black_market"
    MYSTERIOUS = "mysterious"

    @property
    def display_name(self) -> str:
        return {
            MerchantKind.NORMAL: "Traveling Merchant",
            MerchantKind.DISCOUNT: "Generous Merchant",
            MerchantKind.BLACK_MARKET: "Shady Dealer",
            MerchantKind.MYSTERIOUS: "Mysterious Merchant",
        }[self]


# Merchant variant cadence, keyed on the merchant encounter count. The first
# matching interval wins.
MERCHANT_CADENCE: tuple[tuple[int, MerchantKind], ...] = (
    (12, MerchantKind.MYSTERIOUS),
    (9, MerchantKind.BLACK_MARKET),
    (6, MerchantKind.DISCOUNT),
)
