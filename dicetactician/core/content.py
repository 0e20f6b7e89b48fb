"""
Content repository module for the engine.

Loads the static catalogs (class dice, enemy archetypes, items) from the
JSON files shipped in the package and gives by-name access to them.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from catchery import log_warning

from dicetactician.character.character_class import CharacterClass
from dicetactician.combat.progression import EnemyTemplate
from dicetactician.items.item import Item

from .constants import ClassName, EnemyCategory, Rarity
from .utils import Singleton

# Catalogs shipped with the package.
DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class ContentRepository(metaclass=Singleton):
    """
    One-stop registry for every catalog entry that needs fast by-name access.
    """

    classes: dict[ClassName, CharacterClass]
    enemies: dict[str, EnemyTemplate]
    items: dict[str, Item]

    def __init__(self, data_dir: Path | None = None) -> None:
        """
        Initialize the ContentRepository.

        Args:
            data_dir (Path | None):
                The directory containing the catalog files. Defaults to the
                catalogs shipped with the package.

        """
        self.data_dir = data_dir or DEFAULT_DATA_DIR
        self.reload(self.data_dir)

    def reload(self, root: Path) -> None:
        """
        (Re)load all JSON catalogs from disk.

        Args:
            root (Path):
                The directory containing the catalog files.

        """
        self.classes = _load_json_file(
            root / "classes.json",
            self._load_classes,
            "character classes",
        )
        self.enemies = _load_json_file(
            root / "enemies.json",
            self._load_enemies,
            "enemies",
        )
        self.items = _load_json_file(
            root / "items.json",
            self._load_items,
            "items",
        )
        for class_name in ClassName:
            if class_name not in self.classes:
                log_warning(
                    f"Class '{class_name.display_name}' has no catalog entry.",
                    {"data_dir": str(root)},
                )
        for category in EnemyCategory:
            if not self.get_roster().get(category):
                log_warning(
                    f"No enemies of category '{category.display_name}' in the catalog.",
                    {"data_dir": str(root)},
                )

    def _get_from_collection(self, collection_name: str, item_name: Any) -> Any | None:
        """
        Generic helper to get an entry from any collection.

        Args:
            collection_name (str):
                Name of the collection attribute (e.g., 'items', 'enemies').
            item_name (Any):
                Key of the entry to retrieve.

        Returns:
            Any | None:
                The entry if found, None otherwise.

        """
        collection = getattr(self, collection_name, None)
        if not collection:
            log_warning(
                f"Collection '{collection_name}' not found in ContentRepository.",
                {"collection_name": collection_name, "item_name": item_name},
            )
            return None
        entry = collection.get(item_name)
        if entry is None:
            log_warning(
                f"Entry '{item_name}' not found in collection '{collection_name}'.",
                {"collection_name": collection_name, "item_name": item_name},
            )
        return entry

    def get_class(self, class_name: ClassName) -> CharacterClass | None:
        """Get a character class by identity, or None if not found."""
        return self._get_from_collection("classes", class_name)

    def get_enemy(self, name: str) -> EnemyTemplate | None:
        """Get an enemy archetype by name, or None if not found."""
        return self._get_from_collection("enemies", name)

    def get_item(self, name: str) -> Item | None:
        """Get a fresh copy of an item by name, or None if not found."""
        item = self._get_from_collection("items", name)
        return item.model_copy(deep=True) if item else None

    def get_roster(self) -> dict[EnemyCategory, list[EnemyTemplate]]:
        """Returns the enemy archetypes grouped by category, in catalog order."""
        roster: dict[EnemyCategory, list[EnemyTemplate]] = {
            category: [] for category in EnemyCategory
        }
        for template in self.enemies.values():
            roster[template.category].append(template)
        return roster

    def get_items_by_rarity(self, rarity: Rarity) -> list[Item]:
        """Returns the catalog items of a rarity, in catalog order."""
        return [item for item in self.items.values() if item.rarity == rarity]

    def all_items(self) -> list[Item]:
        return list(self.items.values())

    @staticmethod
    def _load_classes(data: list[dict]) -> dict[ClassName, CharacterClass]:
        """
        Load character classes from JSON data.

        Raises:
            ValueError: If duplicate class names are found.

        """
        classes: dict[ClassName, CharacterClass] = {}
        for class_data in data:
            character_class = CharacterClass(**class_data)
            if character_class.name in classes:
                raise ValueError(f"Duplicate class name: {character_class.name}")
            classes[character_class.name] = character_class
        return classes

    @staticmethod
    def _load_enemies(data: list[dict]) -> dict[str, EnemyTemplate]:
        """
        Load enemy archetypes from JSON data.

        Raises:
            ValueError: If duplicate enemy names are found.

        """
        enemies: dict[str, EnemyTemplate] = {}
        for enemy_data in data:
            template = EnemyTemplate(**enemy_data)
            if template.name in enemies:
                raise ValueError(f"Duplicate enemy name: {template.name}")
            enemies[template.name] = template
        return enemies

    @staticmethod
    def _load_items(data: list[dict]) -> dict[str, Item]:
        """
        Load items from JSON data.

        Raises:
            ValueError: If duplicate item names are found.

        """
        items: dict[str, Item] = {}
        for item_data in data:
            item = Item(**item_data)
            if item.name in items:
                raise ValueError(f"Duplicate item name: {item.name}")
            items[item.name] = item
        return items


def _load_json_file(
    filepath: Path,
    loader_func: Callable[[list[dict]], dict[Any, Any]],
    description: str,
) -> dict[Any, Any]:
    """Helper to load and validate JSON files"""
    try:
        # Validate file path
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        if not filepath.is_file():
            raise ValueError(f"Not a file: {filepath}")
        # Load and validate JSON
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not data:
            raise ValueError(f"Empty data list in {filepath}")
        if not isinstance(data, list):
            raise ValueError(f"Expected list in {filepath}, got {type(data).__name__}")
        return loader_func(data)
    except (json.JSONDecodeError, FileNotFoundError, ValueError) as e:
        raise ValueError(f"Loading {description} from {filepath} raised an error: {e}")
