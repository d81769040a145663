"""
JSON catalog implementation.

Reads items and per-owner watched state from a single JSON file:

    {"items": [{"item_id": "tt0133093", "kind": "movie", "title": "The Matrix",
                "watched_by": ["alice"]}]}
"""

import json
from collections.abc import Iterable
from pathlib import Path

from pydantic import TypeAdapter, ValidationError as PydanticValidationError
from typing_extensions import NotRequired, TypedDict, override

from ..exceptions import ConfigurationError, ValidationError
from ..interfaces import Catalog
from ..logging_config import get_logger
from ..models import Item, ItemKind


class CatalogEntry(TypedDict):
    """On-disk shape of one catalog item."""

    item_id: str
    kind: ItemKind
    title: NotRequired[str]
    watched_by: NotRequired[list[str]]


class CatalogFile(TypedDict):
    """On-disk shape of the catalog file."""

    items: list[CatalogEntry]


class JSONCatalog(Catalog):
    """
    Catalog that reads from a JSON file.

    The file is loaded once and cached; call reload() to pick up changes.
    """

    def __init__(self, catalog_path: Path):
        """
        Initialize JSON catalog.

        Args:
            catalog_path: Path to the catalog JSON file
        """
        self.catalog_path: Path = Path(catalog_path)

        self.logger = get_logger("json_catalog")

        if not self.catalog_path.exists():
            raise FileNotFoundError(f"Catalog file does not exist: {self.catalog_path}")

        if not self.catalog_path.is_file():
            raise ConfigurationError(f"Catalog path is not a file: {self.catalog_path}")

        # Cache for loaded items
        self._items = dict[str, Item]()
        self._watched_by = dict[str, set[str]]()
        self._cache_loaded: bool = False

    def _load_items(self) -> None:
        """Load all items from the catalog file into cache."""
        if self._cache_loaded:
            return

        try:
            with open(self.catalog_path, "r", encoding="utf-8") as f:
                data = TypeAdapter(CatalogFile).validate_python(json.load(f))
        except (json.JSONDecodeError, PydanticValidationError) as e:
            raise ConfigurationError(f"Invalid catalog file {self.catalog_path}: {e}") from e

        for entry in data["items"]:
            try:
                item = Item(item_id=entry["item_id"], kind=entry["kind"], title=entry.get("title"))
            except ValidationError as e:
                self.logger.warning(f"Skipping invalid catalog entry {entry!r}: {e}")
                continue

            if item.item_id in self._items:
                self.logger.warning(f"Duplicate catalog item {item.item_id}, keeping first")
                continue

            self._items[item.item_id] = item
            for owner_id in entry.get("watched_by", []):
                self._watched_by.setdefault(owner_id, set()).add(item.item_id)

        self._cache_loaded = True
        self.logger.info(f"Loaded {len(self._items)} items from {self.catalog_path}")

    @override
    def list_watched(self, owner_id: str) -> Iterable[Item]:
        """Return the owner's watched items in catalog order."""
        self._load_items()
        watched = self._watched_by.get(owner_id, set())
        return [item for item_id, item in self._items.items() if item_id in watched]

    @override
    def get_item(self, item_id: str) -> Item:
        """Get a specific item by ID."""
        self._load_items()

        if item_id not in self._items:
            raise KeyError(f"Item not found: {item_id}")

        return self._items[item_id]

    def list_items(self) -> list[Item]:
        """Get all catalog items in file order."""
        self._load_items()
        return list(self._items.values())

    def reload(self) -> None:
        """Force reload items from the catalog file."""
        self._items.clear()
        self._watched_by.clear()
        self._cache_loaded = False
        self._load_items()
