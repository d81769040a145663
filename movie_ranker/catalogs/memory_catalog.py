"""
In-memory catalog implementation.
"""

from collections.abc import Iterable

from typing_extensions import override

from ..interfaces import Catalog
from ..models import Item


class InMemoryCatalog(Catalog):
    """Catalog built from Python objects; every item is watched by the listed owners."""

    def __init__(self, items: Iterable[Item] = (), watched: dict[str, list[str]] | None = None):
        """
        Initialize in-memory catalog.

        Args:
            items: Catalog items
            watched: owner_id -> watched item ids (None = nothing watched)
        """
        self._items = {item.item_id: item for item in items}
        self._watched = {owner: list(ids) for owner, ids in (watched or {}).items()}

    def add(self, item: Item, watched_by: Iterable[str] = ()) -> None:
        """Add an item and mark it watched for the given owners."""
        self._items[item.item_id] = item
        for owner_id in watched_by:
            ids = self._watched.setdefault(owner_id, [])
            if item.item_id not in ids:
                ids.append(item.item_id)

    @override
    def list_watched(self, owner_id: str) -> Iterable[Item]:
        return [self._items[item_id] for item_id in self._watched.get(owner_id, []) if item_id in self._items]

    @override
    def get_item(self, item_id: str) -> Item:
        if item_id not in self._items:
            raise KeyError(f"Item not found: {item_id}")
        return self._items[item_id]
