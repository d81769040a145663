"""
Tests for catalog implementations.

Focus on watched-state lookup and file validation.
"""

import json
import tempfile
from pathlib import Path

import pytest

from movie_ranker.catalogs.json_catalog import JSONCatalog
from movie_ranker.catalogs.memory_catalog import InMemoryCatalog
from movie_ranker.exceptions import ConfigurationError
from movie_ranker.models import Item, ItemKind


def write_catalog(directory: str, data: object) -> Path:
    path = Path(directory) / "catalog.json"
    _ = path.write_text(json.dumps(data), encoding="utf-8")
    return path


SAMPLE = {
    "items": [
        {"item_id": "tt1", "kind": "movie", "title": "First", "watched_by": ["alice", "bob"]},
        {"item_id": "tt2", "kind": "show", "title": "Second", "watched_by": ["alice"]},
        {"item_id": "tt3", "kind": "movie", "watched_by": []},
        {"item_id": "tt4", "kind": "show"},
    ]
}


class TestJSONCatalog:
    """Test JSONCatalog behavior through public interface."""

    def test_list_watched_is_per_owner_in_file_order(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            # Arrange
            catalog = JSONCatalog(write_catalog(temp_dir, SAMPLE))

            # Act
            alice = [item.item_id for item in catalog.list_watched("alice")]
            bob = [item.item_id for item in catalog.list_watched("bob")]
            nobody = list(catalog.list_watched("carol"))

            # Assert
            assert alice == ["tt1", "tt2"]
            assert bob == ["tt1"]
            assert nobody == []

    def test_get_item(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            catalog = JSONCatalog(write_catalog(temp_dir, SAMPLE))

            show = catalog.get_item("tt2")
            untitled = catalog.get_item("tt3")

            assert show == Item(item_id="tt2", kind=ItemKind.SHOW, title="Second")
            assert untitled.title is None
            assert untitled.label == "tt3"
            assert len(catalog.list_items()) == 4

    def test_unknown_item_raises_key_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            catalog = JSONCatalog(write_catalog(temp_dir, SAMPLE))

            with pytest.raises(KeyError):
                catalog.get_item("missing")

    def test_resolve_kind(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            catalog = JSONCatalog(write_catalog(temp_dir, SAMPLE))

            assert catalog.resolve_kind("tt2") is ItemKind.SHOW

    def test_missing_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with pytest.raises(FileNotFoundError):
                JSONCatalog(Path(temp_dir) / "nope.json")

    def test_directory_path_raises_configuration_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with pytest.raises(ConfigurationError):
                JSONCatalog(Path(temp_dir))

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            json.dumps({"entries": []}),
            json.dumps({"items": [{"item_id": "tt1", "kind": "podcast"}]}),
        ],
    )
    def test_invalid_file_raises_configuration_error(self, content: str) -> None:
        """Malformed JSON or an unknown kind is a configuration problem."""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "catalog.json"
            _ = path.write_text(content, encoding="utf-8")
            catalog = JSONCatalog(path)

            with pytest.raises(ConfigurationError):
                catalog.list_items()

    def test_invalid_and_duplicate_entries_are_skipped(self) -> None:
        """Entries with an empty id are dropped; the first of duplicates is kept."""
        with tempfile.TemporaryDirectory() as temp_dir:
            # Arrange
            data = {
                "items": [
                    {"item_id": "", "kind": "movie", "watched_by": ["alice"]},
                    {"item_id": "tt1", "kind": "movie", "title": "Kept", "watched_by": ["alice"]},
                    {"item_id": "tt1", "kind": "show", "title": "Dropped", "watched_by": ["bob"]},
                ]
            }
            catalog = JSONCatalog(write_catalog(temp_dir, data))

            # Act
            items = catalog.list_items()

            # Assert
            assert [item.title for item in items] == ["Kept"]
            assert list(catalog.list_watched("bob")) == []

    def test_reload_picks_up_changes(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = write_catalog(temp_dir, SAMPLE)
            catalog = JSONCatalog(path)
            assert len(catalog.list_items()) == 4

            _ = write_catalog(temp_dir, {"items": [{"item_id": "tt9", "kind": "movie"}]})
            catalog.reload()

            assert [item.item_id for item in catalog.list_items()] == ["tt9"]


class TestInMemoryCatalog:
    """Test InMemoryCatalog behavior through public interface."""

    def test_watched_lists_are_per_owner(self) -> None:
        a = Item(item_id="a")
        b = Item(item_id="b", kind=ItemKind.SHOW)
        catalog = InMemoryCatalog([a, b], watched={"alice": ["b", "a", "ghost"]})

        assert list(catalog.list_watched("alice")) == [b, a]
        assert list(catalog.list_watched("bob")) == []

    def test_add_marks_watched_once(self) -> None:
        catalog = InMemoryCatalog()
        item = Item(item_id="a")

        catalog.add(item, watched_by=["alice"])
        catalog.add(item, watched_by=["alice"])

        assert list(catalog.list_watched("alice")) == [item]
        assert catalog.get_item("a") is item
        with pytest.raises(KeyError):
            catalog.get_item("b")
