"""
Catalog implementations.

Provides implementations of the Catalog interface for listing watched items.

Available implementations:
- JSONCatalog: Loads items and watched state from a JSON file
- InMemoryCatalog: Catalog built from Python objects
"""

from .json_catalog import JSONCatalog
from .memory_catalog import InMemoryCatalog

__all__ = ["JSONCatalog", "InMemoryCatalog"]
