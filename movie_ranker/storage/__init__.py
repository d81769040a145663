"""
Storage implementations.

Provides implementations of the ScoreStore and SnapshotStore interfaces.

Available implementations:
- JSONLScoreStore: Latest score per owner/item in a JSON file
- JSONLSnapshotStore: Append-only snapshot log in a JSONL file
- InMemoryScoreStore / InMemorySnapshotStore: Volatile stores for tests
"""

from .jsonl_storage import JSONLScoreStore, JSONLSnapshotStore
from .memory_storage import InMemoryScoreStore, InMemorySnapshotStore

__all__ = [
    "JSONLScoreStore",
    "JSONLSnapshotStore",
    "InMemoryScoreStore",
    "InMemorySnapshotStore",
]
