from rmrk_consolidator.adapters.base import ConsolidatorAdapter, SnapshotReader
from rmrk_consolidator.adapters.database import SqlAlchemyAdapter
from rmrk_consolidator.adapters.in_memory import InMemoryAdapter

__all__ = [
    "ConsolidatorAdapter",
    "InMemoryAdapter",
    "SnapshotReader",
    "SqlAlchemyAdapter",
]
