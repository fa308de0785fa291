"""
Persistence adapters: configuration stores, staging, and event logs.
"""

from configtx.infrastructure.persistence.filesystem import FilesystemConfigStore
from configtx.infrastructure.persistence.memory import InMemoryConfigStore
from configtx.infrastructure.persistence.staging import FilesystemStagingArea
from configtx.infrastructure.persistence.transaction_events import (
    FilesystemTransactionEventStore,
    InMemoryTransactionEventStore,
)

__all__ = [
    "InMemoryConfigStore",
    "FilesystemConfigStore",
    "FilesystemStagingArea",
    "InMemoryTransactionEventStore",
    "FilesystemTransactionEventStore",
]
