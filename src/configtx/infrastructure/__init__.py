"""
Infrastructure layer for the configuration mutation engine.

Contains adapters for external concerns (persistence, staging, services).
"""

from configtx.infrastructure.attachments import LocalFileSource
from configtx.infrastructure.document_service import DocumentService
from configtx.infrastructure.persistence import (
    FilesystemConfigStore,
    FilesystemStagingArea,
    FilesystemTransactionEventStore,
    InMemoryConfigStore,
    InMemoryTransactionEventStore,
)

__all__ = [
    # Persistence
    "InMemoryConfigStore",
    "FilesystemConfigStore",
    "FilesystemStagingArea",
    "InMemoryTransactionEventStore",
    "FilesystemTransactionEventStore",
    # Services
    "DocumentService",
    "LocalFileSource",
]
