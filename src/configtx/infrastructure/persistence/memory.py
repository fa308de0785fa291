"""
In-memory configuration store.

Useful for testing and ephemeral deployments. Also the base for the
filesystem store, which only changes where committed documents live.
"""

import copy
import logging
import threading

from configtx.domain.exceptions import (
    PersistenceError,
    ScopeLockedError,
    WorkingCopyMissing,
)
from configtx.domain.interfaces import ConfigStoreInterface, Document

logger = logging.getLogger(__name__)


class InMemoryConfigStore(ConfigStoreInterface):
    """Per-scope committed documents with exclusive working copies."""

    def __init__(self, documents: dict[str, Document] | None = None) -> None:
        self._committed: dict[str, Document] = copy.deepcopy(documents or {})
        self._working: dict[str, Document] = {}
        self._owners: dict[str, str | None] = {}
        self._lock = threading.RLock()

    # Storage hooks ------------------------------------------------------------

    def _read_committed(self, scope: str) -> Document:
        return copy.deepcopy(self._committed.get(scope, {}))

    def _write_committed(self, scope: str, document: Document) -> None:
        self._committed[scope] = document

    def _list_scopes(self) -> list[str]:
        return sorted(self._committed)

    # ConfigStoreInterface -----------------------------------------------------

    def load_working_copy(self, scope: str, owner: str | None = None) -> Document:
        with self._lock:
            if scope in self._working:
                raise ScopeLockedError(scope, self._owners.get(scope))
            document = self._read_committed(scope)
            self._working[scope] = document
            self._owners[scope] = owner
        logger.debug("Working copy of '%s' loaded (owner %s)", scope, owner)
        return document

    def working_copy(self, scope: str) -> Document:
        with self._lock:
            if scope not in self._working:
                raise WorkingCopyMissing(scope)
            return self._working[scope]

    def committed(self, scope: str) -> Document:
        with self._lock:
            return self._read_committed(scope)

    def commit(self, scope: str, owner: str | None = None) -> None:
        with self._lock:
            if scope not in self._working or not self._owned_by(scope, owner):
                raise WorkingCopyMissing(scope)
            snapshot = copy.deepcopy(self._working[scope])
            try:
                self._write_committed(scope, snapshot)
            except OSError as e:
                raise PersistenceError(f"Failed to commit scope '{scope}': {e}") from e
            del self._working[scope]
            self._owners.pop(scope, None)
        logger.info("Committed scope '%s'", scope)

    def discard(self, scope: str, owner: str | None = None) -> None:
        with self._lock:
            if scope not in self._working or not self._owned_by(scope, owner):
                return
            del self._working[scope]
            self._owners.pop(scope, None)
        logger.debug("Discarded working copy of '%s'", scope)

    def is_locked(self, scope: str) -> bool:
        with self._lock:
            return scope in self._working

    def scopes(self) -> list[str]:
        with self._lock:
            return self._list_scopes()

    def _owned_by(self, scope: str, owner: str | None) -> bool:
        """A None owner acts on any holder; otherwise owners must match."""
        return owner is None or self._owners.get(scope) == owner
