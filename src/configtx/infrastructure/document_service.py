"""
Generic document service: the apply-side logic for configuration edits.

Reads see the scope's working copy while an edit is in flight and the
committed document otherwise; pass committed=True to ignore in-flight
edits. Writes only ever touch the working copy; they fail with
WorkingCopyMissing when no edit holds the scope.
"""

import copy
from typing import Any

from configtx.domain.document import append_path, delete_path, get_path, set_path
from configtx.domain.exceptions import WorkingCopyMissing
from configtx.domain.interfaces import (
    ConfigServiceInterface,
    ConfigStoreInterface,
    Document,
    ValidatorInterface,
)
from configtx.domain.models import ProblemReport


class DocumentService(ConfigServiceInterface):
    """Path-addressed reads and writes over a ConfigStore."""

    def __init__(
        self,
        store: ConfigStoreInterface,
        validator: ValidatorInterface | None = None,
    ):
        self._store = store
        self._validator = validator

    @property
    def store(self) -> ConfigStoreInterface:
        return self._store

    def _current(self, scope: str, committed: bool = False) -> Document:
        if committed:
            return self._store.committed(scope)
        try:
            return self._store.working_copy(scope)
        except WorkingCopyMissing:
            return self._store.committed(scope)

    def get(self, scope: str, committed: bool = False) -> Document:
        return copy.deepcopy(self._current(scope, committed))

    def get_field(self, scope: str, path: str, committed: bool = False) -> Any:
        return copy.deepcopy(get_path(self._current(scope, committed), path))

    def validate(self, scope: str, committed: bool = False) -> ProblemReport:
        if self._validator is None:
            return ProblemReport()
        return self._validator.validate(self._current(scope, committed))

    def set(self, scope: str, document: Document) -> None:
        working = self._store.working_copy(scope)
        working.clear()
        working.update(copy.deepcopy(document))

    def set_field(self, scope: str, path: str, value: Any) -> None:
        set_path(self._store.working_copy(scope), path, copy.deepcopy(value))

    def append(self, scope: str, path: str, value: Any) -> None:
        append_path(self._store.working_copy(scope), path, copy.deepcopy(value))

    def delete(self, scope: str, path: str) -> Any:
        return delete_path(self._store.working_copy(scope), path)
