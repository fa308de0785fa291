"""
EditRequestBuilder: wires configuration edits into MutationTransactions.

Every edit shares the same plumbing around a different apply step:

    stage    take the scope's working copy, then stage ancillary files
    apply    the edit itself, through the ConfigService
    validate the ConfigService's validator over the applied working copy
    revert   discard the working copy
    persist  promote staged files to their durable home, then commit
    clean    remove this edit's staged files and release the scope if still held

Because revert is a discard, a rejected or failed edit leaves the
committed document exactly as it was.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from typing import Any

from configtx.application.requests import GetRequest
from configtx.application.transaction import MutationTransaction
from configtx.domain.interfaces import (
    ArtifactSourceInterface,
    ConfigServiceInterface,
    ConfigStoreInterface,
    Document,
    StagingAreaInterface,
    TransactionEventStoreInterface,
)
from configtx.settings import ValidationSettings

logger = logging.getLogger(__name__)


class EditRequestBuilder:
    """Factory for the standard edit and read shapes."""

    def __init__(
        self,
        store: ConfigStoreInterface,
        staging: StagingAreaInterface,
        service: ConfigServiceInterface,
        event_store: TransactionEventStoreInterface | None = None,
    ):
        """
        Args:
            store: Owns committed documents and scope locks
            staging: Temporary home for ancillary files
            service: Apply-side logic and validation
            event_store: Progress log for built transactions (optional)
        """
        self._store = store
        self._staging = staging
        self._service = service
        self._event_store = event_store

    def build(
        self,
        scope: str,
        apply: Callable[[], Any],
        description: str,
        settings: ValidationSettings | None = None,
        source: ArtifactSourceInterface | None = None,
    ) -> MutationTransaction:
        """
        Wrap an arbitrary apply step in the standard edit lifecycle.

        Args:
            scope: Scope to lock and edit
            apply: Mutation of the scope's working copy
            description: Task label
            settings: Validation policy (defaults to WARNING, validate on)
            source: Entity whose local files must be staged first
        """
        transaction_id = str(uuid.uuid4())
        holds_scope = False

        def stage() -> None:
            nonlocal holds_scope
            destination = self._staging.staging_dir(scope, transaction_id)
            self._store.load_working_copy(scope, owner=transaction_id)
            holds_scope = True
            if source is not None:
                staged = source.stage_local_files(self._staging, destination)
                logger.debug("Staged %d file(s) for %s", len(staged), transaction_id)

        def validate():
            return self._service.validate(scope)

        def revert() -> None:
            self._store.discard(scope, owner=transaction_id)

        def persist() -> None:
            if source is not None:
                self._staging.promote(scope, transaction_id)
            self._store.commit(scope, owner=transaction_id)

        def clean() -> None:
            # Never touch another holder's staging or working copy
            if not holds_scope:
                return
            try:
                self._staging.clean(scope, transaction_id)
            finally:
                self._store.discard(scope, owner=transaction_id)

        return MutationTransaction(
            apply=apply,
            revert=revert,
            persist=persist,
            stage=stage,
            validate=validate,
            clean=clean,
            settings=settings,
            scope=scope,
            description=description,
            event_store=self._event_store,
            transaction_id=transaction_id,
        )

    # -------------------------------------------------------------------------
    # Edit shapes
    # -------------------------------------------------------------------------

    def set_document(
        self,
        scope: str,
        document: Document,
        settings: ValidationSettings | None = None,
        source: ArtifactSourceInterface | None = None,
        description: str | None = None,
    ) -> MutationTransaction:
        """Replace the whole document of a scope."""
        return self.build(
            scope,
            lambda: self._service.set(scope, document),
            description or f"Edit the {scope} configuration",
            settings,
            source,
        )

    def set_field(
        self,
        scope: str,
        path: str,
        value: Any,
        settings: ValidationSettings | None = None,
        source: ArtifactSourceInterface | None = None,
        description: str | None = None,
    ) -> MutationTransaction:
        """Set one value, creating intermediate mappings."""
        return self.build(
            scope,
            lambda: self._service.set_field(scope, path, value),
            description or f"Edit {path} in {scope}",
            settings,
            source,
        )

    def add_entry(
        self,
        scope: str,
        path: str,
        entry: Any,
        settings: ValidationSettings | None = None,
        source: ArtifactSourceInterface | None = None,
        description: str | None = None,
    ) -> MutationTransaction:
        """Append an entry to the list at path (names must stay unique)."""
        name = entry.get("name") if isinstance(entry, dict) else None
        label = f"the {name} entry" if name else "an entry"
        return self.build(
            scope,
            lambda: self._service.append(scope, path, entry),
            description or f"Add {label} to {path} in {scope}",
            settings,
            source,
        )

    def set_entry(
        self,
        scope: str,
        path: str,
        name: str,
        entry: Any,
        settings: ValidationSettings | None = None,
        source: ArtifactSourceInterface | None = None,
        description: str | None = None,
    ) -> MutationTransaction:
        """Replace the named entry of the list at path."""
        return self.build(
            scope,
            lambda: self._service.set_field(scope, f"{path}.{name}", entry),
            description or f"Edit the {name} entry of {path} in {scope}",
            settings,
            source,
        )

    def delete(
        self,
        scope: str,
        path: str,
        settings: ValidationSettings | None = None,
        description: str | None = None,
    ) -> MutationTransaction:
        """Remove the value at path; the outcome value is what was removed."""
        return self.build(
            scope,
            lambda: self._service.delete(scope, path),
            description or f"Delete {path} from {scope}",
            settings,
        )

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get(self, scope: str, path: str = "", description: str | None = None) -> GetRequest:
        """Validated read of the committed document (or one value in it)."""
        return GetRequest(
            getter=lambda: self._service.get_field(scope, path, committed=True),
            validator=lambda: self._service.validate(scope, committed=True),
            description=description or f"Get {path or 'all settings'} of {scope}",
        )
