"""
Domain interfaces (Ports) for the configuration mutation engine.

These abstract base classes define the contracts that adapters must satisfy.
They have no external dependencies and represent the core domain boundaries.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from configtx.domain.models import ProblemReport, StagedArtifact
    from configtx.domain.transaction_event import (
        TransactionEvent,
        TransactionEventType,
    )

Document = dict[str, Any]


class ConfigStoreInterface(ABC):
    """
    Port for the configuration document store.

    Each scope has one committed document and at most one uncommitted
    working copy. Holding the working copy is the scope lock.
    """

    @abstractmethod
    def load_working_copy(self, scope: str, owner: str | None = None) -> Document:
        """
        Take the scope lock and return a mutable copy of the committed document.

        Args:
            scope: Configuration scope to edit
            owner: Token identifying the holder (usually a transaction id)

        Returns:
            The working copy, distinct from the committed document

        Raises:
            ScopeLockedError: If another holder already has a working copy
        """
        pass

    @abstractmethod
    def working_copy(self, scope: str) -> Document:
        """
        Return the working copy currently held for the scope.

        Raises:
            WorkingCopyMissing: If no working copy is held
        """
        pass

    @abstractmethod
    def committed(self, scope: str) -> Document:
        """Return a copy of the committed document (empty if never committed)."""
        pass

    @abstractmethod
    def commit(self, scope: str, owner: str | None = None) -> None:
        """
        Replace the committed document with the working copy and release the lock.

        Raises:
            PersistenceError: On I/O failure; committed document is unchanged
                and the working copy is still held
            WorkingCopyMissing: If no working copy is held by this owner
        """
        pass

    @abstractmethod
    def discard(self, scope: str, owner: str | None = None) -> None:
        """
        Drop the working copy and release the lock. Idempotent.

        A discard from an owner that does not hold the lock is a no-op.
        """
        pass

    @abstractmethod
    def is_locked(self, scope: str) -> bool:
        pass

    @abstractmethod
    def scopes(self) -> list[str]:
        """List scopes with a committed document."""
        pass


class StagingAreaInterface(ABC):
    """Port for temporary storage of ancillary files ahead of a commit."""

    @abstractmethod
    def staging_dir(self, scope: str, transaction_id: str) -> Path:
        """
        Directory holding one transaction's staged artifacts.

        Raises:
            StagingError: If either name is not a single path component
        """
        pass

    @abstractmethod
    def stage(self, artifact: "StagedArtifact", destination: Path) -> Path:
        """
        Write an artifact's bytes under destination.

        Returns:
            Path of the written file

        Raises:
            StagingError: On I/O failure
        """
        pass

    @abstractmethod
    def promote(self, scope: str, transaction_id: str) -> list[Path]:
        """
        Move one transaction's staged artifacts to the scope's durable home.

        Returns:
            Paths of the promoted files

        Raises:
            StagingError: On I/O failure
        """
        pass

    @abstractmethod
    def clean(self, scope: str, transaction_id: str | None = None) -> None:
        """
        Remove staged artifacts: one transaction's if transaction_id is given,
        otherwise the whole scope's. Never raises.
        """
        pass


class ArtifactSourceInterface(ABC):
    """
    Capability of configuration entities that own ancillary files.

    Implementations only list their files; staging them is shared.
    """

    @abstractmethod
    def local_artifacts(self) -> list["StagedArtifact"]:
        pass

    def stage_local_files(
        self, staging: StagingAreaInterface, destination: Path
    ) -> list[Path]:
        """Stage every local artifact under destination."""
        return [staging.stage(a, destination) for a in self.local_artifacts()]


class ValidatorInterface(ABC):
    """
    Port for document validation.

    Validators are opaque rule sets: they inspect a document and report
    severity-tagged problems. They never mutate the document.
    """

    @abstractmethod
    def validate(self, document: Document) -> "ProblemReport":
        pass


class ConfigServiceInterface(ABC):
    """Port for the domain logic behind a transaction's apply step."""

    @abstractmethod
    def get(self, scope: str, committed: bool = False) -> Document:
        """Current document; committed=True ignores an in-flight working copy."""
        pass

    @abstractmethod
    def get_field(self, scope: str, path: str, committed: bool = False) -> Any:
        pass

    @abstractmethod
    def validate(self, scope: str, committed: bool = False) -> "ProblemReport":
        pass

    @abstractmethod
    def set(self, scope: str, document: Document) -> None:
        pass

    @abstractmethod
    def set_field(self, scope: str, path: str, value: Any) -> None:
        pass

    @abstractmethod
    def append(self, scope: str, path: str, value: Any) -> None:
        pass

    @abstractmethod
    def delete(self, scope: str, path: str) -> Any:
        pass


class TransactionEventStoreInterface(ABC):
    """Port for the per-transaction progress log."""

    @abstractmethod
    def store_event(self, event: "TransactionEvent") -> str:
        """Store an event and return its event_id."""
        pass

    @abstractmethod
    def get_events(
        self,
        transaction_id: str,
        event_type: "TransactionEventType | None" = None,
    ) -> list["TransactionEvent"]:
        """Events for a transaction in emission order."""
        pass
