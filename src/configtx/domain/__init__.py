"""
Domain layer for the configuration mutation engine.

Contains core value types and ports with no external dependencies.
"""

from configtx.domain.exceptions import (
    IllegalTransition,
    PersistenceError,
    ScopeLockedError,
    StagingError,
    TaskNotFound,
    TransactionFailed,
    WorkingCopyMissing,
)
from configtx.domain.interfaces import (
    ArtifactSourceInterface,
    ConfigServiceInterface,
    ConfigStoreInterface,
    Document,
    StagingAreaInterface,
    TransactionEventStoreInterface,
    ValidatorInterface,
)
from configtx.domain.models import (
    Problem,
    ProblemReport,
    Severity,
    StagedArtifact,
    Task,
    TaskHandle,
    TaskResult,
    TaskStatus,
    TransactionOutcome,
    TransactionState,
    ValidationRejected,
)
from configtx.domain.transaction_event import TransactionEvent, TransactionEventType

__all__ = [
    # Models
    "Severity",
    "Problem",
    "ProblemReport",
    "StagedArtifact",
    "TransactionState",
    "TransactionOutcome",
    "ValidationRejected",
    "Task",
    "TaskHandle",
    "TaskResult",
    "TaskStatus",
    # Events
    "TransactionEvent",
    "TransactionEventType",
    # Interfaces
    "Document",
    "ConfigStoreInterface",
    "StagingAreaInterface",
    "ArtifactSourceInterface",
    "ValidatorInterface",
    "ConfigServiceInterface",
    "TransactionEventStoreInterface",
    # Exceptions
    "ScopeLockedError",
    "WorkingCopyMissing",
    "StagingError",
    "PersistenceError",
    "IllegalTransition",
    "TaskNotFound",
    "TransactionFailed",
]
