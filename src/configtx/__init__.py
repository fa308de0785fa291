"""
configtx: Transactional configuration mutation engine.

Every configuration edit runs as a transaction with a fixed lifecycle:
stage ancillary files, apply the edit to a working copy, validate it,
then persist or revert depending on the worst problem severity, and
always clean up. Edits run asynchronously on a task runner that keeps
edits of the same scope in order.

Example:
    from configtx import EditRequestBuilder, Severity, TaskRunner, ValidationSettings
    from configtx.infrastructure import (
        DocumentService,
        FilesystemConfigStore,
        FilesystemStagingArea,
    )
    from configtx.validators import RequiredFieldsValidator

    store = FilesystemConfigStore(".configtx")
    service = DocumentService(store, RequiredFieldsValidator("name"))
    edits = EditRequestBuilder(store, FilesystemStagingArea(".configtx"), service)

    with TaskRunner() as runner:
        handle = runner.submit(edits.set_field("server", "port", 8080))
        result = runner.wait(handle.task_id)
"""

from configtx.application.edits import EditRequestBuilder
from configtx.application.requests import GetRequest
from configtx.application.runner import TaskRunner
from configtx.application.transaction import MutationTransaction

# Domain exceptions
from configtx.domain.exceptions import (
    IllegalTransition,
    PersistenceError,
    ScopeLockedError,
    StagingError,
    TaskNotFound,
    TransactionFailed,
    WorkingCopyMissing,
)

# Domain interfaces (for type hints and custom implementations)
from configtx.domain.interfaces import (
    ArtifactSourceInterface,
    ConfigServiceInterface,
    ConfigStoreInterface,
    StagingAreaInterface,
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

# Infrastructure (explicit import encouraged for dependency injection)
from configtx.infrastructure import (
    DocumentService,
    FilesystemConfigStore,
    FilesystemStagingArea,
    InMemoryConfigStore,
)
from configtx.settings import ConfigurationError, RunnerSettings, ValidationSettings

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Application
    "EditRequestBuilder",
    "GetRequest",
    "MutationTransaction",
    "TaskRunner",
    # Settings
    "ConfigurationError",
    "RunnerSettings",
    "ValidationSettings",
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
    # Interfaces
    "ArtifactSourceInterface",
    "ConfigServiceInterface",
    "ConfigStoreInterface",
    "StagingAreaInterface",
    "ValidatorInterface",
    # Exceptions
    "IllegalTransition",
    "PersistenceError",
    "ScopeLockedError",
    "StagingError",
    "TaskNotFound",
    "TransactionFailed",
    "WorkingCopyMissing",
    # Infrastructure
    "DocumentService",
    "FilesystemConfigStore",
    "FilesystemStagingArea",
    "InMemoryConfigStore",
]
