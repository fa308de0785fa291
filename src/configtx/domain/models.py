"""
Domain models for the configuration mutation engine.

Severity-tagged validation findings, transaction states and outcomes, and
the task records the runner hands back to callers. Everything here is an
immutable value except Task, which the runner owns and updates in place.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from configtx.domain.exceptions import TransactionFailed


# =============================================================================
# VALIDATION FINDINGS
# =============================================================================


@total_ordering
class Severity(Enum):
    """Totally ordered severity of a validation finding."""

    NONE = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.value < other.value

    @classmethod
    def parse(cls, name: "str | Severity") -> "Severity":
        """Resolve a case-insensitive severity name (e.g. 'warning')."""
        if isinstance(name, Severity):
            return name
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ", ".join(s.name for s in cls)
            raise ValueError(
                f"Unknown severity '{name}'. Expected one of: {valid}"
            ) from None


@dataclass(frozen=True)
class Problem:
    """Single validation finding."""

    severity: Severity
    message: str
    location: str = ""  # Dotted path into the document, "" for the root
    remediation: str = ""  # Suggested fix, if the validator knows one

    def __str__(self) -> str:
        where = f" at {self.location}" if self.location else ""
        return f"[{self.severity.name}]{where}: {self.message}"


@dataclass(frozen=True)
class ProblemReport:
    """
    Ordered, immutable collection of validation findings.

    Produced by validators and consulted once per transaction to decide
    whether the working copy may be persisted.
    """

    problems: tuple[Problem, ...] = ()

    def __iter__(self):
        return iter(self.problems)

    def __len__(self) -> int:
        return len(self.problems)

    def __bool__(self) -> bool:
        return bool(self.problems)

    def worst_severity(self) -> Severity:
        """Highest severity present, NONE for an empty report."""
        return max((p.severity for p in self.problems), default=Severity.NONE)

    def exceeds(self, threshold: Severity, inclusive: bool = False) -> bool:
        """
        Check the report against a caller-supplied threshold.

        Args:
            threshold: Severity ceiling supplied by the caller
            inclusive: Block at the threshold itself (>=) instead of only above it (>)

        Returns:
            True if the report must block persistence
        """
        worst = self.worst_severity()
        if worst is Severity.NONE:
            return False
        if inclusive:
            return worst >= threshold
        return worst > threshold

    def merge(self, other: "ProblemReport") -> "ProblemReport":
        return ProblemReport(self.problems + other.problems)

    def filter(self, min_severity: Severity) -> "ProblemReport":
        """Findings at or above min_severity, order preserved."""
        return ProblemReport(
            tuple(p for p in self.problems if p.severity >= min_severity)
        )

    @classmethod
    def of(cls, *problems: Problem) -> "ProblemReport":
        return cls(tuple(problems))


# =============================================================================
# STAGED ARTIFACTS
# =============================================================================


@dataclass(frozen=True)
class StagedArtifact:
    """Ancillary file referenced by a configuration entry."""

    name: str  # Relative file name inside the staging destination
    content: bytes


# =============================================================================
# TRANSACTION STATE AND OUTCOME
# =============================================================================


class TransactionState(Enum):
    """States of a single mutation transaction."""

    CREATED = "created"
    STAGED = "staged"
    APPLIED = "applied"
    VALIDATED = "validated"
    PERSISTED = "persisted"
    REVERTED = "reverted"
    FAILED = "failed"
    CANCELLED = "cancelled"
    CLEANED = "cleaned"  # Terminal


@dataclass(frozen=True)
class ValidationRejected:
    """
    Validation blocked the commit.

    Not an error: the edit was applied in memory, judged against the
    threshold, and reverted. Callers get the report that explains why.
    """

    report: ProblemReport
    threshold: Severity
    inclusive: bool = False

    @property
    def message(self) -> str:
        op = ">=" if self.inclusive else ">"
        return (
            f"Validation rejected the change: worst severity "
            f"{self.report.worst_severity().name} {op} {self.threshold.name}"
        )


@dataclass(frozen=True)
class TransactionOutcome:
    """Result of driving one transaction to CLEANED."""

    transaction_id: str
    disposition: TransactionState  # PERSISTED, REVERTED, FAILED or CANCELLED
    report: ProblemReport = field(default_factory=ProblemReport)
    value: Any = None  # Whatever apply returned
    rejection: ValidationRejected | None = None
    error: "TransactionFailed | None" = None
    revert_error: str | None = None
    clean_error: str | None = None
    history: tuple[TransactionState, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.disposition is TransactionState.PERSISTED

    @property
    def rejected(self) -> bool:
        return self.rejection is not None

    def raise_if_failed(self) -> None:
        if self.error is not None:
            raise self.error


# =============================================================================
# TASKS
# =============================================================================


class TaskStatus(Enum):
    """Execution status of an asynchronous task."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def finished(self) -> bool:
        return self in (TaskStatus.SUCCEEDED, TaskStatus.FAILED, TaskStatus.CANCELLED)


@dataclass
class Task:
    """Mutable task record, owned by the runner for its lifetime."""

    task_id: str
    description: str
    scope: str | None
    status: TaskStatus = TaskStatus.PENDING
    outcome: TransactionOutcome | None = None
    error: BaseException | None = None
    created_at: str = ""  # ISO 8601
    started_at: str | None = None
    completed_at: str | None = None
    cancel_requested: bool = False


@dataclass(frozen=True)
class TaskHandle:
    """Returned by submit; identifies the task for later polling."""

    task_id: str
    description: str
    created_at: str


@dataclass(frozen=True)
class TaskResult:
    """Snapshot returned by wait()."""

    task_id: str
    status: TaskStatus
    outcome: TransactionOutcome | None = None
    error: BaseException | None = None
    timed_out: bool = False
