"""Transaction progress events, one per state transition."""

from dataclasses import dataclass
from enum import Enum


class TransactionEventType(str, Enum):
    """Types of transaction progress events."""

    STAGED = "STAGED"
    APPLIED = "APPLIED"
    VALIDATED = "VALIDATED"
    PERSISTED = "PERSISTED"
    REVERTED = "REVERTED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
    CLEANED = "CLEANED"


@dataclass(frozen=True)
class TransactionEvent:
    """Single state transition of a transaction.

    Gives pollers a progress log while the task runs and an audit trail
    once it has finished.
    """

    event_id: str
    event_type: TransactionEventType
    transaction_id: str
    scope: str | None = None
    sequence: int = 0  # Position within the transaction, starting at 1
    severity: str | None = None  # Worst severity, on VALIDATED
    summary: str = ""
    created_at: str = ""  # ISO 8601
