"""Transaction event emission service."""

import itertools
import uuid
from datetime import UTC, datetime

from configtx.domain.interfaces import TransactionEventStoreInterface
from configtx.domain.models import TransactionState
from configtx.domain.transaction_event import TransactionEvent, TransactionEventType


class TransactionEventEmitter:
    """Emits transaction events to a store.

    One emitter per transaction: it stamps ids, timestamps and a running
    sequence number so pollers can render progress in order.
    """

    def __init__(
        self,
        event_store: TransactionEventStoreInterface,
        transaction_id: str,
        scope: str | None = None,
    ) -> None:
        self._store = event_store
        self._transaction_id = transaction_id
        self._scope = scope
        self._sequence = itertools.count(1)

    @property
    def transaction_id(self) -> str:
        return self._transaction_id

    def _now(self) -> str:
        return datetime.now(UTC).isoformat()

    def transition(
        self,
        state: TransactionState,
        summary: str = "",
        severity: str | None = None,
    ) -> str:
        """Emit the event matching a state the transaction just entered."""
        event = TransactionEvent(
            event_id=str(uuid.uuid4()),
            event_type=TransactionEventType(state.name),
            transaction_id=self._transaction_id,
            scope=self._scope,
            sequence=next(self._sequence),
            severity=severity,
            summary=summary[:500],
            created_at=self._now(),
        )
        return self._store.store_event(event)
