"""Tests for TransactionEventEmitter."""

from configtx.application.transaction_event_emitter import TransactionEventEmitter
from configtx.domain.models import TransactionState
from configtx.domain.transaction_event import TransactionEventType
from configtx.infrastructure.persistence.transaction_events import (
    InMemoryTransactionEventStore,
)


class TestTransactionEventEmitter:
    """Tests for TransactionEventEmitter."""

    def test_transition_creates_event(self):
        """transition stores one event for the entered state."""
        store = InMemoryTransactionEventStore()
        emitter = TransactionEventEmitter(store, "tx-1", scope="server")

        emitter.transition(TransactionState.STAGED)

        events = store.get_events("tx-1")
        assert len(events) == 1
        assert events[0].event_type == TransactionEventType.STAGED
        assert events[0].transaction_id == "tx-1"
        assert events[0].scope == "server"
        assert events[0].created_at

    def test_sequence_increments(self):
        store = InMemoryTransactionEventStore()
        emitter = TransactionEventEmitter(store, "tx-1")

        emitter.transition(TransactionState.STAGED)
        emitter.transition(TransactionState.APPLIED)
        emitter.transition(TransactionState.VALIDATED, severity="WARNING")

        events = store.get_events("tx-1")
        assert [e.sequence for e in events] == [1, 2, 3]
        assert events[2].severity == "WARNING"

    def test_summary_truncated(self):
        """Summaries are capped at 500 chars."""
        store = InMemoryTransactionEventStore()
        emitter = TransactionEventEmitter(store, "tx-1")

        emitter.transition(TransactionState.FAILED, summary="x" * 1000)

        assert len(store.get_events("tx-1")[0].summary) == 500

    def test_returns_event_id(self):
        store = InMemoryTransactionEventStore()
        emitter = TransactionEventEmitter(store, "tx-1")

        event_id = emitter.transition(TransactionState.CLEANED)

        assert store.get_events("tx-1")[0].event_id == event_id
