"""Tests for transaction progress event types."""

from configtx.domain.models import TransactionState
from configtx.domain.transaction_event import TransactionEvent, TransactionEventType


class TestTransactionEventType:
    def test_every_state_after_created_has_event_type(self):
        """Each state a transaction can enter maps onto an event type."""
        for state in TransactionState:
            if state is TransactionState.CREATED:
                continue
            assert TransactionEventType(state.name).value == state.name

    def test_is_str_enum(self):
        assert TransactionEventType.PERSISTED == "PERSISTED"


class TestTransactionEvent:
    def test_defaults(self):
        event = TransactionEvent(
            event_id="e-1",
            event_type=TransactionEventType.STAGED,
            transaction_id="tx-1",
        )
        assert event.scope is None
        assert event.sequence == 0
        assert event.summary == ""
