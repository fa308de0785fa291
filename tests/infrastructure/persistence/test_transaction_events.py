"""Tests for transaction event stores."""

import pytest

from configtx.domain.transaction_event import TransactionEvent, TransactionEventType
from configtx.infrastructure.persistence.transaction_events import (
    FilesystemTransactionEventStore,
    InMemoryTransactionEventStore,
)


def _event(seq: int, event_type=TransactionEventType.STAGED, tx="tx-1", **kwargs):
    return TransactionEvent(
        event_id=f"e-{tx}-{seq}",
        event_type=event_type,
        transaction_id=tx,
        sequence=seq,
        **kwargs,
    )


@pytest.fixture(params=["memory", "filesystem"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryTransactionEventStore()
    return FilesystemTransactionEventStore(tmp_path)


class TestTransactionEventStores:
    """Both stores behave the same."""

    def test_store_and_get(self, store):
        event_id = store.store_event(_event(1, scope="server", summary="ok"))
        events = store.get_events("tx-1")

        assert event_id == "e-tx-1-1"
        assert events == [_event(1, scope="server", summary="ok")]

    def test_sorted_by_sequence(self, store):
        store.store_event(_event(2, TransactionEventType.APPLIED))
        store.store_event(_event(1, TransactionEventType.STAGED))

        assert [e.sequence for e in store.get_events("tx-1")] == [1, 2]

    def test_filter_by_type(self, store):
        store.store_event(_event(1, TransactionEventType.STAGED))
        store.store_event(_event(2, TransactionEventType.VALIDATED, severity="INFO"))

        validated = store.get_events("tx-1", TransactionEventType.VALIDATED)
        assert len(validated) == 1
        assert validated[0].severity == "INFO"

    def test_separate_transactions(self, store):
        store.store_event(_event(1, tx="tx-1"))
        store.store_event(_event(1, tx="tx-2"))

        assert len(store.get_events("tx-1")) == 1
        assert store.get_events("tx-3") == []


class TestFilesystemTransactionEventStore:
    def test_jsonl_per_transaction(self, tmp_path):
        store = FilesystemTransactionEventStore(tmp_path)
        store.store_event(_event(1))
        store.store_event(_event(2, TransactionEventType.APPLIED))

        lines = (tmp_path / "events" / "tx-1.jsonl").read_text().splitlines()
        assert len(lines) == 2
        assert '"event_type": "APPLIED"' in lines[1]
