"""Transaction event store implementations."""

import json
import threading
from pathlib import Path
from typing import Any

from configtx.domain.interfaces import TransactionEventStoreInterface
from configtx.domain.transaction_event import TransactionEvent, TransactionEventType


class InMemoryTransactionEventStore(TransactionEventStoreInterface):
    """In-memory implementation for testing and short-lived runners."""

    def __init__(self) -> None:
        self._events: list[TransactionEvent] = []
        self._lock = threading.Lock()

    def store_event(self, event: TransactionEvent) -> str:
        with self._lock:
            self._events.append(event)
        return event.event_id

    def get_events(
        self,
        transaction_id: str,
        event_type: TransactionEventType | None = None,
    ) -> list[TransactionEvent]:
        with self._lock:
            events = list(self._events)
        return sorted(
            [
                e
                for e in events
                if e.transaction_id == transaction_id
                and (event_type is None or e.event_type == event_type)
            ],
            key=lambda e: e.sequence,
        )


class FilesystemTransactionEventStore(TransactionEventStoreInterface):
    """Filesystem implementation storing events as JSONL, one file per transaction."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = Path(base_path)
        self.events_dir = self.base_path / "events"
        self.events_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _get_transaction_file(self, transaction_id: str) -> Path:
        return self.events_dir / f"{transaction_id}.jsonl"

    def store_event(self, event: TransactionEvent) -> str:
        path = self._get_transaction_file(event.transaction_id)
        line = json.dumps(self._event_to_dict(event)) + "\n"
        with self._lock, open(path, "a") as f:
            f.write(line)
        return event.event_id

    def get_events(
        self,
        transaction_id: str,
        event_type: TransactionEventType | None = None,
    ) -> list[TransactionEvent]:
        path = self._get_transaction_file(transaction_id)
        if not path.exists():
            return []
        events: list[TransactionEvent] = []
        with open(path) as f:
            for line in f:
                if not line.strip():
                    continue
                event = self._dict_to_event(json.loads(line))
                if event_type and event.event_type != event_type:
                    continue
                events.append(event)
        return sorted(events, key=lambda e: e.sequence)

    def _event_to_dict(self, event: TransactionEvent) -> dict[str, Any]:
        """Serialize event to dict."""
        return {
            "event_id": event.event_id,
            "event_type": event.event_type.value,
            "transaction_id": event.transaction_id,
            "scope": event.scope,
            "sequence": event.sequence,
            "severity": event.severity,
            "summary": event.summary,
            "created_at": event.created_at,
        }

    def _dict_to_event(self, data: dict[str, Any]) -> TransactionEvent:
        """Deserialize dict to event."""
        return TransactionEvent(
            event_id=data["event_id"],
            event_type=TransactionEventType(data["event_type"]),
            transaction_id=data["transaction_id"],
            scope=data.get("scope"),
            sequence=data.get("sequence", 0),
            severity=data.get("severity"),
            summary=data.get("summary", ""),
            created_at=data.get("created_at", ""),
        )
