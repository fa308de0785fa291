"""
TaskRunner: asynchronous execution of mutation transactions.

Callers submit a transaction and get a handle back immediately; a worker
pool drives the transaction while the caller polls or waits. Transactions
on the same scope run one at a time in submission order; different scopes
run concurrently.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from configtx.domain.exceptions import TaskNotFound
from configtx.domain.models import (
    Task,
    TaskHandle,
    TaskResult,
    TaskStatus,
    TransactionState,
)

if TYPE_CHECKING:
    from configtx.application.transaction import MutationTransaction
    from configtx.domain.interfaces import TransactionEventStoreInterface
    from configtx.domain.transaction_event import TransactionEvent
    from configtx.settings import RunnerSettings

logger = logging.getLogger(__name__)

_STATUS_BY_DISPOSITION = {
    TransactionState.PERSISTED: TaskStatus.SUCCEEDED,
    TransactionState.REVERTED: TaskStatus.SUCCEEDED,  # Rejected by validation
    TransactionState.FAILED: TaskStatus.FAILED,
    TransactionState.CANCELLED: TaskStatus.CANCELLED,
}


def _now() -> str:
    return datetime.now(UTC).isoformat()


class TaskRunner:
    """
    Worker pool plus per-scope FIFO queues.

    The runner exclusively owns every Task it creates. Callers only see
    snapshots (get, wait) and never the live record.
    """

    def __init__(
        self,
        max_workers: int = 4,
        retention_seconds: float | None = 3600.0,
        event_store: TransactionEventStoreInterface | None = None,
    ):
        """
        Args:
            max_workers: Worker threads; scopes beyond this wait for a free worker
            retention_seconds: Age after which finished tasks are pruned (None: never)
            event_store: Progress log shared by submitted transactions
        """
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="configtx-worker"
        )
        self._retention_seconds = retention_seconds
        self._event_store = event_store
        self._lock = threading.Lock()
        self._tasks: dict[str, Task] = {}
        self._transactions: dict[str, MutationTransaction] = {}
        self._done: dict[str, threading.Event] = {}
        self._queues: dict[str, deque[str]] = {}
        self._active_scopes: set[str] = set()
        self._accepting = True
        self._abandoned = False

    @classmethod
    def from_settings(
        cls,
        settings: RunnerSettings,
        event_store: TransactionEventStoreInterface | None = None,
    ) -> TaskRunner:
        return cls(
            max_workers=settings.max_workers,
            retention_seconds=settings.retention_seconds,
            event_store=event_store,
        )

    # -------------------------------------------------------------------------
    # Submission and dispatch
    # -------------------------------------------------------------------------

    def submit(
        self, transaction: MutationTransaction, description: str | None = None
    ) -> TaskHandle:
        """
        Enqueue a transaction and return immediately.

        Args:
            transaction: A transaction that has not run yet
            description: Label for the task (defaults to the transaction's)

        Returns:
            Handle for a task in PENDING state

        Raises:
            RuntimeError: If the runner is shut down
            ValueError: If the transaction was already submitted
        """
        self.prune()
        if transaction.event_store is None and self._event_store is not None:
            transaction.event_store = self._event_store

        task_id = transaction.transaction_id
        task = Task(
            task_id=task_id,
            description=description or transaction.description or "Unnamed edit",
            scope=transaction.scope,
            created_at=_now(),
        )

        with self._lock:
            if not self._accepting:
                raise RuntimeError("TaskRunner is shut down")
            if task_id in self._tasks:
                raise ValueError(f"Transaction {task_id} was already submitted")
            self._tasks[task_id] = task
            self._transactions[task_id] = transaction
            self._done[task_id] = threading.Event()

            scope = transaction.scope
            if scope is None:
                self._dispatch(task_id)
            elif scope in self._active_scopes:
                self._queues.setdefault(scope, deque()).append(task_id)
                logger.debug(
                    "Task %s queued behind %d task(s) on scope '%s'",
                    task_id,
                    len(self._queues[scope]),
                    scope,
                )
            else:
                self._active_scopes.add(scope)
                self._dispatch(task_id)

        logger.info("Submitted task %s: %s", task_id, task.description)
        return TaskHandle(
            task_id=task_id, description=task.description, created_at=task.created_at
        )

    def _dispatch(self, task_id: str) -> None:
        """Hand a task to the pool (called within lock)."""
        self._executor.submit(self._execute, task_id)

    def _execute(self, task_id: str) -> None:
        with self._lock:
            task = self._tasks[task_id]
            transaction = self._transactions[task_id]
            task.status = TaskStatus.RUNNING
            task.started_at = _now()

        outcome = None
        error: BaseException | None = None
        try:
            outcome = transaction.run(
                cancel_requested=lambda: self._cancel_requested(task_id)
            )
            error = outcome.error
            status = _STATUS_BY_DISPOSITION[outcome.disposition]
        except Exception as exc:
            logger.exception("Task %s crashed outside its lifecycle steps", task_id)
            error = exc
            status = TaskStatus.FAILED

        with self._lock:
            task.status = status
            task.outcome = outcome
            task.error = error
            task.completed_at = _now()
            self._transactions.pop(task_id, None)
            self._release_scope(task.scope)
            done = self._done[task_id]
        done.set()

    def _release_scope(self, scope: str | None) -> None:
        """Start the next queued task on scope, or free it (called within lock)."""
        if scope is None:
            return
        queue = self._queues.get(scope)
        if self._abandoned and queue:
            while queue:
                self._abandon(queue.popleft())
        if queue:
            self._dispatch(queue.popleft())
            return
        self._queues.pop(scope, None)
        self._active_scopes.discard(scope)

    def _abandon(self, task_id: str) -> None:
        """Finish a queued task that will never start (called within lock)."""
        task = self._tasks[task_id]
        task.status = TaskStatus.CANCELLED
        task.completed_at = _now()
        self._transactions.pop(task_id, None)
        self._done[task_id].set()
        logger.warning("Task %s abandoned at shutdown before it started", task_id)

    def _cancel_requested(self, task_id: str) -> bool:
        with self._lock:
            return self._tasks[task_id].cancel_requested

    # -------------------------------------------------------------------------
    # Caller-facing queries
    # -------------------------------------------------------------------------

    def _task(self, task_id: str) -> Task:
        """Look up a live task record (called within lock)."""
        try:
            return self._tasks[task_id]
        except KeyError:
            raise TaskNotFound(task_id) from None

    def poll(self, task_id: str) -> TaskStatus:
        """Non-blocking status read."""
        with self._lock:
            return self._task(task_id).status

    def get(self, task_id: str) -> Task:
        """Snapshot copy of a task record."""
        with self._lock:
            return replace(self._task(task_id))

    def tasks(self) -> list[Task]:
        with self._lock:
            return [replace(t) for t in self._tasks.values()]

    def wait(self, task_id: str, timeout: float | None = None) -> TaskResult:
        """
        Block until the task finishes or timeout elapses.

        A timeout does not cancel the task; it keeps running and can be
        waited on or polled again.
        """
        with self._lock:
            self._task(task_id)
            done = self._done[task_id]

        finished = done.wait(timeout)

        with self._lock:
            task = self._task(task_id)
            return TaskResult(
                task_id=task_id,
                status=task.status,
                outcome=task.outcome,
                error=task.error,
                timed_out=not finished,
            )

    def cancel(self, task_id: str) -> bool:
        """
        Request cooperative cancellation.

        Honored only between steps and only before the persist decision;
        later requests are ignored and the transaction completes.

        Returns:
            False if the task had already finished
        """
        with self._lock:
            task = self._task(task_id)
            if task.status.finished:
                return False
            task.cancel_requested = True
        logger.info("Cancellation requested for task %s", task_id)
        return True

    def events(self, task_id: str) -> list[TransactionEvent]:
        """Progress events recorded for the task's transaction."""
        if self._event_store is None:
            return []
        return self._event_store.get_events(task_id)

    # -------------------------------------------------------------------------
    # Retention and shutdown
    # -------------------------------------------------------------------------

    def forget(self, task_id: str) -> bool:
        """
        Drop a finished task once the caller has its result.

        Returns:
            False if the task is still pending or running
        """
        with self._lock:
            task = self._task(task_id)
            if not task.status.finished:
                return False
            del self._tasks[task_id]
            del self._done[task_id]
        return True

    def prune(self) -> int:
        """Drop finished tasks older than the retention window."""
        if self._retention_seconds is None:
            return 0
        cutoff = datetime.now(UTC) - timedelta(seconds=self._retention_seconds)
        with self._lock:
            expired = [
                t.task_id
                for t in self._tasks.values()
                if t.status.finished
                and t.completed_at is not None
                and datetime.fromisoformat(t.completed_at) <= cutoff
            ]
            for task_id in expired:
                del self._tasks[task_id]
                del self._done[task_id]
        if expired:
            logger.debug("Pruned %d finished task(s)", len(expired))
        return len(expired)

    def shutdown(self, wait: bool = True) -> None:
        """
        Stop accepting work.

        Args:
            wait: Drain every submitted task first; otherwise queued tasks
                that have not started are abandoned as CANCELLED
        """
        with self._lock:
            self._accepting = False
            pending = list(self._done.values())
            if not wait:
                self._abandoned = True
        if wait:
            for done in pending:
                done.wait()
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> TaskRunner:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.shutdown(wait=True)
