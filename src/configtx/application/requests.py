"""
GetRequest: a validated read, executed as a task like any edit.

A read is a transaction with nothing to persist and nothing to revert:
the getter is its apply step, so the value and the validation report come
back through the same TransactionOutcome as an edit. A report that
exceeds the threshold marks the outcome rejected, but the value is still
attached.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from configtx.application.transaction import MutationTransaction
from configtx.domain.models import ProblemReport

if TYPE_CHECKING:
    from configtx.application.runner import TaskRunner
    from configtx.domain.models import TaskHandle
    from configtx.settings import ValidationSettings


def _nothing() -> None:
    return None


@dataclass(frozen=True)
class GetRequest:
    """Getter plus optional validator, labelled for the task list."""

    getter: Callable[[], Any]
    validator: Callable[[], ProblemReport] | None = None
    description: str = "Get configuration"

    def build(self, settings: ValidationSettings | None = None) -> MutationTransaction:
        return MutationTransaction(
            apply=self.getter,
            revert=_nothing,
            persist=_nothing,
            validate=self.validator,
            settings=settings,
            scope=None,
            description=self.description,
        )

    def execute(
        self, runner: TaskRunner, settings: ValidationSettings | None = None
    ) -> TaskHandle:
        """Submit the read to a runner and return its handle."""
        return runner.submit(self.build(settings))
