"""
MutationTransaction: one logical edit driven through a fixed lifecycle.

    CREATED -> STAGED -> APPLIED -> VALIDATED -> PERSISTED | REVERTED -> CLEANED

FAILED and CANCELLED are reachable from every state before the persist
decision and also end in CLEANED. Steps always run in this order; the
transition table below makes any other sequence unrepresentable.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from configtx.application.transaction_event_emitter import TransactionEventEmitter
from configtx.domain.exceptions import IllegalTransition, TransactionFailed
from configtx.domain.interfaces import TransactionEventStoreInterface
from configtx.domain.models import (
    ProblemReport,
    TransactionOutcome,
    TransactionState,
    ValidationRejected,
)
from configtx.settings import ValidationSettings

logger = logging.getLogger(__name__)

S = TransactionState

_TRANSITIONS: dict[TransactionState, frozenset[TransactionState]] = {
    S.CREATED: frozenset({S.STAGED, S.FAILED, S.CANCELLED}),
    S.STAGED: frozenset({S.APPLIED, S.FAILED, S.CANCELLED}),
    S.APPLIED: frozenset({S.VALIDATED, S.FAILED, S.CANCELLED}),
    S.VALIDATED: frozenset({S.PERSISTED, S.REVERTED, S.FAILED, S.CANCELLED}),
    S.PERSISTED: frozenset({S.CLEANED}),
    S.REVERTED: frozenset({S.CLEANED}),
    S.FAILED: frozenset({S.CLEANED}),
    S.CANCELLED: frozenset({S.CLEANED}),
    S.CLEANED: frozenset(),
}

Step = Callable[[], Any]


def _never_cancelled() -> bool:
    return False


class MutationTransaction:
    """
    Stage, apply, validate, then persist or revert, then clean.

    apply, revert and persist are required. stage and clean default to
    no-ops and validate defaults to an empty report. The caller owns the
    apply/revert pair and must make revert undo whatever apply changed.
    """

    def __init__(
        self,
        apply: Step,
        revert: Step,
        persist: Step,
        *,
        stage: Step | None = None,
        validate: Callable[[], ProblemReport] | None = None,
        clean: Step | None = None,
        settings: ValidationSettings | None = None,
        scope: str | None = None,
        description: str = "",
        event_store: TransactionEventStoreInterface | None = None,
        transaction_id: str | None = None,
    ):
        """
        Args:
            apply: In-memory update; its return value becomes the outcome value
            revert: Undo apply; runs whenever apply ran but persist did not
            persist: Durable commit; runs only if validation allows it
            stage: Write ancillary artifacts before apply
            validate: Produce a ProblemReport for the applied state
            clean: Best-effort cleanup, runs exactly once at the end
            settings: Severity threshold and validate switch
            scope: Configuration scope this edit locks (None for reads)
            description: Human-readable label
            event_store: Where to record progress events (optional)
            transaction_id: Explicit id (a UUID is generated otherwise)
        """
        self._apply = apply
        self._revert = revert
        self._persist = persist
        self._stage = stage
        self._validate = validate
        self._clean = clean
        self._settings = settings or ValidationSettings()
        self.scope = scope
        self.description = description
        self.transaction_id = transaction_id or str(uuid.uuid4())
        self._event_store = event_store
        self._emitter: TransactionEventEmitter | None = None
        self._state = S.CREATED
        self._history: list[TransactionState] = [S.CREATED]

    @property
    def state(self) -> TransactionState:
        return self._state

    @property
    def history(self) -> tuple[TransactionState, ...]:
        return tuple(self._history)

    @property
    def settings(self) -> ValidationSettings:
        return self._settings

    @property
    def event_store(self) -> TransactionEventStoreInterface | None:
        return self._event_store

    @event_store.setter
    def event_store(self, store: TransactionEventStoreInterface | None) -> None:
        if self._state is not S.CREATED:
            raise IllegalTransition("Event store must be set before the transaction runs")
        self._event_store = store

    # -------------------------------------------------------------------------
    # Driving the lifecycle
    # -------------------------------------------------------------------------

    def run(self, cancel_requested: Callable[[], bool] | None = None) -> TransactionOutcome:
        """
        Drive the transaction to CLEANED.

        Never raises for step failures: they are captured in the outcome.

        Args:
            cancel_requested: Polled between steps, up to the persist decision

        Returns:
            TransactionOutcome describing the disposition

        Raises:
            IllegalTransition: If the transaction has already run
        """
        if self._state is not S.CREATED:
            raise IllegalTransition(
                f"Transaction {self.transaction_id} already ran (state {self._state.name})"
            )
        if self._event_store is not None:
            self._emitter = TransactionEventEmitter(
                self._event_store, self.transaction_id, self.scope
            )

        logger.debug("Transaction %s started: %s", self.transaction_id, self.description)
        try:
            outcome = self._drive(cancel_requested or _never_cancelled)
        finally:
            clean_error = self._run_clean()
            if S.CLEANED in _TRANSITIONS[self._state]:
                self._advance(S.CLEANED)

        outcome = replace(outcome, clean_error=clean_error, history=self.history)
        logger.info(
            "Transaction %s (%s) finished: %s",
            self.transaction_id,
            self.description or "unnamed",
            outcome.disposition.name,
        )
        return outcome

    def _drive(self, cancel_requested: Callable[[], bool]) -> TransactionOutcome:
        if cancel_requested():
            return self._cancel(applied=False)

        try:
            if self._stage is not None:
                self._stage()
        except Exception as exc:
            return self._fail("stage", exc, applied=False)
        self._advance(S.STAGED)

        if cancel_requested():
            return self._cancel(applied=False)

        try:
            value = self._apply()
        except Exception as exc:
            # Partial applies are reverted too
            return self._fail("apply", exc, applied=True)
        self._advance(S.APPLIED)

        if cancel_requested():
            return self._cancel(applied=True)

        try:
            report = self._run_validate()
        except Exception as exc:
            return self._fail("validate", exc, applied=True)
        self._advance(S.VALIDATED, severity=report.worst_severity().name)

        if cancel_requested():
            return self._cancel(applied=True)

        # Past this point cancellation is ignored
        threshold = self._settings.severity
        if report.exceeds(threshold, inclusive=self._settings.inclusive):
            rejection = ValidationRejected(report, threshold, self._settings.inclusive)
            try:
                self._revert()
            except Exception as exc:
                return self._fail("revert", exc, applied=False, report=report)
            self._advance(S.REVERTED, summary=rejection.message)
            return TransactionOutcome(
                transaction_id=self.transaction_id,
                disposition=S.REVERTED,
                report=report,
                value=value,
                rejection=rejection,
            )

        try:
            self._persist()
        except Exception as exc:
            return self._fail("persist", exc, applied=True, report=report)
        self._advance(S.PERSISTED)
        return TransactionOutcome(
            transaction_id=self.transaction_id,
            disposition=S.PERSISTED,
            report=report,
            value=value,
        )

    def _run_validate(self) -> ProblemReport:
        if not self._settings.should_validate or self._validate is None:
            return ProblemReport()
        report = self._validate()
        if report is None:
            return ProblemReport()
        return report

    def _run_revert(self) -> str | None:
        """Run revert, returning its error message instead of raising."""
        try:
            self._revert()
        except Exception as exc:
            logger.error(
                "Revert failed for transaction %s: %s",
                self.transaction_id,
                exc,
                exc_info=True,
            )
            return f"{type(exc).__name__}: {exc}"
        return None

    def _run_clean(self) -> str | None:
        if self._clean is None:
            return None
        try:
            self._clean()
        except Exception as exc:
            logger.warning(
                "Clean failed for transaction %s (ignored): %s", self.transaction_id, exc
            )
            return f"{type(exc).__name__}: {exc}"
        return None

    def _fail(
        self,
        step: str,
        exc: Exception,
        applied: bool,
        report: ProblemReport | None = None,
    ) -> TransactionOutcome:
        revert_error = self._run_revert() if applied else None
        error = TransactionFailed(
            step,
            exc,
            reverted=applied and revert_error is None,
            revert_error=revert_error,
        )
        logger.error("Transaction %s failed: %s", self.transaction_id, error)
        self._advance(S.FAILED, summary=str(error))
        return TransactionOutcome(
            transaction_id=self.transaction_id,
            disposition=S.FAILED,
            report=report or ProblemReport(),
            error=error,
            revert_error=revert_error,
        )

    def _cancel(self, applied: bool) -> TransactionOutcome:
        revert_error = self._run_revert() if applied else None
        logger.info("Transaction %s cancelled before persist", self.transaction_id)
        self._advance(S.CANCELLED)
        return TransactionOutcome(
            transaction_id=self.transaction_id,
            disposition=S.CANCELLED,
            revert_error=revert_error,
        )

    def _advance(
        self,
        target: TransactionState,
        summary: str = "",
        severity: str | None = None,
    ) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise IllegalTransition(f"{self._state.name} -> {target.name} is not allowed")
        self._state = target
        self._history.append(target)
        if self._emitter is not None:
            self._emitter.transition(target, summary=summary, severity=severity)

    def __repr__(self) -> str:
        return (
            f"MutationTransaction(id={self.transaction_id!r}, scope={self.scope!r}, "
            f"state={self._state.name})"
        )
