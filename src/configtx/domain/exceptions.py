"""
Domain exceptions for the configuration mutation engine.

Validation rejection is deliberately absent: it is an outcome
(ValidationRejected in models), not an error.
"""


class ScopeLockedError(Exception):
    """
    Raised when another transaction already holds the scope's working copy.

    Not a system fault; the caller should retry once the holder commits
    or discards.
    """

    def __init__(self, scope: str, owner: str | None = None):
        holder = f" (held by {owner})" if owner else ""
        super().__init__(f"Scope '{scope}' is locked by another transaction{holder}")
        self.scope = scope
        self.owner = owner


class WorkingCopyMissing(Exception):
    """Raised when an operation needs a working copy that was never loaded."""

    def __init__(self, scope: str):
        super().__init__(f"No working copy loaded for scope '{scope}'")
        self.scope = scope


class StagingError(Exception):
    """Raised when an artifact cannot be written to the staging area."""

    pass


class PersistenceError(Exception):
    """Raised when the committed document cannot be written durably."""

    pass


class IllegalTransition(Exception):
    """Raised when a transaction is driven out of its fixed state order."""

    pass


class TaskNotFound(KeyError):
    """Raised for an unknown or already-forgotten task id."""

    pass


class TransactionFailed(Exception):
    """
    A transaction could not complete its edit.

    Carries the step that failed, the underlying cause, and whether the
    in-memory change was reverted. A revert failure is attached as a
    secondary warning, never in place of the primary cause.
    """

    def __init__(
        self,
        step: str,
        cause: BaseException,
        reverted: bool = False,
        revert_error: str | None = None,
    ):
        """
        Args:
            step: Lifecycle step that failed (stage, apply, validate, persist, revert)
            cause: The exception raised by that step
            reverted: True if revert ran and succeeded
            revert_error: Message from a failed revert, if any
        """
        message = f"{step} failed: {cause}"
        if revert_error:
            message += f" (revert also failed: {revert_error})"
        super().__init__(message)
        self.step = step
        self.cause = cause
        self.reverted = reverted
        self.revert_error = revert_error
