"""
Validator composition.

CompositeValidator implements the Decorator pattern for validator composition.
"""

from configtx.domain.interfaces import Document, ValidatorInterface
from configtx.domain.models import ProblemReport, Severity


class CompositeValidator(ValidatorInterface):
    """
    Run several validators and concatenate their reports in order.

    Unlike a pass/fail chain there is no short-circuit by default: the
    caller's threshold decides what blocks, so every finding is reported.
    """

    def __init__(
        self, *validators: ValidatorInterface, stop_at: Severity | None = None
    ):
        """
        Args:
            *validators: Validators to compose (evaluated in order)
            stop_at: Stop after the first report reaching this severity
        """
        self.validators = validators
        self.stop_at = stop_at

    def validate(self, document: Document) -> ProblemReport:
        report = ProblemReport()
        for validator in self.validators:
            report = report.merge(validator.validate(document))
            if self.stop_at is not None and report.worst_severity() >= self.stop_at:
                break
        return report
