"""
Required-field validation.

Pure validator with no I/O: checks that dotted paths resolve.
"""

from configtx.domain.document import get_path
from configtx.domain.interfaces import Document, ValidatorInterface
from configtx.domain.models import Problem, ProblemReport, Severity


class RequiredFieldsValidator(ValidatorInterface):
    """Report every required path that is missing or None."""

    def __init__(self, *paths: str, severity: Severity = Severity.ERROR):
        self.paths = paths
        self.severity = severity

    def validate(self, document: Document) -> ProblemReport:
        problems = []
        for path in self.paths:
            try:
                value = get_path(document, path)
            except KeyError:
                value = None
            if value is None:
                problems.append(
                    Problem(
                        severity=self.severity,
                        message="Required field is missing",
                        location=path,
                        remediation=f"Set a value for '{path}'",
                    )
                )
        return ProblemReport(tuple(problems))
