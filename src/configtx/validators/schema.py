"""
JSON Schema validation for configuration documents.

Each schema violation becomes one Problem; the dotted location matches the
paths accepted by the document helpers, so a finding can be fed straight
back into an edit.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema.exceptions import SchemaError

from configtx.domain.interfaces import Document, ValidatorInterface
from configtx.domain.models import Problem, ProblemReport, Severity


class JsonSchemaValidator(ValidatorInterface):
    """Validate documents against a JSON Schema (draft picked from $schema)."""

    def __init__(self, schema: dict[str, Any], severity: Severity = Severity.ERROR):
        """
        Args:
            schema: JSON Schema document
            severity: Severity assigned to every violation

        Raises:
            jsonschema.exceptions.SchemaError: If the schema itself is invalid
        """
        validator_cls = jsonschema.validators.validator_for(schema)
        validator_cls.check_schema(schema)
        self._validator = validator_cls(schema)
        self.severity = severity

    @classmethod
    def from_file(
        cls, path: Path, severity: Severity = Severity.ERROR
    ) -> JsonSchemaValidator:
        """
        Load a schema from a JSON file.

        Raises:
            ValueError: If the file is not valid JSON or not a valid schema
        """
        try:
            with open(path) as f:
                schema = json.load(f)
            return cls(schema, severity=severity)
        except (json.JSONDecodeError, SchemaError) as e:
            raise ValueError(f"Invalid schema in {path}: {e}") from e

    def validate(self, document: Document) -> ProblemReport:
        errors = sorted(
            self._validator.iter_errors(document), key=lambda e: [str(p) for p in e.path]
        )
        return ProblemReport(
            tuple(
                Problem(
                    severity=self.severity,
                    message=error.message,
                    location=".".join(str(p) for p in error.path),
                    remediation=f"Check the '{error.validator}' constraint",
                )
                for error in errors
            )
        )
