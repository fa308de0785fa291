"""
Validators for configuration documents.

Validators are opaque rule sets returning a ProblemReport. They never decide
whether a commit proceeds; the transaction compares the report with the
caller's severity threshold.

- required: pure path-presence checks
- schema: JSON Schema validation (jsonschema)
- composite: validator composition
"""

from configtx.validators.composite import CompositeValidator
from configtx.validators.required import RequiredFieldsValidator
from configtx.validators.schema import JsonSchemaValidator

__all__ = [
    "RequiredFieldsValidator",
    "JsonSchemaValidator",
    "CompositeValidator",
]
