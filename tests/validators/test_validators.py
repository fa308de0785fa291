"""Tests for the bundled validators."""

import json

import pytest
from jsonschema.exceptions import SchemaError

from configtx.domain.interfaces import ValidatorInterface
from configtx.domain.models import Problem, ProblemReport, Severity
from configtx.validators import (
    CompositeValidator,
    JsonSchemaValidator,
    RequiredFieldsValidator,
)

SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["name"],
    "properties": {
        "name": {"type": "string"},
        "port": {"type": "integer", "minimum": 1, "maximum": 65535},
        "listeners": {
            "type": "array",
            "items": {"type": "object", "required": ["name"]},
        },
    },
}


class Fixed(ValidatorInterface):
    """Validator returning a fixed report."""

    def __init__(self, *problems: Problem):
        self.report = ProblemReport(problems)
        self.calls = 0

    def validate(self, document):
        self.calls += 1
        return self.report


class TestRequiredFieldsValidator:
    """Tests for RequiredFieldsValidator."""

    def test_present_fields_pass(self):
        report = RequiredFieldsValidator("name", "tls.cert").validate(
            {"name": "edge", "tls": {"cert": "cert.pem"}}
        )
        assert len(report) == 0

    def test_missing_and_null_fields_reported(self):
        report = RequiredFieldsValidator("name", "tls.cert").validate({"tls": {"cert": None}})

        assert [p.location for p in report] == ["name", "tls.cert"]
        assert report.worst_severity() == Severity.ERROR
        assert report.problems[0].remediation == "Set a value for 'name'"

    def test_custom_severity(self):
        report = RequiredFieldsValidator("name", severity=Severity.WARNING).validate({})
        assert report.worst_severity() == Severity.WARNING


class TestJsonSchemaValidator:
    """Tests for JsonSchemaValidator."""

    def test_valid_document(self):
        assert len(JsonSchemaValidator(SCHEMA).validate({"name": "edge", "port": 80})) == 0

    def test_violations_become_problems(self):
        report = JsonSchemaValidator(SCHEMA).validate(
            {"port": 0, "listeners": [{"port": 80}]}
        )

        locations = sorted(p.location for p in report)
        assert locations == ["", "listeners.0", "port"]
        assert all(p.severity == Severity.ERROR for p in report)
        port_problem = next(p for p in report if p.location == "port")
        assert port_problem.remediation == "Check the 'minimum' constraint"

    def test_severity_override(self):
        validator = JsonSchemaValidator(SCHEMA, severity=Severity.FATAL)
        assert validator.validate({}).worst_severity() == Severity.FATAL

    def test_invalid_schema(self):
        with pytest.raises(SchemaError):
            JsonSchemaValidator({"type": 12})

    def test_from_file(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps(SCHEMA))

        validator = JsonSchemaValidator.from_file(path)

        assert len(validator.validate({"name": "edge"})) == 0

    def test_from_file_invalid_json(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text("{")
        with pytest.raises(ValueError, match="Invalid schema"):
            JsonSchemaValidator.from_file(path)


class TestCompositeValidator:
    """Tests for CompositeValidator."""

    def test_concatenates_reports(self):
        first = Fixed(Problem(Severity.INFO, "a"))
        second = Fixed(Problem(Severity.ERROR, "b"))

        report = CompositeValidator(first, second).validate({})

        assert [p.message for p in report] == ["a", "b"]

    def test_stop_at(self):
        first = Fixed(Problem(Severity.FATAL, "a"))
        second = Fixed(Problem(Severity.INFO, "b"))

        report = CompositeValidator(first, second, stop_at=Severity.ERROR).validate({})

        assert len(report) == 1
        assert second.calls == 0

    def test_empty_composite(self):
        assert len(CompositeValidator().validate({})) == 0
