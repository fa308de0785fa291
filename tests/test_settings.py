"""Tests for settings models and loading."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from configtx.domain.models import Severity
from configtx.settings import (
    ConfigurationError,
    RunnerSettings,
    ValidationSettings,
    load_settings,
)


class TestValidationSettings:
    """Tests for ValidationSettings."""

    def test_defaults(self):
        settings = ValidationSettings()
        assert settings.severity == Severity.WARNING
        assert settings.should_validate
        assert not settings.inclusive

    def test_severity_from_name(self):
        assert ValidationSettings(severity="error").severity == Severity.ERROR

    def test_validate_alias(self):
        settings = ValidationSettings.model_validate({"validate": False})
        assert not settings.should_validate

    def test_unknown_severity(self):
        with pytest.raises(ValidationError):
            ValidationSettings(severity="critical")

    def test_frozen(self):
        settings = ValidationSettings()
        with pytest.raises(ValidationError):
            settings.severity = Severity.FATAL


class TestRunnerSettings:
    def test_defaults(self):
        settings = RunnerSettings()
        assert settings.config_dir == Path(".configtx")
        assert settings.max_workers == 4
        assert settings.retention_seconds == 3600.0

    def test_max_workers_positive(self):
        with pytest.raises(ValidationError):
            RunnerSettings(max_workers=0)


class TestLoadSettings:
    """Tests for load_settings."""

    def test_loads_nested_validation(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(
            json.dumps(
                {
                    "config_dir": str(tmp_path / "store"),
                    "max_workers": 2,
                    "validation": {"severity": "info", "validate": True, "inclusive": True},
                }
            )
        )

        settings = load_settings(path)

        assert settings.config_dir == tmp_path / "store"
        assert settings.validation.severity == Severity.INFO
        assert settings.validation.inclusive

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_settings(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{")
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            load_settings(path)

    def test_not_a_dict(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[]")
        with pytest.raises(ConfigurationError, match="Expected dict"):
            load_settings(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"max_workers": -1}))
        with pytest.raises(ConfigurationError, match="Invalid settings"):
            load_settings(path)
