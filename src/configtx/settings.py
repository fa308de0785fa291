"""
Settings models and loading for configtx.

ValidationSettings travels with every edit (the caller's severity threshold
and whether to validate at all). RunnerSettings configures a deployment of
the engine and is usually loaded from a JSON file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from configtx.domain.models import Severity


class ConfigurationError(Exception):
    """Raised when settings files are invalid or missing."""

    pass


class ValidationSettings(BaseModel):
    """Caller's validation policy for one edit."""

    severity: Severity = Field(
        default=Severity.WARNING,
        description="Findings worse than this block the commit",
    )
    should_validate: bool = Field(
        default=True,
        alias="validate",
        description="Run validation at all; when false the report is treated as empty",
    )
    inclusive: bool = Field(
        default=False,
        description="Also block findings equal to the threshold (>= instead of >)",
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("severity", mode="before")
    @classmethod
    def _parse_severity(cls, value: Any) -> Severity:
        if isinstance(value, str):
            return Severity.parse(value)
        return value


class RunnerSettings(BaseModel):
    """Settings for a TaskRunner and the stores behind it."""

    config_dir: Path = Field(
        default=Path(".configtx"),
        description="Root directory for committed documents and staged files",
    )
    max_workers: int = Field(default=4, ge=1, description="Worker pool size")
    retention_seconds: float | None = Field(
        default=3600.0,
        ge=0,
        description="How long finished tasks are kept; None keeps them forever",
    )
    validation: ValidationSettings = Field(default_factory=ValidationSettings)
    log_file: str | None = Field(default=None, description="Optional log file path")


def load_settings(path: Path) -> RunnerSettings:
    """
    Load runner settings from a JSON file.

    Args:
        path: Path to settings.json

    Returns:
        Parsed RunnerSettings

    Raises:
        ConfigurationError: If the file is missing, not JSON, or fails validation
    """
    if not path.exists():
        raise ConfigurationError(f"Settings file not found: {path}")

    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected dict in {path}, got {type(data).__name__}")

    try:
        return RunnerSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings in {path}: {e}") from e
