"""
Command line interface for configtx.

Every command runs as a transaction on a TaskRunner, exactly as an embedding
service would, and waits for it:

    configtx show server
    configtx set server port 8080
    configtx add server listeners '{"name": "http", "port": 80}'
    configtx delete server listeners.http
    configtx replace server server.json --attach cert.pem

Exit codes: 0 committed (or read), 1 failed or cancelled, 3 rejected by
validation.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from pathlib import Path
from typing import Any, TypeVar

import click

from configtx import __version__
from configtx.application.edits import EditRequestBuilder
from configtx.application.runner import TaskRunner
from configtx.application.transaction import MutationTransaction
from configtx.console import (
    print_error,
    print_events,
    print_outcome,
    print_problems,
    print_value,
)
from configtx.domain.models import TaskResult, TaskStatus
from configtx.infrastructure import (
    DocumentService,
    FilesystemConfigStore,
    FilesystemStagingArea,
    FilesystemTransactionEventStore,
    LocalFileSource,
)
from configtx.logging_setup import setup_logging
from configtx.settings import (
    ConfigurationError,
    RunnerSettings,
    ValidationSettings,
    load_settings,
)
from configtx.validators import JsonSchemaValidator

logger = logging.getLogger(__name__)

EXIT_FAILED = 1
EXIT_REJECTED = 3

F = TypeVar("F", bound=Callable[..., Any])


def common_options(func: F) -> F:
    """
    Decorator adding the options every command shares.

    Options added:
        --config-dir: Root directory for documents and staged files
        --settings: Path to settings.json
        --schema: JSON Schema the document must satisfy
        --severity: Worst severity still allowed to commit
        --inclusive: Block at the severity itself, not only above it
        --no-validate: Skip validation entirely
        --log-file: Path to log file
        -v/--verbose: Enable verbose logging
    """

    @click.option(
        "--config-dir",
        default=None,
        type=click.Path(file_okay=False, path_type=Path),
        help="Root directory for documents and staged files (default: .configtx)",
    )
    @click.option(
        "--settings",
        "settings_path",
        default=None,
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Path to settings.json",
    )
    @click.option(
        "--schema",
        default=None,
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="JSON Schema the document must satisfy",
    )
    @click.option(
        "--severity",
        default=None,
        type=click.Choice(["none", "info", "warning", "error", "fatal"], case_sensitive=False),
        help="Worst severity still allowed to commit (default: warning)",
    )
    @click.option(
        "--inclusive",
        is_flag=True,
        help="Also block problems at exactly the --severity level",
    )
    @click.option(
        "--no-validate",
        is_flag=True,
        help="Skip validation; the edit commits if it applies",
    )
    @click.option(
        "--log-file",
        default=None,
        type=click.Path(),
        help="Path to log file",
    )
    @click.option(
        "-v",
        "--verbose",
        is_flag=True,
        help="Enable verbose (DEBUG) logging and show progress events",
    )
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


@dataclass
class Engine:
    """Everything one CLI invocation needs, built from options and settings."""

    settings: RunnerSettings
    validation: ValidationSettings
    edits: EditRequestBuilder
    events: FilesystemTransactionEventStore
    verbose: bool = False

    def runner(self) -> TaskRunner:
        return TaskRunner.from_settings(self.settings, event_store=self.events)


def build_engine(
    config_dir: Path | None,
    settings_path: Path | None,
    schema: Path | None,
    severity: str | None,
    inclusive: bool,
    no_validate: bool,
    log_file: str | None,
    verbose: bool,
) -> Engine:
    """
    Resolve settings (file first, command line on top) and wire the stores.

    Raises:
        ConfigurationError: If the settings file or schema is invalid
    """
    settings = load_settings(settings_path) if settings_path else RunnerSettings()
    if config_dir is not None:
        settings = settings.model_copy(update={"config_dir": config_dir})

    overrides: dict[str, Any] = {}
    if severity is not None:
        overrides["severity"] = severity
    if inclusive:
        overrides["inclusive"] = True
    if no_validate:
        overrides["should_validate"] = False
    validation = ValidationSettings.model_validate(
        {**settings.validation.model_dump(), **overrides}
    )

    setup_logging(log_file=log_file or settings.log_file, verbose=verbose)

    validator = None
    if schema is not None:
        try:
            validator = JsonSchemaValidator.from_file(schema)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    base = settings.config_dir
    store = FilesystemConfigStore(base)
    service = DocumentService(store, validator)
    events = FilesystemTransactionEventStore(base)
    edits = EditRequestBuilder(store, FilesystemStagingArea(base), service, events)
    logger.debug("Using config dir %s (validation: %s)", base, validation)
    return Engine(settings, validation, edits, events, verbose)


def parse_value(raw: str) -> Any:
    """Interpret a command line value as JSON, falling back to a plain string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def run_transaction(engine: Engine, transaction: MutationTransaction) -> TaskResult:
    with engine.runner() as runner:
        handle = runner.submit(transaction)
        result = runner.wait(handle.task_id)
        if engine.verbose:
            print_events(runner.events(handle.task_id))
    return result


def finish(result: TaskResult) -> None:
    """Report a finished edit and exit non-zero unless it committed."""
    outcome = result.outcome
    if outcome is None:
        print_error(f"Task {result.task_id} ended {result.status.value}: {result.error}")
        raise SystemExit(EXIT_FAILED)

    print_outcome(outcome)
    if outcome.rejected:
        raise SystemExit(EXIT_REJECTED)
    if result.status is not TaskStatus.SUCCEEDED:
        raise SystemExit(EXIT_FAILED)


def with_engine(func: Callable[..., None]) -> Callable[..., None]:
    """Turn the common options into an Engine argument and map setup errors."""

    @wraps(func)
    def wrapper(
        *args: Any,
        config_dir: Path | None,
        settings_path: Path | None,
        schema: Path | None,
        severity: str | None,
        inclusive: bool,
        no_validate: bool,
        log_file: str | None,
        verbose: bool,
        **kwargs: Any,
    ) -> None:
        try:
            engine = build_engine(
                config_dir,
                settings_path,
                schema,
                severity,
                inclusive,
                no_validate,
                log_file,
                verbose,
            )
        except ConfigurationError as e:
            print_error(str(e), hint="Check --settings and --schema")
            raise SystemExit(EXIT_FAILED) from None
        func(engine, *args, **kwargs)

    return wrapper


# =============================================================================
# CLI Commands
# =============================================================================


@click.group()
@click.version_option(__version__, prog_name="configtx")
def main() -> None:
    """configtx: validated, transactional configuration edits."""
    pass


@main.command()
@click.argument("scope")
@click.argument("path", default="")
@common_options
@with_engine
def show(engine: Engine, scope: str, path: str) -> None:
    """Print the committed document of SCOPE (or the value at PATH)."""
    request = engine.edits.get(scope, path)
    result = run_transaction(engine, request.build(engine.validation))
    outcome = result.outcome

    if outcome is None or outcome.error is not None:
        cause = outcome.error.cause if outcome and outcome.error else result.error
        if isinstance(cause, KeyError):
            print_error(f"Nothing at '{path}' in {scope}")
        else:
            print_error(f"Could not read {scope}: {cause}")
        raise SystemExit(EXIT_FAILED)

    print_value(outcome.value)
    if outcome.report:
        print_problems(outcome.report)
    if outcome.rejected:
        raise SystemExit(EXIT_REJECTED)


@main.command(name="set")
@click.argument("scope")
@click.argument("path")
@click.argument("value")
@common_options
@with_engine
def set_command(engine: Engine, scope: str, path: str, value: str) -> None:
    """Set the value at PATH in SCOPE (VALUE is parsed as JSON if it can be)."""
    transaction = engine.edits.set_field(scope, path, parse_value(value), engine.validation)
    finish(run_transaction(engine, transaction))


@main.command()
@click.argument("scope")
@click.argument("path")
@click.argument("value")
@common_options
@with_engine
def add(engine: Engine, scope: str, path: str, value: str) -> None:
    """Append VALUE to the list at PATH in SCOPE."""
    transaction = engine.edits.add_entry(scope, path, parse_value(value), engine.validation)
    finish(run_transaction(engine, transaction))


@main.command()
@click.argument("scope")
@click.argument("path")
@common_options
@with_engine
def delete(engine: Engine, scope: str, path: str) -> None:
    """Remove the value at PATH from SCOPE."""
    transaction = engine.edits.delete(scope, path, engine.validation)
    finish(run_transaction(engine, transaction))


@main.command()
@click.argument("scope")
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--attach",
    "attachments",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Ancillary file kept under files/SCOPE/ on commit (repeatable)",
)
@common_options
@with_engine
def replace(
    engine: Engine, scope: str, document: Path, attachments: tuple[Path, ...]
) -> None:
    """Replace the whole document of SCOPE with the JSON in DOCUMENT."""
    try:
        data = json.loads(document.read_text())
    except json.JSONDecodeError as e:
        print_error(f"Invalid JSON in {document}: {e}")
        raise SystemExit(EXIT_FAILED) from None
    if not isinstance(data, dict):
        print_error(f"Expected a JSON object in {document}, got {type(data).__name__}")
        raise SystemExit(EXIT_FAILED)

    try:
        source = LocalFileSource(*attachments) if attachments else None
    except ValueError as e:
        print_error(str(e))
        raise SystemExit(EXIT_FAILED) from None

    transaction = engine.edits.set_document(scope, data, engine.validation, source)
    finish(run_transaction(engine, transaction))


if __name__ == "__main__":
    main()
