"""Shared pytest fixtures for configtx tests."""

import pytest

from configtx.application.edits import EditRequestBuilder
from configtx.application.runner import TaskRunner
from configtx.domain.models import Problem, ProblemReport, Severity
from configtx.infrastructure.document_service import DocumentService
from configtx.infrastructure.persistence.memory import InMemoryConfigStore
from configtx.infrastructure.persistence.staging import FilesystemStagingArea
from configtx.infrastructure.persistence.transaction_events import (
    InMemoryTransactionEventStore,
)
from configtx.validators import RequiredFieldsValidator


@pytest.fixture
def info_report() -> ProblemReport:
    """Report whose worst finding is INFO."""
    return ProblemReport.of(Problem(Severity.INFO, "Consider enabling caching"))


@pytest.fixture
def error_report() -> ProblemReport:
    """Report with one ERROR and one WARNING finding."""
    return ProblemReport.of(
        Problem(Severity.WARNING, "Port is below 1024", location="server.port"),
        Problem(Severity.ERROR, "Required field is missing", location="server.name"),
    )


@pytest.fixture
def memory_store() -> InMemoryConfigStore:
    """Create an in-memory store with one committed scope."""
    return InMemoryConfigStore(
        {"server": {"name": "edge", "port": 8080, "listeners": [{"name": "http", "port": 80}]}}
    )


@pytest.fixture
def event_store() -> InMemoryTransactionEventStore:
    return InMemoryTransactionEventStore()


@pytest.fixture
def staging(tmp_path) -> FilesystemStagingArea:
    return FilesystemStagingArea(tmp_path)


@pytest.fixture
def service(memory_store: InMemoryConfigStore) -> DocumentService:
    """Document service requiring server.name."""
    return DocumentService(memory_store, RequiredFieldsValidator("name"))


@pytest.fixture
def edits(memory_store, staging, service, event_store) -> EditRequestBuilder:
    return EditRequestBuilder(memory_store, staging, service, event_store)


@pytest.fixture
def runner(event_store):
    """Task runner shut down after the test."""
    task_runner = TaskRunner(max_workers=4, event_store=event_store)
    yield task_runner
    task_runner.shutdown(wait=True)
