"""Session fixtures: the configtx import graph and its layer map."""

import os

import pytest
from pytestarch import (
    EvaluableArchitecture,
    LayeredArchitecture,
    get_evaluable_architecture,
)


@pytest.fixture(scope="session")
def evaluable() -> EvaluableArchitecture:
    """Import graph of src/configtx."""
    src_dir = os.path.abspath(
        os.path.join(os.path.dirname(__file__), "..", "..", "src")
    )
    project_path = os.path.join(src_dir, "configtx")
    return get_evaluable_architecture(src_dir, project_path)


@pytest.fixture(scope="session")
def layers() -> LayeredArchitecture:
    """
    Layer map for configtx: domain, application, infrastructure.

    Module names are taken relative to src/'s parent, hence the
    'src.' prefix on each package.
    """
    return (
        LayeredArchitecture()
        .layer("domain")
        .containing_modules(["src.configtx.domain"])
        .layer("application")
        .containing_modules(["src.configtx.application"])
        .layer("infrastructure")
        .containing_modules(["src.configtx.infrastructure"])
    )
