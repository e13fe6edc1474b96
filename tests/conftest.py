"""Shared test fixtures for eloquent-composition."""

from pathlib import Path

import pytest

from eloquent_composition.config import SUB_NAMESPACES, load_layout
from eloquent_composition.engine import CompositionEngine

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def project(tmp_path):
    """A Laravel-shaped project with app/Models, app/Collections, app/QueryBuilders."""
    for segment in SUB_NAMESPACES.values():
        (tmp_path / "app" / segment).mkdir(parents=True)
    return load_layout(tmp_path)


@pytest.fixture
def bare_project(tmp_path):
    """A project whose classes all live directly under app/."""
    base = tmp_path / "bare"
    (base / "app").mkdir(parents=True)
    return load_layout(base)


@pytest.fixture
def engine(project):
    return CompositionEngine.for_layout(project)


@pytest.fixture
def model_source(engine):
    return engine.build_model("User")
