"""Shared fixtures: every test gets its own bookstore."""

import pytest

from bookstore.config import BookstoreSettings
from bookstore.orchestrator import create_app_components
from bookstore.services.storage import InMemoryRecordStore


@pytest.fixture
def settings(tmp_path):
    return BookstoreSettings(data_dir=tmp_path)


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def interpreter(settings, store):
    return create_app_components(settings, store)


@pytest.fixture
def context(interpreter):
    return interpreter.context


@pytest.fixture
def run(interpreter):
    """Execute command lines and return all output lines."""
    def _run(*lines):
        output = []
        for line in lines:
            output.extend(interpreter.execute(line))
        return output
    return _run


@pytest.fixture
def as_root(run):
    assert run("su root sjtu") == []
    return run
