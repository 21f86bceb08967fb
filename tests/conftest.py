"""Pytest fixtures for typedconfig tests."""

import pytest

from typedconfig import ValueHandler
from typedconfig.stores import InMemoryConfigStore


@pytest.fixture
def handler():
    """Provide a fresh value handler (registrations do not leak)."""
    return ValueHandler()


@pytest.fixture
def memory_store():
    """Provide an empty in-memory store."""
    store = InMemoryConfigStore()
    yield store
    store.close()


@pytest.fixture
def second_store():
    """Provide a second in-memory store for precedence tests."""
    return InMemoryConfigStore()
