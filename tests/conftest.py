"""Shared fixtures: a fixed calendar and an in-memory progress store."""

from datetime import date

import pytest

from platolearn.engine import MemoryBackend, ProgressionController, ProgressStore

TODAY = date(2024, 3, 15)


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend):
    return ProgressStore(backend)


@pytest.fixture
def controller(store):
    return ProgressionController(store, clock=lambda: TODAY)
