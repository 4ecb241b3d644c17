"""
tests.conftest

Fixtures wiring the session synchronizer to in-memory fakes.
"""

from __future__ import annotations

import pytest
from fakes import FakeGateway, FakeProfiles

from fittrack.session.storage import MemoryStorage
from fittrack.session.synchronizer import SessionSynchronizer


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def profiles() -> FakeProfiles:
    return FakeProfiles()


@pytest.fixture
def durable() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def ephemeral() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def synchronizer(
    gateway: FakeGateway,
    profiles: FakeProfiles,
    durable: MemoryStorage,
    ephemeral: MemoryStorage,
) -> SessionSynchronizer:
    return SessionSynchronizer(
        gateway=gateway,
        profiles=profiles,
        durable_storage=durable,
        session_storage=ephemeral,
    )
