"""Shared fixtures for splitledger tests."""

import pytest

from splitledger.config import LedgerSettings
from splitledger.core.store import EntityStore
from splitledger.models.ledger import AssociationPolicy
from splitledger.orchestrator import create_session
from splitledger.services.storage import InMemorySnapshotStorage


@pytest.fixture
def store():
    """An empty ledger."""
    return EntityStore()


@pytest.fixture
def dinner_store(store):
    """Alice paid 30.00 for Dinner, shared with Bob."""
    store.add_participant("Alice")
    store.add_participant("Bob")
    store.ensure_task("Dinner", "Alice", 3000)
    store.associate("Dinner", ["Bob"])
    return store


@pytest.fixture
def storage():
    return InMemorySnapshotStorage()


@pytest.fixture
def session(storage):
    """A session over an empty ledger with in-memory snapshots."""
    settings = LedgerSettings(association_policy=AssociationPolicy.IGNORE)
    return create_session(settings, storage=storage)
