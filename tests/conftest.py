"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For catalog and store builders, see tests/mocks/.
"""

import random
import pytest

from core.aggregation import ShardRouter
from core.matcher import CatalogValidator, MatchingService
from tests.mocks.stores import InMemoryShardStore, FakeClock


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def validator():
    """Validator accepting embeddings of any length (test vectors are 3-d)."""
    return CatalogValidator(embedding_dimensions=None)


@pytest.fixture
def matching_service(validator):
    return MatchingService(validator=validator)


@pytest.fixture
def memory_store():
    return InMemoryShardStore()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def seeded_router():
    """Router over the default 100 shards with a reproducible write choice."""
    return ShardRouter(rng=random.Random(1234))
