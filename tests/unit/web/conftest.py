"""
Fixtures for API tests.

The app runs against an in-memory shard store and a static catalog through
FastAPI dependency overrides, so no PostgreSQL or Redis is needed.
"""
import pytest
from fastapi.testclient import TestClient

from core.app_context import AppContext
from core.config_loader import AppConfig, AggregationConfig, MatchingConfig
from web.backend.app import app
from web.backend.dependencies import get_app_context, get_catalog
from web.backend.routers.match import limiter
from tests.mocks.catalog import StaticCatalog, worked_example_catalog


@pytest.fixture
def app_config():
    return AppConfig(
        matching=MatchingConfig(embedding_dimensions=3, max_answers=5, top_k=10),
        aggregation=AggregationConfig(shard_count=10, cache_ttl_seconds=30)
    )


@pytest.fixture
def context(app_config, memory_store):
    ctx = AppContext.build(app_config, store=memory_store)
    yield ctx
    ctx.close()


@pytest.fixture
def catalog():
    _, positions, questions = worked_example_catalog()
    return StaticCatalog(positions=positions, questions=questions)


@pytest.fixture
def client(context, catalog):
    app.dependency_overrides[get_app_context] = lambda: context
    app.dependency_overrides[get_catalog] = lambda: catalog
    limiter.enabled = False
    yield TestClient(app)
    limiter.enabled = True
    limiter.reset()
    app.dependency_overrides.clear()
