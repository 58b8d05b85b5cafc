#!/usr/bin/env python3
"""
Test suite for VoteMatch.

All unit tests run without PostgreSQL or Redis: the catalog repository is
exercised against mocked SQLAlchemy sessions, the shard store against a
mocked Redis client or the in-memory store in tests/mocks.

    # Run all tests
    python -m pytest tests/ -v

    # Skip tests that need a live database
    python -m pytest tests/ -v -m "not db"
"""
