"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def database():
    """
    Function-scoped Database with a fresh schema.

    In-memory SQLite unless TEST_DATABASE_URL points elsewhere.
    """
    from tests import make_test_database, teardown_test_database

    db = make_test_database()
    yield db
    teardown_test_database(db)
