"""
Pytest configuration and fixtures for the star layout tests.
"""

from itertools import combinations

import pytest

from spangled.kinds import LayoutKind


@pytest.fixture
def client():
    """Flask test client for the JSON API."""
    from app import app as flask_app

    flask_app.config["TESTING"] = True
    with flask_app.test_client() as client:
        yield client


@pytest.fixture
def kind_subsets():
    """Every subset of LayoutKind, the empty one included."""
    kinds = list(LayoutKind)
    return [subset
            for size in range(len(kinds) + 1)
            for subset in combinations(kinds, size)]
