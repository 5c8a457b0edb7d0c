"""Shared pytest fixtures for server tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from server.app import app
from server.config import reset_settings_cache

_GEO_ENV = (
    "GEO_MAX_POINTS",
    "GEO_DEFAULT_CLUSTER_RADIUS_M",
    "GEO_DEFAULT_GEOHASH_PRECISION",
    "GEO_DEFAULT_HEATMAP_GRID_M",
    "REQUIRE_API_KEY",
    "API_KEY",
)


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch: pytest.MonkeyPatch):
    for name in _GEO_ENV:
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
