"""
Pytest configuration and fixtures.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "warning")

import pytest
from fastapi.testclient import TestClient

from worldaway.services import ExoplanetClassifier, BatchService


class FixedRandom:
    """Random source that always returns the same draw."""

    def __init__(self, value: float = 0.5):
        self.value = value

    def random(self) -> float:
        return self.value


SAMPLE_RECORD = {
    "orbital_period": 15.234,
    "transit_duration": 2.45,
    "planetary_radius": 1.12,
    "stellar_temp": 5778,
    "snr": 12.5,
    "depth": 0.0023,
}

# Every normalized feature at its best value, so the raw score is 1.0
STRONG_RECORD = {
    "orbital_period": 150.35,
    "transit_duration": 10,
    "planetary_radius": 20,
    "stellar_temp": 5500,
    "snr": 50,
    "depth": 0.05,
}


@pytest.fixture
def classifier():
    """Classifier whose noise term is always zero."""
    return ExoplanetClassifier(rng=FixedRandom(0.5))


@pytest.fixture
def batch_service(classifier):
    return BatchService(classifier)


@pytest.fixture
def client():
    """API client with a noise-free classifier installed after startup."""
    from api import app

    with TestClient(app) as test_client:
        app.state.classifier = ExoplanetClassifier(rng=FixedRandom(0.5))
        yield test_client
