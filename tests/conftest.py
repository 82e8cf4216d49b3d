"""Pytest configuration and shared fixtures."""

import copy
import socket

import pytest
from fastapi.testclient import TestClient

from tripmock.backend.api import create_app
from tripmock.backend.data_processing import TripData, load_fixture
from tripmock.utils.config import Settings


@pytest.fixture
def original_document():
    """The bundled trip fixture as loaded from disk."""
    return load_fixture()


@pytest.fixture
def minimal_document():
    """Smallest fixture the transform accepts, with one passthrough field."""
    return {
        "trip": {
            "estimated_arrival": "2018-09-28T14:22:17",
            "estimated_fare_min": 6500,
            "estimated_fare_max": 7500,
            "passengers": 2,
        },
        "driver": {"name": "Steph"},
    }


@pytest.fixture
def min_only_document(minimal_document):
    """Older fixture variant without estimated_fare_max."""
    document = copy.deepcopy(minimal_document)
    del document["trip"]["estimated_fare_max"]
    return document


@pytest.fixture
def trip_data():
    return TripData()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def client(trip_data, settings):
    """Create test client for the FastAPI app."""
    return TestClient(create_app(trip_data=trip_data, settings=settings))


@pytest.fixture
def free_port():
    """A port nothing is listening on right now."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
