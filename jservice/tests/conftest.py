"""
Test fixtures for jService client tests.
"""

import random

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from jservice.client import JServiceClient


def make_response(payload=None, json_error=None):
    """Fake httpx response whose json() returns payload or raises json_error."""
    response = MagicMock()
    if json_error is not None:
        response.json = MagicMock(side_effect=json_error)
    else:
        response.json = MagicMock(return_value=payload)
    return response


@pytest.fixture
def categories_payload():
    """Sample /categories response."""
    return [{"id": 1, "title": "Science", "clues": 5}]


@pytest.fixture
def category_payload():
    """Sample /category response."""
    return {
        "id": 99,
        "title": "Potent Potables",
        "clues_count": 1,
        "clues": [
            {"id": 10, "value": 200, "question": "Q", "answer": "A", "category_id": 99},
        ],
    }


@pytest.fixture
def random_payload():
    """Sample /random response."""
    return {
        "clues": [
            {"id": 11, "category_id": 3, "value": 400, "question": "Q2", "answer": "A2"},
        ],
    }


@pytest.fixture
def mock_http():
    """Mock httpx.AsyncClient."""
    http = AsyncMock()
    http.is_closed = False
    http.get = AsyncMock(return_value=make_response([]))
    http.aclose = AsyncMock()
    return http


@pytest.fixture
def respond(mock_http):
    """Make the mock HTTP handle answer every GET with the given payload."""
    def _respond(payload=None, json_error=None):
        mock_http.get = AsyncMock(return_value=make_response(payload, json_error))
        return mock_http.get

    return _respond


@pytest.fixture
def client(mock_http):
    """Client wired to the mock HTTP handle with a seeded random source."""
    service = JServiceClient(rng=random.Random(1234))
    service._client = mock_http
    return service


@pytest.fixture
def transport_client():
    """
    Build a client backed by httpx.MockTransport.

    Returns a factory taking the request handler.
    """
    def factory(handler, **kwargs):
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return JServiceClient(client=http, **kwargs)

    return factory
