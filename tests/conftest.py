"""Shared fixtures for the recapper tests."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest


def _make_response(payload=None, status_code=200, reason_phrase="OK"):
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.reason_phrase = reason_phrase
    response.is_success = 200 <= status_code < 300
    response.json.return_value = payload
    return response


@pytest.fixture
def make_response():
    """Factory for stand-in httpx.Response objects carrying a JSON payload."""
    return _make_response


@pytest.fixture
def client():
    return AsyncMock(spec=httpx.AsyncClient)
