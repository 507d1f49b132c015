"""Global test configuration and fixtures."""
import pytest
import asyncio
import logging
import sys
from unittest.mock import AsyncMock, MagicMock

from basecamp.core.config import ClientConfig

if sys.platform.startswith("win"):
    # Use the ProactorEventLoop on Windows
    asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())

ACCOUNT = "605816632"
USERNAME = "user@example.com"
PASSWORD = "s3cr3t-pass"

@pytest.fixture
def credentials():
    """Fixture providing the required construction arguments"""
    return {"account": ACCOUNT, "username": USERNAME, "password": PASSWORD}

@pytest.fixture
def client_config(credentials):
    """Fixture for a default client configuration"""
    return ClientConfig(**credentials)

def make_response(status=200, body='{"id": 1}', headers=None):
    """Build an async context manager standing in for session.request()"""
    mock_response = MagicMock()
    mock_response.status = status
    if isinstance(body, str):
        body = body.encode("utf-8")
    mock_response.read = AsyncMock(return_value=body)
    mock_response.headers = headers or {"Content-Type": "application/json"}

    mock_cm = AsyncMock()
    mock_cm.__aenter__.return_value = mock_response
    mock_cm.__aexit__.return_value = None
    return mock_cm

@pytest.fixture
def response_factory():
    """Fixture exposing make_response to tests"""
    return make_response

@pytest.fixture(autouse=True)
def reset_basecamp_logger():
    """Drop handlers added by Logger between tests"""
    yield
    package_logger = logging.getLogger("basecamp")
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
