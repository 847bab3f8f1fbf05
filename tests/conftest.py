"""
Shared fixtures for the job board client tests.

No test touches the network: the API transport is a MagicMock standing in
for requests.Session, and responses are real requests.Response objects
built from canned JSON.
"""

import json
import os

import pytest
import requests
from unittest.mock import MagicMock

# Set test environment BEFORE any imports so Settings never reads real values
os.environ["ENVIRONMENT"] = "development"
os.environ["API_URL"] = "http://api.test"
os.environ["FLASK_SECRET_KEY"] = "test-secret-key"

from jobboard.config import Settings, get_settings  # noqa: E402


API_URL = "http://api.test"


def create_mock_response(status_code=200, json_data=None, text=None):
    """Helper to create a requests.Response carrying a JSON (or text) body."""
    response = requests.Response()
    response.status_code = status_code
    if json_data is not None:
        response._content = json.dumps(json_data).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    elif text is not None:
        response._content = text.encode("utf-8")
    else:
        response._content = b""
    return response


@pytest.fixture
def mock_response():
    """Factory fixture: mock_response(status, json_data=None, text=None)."""
    return create_mock_response


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        api_url=API_URL,
        flask_secret_key="test-secret-key",
        environment="development",
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    """Flask app fixture with test configuration."""
    from jobboard.app import create_app

    app = create_app(settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def authenticated_client(client):
    """Flask test client whose session holds a recruiter token pair."""
    with client.session_transaction() as sess:
        sess["access_token"] = "access-1"
        sess["refresh_token"] = "refresh-1"
    return client


@pytest.fixture
def transport(mocker):
    """
    Mock requests.Session shared by every ApiClient the app builds.

    Normal API calls go through transport.request; the token refresh goes
    through transport.post.
    """
    session = MagicMock(spec=requests.Session)
    mocker.patch("jobboard.api._get_transport", return_value=session)
    return session
