"""
Pytest configuration and fixtures for constellix-client-core tests.
"""

import pytest
import responses as responses_lib

from constellix_client.core.client import ConstellixClient
from constellix_client.core.config import BASE_URL, CHECKS_HOST
from constellix_client.core.logging.config import LoggingConfig

API_KEY = "0c4b1c2e-test-key"
SECRET_KEY = "test-secret-key"


@pytest.fixture(autouse=True)
def _clean_constellix_env(monkeypatch):
    """Make sure a developer's real CONSTELLIX_* variables never leak into tests."""
    import os
    for name in list(os.environ):
        if name.upper().startswith("CONSTELLIX_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def base_url():
    """Primary API base URL."""
    return BASE_URL


@pytest.fixture
def checks_url():
    """Checks API endpoint (absolute URL, used verbatim)."""
    return f"https://{CHECKS_HOST}/rest/api/http"


@pytest.fixture
def credentials():
    return API_KEY, SECRET_KEY


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def client():
    """Client without rate gate."""
    client = ConstellixClient(api_key=API_KEY, secret_key=SECRET_KEY)
    yield client
    client.close()


@pytest.fixture
def paced_client():
    """Client with 0.5s between requests."""
    client = ConstellixClient(api_key=API_KEY, secret_key=SECRET_KEY, request_interval=0.5)
    yield client
    client.close()


@pytest.fixture
def logging_config():
    """Console-only DEBUG logging."""
    return LoggingConfig.create(
        level="DEBUG",
        enable_console=True,
        enable_file=False
    )


@pytest.fixture
def logging_config_with_file(tmp_path):
    """
    LoggingConfig fixture with file logging enabled.

    Uses temporary directory for log files to avoid cleanup issues.
    """
    log_file = tmp_path / "test.log"
    return LoggingConfig.create(
        level="DEBUG",
        format="json",
        enable_console=False,
        enable_file=True,
        file_path=str(log_file)
    )
