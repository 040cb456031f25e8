from unittest.mock import MagicMock

import pytest

from config.config import Settings


BACKEND_URL = "https://backend.test/functions/v1"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        base_url=BACKEND_URL,
        anon_key="anon-key",
        region="eu-central-1",
        x_api_key="k1",
        request_timeout=5,
    )


@pytest.fixture
def make_response():
    """Build a stand-in for requests.Response."""

    def _make(status_code=200, body=None, reason="OK", json_error=None):
        response = MagicMock()
        response.status_code = status_code
        response.reason = reason
        response.ok = status_code < 400
        if json_error is not None:
            response.json.side_effect = json_error
        else:
            response.json.return_value = body
        return response

    return _make
