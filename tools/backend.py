"""
Outbound calls to the search backend.

Both search tools POST a cleaned JSON body to a fixed path under BASE_URL and
hand the backend's JSON response back untouched, re-serialized as a string.
"""

import json
import logging
from typing import Any, Dict

import requests

from config.config import Settings
from models.errors import ConfigurationError, NetworkError, RemoteHttpError, ResponseParseError

logger = logging.getLogger(__name__)


def to_json_text(data: Any) -> str:
    """Compact JSON, non-ASCII kept as-is."""
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def build_headers(settings: Settings, api_key: str) -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {settings.anon_key}",
        "x-api-key": api_key,
        "x-region": settings.region,
    }


def post_search(settings: Settings, path: str, api_key: str, payload: Dict[str, Any]) -> str:
    """
    POST ``payload`` to ``{base_url}/{path}`` and return the response as JSON text.

    Raises:
        ConfigurationError: BASE_URL is not configured
        NetworkError: the request never got a response (includes timeouts)
        RemoteHttpError: the backend answered with a non-2xx status
        ResponseParseError: the body is not JSON
    """
    if not settings.base_url:
        raise ConfigurationError("BASE_URL not set")

    url = f"{settings.base_url}/{path}"
    logger.debug(f"POST {url} fields={sorted(payload)}")

    try:
        response = requests.post(
            url,
            headers=build_headers(settings, api_key),
            data=to_json_text(payload).encode("utf-8"),
            timeout=settings.request_timeout,
        )
    except requests.exceptions.RequestException as e:
        logger.error(f"Error making the request to {url}: {e}")
        raise NetworkError(f"Request to {path} failed: {e}") from e

    if not 200 <= response.status_code < 300:
        logger.error(f"Backend {path} answered {response.status_code} {response.reason}")
        raise RemoteHttpError(response.status_code, response.reason)

    try:
        data = response.json()
    except ValueError as e:
        logger.error(f"Backend {path} returned a non-JSON body: {e}")
        raise ResponseParseError(f"Invalid JSON in response from {path}") from e

    return to_json_text(data)
