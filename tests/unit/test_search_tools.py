"""
Tests for the ESG and SCI search adapters.

requests.post is replaced with a mock; assertions cover the outbound request
(URL, headers, cleaned body, timeout) and how each failure mode is reported.
"""

import json
from unittest.mock import patch

import pytest
import requests

from config.config import Settings
from models.errors import (
    ConfigurationError,
    InvalidArgumentTypeError,
    NetworkError,
    RemoteHttpError,
    ResponseParseError,
)
from tools.esg_search import SEARCH_ESG_TOOL, search_esg, validate_esg_arguments
from tools.sci_search import SEARCH_SCI_TOOL, search_sci, validate_sci_arguments


def sent_body(mock_post) -> dict:
    return json.loads(mock_post.call_args.kwargs["data"].decode("utf-8"))


def test_esg_search_posts_cleaned_body_with_headers(settings, make_response):
    with patch("tools.backend.requests.post", return_value=make_response(body={"hits": []})) as mock_post:
        result = search_esg(settings, "k1", {"query": "carbon", "topK": 3})

    assert result == '{"hits":[]}'
    assert mock_post.call_count == 1
    assert mock_post.call_args.args[0] == "https://backend.test/functions/v1/esg_search"
    headers = mock_post.call_args.kwargs["headers"]
    assert headers["Authorization"] == "Bearer anon-key"
    assert headers["x-api-key"] == "k1"
    assert headers["x-region"] == "eu-central-1"
    assert headers["Content-Type"] == "application/json"
    assert mock_post.call_args.kwargs["timeout"] == 5
    assert sent_body(mock_post) == {"query": "carbon", "topK": 3}


def test_esg_search_passes_filters_through_unchanged(settings, make_response):
    arguments = {
        "query": "emissions",
        "metaContains": "Acme",
        "filter": {"country": ["CN", "DE"]},
        "dateFilter": {"publication_date": {"gte": 1609459200}},
    }
    with patch("tools.backend.requests.post", return_value=make_response(body={})) as mock_post:
        search_esg(settings, "k1", arguments)

    assert sent_body(mock_post) == arguments


def test_esg_search_drops_fields_it_does_not_know(settings, make_response):
    with patch("tools.backend.requests.post", return_value=make_response(body={})) as mock_post:
        search_esg(settings, "k1", {"query": "q", "journal": "Nature"})

    assert sent_body(mock_post) == {"query": "q"}


def test_sci_search_posts_to_sci_path(settings, make_response):
    arguments = {"query": "perovskite", "filter": {"doi": ["10.1000/xyz"]}, "dateFilter": {"date": {"lte": 1700000000}}}
    with patch("tools.backend.requests.post", return_value=make_response(body={"hits": [1]})) as mock_post:
        result = search_sci(settings, "k1", arguments)

    assert result == '{"hits":[1]}'
    assert mock_post.call_args.args[0] == "https://backend.test/functions/v1/sci_search"
    assert sent_body(mock_post) == arguments


def test_sci_search_ignores_meta_contains(settings, make_response):
    with patch("tools.backend.requests.post", return_value=make_response(body={})) as mock_post:
        search_sci(settings, "k1", {"query": "q", "metaContains": "x"})

    assert sent_body(mock_post) == {"query": "q"}


def test_non_ascii_response_is_kept_verbatim(settings, make_response):
    with patch("tools.backend.requests.post", return_value=make_response(body={"title": "碳中和"})):
        assert search_esg(settings, "k1", {"query": "q"}) == '{"title":"碳中和"}'


def test_http_failure_raises_remote_http_error(settings, make_response):
    response = make_response(status_code=500, reason="Internal Server Error")
    with patch("tools.backend.requests.post", return_value=response):
        with pytest.raises(RemoteHttpError) as exc_info:
            search_esg(settings, "k1", {"query": "q"})

    assert exc_info.value.status == 500
    assert str(exc_info.value) == "HTTP error: 500 Internal Server Error"


@pytest.mark.parametrize("status, reason", [(302, "Found"), (304, "Not Modified")])
def test_redirect_status_is_not_success(settings, make_response, status, reason):
    response = make_response(status_code=status, reason=reason, body={})
    with patch("tools.backend.requests.post", return_value=response):
        with pytest.raises(RemoteHttpError) as exc_info:
            search_esg(settings, "k1", {"query": "q"})

    assert str(exc_info.value) == f"HTTP error: {status} {reason}"


def test_invalid_json_raises_parse_error(settings, make_response):
    response = make_response(json_error=ValueError("Expecting value"))
    with patch("tools.backend.requests.post", return_value=response):
        with pytest.raises(ResponseParseError):
            search_sci(settings, "k1", {"query": "q"})


def test_connection_failure_raises_network_error(settings):
    with patch("tools.backend.requests.post", side_effect=requests.exceptions.ConnectionError("refused")):
        with pytest.raises(NetworkError, match="refused"):
            search_esg(settings, "k1", {"query": "q"})


def test_timeout_raises_network_error(settings):
    with patch("tools.backend.requests.post", side_effect=requests.exceptions.Timeout("read timed out")):
        with pytest.raises(NetworkError):
            search_esg(settings, "k1", {"query": "q"})


def test_missing_base_url_is_a_configuration_error():
    with patch("tools.backend.requests.post") as mock_post:
        with pytest.raises(ConfigurationError, match="BASE_URL"):
            search_esg(Settings(), "k1", {"query": "q"})
    mock_post.assert_not_called()


@pytest.mark.parametrize("arguments", [{}, {"query": 42}, {"query": ""}, {"query": None}])
def test_query_must_be_a_non_empty_string(arguments):
    with pytest.raises(InvalidArgumentTypeError, match="'query' must be a non-empty string"):
        validate_esg_arguments(arguments)
    with pytest.raises(InvalidArgumentTypeError, match="query"):
        validate_sci_arguments(arguments)


@pytest.mark.parametrize(
    "field, value",
    [("topK", "5"), ("extK", True), ("metaContains", 3), ("filter", ["CN"]), ("dateFilter", "2020")],
)
def test_optional_fields_are_type_checked(field, value):
    with pytest.raises(InvalidArgumentTypeError, match=field):
        validate_esg_arguments({"query": "q", field: value})


def test_valid_arguments_pass():
    validate_esg_arguments({"query": "q", "topK": 5, "extK": 1.0, "metaContains": "x", "filter": {}, "dateFilter": {}})
    validate_sci_arguments({"query": "q", "topK": 10})


def test_whitespace_query_is_accepted():
    validate_esg_arguments({"query": "   "})
    validate_sci_arguments({"query": " "})


def test_null_optional_fields_pass():
    validate_esg_arguments({"query": "q", "topK": None, "extK": None, "metaContains": None, "filter": None, "dateFilter": None})
    validate_sci_arguments({"query": "q", "topK": None})


def test_descriptors_mark_query_required():
    for descriptor in (SEARCH_ESG_TOOL, SEARCH_SCI_TOOL):
        assert descriptor.required_fields == ["query"]
        assert descriptor.input_schema["properties"]["query"]["type"] == "string"
        assert descriptor.input_schema["properties"]["topK"]["default"] == 5
