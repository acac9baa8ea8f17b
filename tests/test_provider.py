"""Unit tests for the requests-backed CMS data provider."""

from __future__ import annotations

import typing as typ

import pytest
import requests

from headless_frontend.provider import ApiError, ApiResponse, RestDataProvider

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture


def _session(
    mocker: MockerFixture,
    *,
    status: int = 200,
    payload: typ.Any = None,
    headers: dict[str, str] | None = None,
    json_error: Exception | None = None,
) -> typ.Any:
    response = mocker.Mock(spec=requests.Response)
    response.status_code = status
    response.headers = headers or {}
    response.text = "" if payload is None else str(payload)
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    session = mocker.Mock(spec=requests.Session)
    session.get.return_value = response
    return session


def test_get_returns_decoded_response(mocker: MockerFixture) -> None:
    """A successful request yields the JSON body and its headers."""
    session = _session(mocker, payload=[{"id": 1}], headers={"X-WP-Total": "1"})
    provider = RestDataProvider("https://cms.example.com/wp-json/wp/v2/", session=session)

    response = provider.get("/posts", {"page": 2})

    assert response.data == [{"id": 1}], f"unexpected data {response.data!r}"
    assert response.get_header_line("x-wp-total") == "1", (
        "expected case-insensitive header lookup"
    )
    session.get.assert_called_once()
    args, kwargs = session.get.call_args
    assert args == ("https://cms.example.com/wp-json/wp/v2/posts",), (
        f"unexpected URL {args!r}"
    )
    assert kwargs["params"] == {"page": 2}, "expected query params forwarded"
    assert kwargs["headers"]["Accept"] == "application/json", "expected JSON accept"
    assert kwargs["timeout"] == 10.0, "expected the default timeout"


def test_extra_headers_are_sent(mocker: MockerFixture) -> None:
    """Custom headers are merged over the defaults."""
    session = _session(mocker, payload={})
    provider = RestDataProvider(
        "https://cms.example.com/api",
        session=session,
        headers={"Authorization": "Bearer token"},
        timeout=3,
    )
    provider.get("entries")
    kwargs = session.get.call_args.kwargs
    assert kwargs["headers"]["Authorization"] == "Bearer token", "expected auth header"
    assert kwargs["timeout"] == 3, "expected the configured timeout"


def test_error_status_raises_api_error(mocker: MockerFixture) -> None:
    """HTTP errors raise ApiError carrying the status code."""
    session = _session(mocker, status=404, payload={"code": "rest_post_invalid_id"})
    provider = RestDataProvider("https://cms.example.com/wp-json/wp/v2", session=session)
    with pytest.raises(ApiError, match="status 404") as excinfo:
        provider.get("posts/99")
    assert excinfo.value.status_code == 404, "expected the status code kept"


def test_connection_failure_raises_api_error(mocker: MockerFixture) -> None:
    """Network failures are wrapped in ApiError."""
    session = mocker.Mock(spec=requests.Session)
    session.get.side_effect = requests.ConnectionError("refused")
    provider = RestDataProvider("https://cms.example.com", session=session)
    with pytest.raises(ApiError, match="Failed to reach") as excinfo:
        provider.get("posts")
    assert excinfo.value.status_code is None, "expected no status code"


def test_invalid_json_raises_api_error(mocker: MockerFixture) -> None:
    """A body that is not JSON raises ApiError."""
    session = _session(
        mocker, json_error=requests.JSONDecodeError("Expecting value", "<html>", 0)
    )
    provider = RestDataProvider("https://cms.example.com", session=session)
    with pytest.raises(ApiError, match="not valid JSON"):
        provider.get("posts")


def test_empty_base_url_rejected() -> None:
    """A provider needs an API root."""
    with pytest.raises(ValueError, match="cannot be empty"):
        RestDataProvider("  /  ")


def test_api_response_defaults() -> None:
    """Missing headers read as empty strings."""
    response = ApiResponse(data={})
    assert not response.has_header("X-WP-Total"), "expected no headers"
    assert response.get_header_line("X-WP-Total") == "", "expected an empty string"
    assert response.status_code == 200, "expected status 200 by default"
