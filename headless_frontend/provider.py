"""Fetch decoded JSON from a CMS REST API.

This module holds the data-provider interface the repository depends on and
a ``requests`` implementation of it. Responses are decoded into
:class:`ApiResponse` objects exposing header lookups for header-based
pagination.

Example
-------
>>> from headless_frontend.provider import RestDataProvider
>>> provider = RestDataProvider("https://example.com/wp-json/wp/v2")  # doctest: +SKIP
>>> response = provider.get("posts", {"page": 2})  # doctest: +SKIP
>>> response.get_header_line("X-WP-Total")  # doctest: +SKIP
'42'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import json
import logging
import typing as typ
from http import HTTPStatus

import requests
from requests.structures import CaseInsensitiveDict

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
_ACCEPT_HEADER = "application/json"


class ApiError(RuntimeError):
    """Raised when the CMS API cannot be reached or returns an error response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dc.dataclass(slots=True)
class ApiResponse:
    """Decoded response body with case-insensitive headers.

    Attributes
    ----------
    data : Any
        Decoded JSON body.
    headers : CaseInsensitiveDict[str]
        Response headers.
    status_code : int
        HTTP status code.
    """

    data: typ.Any
    headers: CaseInsensitiveDict[str] = dc.field(default_factory=CaseInsensitiveDict)
    status_code: int = HTTPStatus.OK

    def __post_init__(self) -> None:
        if not isinstance(self.headers, CaseInsensitiveDict):
            self.headers = CaseInsensitiveDict(self.headers)

    def has_header(self, name: str) -> bool:
        return name in self.headers

    def get_header_line(self, name: str) -> str:
        """Return the header value, or ``""`` when it is not set."""
        return self.headers.get(name, "")


class DataProvider(typ.Protocol):
    """Source of decoded CMS data."""

    def get(
        self, endpoint: str, params: cabc.Mapping[str, typ.Any] | None = None
    ) -> ApiResponse: ...


class RestDataProvider:
    """Thin wrapper around a JSON REST API.

    The provider does not retry failed requests; callers should wrap usage in
    higher-level retry logic if desired.
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        headers: cabc.Mapping[str, str] | None = None,
    ) -> None:
        """Initialise the provider.

        Parameters
        ----------
        base_url : str
            API root, for example ``https://example.com/wp-json/wp/v2``.
        session : requests.Session, optional
            Preconfigured session to reuse connections. Defaults to a new
            session per provider.
        timeout : float, optional
            Per-request timeout in seconds. Defaults to ``10.0``.
        headers : Mapping[str, str], optional
            Extra headers sent with every request.
        """
        normalized = base_url.strip().rstrip("/")
        if not normalized:
            msg = "API base URL cannot be empty"
            raise ValueError(msg)
        self.base_url = normalized
        self._session = session or requests.Session()
        self.timeout = timeout
        self._headers = {
            "Accept": _ACCEPT_HEADER,
            "User-Agent": "headless-frontend/0.1",
        }
        if headers:
            self._headers.update(headers)

    def url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def get(
        self, endpoint: str, params: cabc.Mapping[str, typ.Any] | None = None
    ) -> ApiResponse:
        """Return the decoded response for ``endpoint``.

        Raises
        ------
        ApiError
            If the request fails, the API responds with HTTP 400 or above, or
            the body is not valid JSON.
        """
        url = self.url(endpoint)
        logger.debug("GET %s params=%s", url, dict(params or {}))
        try:
            response = self._session.get(
                url,
                params=dict(params or {}),
                headers=self._headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            msg = f"Failed to reach {url}: {exc}"
            raise ApiError(msg) from exc

        if response.status_code >= HTTPStatus.BAD_REQUEST:
            snippet = response.text[:200]
            msg = f"Request to {url} failed with status {response.status_code}: {snippet}"
            raise ApiError(msg, status_code=response.status_code)

        try:
            payload = response.json()
        except (json.JSONDecodeError, requests.JSONDecodeError) as exc:
            msg = f"Response from {url} was not valid JSON"
            raise ApiError(msg, status_code=response.status_code) from exc

        return ApiResponse(
            data=payload,
            headers=CaseInsensitiveDict(response.headers),
            status_code=response.status_code,
        )


__all__ = ["ApiError", "ApiResponse", "DataProvider", "RestDataProvider"]
