"""Async HTTP client for the Carapace API.

One method per endpoint, one exchange per call::

    POST   /query                 (auth)
    POST   /contributions         (auth)
    GET    /contributions/{id}
    PUT    /contributions/{id}    (auth)
    DELETE /contributions/{id}    (auth)

Success bodies are returned exactly as the API sent them.  Any non-2xx
answer becomes a :class:`~carapace.exceptions.CarapaceAPIError`; network
failures (``httpx.TransportError``) are left to propagate as they are.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from carapace.config import API_KEY_ENV, API_KEY_URL, BASE_URL, REQUEST_TIMEOUT
from carapace.exceptions import CarapaceAPIError, ConfigurationError
from carapace.schemas import ContributeParams, QueryParams, UpdateParams

logger = logging.getLogger(__name__)


class CarapaceClient:
    """Client for the Carapace knowledge-base API"""

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ConfigurationError(
                f"{API_KEY_ENV} is required. Get one at {API_KEY_URL}"
            )
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def __repr__(self) -> str:
        return f"CarapaceClient(base_url={self.base_url!r})"

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def query(self, params: QueryParams) -> Any:
        """Semantic search; returns the API's ``{"results": [...]}`` body."""
        return await self._request("POST", "/query", json_body=params.to_payload())

    async def contribute(self, params: ContributeParams) -> Any:
        """Create a contribution; returns the stored record."""
        return await self._request(
            "POST", "/contributions", json_body=params.to_payload()
        )

    async def get(self, contribution_id: str) -> Any:
        # No Authorization header on reads.
        return await self._request("GET", _contribution_path(contribution_id), auth=False)

    async def update(self, contribution_id: str, params: UpdateParams) -> Any:
        """Send only the fields present on ``params``."""
        return await self._request(
            "PUT", _contribution_path(contribution_id), json_body=params.to_payload()
        )

    async def delete(self, contribution_id: str) -> None:
        await self._request(
            "DELETE", _contribution_path(contribution_id), parse_body=False
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _headers(self, auth: bool = True) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if auth:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        auth: bool = True,
        json_body: Optional[Dict[str, Any]] = None,
        parse_body: bool = True,
    ) -> Any:
        url = f"{self.base_url}{path}"
        async with httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            response = await client.request(
                method, url, headers=self._headers(auth), json=json_body
            )

        logger.debug("%s %s -> %d", method, path, response.status_code)

        if not response.is_success:
            raise _api_error(response)
        if not parse_body:
            return None
        return response.json()


def _contribution_path(contribution_id: str) -> str:
    return f"/contributions/{quote(contribution_id, safe='')}"


def _api_error(response: httpx.Response) -> CarapaceAPIError:
    """Build the error for a non-success response.

    Prefers the API's ``error.message``; falls back to the status code when
    the body is not JSON or carries no usable message.
    """
    fallback = f"API error: {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return CarapaceAPIError(fallback, response.status_code)

    message = None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        message = body["error"].get("message")
    if not isinstance(message, str) or not message:
        message = fallback
    return CarapaceAPIError(message, response.status_code, body)
