"""HTTP core shared by all API resources.

``APIClient`` owns a single ``httpx.AsyncClient`` (connection pooling) and
adds the two things every resource needs: default headers merged with
per-request headers, and non-2xx responses turned into
:class:`~automa.errors.APIStatusError` carrying the service's message.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Mapping

import httpx

from automa.errors import APIStatusError

logger = logging.getLogger(__name__)

Headers = Mapping[str, "str | None"]


def _error_message(response: httpx.Response) -> str:
    """Extract the error message the service sent, unmodified.

    JSON bodies carry it under ``message`` (or ``error`` / ``detail``);
    anything else is used as plain text.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    elif isinstance(body, str) and body:
        return body

    text = response.text
    if text:
        return text
    return f"HTTP {response.status_code} {response.reason_phrase}".rstrip()


class APIClient:
    """Thin async HTTP client for the Automa API.

    Subclasses override :meth:`default_headers` to add their own::

        def default_headers(self):
            return {**super().default_headers(), "Authorization": "Bearer 123"}

    An ``httpx.AsyncClient`` can be passed in (tests wire one to an ASGI
    app); otherwise one is created and closed by :meth:`aclose`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    def default_headers(self) -> dict[str, str | None]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def _build_request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        headers: Headers | None = None,
    ) -> httpx.Request:
        merged = {**self.default_headers(), **(headers or {})}
        # A header explicitly set to None is dropped from the request
        final = {k: v for k, v in merged.items() if v is not None}
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        return self._client.build_request(method, url, json=json, headers=final)

    async def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        await response.aread()
        message = _error_message(response)
        logger.debug(
            "%s %s failed with %d: %s",
            response.request.method,
            response.request.url,
            response.status_code,
            message,
        )
        raise APIStatusError(message, response=response)

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        headers: Headers | None = None,
    ) -> httpx.Response:
        """Send a request and return the buffered response.

        Raises ``APIStatusError`` on non-2xx.  Network errors
        (``httpx.TransportError``) propagate unchanged.
        """
        req = self._build_request(method, path, json=json, headers=headers)
        logger.debug("%s %s", method, req.url)
        response = await self._client.send(req)
        await self._raise_for_status(response)
        return response

    @asynccontextmanager
    async def stream(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        headers: Headers | None = None,
    ) -> AsyncIterator[httpx.Response]:
        """Send a request and yield the response with its body unread.

        The status is checked before yielding, so the caller only ever
        sees successful responses.
        """
        req = self._build_request(method, path, json=json, headers=headers)
        logger.debug("%s %s (streamed)", method, req.url)
        response = await self._client.send(req, stream=True)
        try:
            await self._raise_for_status(response)
            yield response
        finally:
            await response.aclose()

    async def get(self, path: str, *, headers: Headers | None = None) -> httpx.Response:
        return await self.request("GET", path, headers=headers)

    async def post(
        self,
        path: str,
        json: Any = None,
        *,
        headers: Headers | None = None,
    ) -> httpx.Response:
        return await self.request("POST", path, json=json, headers=headers)

    async def aclose(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()
