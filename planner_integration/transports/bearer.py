"""
Custom httpx transport that adds the bearer token to requests.

The BearerTokenTransport wraps an httpx async transport and injects the
Authorization header on every outbound request to Microsoft Graph. The token
is not inspected; expiry or permission problems surface as Graph responses.
"""

from typing import Optional

import httpx
from loguru import logger


class BearerTokenTransport(httpx.AsyncBaseTransport):
    """Transport that adds `Authorization: Bearer <token>` to all requests."""

    def __init__(self, token: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize transport.

        Args:
            token: Access token acquired by the credential provider
            transport: Underlying transport (defaults to AsyncHTTPTransport)
        """
        self._token = token
        self._transport = transport or httpx.AsyncHTTPTransport()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Add the Authorization header and forward the request."""
        request.headers["Authorization"] = f"Bearer {self._token}"

        try:
            response = await self._transport.handle_async_request(request)
            logger.debug(f"{request.method} {request.url.path} -> {response.status_code}")
            return response
        except Exception as e:
            logger.error(f"Request failed: {request.method} {request.url.path} - {e}")
            raise

    async def aclose(self) -> None:
        """Close the underlying transport."""
        await self._transport.aclose()
        logger.debug("BearerTokenTransport closed")
