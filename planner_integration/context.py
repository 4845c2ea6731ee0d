"""
Graph client context shared by the HTTP handlers.

Holds the lazily-initialized GraphClient for one application instance.
Initialization happens at most once; concurrent first callers wait on the
same lock instead of each acquiring a token.
"""

import asyncio
from typing import Optional

import httpx
from loguru import logger

from planner_integration.auth import AuthError, ClientCredentialProvider
from planner_integration.config import Settings
from planner_integration.graph_client import GraphClient, build_client


class GraphContext:
    """
    Owns the Graph client for the lifetime of the application.

    Uses double-checked locking so the fast path (client already built)
    never touches the lock.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the context.

        Args:
            settings: Application settings (credentials and endpoints)
            transport: Optional httpx transport shared by the token request
                and the Graph client
        """
        self.settings = settings
        self._transport = transport
        self._client: Optional[GraphClient] = None
        self._lock = asyncio.Lock()

    @property
    def client(self) -> Optional[GraphClient]:
        """The Graph client, or None before a successful initialization."""
        return self._client

    @property
    def initialized(self) -> bool:
        return self._client is not None

    async def initialize(self) -> bool:
        """
        Acquire a token and build the Graph client.

        Returns:
            True if a client is available, False if the token request failed
        """
        if self._client is not None:
            return True

        provider = ClientCredentialProvider.from_settings(self.settings, transport=self._transport)
        try:
            token = await provider.acquire_token()
        except AuthError as e:
            logger.error(f"❌ Failed to initialize Microsoft Graph client: {e}")
            return False

        self._client = build_client(
            token,
            base_url=self.settings.graph_base_url,
            timeout=self.settings.http_timeout_seconds,
            transport=self._transport,
        )
        logger.info("✅ Microsoft Graph client initialized successfully")
        return True

    async def ensure_client(self) -> Optional[GraphClient]:
        """
        Return the Graph client, initializing it on first use.

        Returns:
            GraphClient, or None if initialization failed
        """
        # Fast path: already initialized
        if self._client is not None:
            return self._client

        async with self._lock:
            # Another request may have finished initializing while we waited
            if self._client is None:
                await self.initialize()
            return self._client

    async def aclose(self) -> None:
        """Close the Graph client, if one was built."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("GraphContext closed")
