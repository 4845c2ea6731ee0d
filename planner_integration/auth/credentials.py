"""
Microsoft Entra ID client credential provider.

Exchanges the app registration's client id/secret for a Microsoft Graph
access token using the OAuth2 client credentials grant. Every call to
acquire_token() performs one token request; there is no retry and no cache.
Callers acquire once and hold the token for the lifetime of the process.
"""

from typing import Optional

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from planner_integration.config import (
    DEFAULT_AUTHORITY_HOST,
    DEFAULT_GRAPH_SCOPE,
    Settings,
    build_authority,
)
from planner_integration.exceptions import AuthError


class TokenResponse(BaseModel):
    """Entra ID token endpoint response."""

    access_token: str
    expires_in: int
    token_type: str
    ext_expires_in: Optional[int] = None


def _describe_token_failure(response: httpx.Response) -> str:
    """Pull the most useful message out of a token endpoint error response."""
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase

    if isinstance(data, dict):
        description = data.get("error_description") or data.get("error")
        if description:
            # Entra appends trace/correlation ids on following lines
            return str(description).splitlines()[0]
    return response.text or response.reason_phrase


class ClientCredentialProvider:
    """
    Acquires Graph access tokens with the client credentials flow.

    The provider is stateless apart from its configuration; tokens are not
    stored on the instance.
    """

    def __init__(
        self,
        *,
        client_id: Optional[str],
        client_secret: Optional[str],
        tenant_id: Optional[str],
        authority_host: str = DEFAULT_AUTHORITY_HOST,
        scope: str = DEFAULT_GRAPH_SCOPE,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the credential provider.

        Args:
            client_id: Application (client) ID of the app registration
            client_secret: Client secret of the app registration
            tenant_id: Directory (tenant) ID
            authority_host: Identity authority base URL
            scope: Resource scope requested for the token
            timeout: HTTP request timeout in seconds
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.tenant_id = tenant_id
        self.authority_host = authority_host.rstrip("/")
        self.scope = scope
        self._timeout = timeout
        self._transport = transport

        logger.debug(
            f"ClientCredentialProvider initialized: authority={self.authority_host}, "
            f"tenant={tenant_id}, scope={scope}"
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "ClientCredentialProvider":
        """Build a provider from application settings."""
        return cls(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            tenant_id=settings.tenant_id,
            authority_host=settings.authority_host,
            scope=settings.graph_scope,
            timeout=settings.http_timeout_seconds,
            transport=transport,
        )

    @property
    def authority(self) -> str:
        """Tenant-specific authority URL."""
        return build_authority(self.authority_host, self.tenant_id)

    @property
    def token_url(self) -> str:
        """OAuth2 v2.0 token endpoint for the configured tenant."""
        return f"{self.authority}/oauth2/v2.0/token"

    async def acquire_token(self) -> str:
        """
        Request a new access token from the identity authority.

        Returns:
            Bearer access token for Microsoft Graph

        Raises:
            AuthError: If credentials are missing, the authority rejects them,
                the network call fails, or the response is malformed
        """
        if not (self.client_id and self.client_secret and self.tenant_id):
            raise AuthError(
                "Missing Microsoft 365 credentials. Set MICROSOFT_CLIENT_ID, "
                "MICROSOFT_CLIENT_SECRET and MICROSOFT_TENANT_ID."
            )

        payload = {
            "grant_type": "client_credentials",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "scope": self.scope,
        }

        logger.debug(f"Requesting access token from {self.token_url}")

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.token_url,
                    data=payload,
                    headers={"Accept": "application/json"},
                )
                response.raise_for_status()
                token_data = TokenResponse.model_validate(response.json())

        except httpx.HTTPStatusError as e:
            detail = _describe_token_failure(e.response)
            logger.error(f"Token request rejected: HTTP {e.response.status_code} - {detail}")
            raise AuthError(
                f"Microsoft identity platform rejected the token request "
                f"({e.response.status_code}): {detail}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Token request failed: {e}")
            raise AuthError(f"Could not reach Microsoft identity platform: {e}") from e
        except (ValueError, TypeError, ValidationError) as e:
            logger.error(f"Malformed token response: {e}")
            raise AuthError("Malformed token response from Microsoft identity platform") from e

        logger.info(f"Access token acquired (expires in {token_data.expires_in}s)")
        return token_data.access_token
