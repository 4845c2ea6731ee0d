"""
Authentication module for the Planner integration.

OAuth2 client credentials flow against Microsoft Entra ID.
"""

from planner_integration.auth.credentials import (
    ClientCredentialProvider,
    TokenResponse,
)
from planner_integration.exceptions import AuthError

__all__ = [
    "AuthError",
    "ClientCredentialProvider",
    "TokenResponse",
]
