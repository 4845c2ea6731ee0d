"""
Error taxonomy for the Planner integration.

AuthError covers the client credential exchange, ApiError covers every
call made to Microsoft Graph with an acquired token.
"""

from typing import Optional


class PlannerIntegrationError(Exception):
    """Base class for errors raised by this service."""

    pass


class AuthError(PlannerIntegrationError):
    """Raised when the identity authority rejects or fails the token request."""

    pass


class ApiError(PlannerIntegrationError):
    """Raised when a Microsoft Graph call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
