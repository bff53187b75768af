"""
Error taxonomy for PixelForge Nexus.

Services and gates raise these; the handlers registered in ``pixelforge.main``
turn them into ``{"error": <message>}`` responses with the matching status.
"""

from typing import Any, Optional

from fastapi import status


class NexusError(Exception):
    """Base exception for PixelForge Nexus."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class AuthenticationFailed(NexusError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDenied(NexusError):
    """Authenticated, but the role or project relation does not allow the action."""

    status_code = status.HTTP_403_FORBIDDEN


class InvalidInput(NexusError):
    status_code = status.HTTP_400_BAD_REQUEST


class PayloadTooLarge(InvalidInput):
    status_code = 413


class ResourceNotFound(NexusError):
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(NexusError):
    """Raised when a unique value (username, email) is already taken."""

    status_code = status.HTTP_409_CONFLICT


def not_found(resource_type: str) -> ResourceNotFound:
    """
    Build a 404 error with the standard message.

    Args:
        resource_type: Type of resource (e.g., "Project", "User", "Document")
    """
    return ResourceNotFound(f"{resource_type} not found")
