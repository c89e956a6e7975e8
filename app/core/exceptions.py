"""
Error taxonomy for the social services.

Services raise these; app.main maps them to HTTP responses. They subclass
ValueError so callers that only care about "the operation was refused" can
keep catching ValueError.
"""
from typing import Optional

from fastapi import status


class SocialError(ValueError):
    """Base class for expected, client-facing failures"""
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_detail: str = "Request could not be completed"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class BadRequestError(SocialError):
    """Self-referential or otherwise invalid operation"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request"


class ForbiddenError(SocialError):
    """Acting user is not the authorized party"""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not allowed"


class NotFoundError(SocialError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ConflictError(SocialError):
    """Duplicate pending request, already friends, ..."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"
