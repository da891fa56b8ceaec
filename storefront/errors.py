"""
Application error taxonomy
"""
from typing import Any, Optional


class StorefrontError(Exception):
    """Base exception carrying the HTTP status it maps to"""

    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(StorefrontError):
    """Missing or malformed request fields"""
    status_code = 400


class VerificationError(StorefrontError):
    """Payment signature mismatch"""
    status_code = 400


class NotFoundError(StorefrontError):
    """Requested entity does not exist"""
    status_code = 404


class UpstreamError(StorefrontError):
    """A third-party API call failed"""
    status_code = 500


class GatewayError(UpstreamError):
    """Payment gateway call failed"""
    pass


class ForbiddenError(StorefrontError):
    """Caller is not allowed to perform the operation"""
    status_code = 403
