"""
Shared error handling for the access-jwt token codec.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class TokenError(Exception):
    """Base exception for token codec failures.

    Messages and details must never carry key material or signatures;
    only the high-level failure kind is meant to leave the process.
    """

    code = "TOKEN_ERROR"
    default_message = "Token error"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class MalformedInputError(TokenError):
    """Input is not valid base64url."""

    code = "MALFORMED_INPUT"
    default_message = "Illegal base64url string"


class MalformedTokenError(TokenError):
    """Token structure is broken: segment count, encoding or JSON."""

    code = "MALFORMED_TOKEN"
    default_message = "Malformed token"


class InvalidClaimError(MalformedTokenError):
    """A claim is present but cannot be interpreted."""

    code = "INVALID_CLAIM"
    default_message = "Invalid claim"


class UnsupportedAlgorithmError(TokenError):
    """Algorithm is unknown or has no signer."""

    code = "UNSUPPORTED_ALGORITHM"
    default_message = "Algorithm not supported"


class InvalidSignatureError(TokenError):
    """Signature does not match the token contents."""

    code = "INVALID_SIGNATURE"
    default_message = "Invalid signature"


class ExpiredTokenError(TokenError):
    """Token is past its exp claim."""

    code = "EXPIRED_TOKEN"
    default_message = "Token has expired"
