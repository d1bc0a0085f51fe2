"""
Token data models and verification result types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Literal, NamedTuple, Union

from pydantic import BaseModel


class TokenSegments(NamedTuple):
    """The three base64url segments of a compact token."""
    header: str
    payload: str
    signature: str

    @property
    def signing_input(self) -> bytes:
        """Bytes covered by the signature: header and payload segments joined by '.'."""
        return f"{self.header}.{self.payload}".encode("ascii")


@dataclass(frozen=True)
class DecodedToken:
    """A structurally valid token, split and decoded but not yet verified."""
    segments: TokenSegments
    header: Dict[str, Any]
    payload_json: str
    signature: bytes

    @property
    def algorithm(self) -> str:
        return self.header["alg"]

    @property
    def signing_input(self) -> bytes:
        return self.segments.signing_input


class FailureKind(str, Enum):
    """Why a token failed verification; values match TokenError codes."""
    MALFORMED_INPUT = "MALFORMED_INPUT"
    MALFORMED_TOKEN = "MALFORMED_TOKEN"
    INVALID_CLAIM = "INVALID_CLAIM"
    UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    EXPIRED_TOKEN = "EXPIRED_TOKEN"


class VerificationSuccess(BaseModel):
    """Verified token with its trusted claims."""
    valid: Literal[True] = True
    claims: Dict[str, Any]

    def __bool__(self) -> bool:
        return True


class VerificationFailed(BaseModel):
    """Failed verification; carries the failure kind but never any claims."""
    valid: Literal[False] = False
    kind: FailureKind
    message: str
    details: Dict[str, Any] = {}

    def __bool__(self) -> bool:
        return False


VerificationResult = Union[VerificationSuccess, VerificationFailed]
