"""
Decoder and verifier for compact JWTs.

Decoding runs a single linear pipeline: split the token, decode its
segments, parse the header and, when verification is requested, recompute
and compare the signature and enforce the ``exp`` claim. Every stage fails
with a typed TokenError; nothing in this module swallows one.
"""

import hmac
import math
import time
from typing import Any, Dict, Optional, Type, TypeVar

from shared.errors import (
    ExpiredTokenError,
    InvalidClaimError,
    InvalidSignatureError,
    MalformedInputError,
    MalformedTokenError,
    TokenError,
)
from shared.logging import get_logger
from ..algorithms.registry import get_signer
from ..codec.base64url import base64url_decode
from ..codec.json_adapter import JsonSerializer, get_json_serializer
from .models import (
    DecodedToken,
    FailureKind,
    TokenSegments,
    VerificationFailed,
    VerificationResult,
    VerificationSuccess,
)


T = TypeVar("T")

logger = get_logger("jwt.decoder")


def current_timestamp() -> int:
    """Current UTC time in whole seconds since the epoch, rounded to nearest."""
    return int(round(time.time()))


def split_token(token: str) -> TokenSegments:
    """Split a compact token into its three segments."""
    if not isinstance(token, str):
        raise MalformedTokenError("Token must be a string")

    parts = token.split(".")
    if len(parts) != 3:
        raise MalformedTokenError(
            "Token must consist of 3 dot-delimited parts",
            details={"segments": len(parts)}
        )
    return TokenSegments(*parts)


def _decode_text(segment: str, name: str) -> str:
    try:
        return base64url_decode(segment).decode("utf-8")
    except MalformedInputError as e:
        raise MalformedTokenError(f"Invalid {name} segment encoding") from e
    except UnicodeDecodeError as e:
        raise MalformedTokenError(f"{name.capitalize()} segment is not UTF-8 text") from e


def _parse_header(header_json: str, serializer: JsonSerializer) -> Dict[str, Any]:
    try:
        header = serializer.deserialize(header_json)
    except ValueError as e:
        raise MalformedTokenError("Header is not valid JSON") from e

    if not isinstance(header, dict):
        raise MalformedTokenError("Header must be a JSON object")
    if not isinstance(header.get("alg"), str):
        raise MalformedTokenError("Header is missing the alg field")
    return header


def parse_claims(payload_json: str, serializer: Optional[JsonSerializer] = None) -> Dict[str, Any]:
    """Parse payload JSON text into a claims mapping."""
    serializer = serializer or get_json_serializer()
    try:
        claims = serializer.deserialize(payload_json)
    except ValueError as e:
        raise MalformedTokenError("Payload is not valid JSON") from e

    if not isinstance(claims, dict):
        raise MalformedTokenError("Payload must be a JSON object")
    return claims


def decode_segments(token: str, serializer: Optional[JsonSerializer] = None) -> DecodedToken:
    """Split and decode a token without verifying it."""
    serializer = serializer or get_json_serializer()
    segments = split_token(token)

    header_json = _decode_text(segments.header, "header")
    payload_json = _decode_text(segments.payload, "payload")
    try:
        signature = base64url_decode(segments.signature)
    except MalformedInputError as e:
        raise MalformedTokenError("Invalid signature segment encoding") from e

    return DecodedToken(
        segments=segments,
        header=_parse_header(header_json, serializer),
        payload_json=payload_json,
        signature=signature,
    )


def get_unverified_header(token: str, serializer: Optional[JsonSerializer] = None) -> Dict[str, Any]:
    """Return the token header without verifying anything but its structure."""
    return dict(decode_segments(token, serializer).header)


def verify_signature(decoded: DecodedToken, key: bytes) -> None:
    """Recompute the signature and compare it with the token's.

    The algorithm comes from the token header, so an unknown one raises
    UnsupportedAlgorithmError rather than falling back to another signer.
    """
    signer = get_signer(decoded.algorithm)
    if not isinstance(key, (bytes, bytearray)):
        raise TypeError("key must be bytes")

    expected = signer(bytes(key), decoded.signing_input)
    if not hmac.compare_digest(expected, decoded.signature):
        logger.debug("Signature mismatch", algorithm=decoded.algorithm)
        raise InvalidSignatureError()


def _exp_to_int(exp: Any) -> int:
    if isinstance(exp, bool):
        raise InvalidClaimError("exp claim must be numeric")
    if isinstance(exp, int):
        return exp
    if isinstance(exp, float):
        if not math.isfinite(exp):
            raise InvalidClaimError("exp claim must be finite")
        # Nearest second, ties to even
        return int(round(exp))
    if isinstance(exp, str):
        try:
            return int(exp.strip())
        except ValueError:
            pass
        try:
            return _exp_to_int(float(exp))
        except ValueError as e:
            raise InvalidClaimError("exp claim must be numeric") from e
    raise InvalidClaimError("exp claim must be numeric")


def check_expiry(claims: Dict[str, Any], now: Optional[int] = None) -> None:
    """Enforce the exp claim: valid only while now < exp. A missing exp always passes."""
    exp = claims.get("exp")
    if exp is None:
        return

    exp_value = _exp_to_int(exp)
    current = current_timestamp() if now is None else now
    if current >= exp_value:
        raise ExpiredTokenError(details={"exp": exp_value})


def _verify_decoded(
    decoded: DecodedToken,
    key: Optional[bytes],
    now: Optional[int],
    serializer: Optional[JsonSerializer],
) -> Dict[str, Any]:
    if key is None:
        raise TypeError("A key is required to verify a token")
    verify_signature(decoded, key)
    claims = parse_claims(decoded.payload_json, serializer)
    check_expiry(claims, now)
    return claims


def decode(
    token: str,
    key: Optional[bytes] = None,
    verify: bool = True,
    *,
    now: Optional[int] = None,
    serializer: Optional[JsonSerializer] = None,
) -> str:
    """Decode a JWT and return its JSON payload text.

    With ``verify`` the signature and exp claim are checked and any failure
    raises, so the payload is only ever returned once trusted. Without it
    the payload is returned as-is.
    """
    decoded = decode_segments(token, serializer)
    if verify:
        _verify_decoded(decoded, key, now, serializer)
    return decoded.payload_json


def decode_to_object(
    token: str,
    key: Optional[bytes] = None,
    verify: bool = True,
    *,
    now: Optional[int] = None,
    serializer: Optional[JsonSerializer] = None,
) -> Dict[str, Any]:
    """Decode a JWT and return its claims mapping."""
    decoded = decode_segments(token, serializer)
    if verify:
        return _verify_decoded(decoded, key, now, serializer)
    return parse_claims(decoded.payload_json, serializer)


def decode_as(
    token: str,
    model: Type[T],
    key: Optional[bytes] = None,
    verify: bool = True,
    *,
    now: Optional[int] = None,
    serializer: Optional[JsonSerializer] = None,
) -> T:
    """Decode a JWT and deserialize its payload into ``model``."""
    serializer = serializer or get_json_serializer()
    payload_json = decode(token, key, verify, now=now, serializer=serializer)
    try:
        return serializer.deserialize(payload_json, model)
    except ValueError as e:
        raise InvalidClaimError(
            "Payload does not match the requested type",
            details={"type": getattr(model, "__name__", str(model))}
        ) from e


def verify(
    token: str,
    key: bytes,
    *,
    now: Optional[int] = None,
    serializer: Optional[JsonSerializer] = None,
) -> VerificationResult:
    """Verify a JWT, returning the trusted claims or the kind of failure."""
    try:
        decoded = decode_segments(token, serializer)
        claims = _verify_decoded(decoded, key, now, serializer)
    except TokenError as e:
        response = e.to_response()
        return VerificationFailed(
            kind=FailureKind(response.code),
            message=response.message,
            details=response.details
        )
    return VerificationSuccess(claims=claims)


def is_valid(
    token: str,
    key: bytes,
    *,
    now: Optional[int] = None,
    serializer: Optional[JsonSerializer] = None,
) -> bool:
    """Boolean view of verify()."""
    return verify(token, key, now=now, serializer=serializer).valid
