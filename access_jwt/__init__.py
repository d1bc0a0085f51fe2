"""
JSON Web Token codec for the access layer.

Encodes claim sets into compact HMAC-signed tokens, decodes them back and
verifies signature and expiry. The package is intentionally small:

- app.codec: base64url segments and the pluggable JSON adapter.
- app.algorithms: immutable registry of HS256/HS384/HS512 signers.
- app.tokens: encoder, decoder/verifier and result models.
- app.validation: host-facing facade that logs and returns sentinels.

Design notes:
- Pure in-memory computation; no I/O, no retries, no shared mutable state.
- Errors come from shared.errors; only the facade swallows them.
"""

from .app.algorithms.registry import JwtHashAlgorithm, supported_algorithms
from .app.tokens.decoder import (
    decode,
    decode_as,
    decode_to_object,
    get_unverified_header,
    is_valid,
    verify,
)
from .app.tokens.encoder import encode, encode_raw
from .app.tokens.models import FailureKind, VerificationFailed, VerificationResult, VerificationSuccess
from .app.validation.token_validator import TokenValidator, TokenVerificationResponse, get_token_validator

__all__ = [
    "FailureKind",
    "JwtHashAlgorithm",
    "TokenValidator",
    "TokenVerificationResponse",
    "VerificationFailed",
    "VerificationResult",
    "VerificationSuccess",
    "decode",
    "decode_as",
    "decode_to_object",
    "encode",
    "encode_raw",
    "get_token_validator",
    "get_unverified_header",
    "is_valid",
    "supported_algorithms",
    "verify",
]
