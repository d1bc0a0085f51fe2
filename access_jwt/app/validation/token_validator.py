"""
Token validation facade for host integrations.

The host hands over a bearer token and a key and gets back claims plus a
success/failure signal. This is the only layer that downgrades TokenErrors
to a logged warning and a sentinel (None / False); the codec underneath
always raises. Callers that need to know why a token was rejected use
``verify_token``.
"""

from functools import lru_cache
from typing import Any, Callable, Dict, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from shared.errors import TokenError
from shared.logging import configure_logging, get_logger
from shared.metrics import MetricsCollector, get_metrics_collector
from ..algorithms.registry import JwtHashAlgorithm, get_hash_algorithm
from ..codec.json_adapter import DefaultJsonSerializer, JsonSerializer
from ..config import CodecSettings, get_settings
from ..tokens import decoder, encoder
from ..tokens.models import FailureKind


T = TypeVar("T")
KeyLike = Union[str, bytes]
AlgorithmLike = Union[JwtHashAlgorithm, str]


class TokenVerificationResponse(BaseModel):
    """Response model for token verification."""
    valid: bool
    claims: Optional[Dict[str, Any]] = None
    error: Optional[FailureKind] = None
    message: Optional[str] = None
    details: Dict[str, Any] = {}


class TokenValidator:
    """Encode, decode and verify tokens with str or bytes keys."""

    def __init__(
        self,
        settings: Optional[CodecSettings] = None,
        serializer: Optional[JsonSerializer] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.settings = settings or get_settings()
        self.serializer = serializer or DefaultJsonSerializer(
            compact=self.settings.compact_json,
            sort_keys=self.settings.sort_keys
        )
        self.metrics = metrics or get_metrics_collector(self.settings.service_name)
        self.logger = get_logger("jwt.validator")

    @staticmethod
    def _key_bytes(key: KeyLike) -> bytes:
        if isinstance(key, str):
            return key.encode("utf-8")
        if isinstance(key, (bytes, bytearray)):
            return bytes(key)
        raise TypeError("key must be str or bytes")

    def _normalize_token(self, token: str) -> str:
        # Remove Bearer prefix if present
        if self.settings.strip_bearer_prefix and isinstance(token, str) and token.startswith("Bearer "):
            return token[7:].strip()
        return token

    def _guard(self, operation: str, func: Callable[[], T]) -> Optional[T]:
        try:
            with self.metrics.time_operation(operation):
                return func()
        except TokenError as e:
            self.logger.warning(
                "Token operation failed",
                operation=operation,
                error_code=e.code,
                error=e.message
            )
            return None

    def encode(
        self,
        payload: Any,
        key: KeyLike,
        algorithm: Optional[AlgorithmLike] = None,
        extra_headers: Optional[Mapping[str, Any]] = None,
    ) -> Optional[str]:
        """Encode claims into a signed token, or None if the algorithm is unusable."""
        algorithm = algorithm or self.settings.default_algorithm
        key_bytes = self._key_bytes(key)
        token = self._guard("encode", lambda: encoder.encode(
            payload,
            key_bytes,
            algorithm,
            extra_headers=extra_headers,
            serializer=self.serializer
        ))
        if token is not None:
            self.metrics.record_encode(get_hash_algorithm(algorithm).value)
        return token

    def encode_raw(
        self,
        payload_json: str,
        key: KeyLike,
        algorithm: Optional[AlgorithmLike] = None,
    ) -> Optional[str]:
        """Encode pre-formed JSON payload text into a signed token."""
        algorithm = algorithm or self.settings.default_algorithm
        key_bytes = self._key_bytes(key)
        token = self._guard("encode", lambda: encoder.encode_raw(
            payload_json,
            key_bytes,
            algorithm,
            serializer=self.serializer
        ))
        if token is not None:
            self.metrics.record_encode(get_hash_algorithm(algorithm).value)
        return token

    def decode(self, token: str, key: KeyLike, verify: bool = True) -> Optional[str]:
        """Return the payload JSON text, or None if decoding or verification failed."""
        key_bytes = self._key_bytes(key)
        return self._guard("decode", lambda: decoder.decode(
            self._normalize_token(token),
            key_bytes,
            verify,
            serializer=self.serializer
        ))

    def decode_to_object(self, token: str, key: KeyLike, verify: bool = True) -> Optional[Dict[str, Any]]:
        """Return the claims mapping, or None if decoding or verification failed."""
        key_bytes = self._key_bytes(key)
        return self._guard("decode", lambda: decoder.decode_to_object(
            self._normalize_token(token),
            key_bytes,
            verify,
            serializer=self.serializer
        ))

    def decode_as(self, token: str, key: KeyLike, model: Type[T], verify: bool = True) -> Optional[T]:
        """Return the payload deserialized into ``model``, or None on failure."""
        key_bytes = self._key_bytes(key)
        return self._guard("decode", lambda: decoder.decode_as(
            self._normalize_token(token),
            model,
            key_bytes,
            verify,
            serializer=self.serializer
        ))

    def verify_token(self, token: str, key: KeyLike) -> TokenVerificationResponse:
        """Verify a token and report the failure kind when it is rejected."""
        key_bytes = self._key_bytes(key)
        with self.metrics.time_operation("verify"):
            result = decoder.verify(
                self._normalize_token(token),
                key_bytes,
                serializer=self.serializer
            )

        if result.valid:
            self.metrics.record_verification("valid")
            return TokenVerificationResponse(valid=True, claims=result.claims)

        self.metrics.record_verification(result.kind.value)
        self.logger.warning("Token verification failed", error_code=result.kind.value)
        return TokenVerificationResponse(
            valid=False,
            error=result.kind,
            message=result.message,
            details=result.details
        )

    def verify(self, token: str, key: KeyLike) -> bool:
        """Return True only if the signature matches and the token has not expired."""
        return self.verify_token(token, key).valid


@lru_cache(maxsize=1)
def get_token_validator() -> TokenValidator:
    """Get the process-wide token validator, configuring logging from the current settings."""
    settings = get_settings()
    configure_logging(settings.service_name, settings.log_level, settings.env)
    return TokenValidator(settings=settings)
