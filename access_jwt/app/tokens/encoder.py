"""
Encoder assembling header, payload and signature into a compact JWT.
"""

from typing import Any, Dict, Mapping, Optional, Union

from shared.logging import get_logger
from ..algorithms.registry import JwtHashAlgorithm, Signer, get_hash_algorithm, get_signer
from ..codec.base64url import base64url_encode
from ..codec.json_adapter import JsonSerializer, get_json_serializer


logger = get_logger("jwt.encoder")


def build_header(
    algorithm: Union[JwtHashAlgorithm, str],
    extra_headers: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Merge caller headers with the standard ones; "typ" and "alg" always win."""
    resolved = get_hash_algorithm(algorithm)
    header = dict(extra_headers or {})
    header["typ"] = "JWT"
    header["alg"] = resolved.value
    return header


def _assemble(header: Dict[str, Any], payload_bytes: bytes, key: bytes, signer: Signer, serializer: JsonSerializer) -> str:
    segments = [
        base64url_encode(serializer.serialize(header).encode("utf-8")),
        base64url_encode(payload_bytes),
    ]
    signing_input = ".".join(segments).encode("ascii")
    segments.append(base64url_encode(signer(key, signing_input)))

    logger.debug("Token encoded", algorithm=header["alg"], header_fields=sorted(header))
    return ".".join(segments)


def _resolve_signer(algorithm: Union[JwtHashAlgorithm, str], key: bytes) -> Signer:
    signer = get_signer(algorithm)
    if not isinstance(key, (bytes, bytearray)):
        raise TypeError("key must be bytes")
    return signer


def encode(
    payload: Any,
    key: bytes,
    algorithm: Union[JwtHashAlgorithm, str] = JwtHashAlgorithm.HS256,
    *,
    extra_headers: Optional[Mapping[str, Any]] = None,
    serializer: Optional[JsonSerializer] = None,
) -> str:
    """Create a JWT from a payload, the signing key and the algorithm to use.

    Args:
        payload: Claims mapping or any object the JSON adapter can serialize.
        key: Key bytes used to sign the token.
        algorithm: Hash algorithm; unknown or unimplemented ones raise
            UnsupportedAlgorithmError before anything is produced.
        extra_headers: Arbitrary extra headers, augmented with "typ" and "alg".
        serializer: JSON adapter; defaults to the process-wide one.

    Returns:
        The compact token.
    """
    signer = _resolve_signer(algorithm, key)
    serializer = serializer or get_json_serializer()
    header = build_header(algorithm, extra_headers)
    payload_bytes = serializer.serialize(payload).encode("utf-8")
    return _assemble(header, payload_bytes, bytes(key), signer, serializer)


def encode_raw(
    payload_json: str,
    key: bytes,
    algorithm: Union[JwtHashAlgorithm, str] = JwtHashAlgorithm.HS256,
    *,
    extra_headers: Optional[Mapping[str, Any]] = None,
    serializer: Optional[JsonSerializer] = None,
) -> str:
    """Create a JWT from pre-formed JSON payload text, used verbatim."""
    if not isinstance(payload_json, str):
        raise TypeError("payload_json must be str")

    signer = _resolve_signer(algorithm, key)
    serializer = serializer or get_json_serializer()
    header = build_header(algorithm, extra_headers)
    return _assemble(header, payload_json.encode("utf-8"), bytes(key), signer, serializer)
