"""
Algorithm registry mapping JWT algorithm identifiers to keyed-hash signers.
"""

import hashlib
import hmac
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Tuple, Union

from shared.errors import UnsupportedAlgorithmError


Signer = Callable[[bytes, bytes], bytes]


class JwtHashAlgorithm(str, Enum):
    """JWT "alg" header values known to the codec."""
    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"  # asymmetric, named but never implemented


def _hmac_signer(digest) -> Signer:
    def _sign(key: bytes, message: bytes) -> bytes:
        return hmac.new(key, message, digest).digest()
    return _sign


# Built once at import and never mutated; RS256 deliberately has no entry
HASH_ALGORITHMS: Mapping[JwtHashAlgorithm, Signer] = MappingProxyType({
    JwtHashAlgorithm.HS256: _hmac_signer(hashlib.sha256),
    JwtHashAlgorithm.HS384: _hmac_signer(hashlib.sha384),
    JwtHashAlgorithm.HS512: _hmac_signer(hashlib.sha512),
})


def get_hash_algorithm(algorithm: Union[JwtHashAlgorithm, str]) -> JwtHashAlgorithm:
    """Resolve an algorithm name or enum member.

    Names are matched exactly, so "hs256" is as unknown as "HS999".
    """
    if isinstance(algorithm, JwtHashAlgorithm):
        return algorithm
    if isinstance(algorithm, str):
        try:
            return JwtHashAlgorithm(algorithm)
        except ValueError:
            pass
    raise UnsupportedAlgorithmError(details={"algorithm": str(algorithm)})


def get_signer(algorithm: Union[JwtHashAlgorithm, str]) -> Signer:
    """Look up the signer for an algorithm, failing for unknown or unimplemented ones."""
    resolved = get_hash_algorithm(algorithm)
    signer = HASH_ALGORITHMS.get(resolved)
    if signer is None:
        raise UnsupportedAlgorithmError(details={"algorithm": resolved.value})
    return signer


def sign(algorithm: Union[JwtHashAlgorithm, str], key: bytes, message: bytes) -> bytes:
    """Compute the signature of message under key with the given algorithm."""
    if not isinstance(key, (bytes, bytearray)):
        raise TypeError("key must be bytes")
    return get_signer(algorithm)(bytes(key), message)


def supported_algorithms() -> Tuple[str, ...]:
    """Names of algorithms that have a working signer."""
    return tuple(algorithm.value for algorithm in HASH_ALGORITHMS)
