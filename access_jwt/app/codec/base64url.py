"""
Base64url codec for JWT segments.
"""

import base64
import binascii

from shared.errors import MalformedInputError


# Pad characters to restore, keyed by len % 4; a remainder of 1 is never valid
_PADDING = {0: "", 2: "==", 3: "="}


def base64url_encode(data: bytes) -> str:
    """Encode bytes to unpadded base64url text."""
    output = base64.b64encode(data).decode("ascii")
    output = output.rstrip("=")
    output = output.replace("+", "-")  # 62nd char of encoding
    output = output.replace("/", "_")  # 63rd char of encoding
    return output


def base64url_decode(data: str) -> bytes:
    """Decode unpadded base64url text back to bytes.

    Raises MalformedInputError when the text is not valid base64url.
    """
    output = data.replace("-", "+").replace("_", "/")

    padding = _PADDING.get(len(output) % 4)
    if padding is None:
        raise MalformedInputError(details={"length": len(data)})

    try:
        decoded = base64.b64decode(output + padding, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedInputError(details={"reason": str(e)}) from e

    # Reject non-zero trailing bits so every byte string has exactly one encoding
    if base64.b64encode(decoded).decode("ascii").rstrip("=") != output.rstrip("="):
        raise MalformedInputError(details={"reason": "Non-canonical trailing bits"})

    return decoded
