"""
Test helper functions and factory methods for the access-jwt token codec.

Imports PyJWT, which is only installed with the `test` extra
(`pip install access-jwt[test]`); do not import this module from
runtime code.
"""

import time
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field
import jwt


@dataclass
class TestUser:
    """Test user data."""
    __test__ = False

    user_id: str
    username: str
    email: str
    tenant_id: str
    roles: List[str] = field(default_factory=list)


class TestDataFactory:
    """Factory for creating test data."""
    __test__ = False

    @staticmethod
    def create_test_users() -> List[TestUser]:
        """Create test users."""
        return [
            TestUser(
                user_id="alice",
                username="alice",
                email="alice@example.com",
                tenant_id="tenant-1",
                roles=["user", "analyst"]
            ),
            TestUser(
                user_id="bob",
                username="bob",
                email="bob@example.com",
                tenant_id="tenant-2",
                roles=["user", "admin"]
            )
        ]

    @staticmethod
    def create_claims(user: TestUser, expires_in: Optional[int] = 3600, now: Optional[int] = None) -> Dict[str, Any]:
        """Create a claim set for a user; expires_in=None leaves out exp."""
        now = int(time.time()) if now is None else now
        claims: Dict[str, Any] = {
            "sub": user.user_id,
            "iat": now,
            "preferred_username": user.username,
            "email": user.email,
            "tenant_id": user.tenant_id,
            "realm_access": {
                "roles": user.roles
            }
        }
        if expires_in is not None:
            claims["exp"] = now + expires_in
        return claims


class ReferenceTokenGenerator:
    """Generate tokens with PyJWT, an implementation independent of ours."""

    def __init__(self, secret: str = "reference-secret-0123456789abcdef0123456789abcdef0123456789abcdef"):
        self.secret = secret

    def encode(self, claims: Dict[str, Any], algorithm: str = "HS256", headers: Optional[Dict[str, Any]] = None) -> str:
        """Encode claims with PyJWT."""
        return jwt.encode(claims, self.secret, algorithm=algorithm, headers=headers)

    def decode(self, token: str, algorithm: str = "HS256") -> Dict[str, Any]:
        """Decode and verify a token with PyJWT."""
        return jwt.decode(token, self.secret, algorithms=[algorithm])


def flip_char(text: str, index: int) -> str:
    """Replace the character at index with a different base64url character."""
    current = text[index]
    replacement = "B" if current != "B" else "C"
    return text[:index] + replacement + text[index + 1:]


def tamper_segment(token: str, segment: int, index: int) -> str:
    """Flip one character inside one of the three token segments."""
    parts = token.split(".")
    parts[segment] = flip_char(parts[segment], index)
    return ".".join(parts)


# Global instances for easy access
test_data_factory = TestDataFactory()
reference_token_generator = ReferenceTokenGenerator()
