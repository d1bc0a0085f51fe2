"""
Token validation package.

Provides the facade used by host integrations to turn an opaque bearer
token into claims. Typical responsibilities include:

- Accepting str or bytes keys and stripping a "Bearer " prefix.
- Logging failures and returning None / False instead of raising.
- Recording encode and verification outcomes as metrics.
"""
