"""
Shared utilities for the access-jwt packages.

This package aggregates common building blocks consumed by the codec:

- config: Base configuration via pydantic-settings
- logging: Structured logging with secret redaction
- metrics: Prometheus metrics helpers
- errors: Canonical token error types and responses
- test_helpers: Factories and a reference token generator for tests (needs the test extra)

Do not import from access_jwt into shared/.
"""
