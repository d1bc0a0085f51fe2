"""
Token codec application package.

Import side-effects are limited to building the immutable algorithm
registry; settings are only read when the facade is first used.
"""
