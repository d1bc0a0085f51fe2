"""
Configuration for the token facade.
"""

from functools import lru_cache

from pydantic import Field, field_validator

from shared.config import BaseConfig
from .algorithms.registry import supported_algorithms


class CodecSettings(BaseConfig):
    """Facade settings, read from ACCESS_JWT_* variables.

    The codec core never reads these; it takes explicit arguments.
    """

    service_name: str = Field(default="jwt")
    default_algorithm: str = Field(default="HS256")
    strip_bearer_prefix: bool = Field(default=True)

    # JSON adapter
    compact_json: bool = Field(default=True)
    sort_keys: bool = Field(default=False)

    @field_validator("default_algorithm")
    @classmethod
    def _known_algorithm(cls, value: str) -> str:
        name = value.strip().upper()
        if name not in supported_algorithms():
            raise ValueError(f"default_algorithm must be one of {', '.join(supported_algorithms())}")
        return name


@lru_cache(maxsize=1)
def get_settings() -> CodecSettings:
    """Get the process-wide facade settings."""
    return CodecSettings()
