"""
Pluggable JSON adapter used by the encoder and decoder.

The codec only needs two capabilities from a JSON engine: turn a mapping or
object into JSON text, and turn JSON text back into a generic value or a
caller-specified type. ``JsonSerializer`` is that contract; the default
implementation uses the standard ``json`` module for generic values and
pydantic's ``TypeAdapter`` for typed ones.
"""

import json
from functools import lru_cache
from typing import Any, Optional, Protocol, Type, runtime_checkable

from pydantic import BaseModel, TypeAdapter


@runtime_checkable
class JsonSerializer(Protocol):
    """Interface the token codec requires from a JSON engine."""

    def serialize(self, obj: Any) -> str:
        ...

    def deserialize(self, text: str, target: Optional[Type[Any]] = None) -> Any:
        ...


@lru_cache(maxsize=128)
def _type_adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


class DefaultJsonSerializer:
    """JSON adapter backed by ``json`` and pydantic."""

    def __init__(self, compact: bool = True, sort_keys: bool = False):
        self.compact = compact
        self.sort_keys = sort_keys

    def serialize(self, obj: Any) -> str:
        """Serialize a mapping, sequence, scalar or pydantic model to JSON text."""
        if isinstance(obj, BaseModel):
            obj = obj.model_dump(mode="json")

        separators = (",", ":") if self.compact else None
        return json.dumps(obj, separators=separators, sort_keys=self.sort_keys, ensure_ascii=False)

    def deserialize(self, text: str, target: Optional[Type[Any]] = None) -> Any:
        """Deserialize JSON text into a generic value, or into ``target`` when given.

        Raises ValueError (json.JSONDecodeError or pydantic.ValidationError)
        when the text is not valid JSON or does not fit ``target``.
        """
        if target is None:
            return json.loads(text)
        return _type_adapter(target).validate_json(text)


_json_serializer: JsonSerializer = DefaultJsonSerializer()


def get_json_serializer() -> JsonSerializer:
    """Get the process-wide default JSON adapter."""
    return _json_serializer


def set_json_serializer(serializer: JsonSerializer) -> JsonSerializer:
    """Replace the process-wide default JSON adapter, returning the previous one."""
    global _json_serializer
    if not isinstance(serializer, JsonSerializer):
        raise TypeError("serializer must provide serialize() and deserialize()")
    previous = _json_serializer
    _json_serializer = serializer
    return previous
