import logging
from functools import lru_cache
from typing import Any, Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError


T = TypeVar("T")

_logger = logging.getLogger("JsonSerializer")


class Serializer(Protocol):
    """Body codec used by the client. `deserialize` returns None for an empty or unreadable body."""

    def deserialize(self, body: bytes | None, target: type[T]) -> T | None: ...

    def serialize(self, value: Any) -> bytes: ...


@lru_cache(maxsize=128)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


class JsonSerializer:
    """
    JSON codec backed by pydantic TypeAdapters, so targets can be pydantic
    models, dataclasses, TypedDicts, builtins or `Any`.
    """

    def deserialize(self, body: bytes | None, target: type[T]) -> T | None:
        if body is None or not body.strip():
            return None

        try:
            value = _adapter(target).validate_json(body)
        except ValidationError as e:
            _logger.debug("Body does not deserialize as %r: %s", target, e)
            return None

        return value

    def serialize(self, value: Any) -> bytes:
        return _adapter(type(value)).dump_json(value, by_alias=True)
