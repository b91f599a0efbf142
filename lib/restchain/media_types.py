from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any

from .errors import DeserializationError
from .results import fill_target


class MediaType(ABC):
    """A content type name bundled with the codec for bodies of that type."""

    def __init__(self, wire_name: str):
        self.wire_name = wire_name

    def __str__(self) -> str:
        return self.wire_name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.wire_name!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MediaType):
            return NotImplemented
        return type(self) is type(other) and self.wire_name == other.wire_name

    def __hash__(self) -> int:
        return hash((type(self), self.wire_name))

    @abstractmethod
    def marshal(self, value: Any) -> bytes:
        ...

    @abstractmethod
    def unmarshal(self, data: bytes, target: Any) -> None:
        """Decode ``data`` into ``target`` in place, raising DeserializationError on failure."""


class JsonMediaType(MediaType):
    def marshal(self, value: Any) -> bytes:
        return json.dumps(value, ensure_ascii=False).encode("utf-8")

    def unmarshal(self, data: bytes, target: Any) -> None:
        try:
            value = json.loads(data)
        except ValueError as e:
            raise DeserializationError(f"invalid {self.wire_name} body: {e}") from e
        fill_target(target, value)


class TextMediaType(MediaType):
    def __init__(self, wire_name: str, encoding: str = "utf-8"):
        super().__init__(wire_name)
        self.encoding = encoding

    def marshal(self, value: Any) -> bytes:
        return str(value).encode(self.encoding)

    def unmarshal(self, data: bytes, target: Any) -> None:
        try:
            text = data.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise DeserializationError(f"invalid {self.wire_name} body: {e}") from e
        fill_target(target, text)


APPLICATION_JSON = JsonMediaType("application/json")
TEXT_PLAIN = TextMediaType("text/plain")
