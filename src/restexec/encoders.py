"""Request body encoders.

An encoder declares the ``Content-Type`` of a request and writes the encoded
body to the connection. Both steps are skipped for an empty body, which lets
GET and DELETE style calls pass ``None`` through the same pipeline.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sized
from typing import Any, Generic, Mapping, Protocol, TypeVar, cast, runtime_checkable
from urllib.parse import quote_plus

from pydantic_core import PydanticSerializationError, to_json

from .connection.base import CONTENT_TYPE_HEADER, Connection
from .errors import EncodeError

B = TypeVar("B")
B_contra = TypeVar("B_contra", contravariant=True)

JSON_MIME = "application/json"
FORM_URLENCODED_MIME = "application/x-www-form-urlencoded"


def is_empty_body(body: Any) -> bool:
    if body is None:
        return True
    return isinstance(body, Sized) and len(body) == 0


@runtime_checkable
class BodyEncoder(Protocol[B_contra]):
    def set_content_type(self, connection: Connection, body: B_contra | None) -> None: ...

    def write(self, connection: Connection, body: B_contra | None) -> None: ...


class _MimeBodyEncoder(ABC, Generic[B]):
    content_type: str

    def set_content_type(self, connection: Connection, body: B | None) -> None:
        if not is_empty_body(body):
            connection.set_header(CONTENT_TYPE_HEADER, self.content_type)

    def write(self, connection: Connection, body: B | None) -> None:
        if is_empty_body(body):
            return
        payload = self.encode(cast(B, body))
        connection.enable_output()
        with connection.output_stream() as stream:
            stream.write(payload)

    @abstractmethod
    def encode(self, body: B) -> bytes: ...


class JsonBodyEncoder(_MimeBodyEncoder[Any]):
    """Serializes any JSON-compatible value, dataclass or pydantic model."""

    content_type = JSON_MIME

    def __init__(self, *, by_alias: bool = True, exclude_none: bool = False) -> None:
        self.by_alias = by_alias
        self.exclude_none = exclude_none

    def encode(self, body: Any) -> bytes:
        try:
            return to_json(body, by_alias=self.by_alias, exclude_none=self.exclude_none)
        except (PydanticSerializationError, TypeError, ValueError) as exc:
            raise EncodeError(f"Cannot serialize {type(body).__name__} to JSON: {exc}") from exc


class FormUrlEncodedBodyEncoder(_MimeBodyEncoder[Mapping[str, str]]):
    content_type = FORM_URLENCODED_MIME

    def encode(self, body: Mapping[str, str]) -> bytes:
        return self.encode_form(body).encode("utf-8")

    @staticmethod
    def encode_form(params: Mapping[str, str]) -> str:
        """Render ``params`` as ``key=value`` pairs joined by ``&``, in iteration order."""
        pairs: list[str] = []
        for key, value in params.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise EncodeError(
                    f"Form fields must be strings, got {type(key).__name__}={type(value).__name__}",
                    context={"key": key},
                )
            pairs.append(f"{quote_plus(key, encoding='utf-8')}={quote_plus(value, encoding='utf-8')}")
        return "&".join(pairs)


__all__ = [
    "BodyEncoder",
    "FORM_URLENCODED_MIME",
    "FormUrlEncodedBodyEncoder",
    "JSON_MIME",
    "JsonBodyEncoder",
    "is_empty_body",
]
