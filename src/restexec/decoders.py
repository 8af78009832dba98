"""Response decoders.

A decoder declares the ``Accept`` header of a request and turns the response
body into a value of the requested type.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, BinaryIO, Callable, Protocol, TypeVar, Union, runtime_checkable

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError

from .connection.base import ACCEPT_HEADER, Connection
from .errors import DecodeError
from .streams import read_all, transfer_to

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

PathLike = Union[str, "os.PathLike[str]"]

TEXT_PLAIN_MIME = "text/plain"
JSON_MIME = "application/json"


@runtime_checkable
class ResponseDecoder(Protocol[T_co]):
    def set_accept(self, connection: Connection) -> None: ...

    def read_value(self, stream: BinaryIO, response_type: Any) -> T_co: ...


class JsonResponseDecoder:
    """Validates JSON bodies against whatever type the call asks for.

    A single instance is shared across target types; adapters are cached per type.
    """

    accept = JSON_MIME

    def __init__(self, *, strict: bool | None = None) -> None:
        self.strict = strict
        self._adapters: dict[Any, TypeAdapter[Any]] = {}

    def set_accept(self, connection: Connection) -> None:
        connection.set_header(ACCEPT_HEADER, self.accept)

    def read_value(self, stream: BinaryIO, response_type: type[T]) -> T:
        data = read_all(stream)
        try:
            adapter = self._adapter(response_type)
        except PydanticSchemaGenerationError as exc:
            raise DecodeError(f"Cannot decode JSON into {_type_name(response_type)}: {exc}") from exc
        try:
            return adapter.validate_json(data, strict=self.strict)
        except ValidationError as exc:
            raise DecodeError(f"Cannot decode JSON response as {_type_name(response_type)}: {exc}") from exc

    def _adapter(self, response_type: Any) -> TypeAdapter[Any]:
        try:
            return self._adapters[response_type]
        except (KeyError, TypeError):
            pass
        adapter: TypeAdapter[Any] = TypeAdapter(response_type)
        try:
            self._adapters[response_type] = adapter
        except TypeError:
            # unhashable typing constructs are simply not cached
            pass
        return adapter


class StringResponseDecoder:
    accept = TEXT_PLAIN_MIME

    def set_accept(self, connection: Connection) -> None:
        connection.set_header(ACCEPT_HEADER, self.accept)

    def read_value(self, stream: BinaryIO, response_type: Any = str) -> str:
        data = read_all(stream)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Response body is not valid UTF-8: {exc}") from exc


class BytesResponseDecoder:
    """Returns the body untouched."""

    def __init__(self, accept: str) -> None:
        self.accept = accept

    def set_accept(self, connection: Connection) -> None:
        connection.set_header(ACCEPT_HEADER, self.accept)

    def read_value(self, stream: BinaryIO, response_type: Any = bytes) -> bytes:
        return read_all(stream)


class FileResponseDecoder:
    """Streams the body into ``path`` and returns that path."""

    def __init__(self, accept: str, path: PathLike) -> None:
        self.accept = accept
        self.path = Path(path)

    def set_accept(self, connection: Connection) -> None:
        connection.set_header(ACCEPT_HEADER, self.accept)

    def read_value(self, stream: BinaryIO, response_type: Any = Path) -> Path:
        with open(self.path, "wb") as sink:
            transfer_to(stream, sink)
        return self.path


class StreamResponseDecoder:
    """Copies the body into a sink produced by ``sink_factory`` for every call."""

    def __init__(self, accept: str, sink_factory: Callable[[], BinaryIO]) -> None:
        self.accept = accept
        self._sink_factory = sink_factory

    def set_accept(self, connection: Connection) -> None:
        connection.set_header(ACCEPT_HEADER, self.accept)

    def read_value(self, stream: BinaryIO, response_type: Any = bool) -> bool:
        with self._sink_factory() as sink:
            transfer_to(stream, sink)
        return True


def _type_name(response_type: Any) -> str:
    return getattr(response_type, "__name__", repr(response_type))


__all__ = [
    "BytesResponseDecoder",
    "FileResponseDecoder",
    "JsonResponseDecoder",
    "ResponseDecoder",
    "StreamResponseDecoder",
    "StringResponseDecoder",
    "TEXT_PLAIN_MIME",
]
