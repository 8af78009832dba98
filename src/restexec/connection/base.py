"""Connection handle abstraction consumed by the executor."""

from __future__ import annotations

from typing import BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class Connection(Protocol):
    """A one-shot HTTP exchange.

    The request is assembled through the setters and sent the first time the
    response is inspected (``response_code``, ``response_message`` or one of
    the response streams). ``disconnect`` releases everything the exchange
    holds and is safe to call more than once.
    """

    @property
    def url(self) -> str: ...

    def set_method(self, method: str) -> None: ...

    def set_header(self, name: str, value: str) -> None: ...

    def get_header(self, name: str) -> str | None: ...

    def enable_output(self) -> None: ...

    def output_stream(self) -> BinaryIO: ...

    def input_stream(self) -> BinaryIO | None: ...

    def error_stream(self) -> BinaryIO | None: ...

    def response_code(self) -> int: ...

    def response_message(self) -> str | None: ...

    def disconnect(self) -> None: ...


CONTENT_TYPE_HEADER = "Content-Type"
ACCEPT_HEADER = "Accept"
AUTHORIZATION_HEADER = "Authorization"


__all__ = ["ACCEPT_HEADER", "AUTHORIZATION_HEADER", "CONTENT_TYPE_HEADER", "Connection"]
