"""Exceptions raised by the restexec client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, TypeVar

T = TypeVar("T")


class RestClientError(Exception):
    """Base error for all client failures."""

    def __init__(self, message: str, *, context: Any | None = None) -> None:
        super().__init__(message)
        self.context = context


class TransportError(RestClientError):
    """Raised when an I/O fault interrupts a call (connect, write or read)."""

    def __init__(self, message: str, *, cause: BaseException | None = None, context: Any | None = None) -> None:
        super().__init__(message, context=context)
        self.cause = cause


@dataclass(frozen=True)
class ErrorPayload:
    """Status line and raw error body captured from a rejected response."""

    status_code: int
    status_message: str | None
    body: bytes | None = None

    def error_object(self, transform: Callable[[bytes], T]) -> T | None:
        if self.body is None:
            return None
        return transform(self.body)


class StatusClassificationError(RestClientError):
    """Raised when the response status is not one of the accepted codes."""

    def __init__(
        self,
        status_code: int,
        status_message: str | None,
        error_body: bytes | None = None,
    ) -> None:
        super().__init__(f"{status_code}, {status_message}")
        self.payload = ErrorPayload(status_code, status_message, error_body)

    @property
    def status_code(self) -> int:
        return self.payload.status_code

    @property
    def status_message(self) -> str | None:
        return self.payload.status_message

    @property
    def error_body(self) -> bytes | None:
        return self.payload.body

    def error_object(self, transform: Callable[[bytes], T]) -> T | None:
        """Transform the captured error body, or return None when there is none."""
        return self.payload.error_object(transform)


class EncodeError(RestClientError):
    """Raised when a request body cannot be serialized."""


class DecodeError(RestClientError):
    """Raised when a response body cannot be deserialized."""


class TrustError(RestClientError):
    """Raised when a TLS trust context cannot be built."""


__all__ = [
    "DecodeError",
    "EncodeError",
    "ErrorPayload",
    "RestClientError",
    "StatusClassificationError",
    "TransportError",
    "TrustError",
]
