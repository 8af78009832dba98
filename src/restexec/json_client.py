"""JSON convenience layer over any ``RestExecutor``."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

from .client import RestExecutor
from .connection import Connection
from .decoders import JsonResponseDecoder, ResponseDecoder
from .encoders import BodyEncoder, JsonBodyEncoder

R = TypeVar("R")


class JsonRestClient:
    """Wraps an executor and fixes the encoder and decoder to JSON.

    Everything except ``fetch`` and ``send`` is forwarded to the wrapped
    executor unchanged, so headers set here are the wrapped executor's headers.
    Pass preconfigured ``encoder``/``decoder`` instances to change JSON options.
    """

    def __init__(
        self,
        executor: RestExecutor,
        *,
        encoder: JsonBodyEncoder | None = None,
        decoder: JsonResponseDecoder | None = None,
    ) -> None:
        self._executor = executor
        self._encoder = encoder or JsonBodyEncoder()
        self._decoder = decoder or JsonResponseDecoder()

    @property
    def executor(self) -> RestExecutor:
        return self._executor

    def get_connection(self, url_suffix: str) -> Connection:
        return self._executor.get_connection(url_suffix)

    def fetch(
        self,
        method: str,
        url_suffix: str,
        response_type: type[R] | Any = None,
        headers: Mapping[str, str] | None = None,
        *accepted_codes: int,
    ) -> R | None:
        """Issue a bodyless call (GET, DELETE, ...) and decode a JSON response."""
        return self._executor.execute(
            method,
            url_suffix,
            None,
            None,
            response_type,
            self._decoder,
            headers,
            *accepted_codes,
        )

    def send(
        self,
        method: str,
        url_suffix: str,
        body: Any,
        response_type: type[R] | Any = None,
        headers: Mapping[str, str] | None = None,
        *accepted_codes: int,
    ) -> R | None:
        """Issue a call with a JSON body and decode a JSON response."""
        return self._executor.execute(
            method,
            url_suffix,
            body,
            self._encoder,
            response_type,
            self._decoder,
            headers,
            *accepted_codes,
        )

    def execute(
        self,
        method: str,
        url_suffix: str,
        request_body: Any = None,
        encoder: BodyEncoder[Any] | None = None,
        response_type: Any = None,
        decoder: ResponseDecoder[Any] | None = None,
        headers: Mapping[str, str] | None = None,
        *accepted_codes: int,
    ) -> Any:
        return self._executor.execute(
            method,
            url_suffix,
            request_body,
            encoder,
            response_type,
            decoder,
            headers,
            *accepted_codes,
        )

    def set_bearer_token(self, token: str) -> None:
        self._executor.set_bearer_token(token)

    def set_header(self, name: str, value: str) -> None:
        self._executor.set_header(name, value)

    def remove_header(self, name: str) -> None:
        self._executor.remove_header(name)

    def remove_headers(self) -> None:
        self._executor.remove_headers()


__all__ = ["JsonRestClient"]
