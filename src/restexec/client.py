"""Request executor: the single entry point for issuing HTTP calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, TypeVar, runtime_checkable

import httpx

from .connection import AUTHORIZATION_HEADER, Connection, HttpConnection
from .decoders import ResponseDecoder
from .encoders import BodyEncoder
from .errors import RestClientError, StatusClassificationError, TransportError
from .logger import LogLevel, create_logger
from .streams import read_all

B = TypeVar("B")
R = TypeVar("R")

OK_RESPONSE_CODE = 200


@runtime_checkable
class RestExecutor(Protocol):
    def get_connection(self, url_suffix: str) -> Connection: ...

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
    ) -> Any: ...

    def set_bearer_token(self, token: str) -> None: ...

    def set_header(self, name: str, value: str) -> None: ...

    def remove_header(self, name: str) -> None: ...

    def remove_headers(self) -> None: ...


@dataclass
class ClientOptions:
    base_url: str
    default_headers: Mapping[str, str] | None = None
    transport: httpx.BaseTransport | None = None
    logger: object | None = None
    log_level: LogLevel = "info"


class RestClient:
    """Issues one blocking HTTP call per ``execute``.

    Persistent headers set through ``set_header``/``set_bearer_token`` are
    applied to every call after the per-call headers, so they win on a name
    collision. They are plain instance state without locking: callers sharing
    a client across threads must not mutate headers while a call is running.
    """

    def __init__(
        self,
        base_url: str,
        *,
        default_headers: Mapping[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
        logger: object | None = None,
        log_level: LogLevel = "info",
    ) -> None:
        options = ClientOptions(
            base_url=base_url,
            default_headers=default_headers,
            transport=transport,
            logger=logger,
            log_level=log_level,
        )
        self.base_url = options.base_url
        self._transport = options.transport
        self._logger = create_logger(logger=options.logger, level=options.log_level)
        self._headers: dict[str, str] = dict(options.default_headers or {})

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    def get_connection(self, url_suffix: str) -> Connection:
        # The suffix is appended verbatim; callers pre-encode paths and queries.
        return HttpConnection(self.base_url + url_suffix, transport=self._transport, logger=self._logger)

    def execute(
        self,
        method: str,
        url_suffix: str,
        request_body: B | None = None,
        encoder: BodyEncoder[B] | None = None,
        response_type: Any = None,
        decoder: ResponseDecoder[R] | None = None,
        headers: Mapping[str, str] | None = None,
        *accepted_codes: int,
    ) -> R | None:
        """Run a request and decode its response.

        ``accepted_codes`` lists the statuses treated as success (200 when
        empty). Any other status raises ``StatusClassificationError`` with the
        error body attached. I/O faults surface as ``TransportError``. The
        connection is released on every path.
        """
        try:
            connection = self.get_connection(url_suffix)
            try:
                connection.set_method(method)
                for name, value in (headers or {}).items():
                    connection.set_header(name, value)
                for name, value in self._headers.items():
                    connection.set_header(name, value)
                if encoder is not None:
                    encoder.set_content_type(connection, request_body)
                if decoder is not None:
                    decoder.set_accept(connection)
                if encoder is not None:
                    encoder.write(connection, request_body)

                self._check_response_code(connection, method, accepted_codes)
                return self._read_response(connection, response_type, decoder)
            finally:
                connection.disconnect()
        except RestClientError:
            raise
        except OSError as exc:
            raise TransportError(f"{method} {url_suffix} failed: {exc}", cause=exc) from exc

    def execute_without_body(
        self,
        method: str,
        url_suffix: str,
        response_type: Any = None,
        decoder: ResponseDecoder[R] | None = None,
        headers: Mapping[str, str] | None = None,
        *accepted_codes: int,
    ) -> R | None:
        return self.execute(method, url_suffix, None, None, response_type, decoder, headers, *accepted_codes)

    def set_bearer_token(self, token: str) -> None:
        self._headers[AUTHORIZATION_HEADER] = f"Bearer {token}"

    def set_header(self, name: str, value: str) -> None:
        self._headers[name] = value

    def remove_header(self, name: str) -> None:
        self._headers.pop(name, None)

    def remove_headers(self) -> None:
        self._headers.clear()

    def _check_response_code(self, connection: Connection, method: str, accepted_codes: tuple[int, ...]) -> None:
        accepted = accepted_codes or (OK_RESPONSE_CODE,)
        status = connection.response_code()
        self._logger.debug("%s %s -> %s", method, connection.url, status)
        if status in accepted:
            return

        error_body: bytes | None = None
        stream = connection.error_stream()
        if stream is not None:
            with stream:
                error_body = read_all(stream)
        message = connection.response_message()
        self._logger.warn(
            "%s %s returned %s %s, expected one of %s",
            method,
            connection.url,
            status,
            message,
            list(accepted),
        )
        raise StatusClassificationError(status, message, error_body)

    def _read_response(
        self,
        connection: Connection,
        response_type: Any,
        decoder: ResponseDecoder[R] | None,
    ) -> R | None:
        if response_type is None or decoder is None:
            return None
        stream = connection.input_stream()
        if stream is None:
            return None
        with stream:
            return decoder.read_value(stream, response_type)


__all__ = ["ClientOptions", "OK_RESPONSE_CODE", "RestClient", "RestExecutor"]
