"""HTTP connection built on top of httpx."""

from __future__ import annotations

import io
from typing import BinaryIO, Iterator

import httpx

from ..errors import TransportError
from ..logger import BoundLogger, create_logger
from ..trust import default_ssl_context

_BODYLESS_STATUSES = frozenset({204, 304})


class _RequestBody(io.BytesIO):
    """Output buffer that keeps its content after the caller closes it."""

    def __init__(self) -> None:
        super().__init__()
        self.content = b""

    def close(self) -> None:
        if not self.closed:
            self.content = self.getvalue()
        super().close()

    def payload(self) -> bytes:
        return self.content if self.closed else self.getvalue()


class ResponseStream(io.RawIOBase):
    """Readable binary view over an httpx response opened with ``stream=True``."""

    def __init__(self, response: httpx.Response) -> None:
        super().__init__()
        self._response = response
        self._chunks: Iterator[bytes] = response.iter_bytes()
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # type: ignore[override]
        while not self._pending:
            try:
                self._pending = next(self._chunks)
            except StopIteration:
                return 0
            except httpx.HTTPError as exc:
                raise TransportError(f"Failed reading response body: {exc}", cause=exc) from exc
        size = min(len(buffer), len(self._pending))
        buffer[:size] = self._pending[:size]
        self._pending = self._pending[size:]
        return size

    def close(self) -> None:
        if not self.closed:
            self._response.close()
        super().close()


class HttpConnection:
    """One request/response exchange over a private httpx client.

    Nothing touches the network until the response is first inspected.
    """

    def __init__(
        self,
        url: str,
        *,
        transport: httpx.BaseTransport | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        self._url = url
        self._method = "GET"
        self._headers = httpx.Headers()
        self._transport = transport
        self._output_enabled = False
        self._body: _RequestBody | None = None
        self._client: httpx.Client | None = None
        self._response: httpx.Response | None = None
        self._stream: ResponseStream | None = None
        self._logger = (logger or create_logger()).child("http")

    @property
    def url(self) -> str:
        return self._url

    def set_method(self, method: str) -> None:
        self._ensure_not_sent()
        self._method = method

    def set_header(self, name: str, value: str) -> None:
        self._ensure_not_sent()
        self._headers[name] = value

    def get_header(self, name: str) -> str | None:
        return self._headers.get(name)

    def enable_output(self) -> None:
        self._ensure_not_sent()
        self._output_enabled = True

    def output_stream(self) -> BinaryIO:
        if not self._output_enabled:
            raise TransportError("Output is not enabled for this connection")
        self._ensure_not_sent()
        if self._body is None:
            self._body = _RequestBody()
        elif self._body.closed:
            raise TransportError("Request body has already been written and closed")
        return self._body

    def input_stream(self) -> BinaryIO | None:
        response = self._send()
        if self._method.upper() == "HEAD" or response.status_code in _BODYLESS_STATUSES:
            return None
        return self._response_stream(response)

    def error_stream(self) -> BinaryIO | None:
        response = self._send()
        if response.status_code < 400:
            return None
        return self._response_stream(response)

    def response_code(self) -> int:
        return self._send().status_code

    def response_message(self) -> str | None:
        return self._send().reason_phrase or None

    def disconnect(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None
        if self._response is not None:
            self._response.close()
        if self._client is not None:
            self._client.close()
            self._client = None

    def _send(self) -> httpx.Response:
        if self._response is not None:
            return self._response

        content = self._body.payload() if self._output_enabled and self._body is not None else None
        context = default_ssl_context()
        self._client = httpx.Client(
            transport=self._transport,
            verify=context if context is not None else True,
            timeout=None,
            follow_redirects=True,
        )
        try:
            request = self._client.build_request(
                self._method,
                self._url,
                headers=self._headers,
                content=content,
            )
            self._logger.debug("HTTP %s %s bytes=%d", self._method, self._url, len(content or b""))
            self._response = self._client.send(request, stream=True)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"Cannot reach {self._url}: {exc}", cause=exc) from exc

        self._logger.debug(
            "HTTP <- %s status=%s",
            self._url,
            self._response.status_code,
        )
        self._logger.trace("HTTP <- headers %s", dict(self._response.headers))
        return self._response

    def _response_stream(self, response: httpx.Response) -> ResponseStream:
        if self._stream is None:
            self._stream = ResponseStream(response)
        return self._stream

    def _ensure_not_sent(self) -> None:
        if self._response is not None:
            raise TransportError("Request has already been sent")


__all__ = ["HttpConnection", "ResponseStream"]
