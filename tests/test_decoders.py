import io
from pathlib import Path

import pytest
from pydantic import BaseModel

from restexec import (
    BytesResponseDecoder,
    DecodeError,
    FileResponseDecoder,
    JsonBodyEncoder,
    JsonResponseDecoder,
    StreamResponseDecoder,
    StringResponseDecoder,
)


class HeaderConnection:
    def __init__(self) -> None:
        self.headers: dict[str, str] = {}

    def set_header(self, name: str, value: str) -> None:
        self.headers[name] = value


class Item(BaseModel):
    id: int
    value: str


@pytest.mark.parametrize(
    ("decoder", "accept"),
    [
        (JsonResponseDecoder(), "application/json"),
        (StringResponseDecoder(), "text/plain"),
        (BytesResponseDecoder("application/octet-stream"), "application/octet-stream"),
        (FileResponseDecoder("application/pdf", "unused.pdf"), "application/pdf"),
        (StreamResponseDecoder("image/png", io.BytesIO), "image/png"),
    ],
)
def test_set_accept(decoder, accept) -> None:
    connection = HeaderConnection()
    decoder.set_accept(connection)
    assert connection.headers == {"Accept": accept}


def test_json_round_trip_with_encoder() -> None:
    body = {"id": "1", "value": "2"}
    encoded = JsonBodyEncoder().encode(body)
    decoded = JsonResponseDecoder().read_value(io.BytesIO(encoded), dict)
    assert decoded == body


def test_json_decoder_is_reused_across_types() -> None:
    decoder = JsonResponseDecoder()
    item = decoder.read_value(io.BytesIO(b'{"id": 7, "value": "seven"}'), Item)
    numbers = decoder.read_value(io.BytesIO(b"[1, 2, 3]"), list[int])
    mapping = decoder.read_value(io.BytesIO(b'{"id": 7}'), dict[str, int])

    assert item == Item(id=7, value="seven")
    assert numbers == [1, 2, 3]
    assert mapping == {"id": 7}


@pytest.mark.parametrize("payload", [b"{not json", b'{"id": "seven", "value": "x"}'])
def test_json_decoder_raises_decode_error(payload: bytes) -> None:
    with pytest.raises(DecodeError):
        JsonResponseDecoder().read_value(io.BytesIO(payload), Item)


def test_string_decoder_reads_utf8() -> None:
    text = "result – ok"
    assert StringResponseDecoder().read_value(io.BytesIO(text.encode("utf-8")), str) == text


def test_string_decoder_rejects_invalid_utf8() -> None:
    with pytest.raises(DecodeError):
        StringResponseDecoder().read_value(io.BytesIO(b"\xff\xfe"), str)


def test_bytes_decoder_returns_body_unchanged() -> None:
    payload = bytes(range(256)) * 100
    assert BytesResponseDecoder("application/octet-stream").read_value(io.BytesIO(payload), bytes) == payload


def test_file_decoder_writes_body_to_path(tmp_path: Path) -> None:
    target = tmp_path / "report.bin"
    payload = b"x" * 20000
    result = FileResponseDecoder("application/octet-stream", target).read_value(io.BytesIO(payload), Path)
    assert result == target
    assert target.read_bytes() == payload


def test_stream_decoder_uses_new_sink_per_call_and_closes_it() -> None:
    sinks: list["RecordingSink"] = []

    class RecordingSink(io.BytesIO):
        def __init__(self) -> None:
            super().__init__()
            self.captured = b""
            sinks.append(self)

        def close(self) -> None:
            self.captured = self.getvalue()
            super().close()

    decoder = StreamResponseDecoder("text/csv", RecordingSink)
    assert decoder.read_value(io.BytesIO(b"a,b\n1,2\n"), bool) is True
    assert decoder.read_value(io.BytesIO(b"c\n"), bool) is True

    assert [sink.captured for sink in sinks] == [b"a,b\n1,2\n", b"c\n"]
    assert all(sink.closed for sink in sinks)


def test_stream_decoder_closes_sink_on_failure() -> None:
    sink = io.BytesIO()

    class BrokenStream(io.RawIOBase):
        def readable(self) -> bool:
            return True

        def readinto(self, buffer) -> int:
            raise OSError("connection reset")

    with pytest.raises(OSError):
        StreamResponseDecoder("text/plain", lambda: sink).read_value(BrokenStream(), bool)
    assert sink.closed


def test_json_decoder_wraps_schema_errors_for_unsupported_types() -> None:
    class Plain:
        def __init__(self, a: int) -> None:
            self.a = a

    with pytest.raises(DecodeError):
        JsonResponseDecoder().read_value(io.BytesIO(b'{"a": 1}'), Plain)


def test_json_decoder_strict_mode_rejects_coercion() -> None:
    payload = b'{"id": "7", "value": "seven"}'
    assert JsonResponseDecoder().read_value(io.BytesIO(payload), Item) == Item(id=7, value="seven")
    with pytest.raises(DecodeError):
        JsonResponseDecoder(strict=True).read_value(io.BytesIO(payload), Item)
