"""Public surface for the restexec HTTP client."""

from .client import ClientOptions, RestClient, RestExecutor
from .connection import Connection, HttpConnection
from .decoders import (
    BytesResponseDecoder,
    FileResponseDecoder,
    JsonResponseDecoder,
    ResponseDecoder,
    StreamResponseDecoder,
    StringResponseDecoder,
)
from .encoders import BodyEncoder, FormUrlEncodedBodyEncoder, JsonBodyEncoder
from .errors import (
    DecodeError,
    EncodeError,
    ErrorPayload,
    RestClientError,
    StatusClassificationError,
    TransportError,
    TrustError,
)
from .json_client import JsonRestClient
from .trust import IgnoredCertificate, TrustCertificate, TrustKeystore
from .version import __version__

__all__ = [
    "__version__",
    "BodyEncoder",
    "BytesResponseDecoder",
    "ClientOptions",
    "Connection",
    "DecodeError",
    "EncodeError",
    "ErrorPayload",
    "FileResponseDecoder",
    "FormUrlEncodedBodyEncoder",
    "HttpConnection",
    "IgnoredCertificate",
    "JsonBodyEncoder",
    "JsonResponseDecoder",
    "JsonRestClient",
    "ResponseDecoder",
    "RestClient",
    "RestClientError",
    "RestExecutor",
    "StatusClassificationError",
    "StreamResponseDecoder",
    "StringResponseDecoder",
    "TransportError",
    "TrustCertificate",
    "TrustError",
    "TrustKeystore",
]
