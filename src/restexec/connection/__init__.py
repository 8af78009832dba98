"""Connection implementations exposed to users."""

from .base import ACCEPT_HEADER, AUTHORIZATION_HEADER, CONTENT_TYPE_HEADER, Connection
from .http import HttpConnection, ResponseStream

__all__ = [
    "ACCEPT_HEADER",
    "AUTHORIZATION_HEADER",
    "CONTENT_TYPE_HEADER",
    "Connection",
    "HttpConnection",
    "ResponseStream",
]
