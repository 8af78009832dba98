"""Process-wide TLS trust configuration for HTTPS connections.

Run one of the ``trust()`` helpers once, before the first HTTPS call that
relies on the custom trust. Every ``HttpConnection`` opened afterwards verifies
servers with the installed context.
"""

from __future__ import annotations

import os
import ssl
from pathlib import Path
from typing import Union

from .errors import TrustError
from .logger import BoundLogger, create_logger

PathLike = Union[str, "os.PathLike[str]"]

_installed_context: ssl.SSLContext | None = None


def install_ssl_context(context: ssl.SSLContext) -> None:
    global _installed_context
    _installed_context = context


def default_ssl_context() -> ssl.SSLContext | None:
    return _installed_context


def reset_ssl_context() -> None:
    """Drop the installed context so connections fall back to httpx defaults."""
    global _installed_context
    _installed_context = None


class TrustCertificate:
    """Trust a single PEM certificate read from a file."""

    def __init__(self, certificate: PathLike, *, logger: BoundLogger | None = None) -> None:
        self.certificate = Path(certificate)
        self._logger = (logger or create_logger()).child("trust")

    def trust(self) -> ssl.SSLContext:
        try:
            context = ssl.create_default_context(cafile=os.fspath(self.certificate))
        except (OSError, ssl.SSLError) as exc:
            raise TrustError(f"Cannot load certificate {self.certificate}: {exc}") from exc

        install_ssl_context(context)
        self._logger.info("Installed trust for certificate %s", self.certificate)
        return context


class TrustKeystore:
    """Trust the certificates of a PEM keystore and present its key as client identity.

    The keystore holds one or more certificates plus a private key. When no key
    password is given the store password unlocks the key.
    """

    def __init__(
        self,
        keystore: PathLike,
        store_password: str,
        key_password: str | None = None,
        *,
        logger: BoundLogger | None = None,
    ) -> None:
        self.keystore = Path(keystore)
        self._key_password = key_password if key_password is not None else store_password
        self._logger = (logger or create_logger()).child("trust")

    def trust(self) -> ssl.SSLContext:
        path = os.fspath(self.keystore)
        try:
            context = ssl.create_default_context(cafile=path)
            context.load_cert_chain(path, password=self._key_password)
        except (OSError, ssl.SSLError) as exc:
            raise TrustError(f"Cannot load keystore {self.keystore}: {exc}") from exc

        install_ssl_context(context)
        self._logger.info("Installed trust for keystore %s", self.keystore)
        return context


class IgnoredCertificate:
    """Disable certificate and hostname checks. For local development servers only."""

    def __init__(self, *, logger: BoundLogger | None = None) -> None:
        self._logger = (logger or create_logger()).child("trust")

    def trust(self) -> ssl.SSLContext:
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        install_ssl_context(context)
        self._logger.warn("Certificate validation is disabled for HTTPS connections")
        return context


__all__ = [
    "IgnoredCertificate",
    "TrustCertificate",
    "TrustKeystore",
    "default_ssl_context",
    "install_ssl_context",
    "reset_ssl_context",
]
