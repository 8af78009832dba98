import ssl
from pathlib import Path

import httpx
import pytest

from restexec import IgnoredCertificate, TrustCertificate, TrustError, TrustKeystore
from restexec.connection.http import HttpConnection
from restexec.trust import default_ssl_context, reset_ssl_context

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def clean_trust():
    reset_ssl_context()
    yield
    reset_ssl_context()


def test_trust_certificate_installs_context() -> None:
    context = TrustCertificate(FIXTURES / "cert.pem").trust()
    assert default_ssl_context() is context
    assert context.verify_mode == ssl.CERT_REQUIRED
    assert len(context.get_ca_certs()) == 1


def test_trust_keystore_uses_store_password_for_key() -> None:
    context = TrustKeystore(FIXTURES / "keystore.pem", "storepass").trust()
    assert default_ssl_context() is context
    assert len(context.get_ca_certs()) == 1


def test_trust_keystore_key_password_takes_precedence() -> None:
    with pytest.raises(TrustError):
        TrustKeystore(FIXTURES / "keystore.pem", "storepass", "wrong").trust()
    assert default_ssl_context() is None


def test_missing_certificate_raises_trust_error(tmp_path: Path) -> None:
    with pytest.raises(TrustError):
        TrustCertificate(tmp_path / "missing.pem").trust()
    assert default_ssl_context() is None


def test_ignored_certificate_disables_verification() -> None:
    context = IgnoredCertificate().trust()
    assert context.verify_mode == ssl.CERT_NONE
    assert context.check_hostname is False


def test_connections_use_installed_context(monkeypatch: pytest.MonkeyPatch) -> None:
    context = TrustCertificate(FIXTURES / "cert.pem").trust()
    captured: dict[str, object] = {}
    real_client = httpx.Client

    def recording_client(**kwargs):
        captured.update(kwargs)
        return real_client(**kwargs)

    monkeypatch.setattr(httpx, "Client", recording_client)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, request=request)

    connection = HttpConnection("https://localhost/", transport=httpx.MockTransport(handler))
    try:
        assert connection.response_code() == 200
    finally:
        connection.disconnect()
    assert captured["verify"] is context
