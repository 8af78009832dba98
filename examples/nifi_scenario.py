"""Walk through a token login, a JSON query and a logout against an Apache NiFi API."""

from __future__ import annotations

import os
from typing import Any

from restexec import (
    FormUrlEncodedBodyEncoder,
    IgnoredCertificate,
    JsonRestClient,
    RestClient,
    StatusClassificationError,
    StringResponseDecoder,
)

BASE_URL = os.getenv("NIFI_API_URL", "https://localhost:8443/nifi-api")
USERNAME = os.getenv("NIFI_USERNAME", "admin")
PASSWORD = os.getenv("NIFI_PASSWORD", "")


def log_section(title: str) -> None:
    print("\n" + "=" * 80)
    print(title)
    print("=" * 80)


def get_token(client: RestClient) -> str:
    token = client.execute(
        "POST",
        "/access/token",
        {"username": USERNAME, "password": PASSWORD},
        FormUrlEncodedBodyEncoder(),
        str,
        StringResponseDecoder(),
        None,
        201,
    )
    if not token:
        raise RuntimeError("NiFi returned an empty token")
    return token


def main() -> None:
    log_section("restexec: NiFi scenario")
    log_level = os.getenv("RESTEXEC_LOG", "info")
    if os.getenv("NIFI_INSECURE", "1") == "1":
        # NiFi ships a self-signed certificate by default
        IgnoredCertificate().trust()

    client = RestClient(BASE_URL, log_level=log_level)

    log_section("Step 1: Request an access token")
    token = get_token(client)
    print(f"→ Token {token[:12]}...")
    client.set_bearer_token(token)

    log_section("Step 2: Read system diagnostics")
    json_client = JsonRestClient(client)
    diagnostics: dict[str, Any] | None = json_client.fetch("GET", "/system-diagnostics", dict)
    snapshot = (diagnostics or {}).get("systemDiagnostics", {}).get("aggregateSnapshot", {})
    for key in ("totalHeap", "usedHeap", "availableProcessors", "uptime"):
        print(f"  {key}: {snapshot.get(key)}")

    log_section("Step 3: Log out")
    try:
        json_client.fetch("DELETE", "/access/logout")
    except StatusClassificationError as exc:
        print(f"→ Logout rejected: {exc} {exc.error_object(lambda body: body.decode('utf-8'))}")
        raise
    client.remove_header("Authorization")
    print("→ Logged out")


if __name__ == "__main__":
    main()
