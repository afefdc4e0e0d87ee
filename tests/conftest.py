# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_identity

import base64
import json
import threading
from collections.abc import Callable, Generator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from urllib.parse import urlsplit

import httpx
import pytest
from pydantic import SecretStr

from fayda_identity.config import FaydaOIDCConfig, FaydaPartnerConfig

BASE_URL = "http://base.url"


class RecordingHandler:
    """
    httpx.MockTransport handler that records requests and replays canned responses or errors.
    """

    def __init__(self, *responses: httpx.Response | Exception) -> None:
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            return httpx.Response(500, text="Unexpected request")
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_client() -> Callable[..., tuple[httpx.AsyncClient, RecordingHandler]]:
    def _make(*responses: httpx.Response | Exception) -> tuple[httpx.AsyncClient, RecordingHandler]:
        handler = RecordingHandler(*responses)
        return httpx.AsyncClient(transport=httpx.MockTransport(handler)), handler

    return _make


@pytest.fixture
def oidc_config() -> FaydaOIDCConfig:
    return FaydaOIDCConfig(
        client_id="test-client-id",
        redirect_uri="http://localhost:4000/callback",
        authorization_endpoint="http://auth.endpoint/authorize",
        token_endpoint="http://auth.endpoint/token",
        userinfo_endpoint="http://auth.endpoint/userinfo",
    )


@pytest.fixture
def partner_config_factory() -> Callable[[str], FaydaPartnerConfig]:
    def _make(partner_id: str) -> FaydaPartnerConfig:
        return FaydaPartnerConfig(
            base_url=BASE_URL,
            authorization_token=SecretStr("fake-auth-token"),
            fisp_license_key="fispLicenseKey",
            partner_id=partner_id,
            partner_api_key=SecretStr("partnerApiKey"),
        )

    return _make


@pytest.fixture
def make_jwt() -> Callable[..., str]:
    """Builds an unsigned compact JWT for decoding tests."""

    def _segment(value: Any) -> str:
        raw = json.dumps(value).encode("utf-8")
        return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")

    def _make(claims: Any, header: dict[str, Any] | None = None) -> str:
        return f"{_segment(header or {'alg': 'RS256', 'typ': 'JWT'})}.{_segment(claims)}.c2lnbmF0dXJl"

    return _make


@pytest.fixture
def auth_body() -> dict[str, Any]:
    return {
        "id": "fayda.identity.auth",
        "version": "1.0",
        "transactionID": "543210",
        "requestTime": "2025-01-01T10:00:00.000Z",
        "env": "Developer",
        "domainUri": "http://test.com",
        "requestedAuth": {"otp": True, "demo": False, "bio": False},
        "individualId": "9830872690593682",
        "individualIdType": "VID",
        "consentObtained": True,
        "thumbprint": "THUMBPRINT_EXAMPLE",
        "requestSessionKey": "ENCRYPTED_SESSION_KEY",
        "requestHMAC": "ENCRYPTED_HMAC",
        "request": "ENCRYPTED_REQUEST_PAYLOAD",
    }


class PlatformServer(ThreadingHTTPServer):
    """
    Local HTTP/1.1 keep-alive server serving canned responses per (method, path).
    """

    daemon_threads = True

    def __init__(self) -> None:
        super().__init__(("127.0.0.1", 0), PlatformHandler)
        self.routes: dict[tuple[str, str], tuple[int, list[tuple[str, str]], bytes]] = {}
        self.received: list[tuple[str, str, dict[str, str], bytes]] = []

    @property
    def url(self) -> str:
        host, port = self.server_address[:2]
        return f"http://{host}:{port}"

    def route(
        self,
        method: str,
        path: str,
        status: int = 200,
        json_body: Any = None,
        headers: list[tuple[str, str]] | None = None,
    ) -> None:
        payload = json.dumps(json_body).encode("utf-8") if json_body is not None else b""
        all_headers = [("Content-Type", "application/json"), *(headers or [])]
        self.routes[(method, path)] = (status, all_headers, payload)


class PlatformHandler(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.1"
    server: PlatformServer

    def _handle(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        path = urlsplit(self.path).path
        self.server.received.append((self.command, path, dict(self.headers), body))

        status, headers, payload = self.server.routes.get((self.command, path), (404, [], b"not found"))
        self.send_response(status)
        for name, value in headers:
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    do_GET = _handle
    do_POST = _handle

    def log_message(self, format: str, *args: Any) -> None:
        pass


@pytest.fixture
def platform_server(monkeypatch: pytest.MonkeyPatch) -> Generator[PlatformServer, None, None]:
    # Transient clients honour proxy env vars; loopback traffic must go direct
    for var in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(var, raising=False)

    server = PlatformServer()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()
    thread.join(timeout=5)
