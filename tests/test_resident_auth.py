# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_identity


import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from fayda_identity.config import FaydaPartnerConfig
from fayda_identity.exceptions import TransportError
from fayda_identity.models import RequestedAuth, ResidentAuthRequest
from fayda_identity.services.resident_auth import ResidentAuthServiceAsync


@pytest.fixture
def config(partner_config_factory: Callable[[str], FaydaPartnerConfig]) -> FaydaPartnerConfig:
    return partner_config_factory("authPartnerId")


@pytest.mark.asyncio
async def test_authenticate_resident(
    config: FaydaPartnerConfig, make_client: Callable[..., Any], auth_body: dict[str, Any]
) -> None:
    client, handler = make_client(httpx.Response(200, json={"status": "authenticated"}))

    response = await ResidentAuthServiceAsync(config, client=client).authenticate_resident(auth_body, "fake-signature")

    assert response == {"status": "authenticated"}
    assert len(handler.requests) == 1
    request = handler.last_request
    assert str(request.url) == "http://base.url/idauthentication/v1/auth/fispLicenseKey/authPartnerId/partnerApiKey"
    assert request.headers["Authorization"] == "fake-auth-token"
    assert request.headers["Signature"] == "fake-signature"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == auth_body


@pytest.mark.asyncio
async def test_authenticate_resident_with_model(
    config: FaydaPartnerConfig, make_client: Callable[..., Any], auth_body: dict[str, Any]
) -> None:
    client, handler = make_client(httpx.Response(200, json={"response": {"authStatus": True}}))
    body = ResidentAuthRequest(
        transaction_id="543210",
        request_time="2025-01-01T10:00:00.000Z",
        env="Developer",
        domain_uri="http://test.com",
        requested_auth=RequestedAuth(otp=True),
        individual_id="9830872690593682",
        individual_id_type="VID",
        consent_obtained=True,
        thumbprint="THUMBPRINT_EXAMPLE",
        request_session_key="ENCRYPTED_SESSION_KEY",
        request_hmac="ENCRYPTED_HMAC",
        request="ENCRYPTED_REQUEST_PAYLOAD",
    )

    response = await ResidentAuthServiceAsync(config, client=client).authenticate_resident(body, "sig")

    assert response == {"response": {"authStatus": True}}
    assert json.loads(handler.last_request.content) == auth_body


@pytest.mark.asyncio
async def test_authenticate_resident_failure(
    config: FaydaPartnerConfig, make_client: Callable[..., Any], auth_body: dict[str, Any]
) -> None:
    client, _ = make_client(httpx.Response(403, json={"errors": [{"errorCode": "IDA-MPA-013"}]}))

    with pytest.raises(TransportError, match="Failed to authenticate resident") as exc_info:
        await ResidentAuthServiceAsync(config, client=client).authenticate_resident(auth_body, "sig")

    assert exc_info.value.context == "Failed to authenticate resident"
    assert "IDA-MPA-013" in (exc_info.value.details or "")
