# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_identity


"""
ResidentAuthService component for demographic, biometric and OTP authentication.
"""

from typing import Any

import anyio
import httpx

from fayda_identity.config import FaydaPartnerConfig
from fayda_identity.transport import RequestBody, operation_span, submit_partner_request
from fayda_identity.utils.logger import logger


class ResidentAuthServiceAsync:
    """
    Authenticates a resident by UIN or VID.

    The config's `partner_id` is the auth partner id.
    """

    def __init__(self, config: FaydaPartnerConfig, client: httpx.AsyncClient | None = None) -> None:
        self.config = config
        self._client = client

    async def authenticate_resident(self, body: RequestBody, signature: str) -> Any:
        """
        Submits an authentication request.

        Args:
            body: A `ResidentAuthRequest` or an equivalent mapping. The session key, HMAC and
                request block must already be encrypted.
            signature: Detached JWS over the body.

        Returns:
            The platform response body, unchanged.

        Raises:
            TransportError: If the request fails or the platform responds with a non-2xx status.
        """
        with operation_span("fayda.auth.resident"):
            result = await submit_partner_request(
                self._client, self.config, "auth", body, signature, "Failed to authenticate resident"
            )
        logger.info("Resident authentication request submitted.")
        return result


class ResidentAuthService:
    """
    Sync facade for ResidentAuthServiceAsync.
    Each call uses a client opened and closed on that call's event loop.
    """

    def __init__(self, config: FaydaPartnerConfig) -> None:
        self._async = ResidentAuthServiceAsync(config)

    def authenticate_resident(self, body: RequestBody, signature: str) -> Any:
        return anyio.run(self._async.authenticate_resident, body, signature)
