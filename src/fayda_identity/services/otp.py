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
OTPService component for requesting one-time passwords.
"""

from typing import Any

import anyio
import httpx

from fayda_identity.config import FaydaPartnerConfig
from fayda_identity.transport import RequestBody, operation_span, submit_partner_request
from fayda_identity.utils.logger import logger


class OTPServiceAsync:
    """
    Requests an OTP for a UIN or VID, delivered over email or phone.

    Attributes:
        config (FaydaPartnerConfig): Platform URL, authorization token and partner credentials.
    """

    def __init__(self, config: FaydaPartnerConfig, client: httpx.AsyncClient | None = None) -> None:
        """
        Initialize the OTPServiceAsync.

        Args:
            config: The partner configuration.
            client: External async client (optional). If not provided, a transient client is used per call.
        """
        self.config = config
        self._client = client

    async def request_otp(self, body: RequestBody, signature: str) -> Any:
        """
        Requests an OTP for the individual identified in the body.

        Args:
            body: An `OTPRequest` or an equivalent mapping using the wire field names.
            signature: Detached JWS over the body, as required by the platform.

        Returns:
            The platform response body, unchanged.

        Raises:
            TransportError: If the request fails or the platform responds with a non-2xx status.
        """
        with operation_span("fayda.otp.request"):
            result = await submit_partner_request(
                self._client, self.config, "otp", body, signature, "Failed to request OTP"
            )
        logger.info("OTP request submitted.")
        return result


class OTPService:
    """
    Sync facade for OTPServiceAsync.
    Each call uses a client opened and closed on that call's event loop.
    """

    def __init__(self, config: FaydaPartnerConfig) -> None:
        self._async = OTPServiceAsync(config)

    def request_otp(self, body: RequestBody, signature: str) -> Any:
        return anyio.run(self._async.request_otp, body, signature)
