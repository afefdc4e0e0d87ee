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
EKYCService component for e-KYC retrieval.
"""

from typing import Any

import anyio
import httpx

from fayda_identity.config import FaydaPartnerConfig
from fayda_identity.transport import RequestBody, operation_span, submit_partner_request
from fayda_identity.utils.logger import logger


class EKYCServiceAsync:
    """
    Retrieves e-KYC identity attributes after authentication and consent.

    The config's `partner_id` is the e-KYC partner id.
    """

    def __init__(self, config: FaydaPartnerConfig, client: httpx.AsyncClient | None = None) -> None:
        self.config = config
        self._client = client

    async def request_ekyc(self, body: RequestBody, signature: str) -> Any:
        """
        Requests e-KYC details for an individual.

        Args:
            body: An `EKYCRequest` or an equivalent mapping.
            signature: Detached JWS over the body.

        Returns:
            The platform response body, unchanged.

        Raises:
            TransportError: If the request fails or the platform responds with a non-2xx status.
        """
        with operation_span("fayda.ekyc.request"):
            result = await submit_partner_request(
                self._client, self.config, "kyc", body, signature, "Failed to request e-KYC"
            )
        logger.info("e-KYC request submitted.")
        return result


class EKYCService:
    """
    Sync facade for EKYCServiceAsync.
    Each call uses a client opened and closed on that call's event loop.
    """

    def __init__(self, config: FaydaPartnerConfig) -> None:
        self._async = EKYCServiceAsync(config)

    def request_ekyc(self, body: RequestBody, signature: str) -> Any:
        return anyio.run(self._async.request_ekyc, body, signature)
