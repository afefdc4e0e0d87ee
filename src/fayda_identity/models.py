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
Data models for the fayda-identity package.

Python attributes are snake_case; the wire field names used by the platform are the aliases.
"""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, NotRequired, TypedDict

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_serializer


def iso_timestamp() -> str:
    """
    Returns the current UTC time in the platform's request time format.

    Returns:
        str: ISO-8601 with millisecond precision and a `Z` suffix, e.g. 2025-01-01T10:00:00.000Z.
    """
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class IdType(StrEnum):
    UIN = "UIN"
    VID = "VID"


class OtpChannel(StrEnum):
    EMAIL = "EMAIL"
    PHONE = "PHONE"


class TokenSet(TypedDict):
    """
    Token endpoint response body.
    """

    access_token: str
    id_token: str
    token_type: str
    expires_in: int
    refresh_token: NotRequired[str]


class RequestedAuth(BaseModel):
    """
    Authentication factors requested from the platform.
    """

    model_config = ConfigDict(frozen=True)

    otp: bool = False
    demo: bool = False
    bio: bool = False


class RequestEnvelope(BaseModel):
    """
    Fields shared by every identity-authentication request.

    Attributes:
        id (str): The API id (e.g. "fayda.identity.otp").
        version (str): The API version.
        transaction_id (str): Caller-generated transaction id, reused across OTP and auth calls.
        request_time (str): ISO-8601 request timestamp. Defaults to now.
        env (str): Target environment tag (e.g. "Developer", "Production").
        domain_uri (str): The platform domain URI.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    version: str = "1.0"
    transaction_id: str = Field(..., alias="transactionID")
    request_time: str = Field(default_factory=iso_timestamp, alias="requestTime")
    env: str
    domain_uri: str = Field(..., alias="domainUri")


class OTPRequest(RequestEnvelope):
    """
    OTP generation request for a UIN or VID over a delivery channel.
    """

    id: str = "fayda.identity.otp"
    individual_id: str | None = Field(default=None, alias="individualId")
    id_type: IdType = Field(..., alias="idType")
    otp_channel: OtpChannel = Field(..., alias="otpChannel")


class ResidentAuthRequest(RequestEnvelope):
    """
    Demographic, biometric or OTP authentication request.

    The session key, HMAC and request block are produced (encrypted) by the caller and only
    transported by this library.
    """

    id: str = "fayda.identity.auth"
    requested_auth: RequestedAuth = Field(default_factory=RequestedAuth, alias="requestedAuth")
    individual_id: str = Field(..., alias="individualId")
    individual_id_type: IdType = Field(..., alias="individualIdType")
    consent_obtained: bool = Field(..., alias="consentObtained")
    thumbprint: str
    request_session_key: str = Field(..., alias="requestSessionKey")
    request_hmac: str = Field(..., alias="requestHMAC")
    request: str


class EKYCRequest(ResidentAuthRequest):
    """
    e-KYC retrieval request. Same shape as an authentication request.
    """

    id: str = "fayda.identity.kyc"
    secondary_lang_code: str | None = Field(default=None, alias="secondaryLangCode")


class ClientCredentials(BaseModel):
    """
    Credentials exchanged for a platform authorization token.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    client_id: str = Field(..., alias="clientId")
    secret_key: SecretStr = Field(..., alias="secretKey")
    app_id: str = Field(..., alias="appId")

    @field_serializer("secret_key")
    def reveal_secret_key(self, value: SecretStr) -> str:
        return value.get_secret_value()


class ClientAuthRequest(BaseModel):
    """
    Envelope for the client id / secret key authentication call.
    """

    model_config = ConfigDict(frozen=True)

    id: str = "fayda.client.authenticate"
    version: str = "1.0"
    requesttime: str = Field(default_factory=iso_timestamp)
    metadata: dict[str, Any] | None = None
    request: ClientCredentials
