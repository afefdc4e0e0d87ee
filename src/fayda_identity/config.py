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
Configuration for the fayda-identity package.
"""

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FaydaOIDCConfig(BaseSettings):
    """
    Configuration settings for the Fayda OIDC client.

    Attributes:
        client_id (str): The OIDC Client ID registered with the platform.
        redirect_uri (str): The callback URI registered for the client.
        authorization_endpoint (str): The authorization endpoint URL.
        token_endpoint (str): The token endpoint URL.
        userinfo_endpoint (str): The userinfo endpoint URL.
        http_timeout (float): Timeout in seconds handed to the HTTP transport.
    """

    model_config = SettingsConfigDict(
        env_prefix="FAYDA_OIDC_",
        case_sensitive=False,
        frozen=True,
    )

    client_id: str
    redirect_uri: str
    authorization_endpoint: str
    token_endpoint: str
    userinfo_endpoint: str
    http_timeout: float = Field(default=30.0, gt=0, description="Timeout in seconds for each IdP request.")


class FaydaPartnerConfig(BaseSettings):
    """
    Configuration settings for the partner-authenticated REST services (OTP, auth, e-KYC).

    Attributes:
        base_url (str): Base URL of the identity platform (e.g. https://auth.fayda.et).
        authorization_token (SecretStr): Token obtained from the client credential exchange.
        fisp_license_key (str): The FISP license key path segment.
        partner_id (str): The partner id path segment (auth or e-KYC partner id where relevant).
        partner_api_key (SecretStr): The partner API key path segment.
        http_timeout (float): Timeout in seconds handed to the HTTP transport.
    """

    model_config = SettingsConfigDict(
        env_prefix="FAYDA_",
        case_sensitive=False,
        frozen=True,
    )

    base_url: str
    authorization_token: SecretStr
    fisp_license_key: str
    partner_id: str
    partner_api_key: SecretStr
    http_timeout: float = Field(default=30.0, gt=0, description="Timeout in seconds for each platform request.")

    @field_validator("base_url")
    @classmethod
    def normalize_base_url(cls, v: str) -> str:
        """
        Strips whitespace and trailing slashes so paths can be appended directly.

        Raises:
            ValueError: If the URL is empty or lacks an http(s) scheme.
        """
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got '{v}'")
        return v
