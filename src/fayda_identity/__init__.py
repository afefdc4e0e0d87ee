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
Client library for the Fayda digital-identity platform: OIDC login with PKCE, client
credential exchange, OTP, resident authentication and e-KYC.
"""

__version__ = "0.1.0"

from .config import FaydaOIDCConfig, FaydaPartnerConfig
from .exceptions import FaydaIdentityError, IdTokenDecodeError, MissingDataError, TransportError
from .models import (
    ClientAuthRequest,
    EKYCRequest,
    IdType,
    OtpChannel,
    OTPRequest,
    RequestedAuth,
    ResidentAuthRequest,
    TokenSet,
)
from .oidc import FaydaOIDC, FaydaOIDCAsync
from .pkce import generate_code_challenge, generate_code_verifier
from .services import (
    ClientAuthService,
    ClientAuthServiceAsync,
    EKYCService,
    EKYCServiceAsync,
    OTPService,
    OTPServiceAsync,
    ResidentAuthService,
    ResidentAuthServiceAsync,
)

__all__ = [
    "ClientAuthRequest",
    "ClientAuthService",
    "ClientAuthServiceAsync",
    "EKYCRequest",
    "EKYCService",
    "EKYCServiceAsync",
    "FaydaIdentityError",
    "FaydaOIDC",
    "FaydaOIDCAsync",
    "FaydaOIDCConfig",
    "FaydaPartnerConfig",
    "IdTokenDecodeError",
    "IdType",
    "MissingDataError",
    "OTPRequest",
    "OTPService",
    "OTPServiceAsync",
    "OtpChannel",
    "RequestedAuth",
    "ResidentAuthRequest",
    "ResidentAuthService",
    "ResidentAuthServiceAsync",
    "TokenSet",
    "TransportError",
    "generate_code_challenge",
    "generate_code_verifier",
]
