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
Platform REST services authenticated by partner credentials.
"""

from fayda_identity.services.client_auth import ClientAuthService, ClientAuthServiceAsync
from fayda_identity.services.ekyc import EKYCService, EKYCServiceAsync
from fayda_identity.services.otp import OTPService, OTPServiceAsync
from fayda_identity.services.resident_auth import ResidentAuthService, ResidentAuthServiceAsync

__all__ = [
    "ClientAuthService",
    "ClientAuthServiceAsync",
    "EKYCService",
    "EKYCServiceAsync",
    "OTPService",
    "OTPServiceAsync",
    "ResidentAuthService",
    "ResidentAuthServiceAsync",
]
