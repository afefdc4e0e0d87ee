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
Custom exceptions for the fayda-identity package.
"""


class FaydaIdentityError(Exception):
    """
    Base exception for all fayda-identity errors.

    The message is composed of a fixed per-operation context phrase, the reason reported by the
    underlying failure and, when available, the detail returned by the remote service.

    Attributes:
        context (str): The operation context (e.g. "Failed to request OTP").
        reason (str): The underlying failure's message.
        details (str | None): Response body content or other diagnostic detail.
    """

    def __init__(self, context: str, reason: str, details: str | None = None) -> None:
        self.context = context
        self.reason = reason
        self.details = details
        message = f"{context}: {reason}"
        if details is not None:
            message = f"{message} - {details}"
        super().__init__(message)


class TransportError(FaydaIdentityError):
    """Raised on network failures, non-2xx responses or undecodable response bodies."""


class MissingDataError(FaydaIdentityError):
    """Raised when an expected piece of a successful response (header, cookie) is absent."""


class IdTokenDecodeError(FaydaIdentityError):
    """Raised when an ID token is not a well-formed JWT."""
