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
PKCE (RFC 7636) helpers for the authorization code flow.
"""

import base64
import hashlib
import secrets


def generate_code_verifier() -> str:
    """
    Generates a random PKCE code verifier.

    Returns:
        str: 32 cryptographically random bytes, hex encoded (64 characters).
    """
    return secrets.token_hex(32)


def generate_code_challenge(code_verifier: str) -> str:
    """
    Derives the S256 code challenge for a verifier.

    Args:
        code_verifier: The verifier produced by `generate_code_verifier`.

    Returns:
        str: The unpadded base64url SHA-256 digest of the verifier (43 characters).
    """
    digest = hashlib.sha256(code_verifier.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
