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
OIDC client for the Fayda authorization code flow with PKCE.
"""

from typing import Any, cast
from urllib.parse import urlencode

import anyio
import httpx
from authlib.common.encoding import json_loads, to_bytes, urlsafe_b64decode

from fayda_identity.config import FaydaOIDCConfig
from fayda_identity.exceptions import IdTokenDecodeError
from fayda_identity.models import TokenSet
from fayda_identity.pkce import generate_code_challenge, generate_code_verifier
from fayda_identity.transport import open_client, operation_span, parse_json, send
from fayda_identity.utils.logger import logger

SCOPE = "openid profile email"
CODE_CHALLENGE_METHOD = "S256"


class FaydaOIDCAsync:
    """
    Async OIDC client (The Core).

    A PKCE code verifier is generated once per instance and used for exactly one authorization
    code exchange. Concurrent login attempts need distinct instances.

    Attributes:
        config (FaydaOIDCConfig): Client id, redirect URI and endpoint URLs.
    """

    def __init__(self, config: FaydaOIDCConfig, client: httpx.AsyncClient | None = None) -> None:
        """
        Initialize the FaydaOIDCAsync client.

        Args:
            config: The OIDC configuration.
            client: External async client (optional). If not provided, a transient client is used per call.
        """
        self.config = config
        self._client = client
        self._code_verifier = generate_code_verifier()

    @property
    def code_verifier(self) -> str:
        return self._code_verifier

    def get_authorization_url(self, state: str) -> str:
        """
        Builds the URL the user agent is redirected to in order to start the login.

        Args:
            state: Opaque caller-supplied value echoed back on the redirect.

        Returns:
            str: The authorization endpoint with the PKCE-bound query string.
        """
        params = {
            "client_id": self.config.client_id,
            "response_type": "code",
            "redirect_uri": self.config.redirect_uri,
            "scope": SCOPE,
            "state": state,
            "code_challenge": generate_code_challenge(self._code_verifier),
            "code_challenge_method": CODE_CHALLENGE_METHOD,
        }
        return f"{self.config.authorization_endpoint}?{urlencode(params)}"

    async def exchange_code_for_tokens(self, authorization_code: str) -> TokenSet:
        """
        Exchanges an authorization code for tokens, proving possession of the code verifier.

        Args:
            authorization_code: The code received on the redirect URI.

        Returns:
            TokenSet: The token endpoint's JSON body.

        Raises:
            TransportError: If the request fails or the endpoint responds with a non-2xx status.
        """
        context = "Failed to exchange code for tokens"
        data = {
            "grant_type": "authorization_code",
            "code": authorization_code,
            "redirect_uri": self.config.redirect_uri,
            "client_id": self.config.client_id,
            "code_verifier": self._code_verifier,
        }

        with operation_span("fayda.oidc.exchange_code"):
            async with open_client(self._client, self.config.http_timeout) as client:
                response = await send(
                    client,
                    "POST",
                    self.config.token_endpoint,
                    context,
                    data=data,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                )
                tokens = parse_json(response, context)

        logger.info("Authorization code exchanged for tokens.")
        return cast("TokenSet", tokens)

    async def get_user_info(self, access_token: str) -> Any:
        """
        Retrieves the user's claims from the userinfo endpoint.

        Args:
            access_token: The access token from the code exchange.

        Returns:
            The parsed userinfo response body.

        Raises:
            TransportError: If the request fails or the endpoint responds with a non-2xx status.
        """
        context = "Failed to fetch user information"

        with operation_span("fayda.oidc.user_info"):
            async with open_client(self._client, self.config.http_timeout) as client:
                response = await send(
                    client,
                    "GET",
                    self.config.userinfo_endpoint,
                    context,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                return parse_json(response, context)

    def decode_id_token(self, id_token: str) -> dict[str, Any]:
        """
        Decodes the claims of an ID token. The signature is NOT verified.

        Args:
            id_token: The compact-serialized JWT.

        Returns:
            dict[str, Any]: The payload claims.

        Raises:
            IdTokenDecodeError: If the token is not a well-formed JWT.
        """
        return decode_id_token(id_token)


class FaydaOIDC:
    """
    Sync facade for FaydaOIDCAsync.
    Runs each network call to completion on its own event loop, over a client opened and closed
    inside that loop. Callers that share a client use FaydaOIDCAsync.
    """

    def __init__(self, config: FaydaOIDCConfig) -> None:
        self._async = FaydaOIDCAsync(config)

    @property
    def code_verifier(self) -> str:
        return self._async.code_verifier

    def get_authorization_url(self, state: str) -> str:
        return self._async.get_authorization_url(state)

    def exchange_code_for_tokens(self, authorization_code: str) -> TokenSet:
        return anyio.run(self._async.exchange_code_for_tokens, authorization_code)

    def get_user_info(self, access_token: str) -> Any:
        return anyio.run(self._async.get_user_info, access_token)

    def decode_id_token(self, id_token: str) -> dict[str, Any]:
        return self._async.decode_id_token(id_token)


def decode_id_token(id_token: str) -> dict[str, Any]:
    """
    Decodes the payload segment of a compact JWT without verifying its signature.

    Raises:
        IdTokenDecodeError: If the token does not have three segments, or the payload is not
            a base64url-encoded JSON object.
    """
    context = "Failed to decode ID token"
    if not isinstance(id_token, str):
        raise IdTokenDecodeError(context, f"expected a string, got {type(id_token).__name__}")

    segments = id_token.split(".")
    if len(segments) != 3 or not segments[1]:
        raise IdTokenDecodeError(context, "token must consist of three dot-separated segments")

    try:
        claims = json_loads(urlsafe_b64decode(to_bytes(segments[1])))
    except ValueError as e:
        raise IdTokenDecodeError(context, f"invalid payload segment ({e})") from e

    if not isinstance(claims, dict):
        raise IdTokenDecodeError(context, "payload is not a JSON object")
    return claims
