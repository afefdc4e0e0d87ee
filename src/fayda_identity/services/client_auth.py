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
ClientAuthService component for the client id / secret key exchange.
"""

import anyio
import httpx
from pydantic import SecretStr

from fayda_identity.exceptions import MissingDataError
from fayda_identity.models import ClientAuthRequest, ClientCredentials
from fayda_identity.transport import open_client, operation_span, send
from fayda_identity.utils.logger import logger

AUTH_COOKIE_NAME = "authorization"


class ClientAuthServiceAsync:
    """
    Exchanges client credentials for the platform authorization token.

    The token is not part of the response body: the platform sets it as the `Authorization`
    cookie. No credentials are stored on the instance.
    """

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        http_timeout: float = 30.0,
    ) -> None:
        """
        Initialize the ClientAuthServiceAsync.

        Args:
            base_url: Base URL of the identity platform.
            client: External async client (optional). If not provided, a transient client is used per call.
            http_timeout: Timeout in seconds for transient clients.
        """
        self.base_url = base_url.strip().rstrip("/")
        self._client = client
        self.http_timeout = http_timeout

    @property
    def url(self) -> str:
        return f"{self.base_url}/v1/authmanager/authenticate/clientidsecretkey"

    async def authenticate_client(self, client_id: str, secret_key: str, app_id: str) -> str:
        """
        Authenticates the client and returns the authorization token.

        Args:
            client_id: The registered client id.
            secret_key: The client secret key.
            app_id: The application id.

        Returns:
            str: The value of the `authorization` cookie.

        Raises:
            TransportError: If the request fails or the platform responds with a non-2xx status.
            MissingDataError: If the response sets no cookies, or no authorization cookie.
        """
        context = "Failed to authenticate client"
        envelope = ClientAuthRequest(
            request=ClientCredentials(client_id=client_id, secret_key=SecretStr(secret_key), app_id=app_id)
        )

        with operation_span("fayda.client_auth") as span:
            span.set_attribute("fayda.client_id", client_id)
            async with open_client(self._client, self.http_timeout) as client:
                response = await send(
                    client,
                    "POST",
                    self.url,
                    context,
                    json=envelope.model_dump(mode="json", by_alias=True),
                )

            token = extract_authorization_cookie(response.headers.get_list("set-cookie"), context)

        logger.info(f"Client {client_id} authenticated.")
        return token


class ClientAuthService:
    """
    Sync facade for ClientAuthServiceAsync.
    Each call uses a client opened and closed on that call's event loop.
    """

    def __init__(self, base_url: str, http_timeout: float = 30.0) -> None:
        self._async = ClientAuthServiceAsync(base_url, http_timeout=http_timeout)

    def authenticate_client(self, client_id: str, secret_key: str, app_id: str) -> str:
        return anyio.run(self._async.authenticate_client, client_id, secret_key, app_id)


def extract_authorization_cookie(set_cookie_headers: list[str], context: str) -> str:
    """
    Returns the value of the first cookie named `authorization` (case-insensitive).

    Args:
        set_cookie_headers: Raw `Set-Cookie` header values, one per cookie.
        context: Context phrase for error messages.

    Raises:
        MissingDataError: If the list is empty or holds no authorization cookie.
    """
    if not set_cookie_headers:
        logger.error(f"{context}: response carried no Set-Cookie header")
        raise MissingDataError(context, "No 'Set-Cookie' header found. Unable to retrieve auth token.")

    for cookie in set_cookie_headers:
        name_value = cookie.split(";", 1)[0]
        name, sep, value = name_value.partition("=")
        if sep and name.strip().lower() == AUTH_COOKIE_NAME:
            return value.strip()

    logger.error(f"{context}: no authorization cookie among {len(set_cookie_headers)} cookie(s)")
    raise MissingDataError(context, "Authorization cookie not found in Set-Cookie header.")
