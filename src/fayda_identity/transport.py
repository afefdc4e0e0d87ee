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
Shared HTTP plumbing for the Fayda adapters.

Every adapter call performs exactly one request. Clients are either injected by the caller or
created for the duration of a single call; nothing is pooled, cached or retried here.
"""

from collections.abc import AsyncIterator, Iterator, Mapping
from contextlib import asynccontextmanager, contextmanager
from typing import Any

import httpx
from opentelemetry import trace
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.trace import Span, Status, StatusCode
from pydantic import BaseModel

from fayda_identity.config import FaydaPartnerConfig
from fayda_identity.exceptions import FaydaIdentityError, TransportError
from fayda_identity.utils.logger import logger

tracer = trace.get_tracer(__name__)

NO_DETAILS = "No additional details"

RequestBody = BaseModel | Mapping[str, Any]


@asynccontextmanager
async def open_client(client: httpx.AsyncClient | None, timeout: float) -> AsyncIterator[httpx.AsyncClient]:
    """
    Yields the injected client, or a transient instrumented client closed after the call.

    Args:
        client: Caller-owned client (optional). It is never closed here.
        timeout: Timeout in seconds for a transient client.
    """
    if client is not None:
        yield client
    else:
        async with httpx.AsyncClient(timeout=timeout) as transient:
            HTTPXClientInstrumentor().instrument_client(transient)
            yield transient


@contextmanager
def operation_span(name: str) -> Iterator[Span]:
    """
    Runs one adapter operation inside an OpenTelemetry span and records its outcome.
    """
    with tracer.start_as_current_span(name, record_exception=False, set_status_on_exception=False) as span:
        try:
            yield span
        except FaydaIdentityError as e:
            span.record_exception(e)
            span.set_status(Status(StatusCode.ERROR, e.context))
            raise
        span.set_status(Status(StatusCode.OK))


def partner_url(base_url: str, service: str, license_key: str, partner_id: str, api_key: str) -> str:
    """
    Builds `{base_url}/idauthentication/v1/{service}/{license_key}/{partner_id}/{api_key}`.
    """
    return f"{base_url}/idauthentication/v1/{service}/{license_key}/{partner_id}/{api_key}"


def partner_headers(authorization_token: str, signature: str) -> dict[str, str]:
    """
    Headers required on OTP, authentication and e-KYC calls.

    Args:
        authorization_token: Token from the client credential exchange, sent as-is.
        signature: Caller-computed detached JWS over the request body.
    """
    return {
        "Authorization": authorization_token,
        "Signature": signature,
        "Content-Type": "application/json",
    }


def serialize_body(body: RequestBody) -> dict[str, Any]:
    """
    Converts a request model to its wire form. Plain mappings are transported unchanged.
    """
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", by_alias=True, exclude_none=True)
    return dict(body)


async def send(client: httpx.AsyncClient, method: str, url: str, context: str, **kwargs: Any) -> httpx.Response:
    """
    Issues a single request and normalizes failures.

    Args:
        client: The async HTTP client.
        method: HTTP method.
        url: Target URL.
        context: Context phrase prefixed to any error message.
        **kwargs: Passed through to `httpx.AsyncClient.request`.

    Returns:
        httpx.Response: A 2xx response.

    Raises:
        TransportError: On network failures or non-2xx responses. The response body, if any,
            is carried as the error details.
    """
    try:
        response = await client.request(method, url, **kwargs)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        # URLs may embed partner API keys, so neither the URL nor str(e) is logged
        logger.error(f"{context}: server responded with status {status_code}")
        raise TransportError(
            context, f"Request failed with status code {status_code}", e.response.text or NO_DETAILS
        ) from e
    except httpx.HTTPError as e:
        logger.error(f"{context}: {type(e).__name__}")
        raise TransportError(context, str(e) or type(e).__name__, NO_DETAILS) from e
    return response


def parse_json(response: httpx.Response, context: str) -> Any:
    """
    Decodes a JSON response body.

    Raises:
        TransportError: If a successful response does not carry valid JSON.
    """
    try:
        return response.json()
    except ValueError as e:
        logger.error(f"{context}: response body is not valid JSON")
        raise TransportError(context, f"Invalid JSON response: {e}", response.text or NO_DETAILS) from e


async def submit_partner_request(
    client: httpx.AsyncClient | None,
    config: FaydaPartnerConfig,
    service: str,
    body: RequestBody,
    signature: str,
    context: str,
) -> Any:
    """
    POSTs a signed JSON request to a partner-authenticated identity-authentication endpoint.

    Args:
        client: External async client (optional).
        config: Partner configuration supplying the URL path segments and authorization token.
        service: The endpoint family (`otp`, `auth` or `kyc`).
        body: Request model or plain mapping.
        signature: Detached JWS over the body.
        context: Context phrase prefixed to any error message.

    Returns:
        The parsed response body, unchanged. Embedded `errors` entries are left to the caller.
    """
    url = partner_url(
        config.base_url,
        service,
        config.fisp_license_key,
        config.partner_id,
        config.partner_api_key.get_secret_value(),
    )
    headers = partner_headers(config.authorization_token.get_secret_value(), signature)

    async with open_client(client, config.http_timeout) as http_client:
        response = await send(http_client, "POST", url, context, json=serialize_body(body), headers=headers)
        return parse_json(response, context)
