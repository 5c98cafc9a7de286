"""Session acquisition from Telegram mini-app init data."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import httpx

from blum_tasks.config import Settings
from blum_tasks.http.client import BlumHttpClient
from blum_tasks.http.errors import AuthorizationError, ResponseParseError

logger = logging.getLogger(__name__)

AUTH_PATH = "/api/v1/auth/provider/PROVIDER_TELEGRAM_MINI_APP"


def authenticate(client: BlumHttpClient, settings: Settings) -> str:
    """Exchange init data for a bearer token and install it on the client."""

    payload = {"query": settings.auth.query_id}
    if settings.auth.referral_token:
        payload["referralToken"] = settings.auth.referral_token

    response = client.post_json(f"{settings.endpoints.auth_base_url}{AUTH_PATH}", payload)
    if not response.is_success:
        message = _payload_message(response.payload)
        raise AuthorizationError(
            message=f"Authentication failed: HTTP {response.status_code} {message}".strip(),
        )
    access = _access_token(response.payload)
    token = f"Bearer {access}"
    client.set_authorization(token)
    logger.info("Authenticated session acquired")
    return token


@contextmanager
def authenticated_client(
    settings: Settings,
    *,
    transport: httpx.BaseTransport | None = None,
) -> Iterator[BlumHttpClient]:
    """Open an HTTP client for one command invocation and authenticate it."""

    with BlumHttpClient(
        timeout_seconds=settings.http.request_timeout_seconds,
        max_retries=settings.http.max_retries,
        transport=transport,
    ) as client:
        authenticate(client, settings)
        yield client


def _access_token(payload: object) -> str:
    token = payload.get("token") if isinstance(payload, dict) else None
    access = token.get("access") if isinstance(token, dict) else None
    if not isinstance(access, str) or not access:
        raise ResponseParseError(message="Authentication response has no token.access")
    return access


def _payload_message(payload: object) -> str:
    if isinstance(payload, dict):
        return str(payload.get("message") or "")
    return ""
