"""JSON HTTP client with retries, timeout and bearer authorization."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from blum_tasks.http.errors import AuthorizationError, ResponseParseError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; BlumTasks/0.1)"
UNAUTHORIZED_STATUS_CODES = frozenset({401, 403})
THROTTLED_STATUS_CODES = frozenset({408, 429})
HTTP_SERVER_ERROR = 500


@dataclass(slots=True)
class ApiResponse:
    """Decoded response of one API call."""

    url: str
    status_code: int
    payload: object

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class BlumHttpClient:
    """httpx wrapper that turns transport problems into ``TransportError``.

    Client errors (4xx other than authorization failures and throttling) are
    returned to the caller, because the remote reports "not eligible right now"
    that way and the caller decides whether it is fatal.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        user_agent: str = DEFAULT_USER_AGENT,
        headers: dict[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout = httpx.Timeout(timeout_seconds, connect=10.0)
        base_headers = {
            "User-Agent": user_agent,
            "Accept": "application/json",
        }
        if headers:
            base_headers.update(headers)
        self._client = httpx.Client(
            timeout=self._timeout,
            headers=base_headers,
            transport=transport or httpx.HTTPTransport(retries=max_retries),
            follow_redirects=True,
        )

    @property
    def authorization(self) -> str | None:
        return self._client.headers.get("Authorization")

    def set_authorization(self, token: str) -> None:
        """Attach the bearer token to every following request."""

        self._client.headers["Authorization"] = token

    def get_json(self, url: str) -> ApiResponse:
        return self._decode(self._send("GET", url))

    def post_json(self, url: str, payload: object | None = None) -> ApiResponse:
        return self._decode(self._send("POST", url, payload=payload))

    def post_text(self, url: str, payload: object | None = None) -> str:
        """POST and return the raw body for endpoints that do not answer JSON."""

        response = self._send("POST", url, payload=payload)
        return response.text

    def _send(self, method: str, url: str, *, payload: object | None = None) -> httpx.Response:
        try:
            if payload is None:
                response = self._client.request(method, url)
            else:
                response = self._client.request(method, url, json=payload)
        except httpx.TimeoutException as exc:
            logger.warning("Timeout calling %s %s", method, url)
            raise TransportError(message=f"Timeout calling {url}", code="timeout") from exc
        except httpx.HTTPError as exc:
            logger.warning("HTTP error calling %s %s: %s", method, url, exc)
            raise TransportError(message=f"HTTP error calling {url}: {exc}") from exc

        if response.status_code in UNAUTHORIZED_STATUS_CODES:
            raise AuthorizationError(
                message=f"Remote rejected credentials for {url}: HTTP {response.status_code}",
            )
        if response.status_code in THROTTLED_STATUS_CODES:
            logger.warning("Throttled calling %s %s: %s", method, url, response.status_code)
            raise TransportError(
                message=f"Remote throttled {url}: HTTP {response.status_code}",
                code=str(response.status_code),
            )
        if response.status_code >= HTTP_SERVER_ERROR:
            logger.warning("Server error calling %s %s: %s", method, url, response.status_code)
            raise TransportError(
                message=f"Server error calling {url}: HTTP {response.status_code}",
                code=str(response.status_code),
            )
        return response

    @staticmethod
    def _decode(response: httpx.Response) -> ApiResponse:
        url = str(response.request.url)
        try:
            payload = response.json()
        except ValueError as exc:
            raise ResponseParseError(
                message=f"Malformed JSON from {url} (HTTP {response.status_code})",
            ) from exc
        return ApiResponse(
            url=url,
            status_code=response.status_code,
            payload=payload,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> BlumHttpClient:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()
