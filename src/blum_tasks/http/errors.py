"""Infrastructure error types raised by remote clients."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TransportError(Exception):
    """Base remote call failure: network, timeout, server error or unusable response."""

    message: str
    code: str = "transport"

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class ResponseParseError(TransportError):
    """Remote answered, but the body does not have the expected shape."""

    code: str = "parse"


@dataclass(slots=True)
class AuthorizationError(TransportError):
    """Remote rejected the session credentials."""

    code: str = "unauthorized"
