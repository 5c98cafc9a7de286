"""Runtime configuration for the Blum client."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from urllib.parse import urlparse

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(slots=True)
class AuthSettings:
    """Session acquisition settings."""

    query_id: str = ""
    referral_token: str = ""


@dataclass(slots=True)
class EndpointSettings:
    """Base URLs of the remote service domains."""

    auth_base_url: str = "https://user-domain.blum.codes"
    gateway_base_url: str = "https://gateway.blum.codes"
    game_base_url: str = "https://game-domain.blum.codes"
    earn_base_url: str = "https://earn-domain.blum.codes"

    def all_urls(self) -> dict[str, str]:
        return {
            "BLUM_AUTH_BASE_URL": self.auth_base_url,
            "BLUM_GATEWAY_BASE_URL": self.gateway_base_url,
            "BLUM_GAME_BASE_URL": self.game_base_url,
            "BLUM_EARN_BASE_URL": self.earn_base_url,
        }


@dataclass(slots=True)
class HttpSettings:
    """Transport settings shared by every remote call."""

    request_timeout_seconds: float = 30.0
    max_retries: int = 3


@dataclass(slots=True)
class TaskSettings:
    """Earn-tasks run settings."""

    settle_seconds: float = 0.0


@dataclass(slots=True)
class GameSettings:
    """Play-pass mini game settings."""

    enabled: bool = True
    min_points: int = 200
    max_points: int = 240
    duration_seconds: float = 60.0
    max_rounds: int = 1


@dataclass(slots=True)
class Settings:
    """Application settings grouped by domain concerns."""

    auth: AuthSettings = field(default_factory=AuthSettings)
    endpoints: EndpointSettings = field(default_factory=EndpointSettings)
    http: HttpSettings = field(default_factory=HttpSettings)
    tasks: TaskSettings = field(default_factory=TaskSettings)
    game: GameSettings = field(default_factory=GameSettings)
    daily_reward_offset: int = -420
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment with defaults matching the public service."""

        defaults = EndpointSettings()
        return cls(
            auth=AuthSettings(
                query_id=os.getenv("BLUM_QUERY_ID", os.getenv("QUERY_ID", "")).strip(),
                referral_token=os.getenv("BLUM_REFERRAL_TOKEN", "").strip(),
            ),
            endpoints=EndpointSettings(
                auth_base_url=_base_url("BLUM_AUTH_BASE_URL", defaults.auth_base_url),
                gateway_base_url=_base_url("BLUM_GATEWAY_BASE_URL", defaults.gateway_base_url),
                game_base_url=_base_url("BLUM_GAME_BASE_URL", defaults.game_base_url),
                earn_base_url=_base_url("BLUM_EARN_BASE_URL", defaults.earn_base_url),
            ),
            http=HttpSettings(
                request_timeout_seconds=float(
                    os.getenv("BLUM_REQUEST_TIMEOUT_SECONDS", "30.0"),
                ),
                max_retries=int(os.getenv("BLUM_MAX_RETRIES", "3")),
            ),
            tasks=TaskSettings(
                settle_seconds=float(os.getenv("BLUM_TASK_SETTLE_SECONDS", "0")),
            ),
            game=GameSettings(
                enabled=_env_bool("BLUM_GAME_ENABLED", default=True),
                min_points=int(os.getenv("BLUM_GAME_MIN_POINTS", "200")),
                max_points=int(os.getenv("BLUM_GAME_MAX_POINTS", "240")),
                duration_seconds=float(os.getenv("BLUM_GAME_DURATION_SECONDS", "60")),
                max_rounds=int(os.getenv("BLUM_GAME_MAX_ROUNDS", "1")),
            ),
            daily_reward_offset=int(os.getenv("BLUM_DAILY_REWARD_OFFSET", "-420")),
            log_level=os.getenv("BLUM_LOG_LEVEL", "WARNING").strip().upper(),
        )

    def validate_for_auth(self) -> None:
        """Raise configuration error if a session cannot be acquired with these settings."""

        if not self.auth.query_id:
            raise ValueError(
                "Telegram init data is required. Set BLUM_QUERY_ID (or QUERY_ID) in the "
                "environment or in a .env file.",
            )
        for name, url in self.endpoints.all_urls().items():
            _validate_base_url(name, url)
        if self.http.request_timeout_seconds <= 0:
            raise ValueError("BLUM_REQUEST_TIMEOUT_SECONDS must be > 0.")
        if self.http.max_retries < 0:
            raise ValueError("BLUM_MAX_RETRIES must be >= 0.")
        if self.tasks.settle_seconds < 0:
            raise ValueError("BLUM_TASK_SETTLE_SECONDS must be >= 0.")
        if self.game.min_points < 0 or self.game.min_points > self.game.max_points:
            raise ValueError(
                "Invalid game point range: "
                f"{self.game.min_points}..{self.game.max_points} "
                "(BLUM_GAME_MIN_POINTS must be >= 0 and <= BLUM_GAME_MAX_POINTS).",
            )
        if self.game.duration_seconds < 0:
            raise ValueError("BLUM_GAME_DURATION_SECONDS must be >= 0.")
        if self.game.max_rounds < 0:
            raise ValueError("BLUM_GAME_MAX_ROUNDS must be >= 0.")

    def resolved_log_level(self) -> int:
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"Invalid BLUM_LOG_LEVEL: {self.log_level!r}. "
                f"Expected one of {', '.join(LOG_LEVELS)}.",
            )
        return getattr(logging, self.log_level)


def _base_url(name: str, default: str) -> str:
    return os.getenv(name, default).strip().rstrip("/")


def _validate_base_url(name: str, value: str) -> None:
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError(
            f"Invalid {name}: {value!r}. Expected an absolute URL with http:// or https:// scheme.",
        )


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Invalid boolean value for {name}: {value!r}")
