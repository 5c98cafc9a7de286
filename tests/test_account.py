from __future__ import annotations

import json
import random

import allure
import httpx
import pytest

from blum_tasks.account.auth import authenticate, authenticated_client
from blum_tasks.account.game import GameService
from blum_tasks.account.service import AccountService
from blum_tasks.config import AuthSettings, GameSettings, Settings
from blum_tasks.http.client import BlumHttpClient
from blum_tasks.http.errors import AuthorizationError, ResponseParseError

pytestmark = [
    allure.epic("Account"),
    allure.feature("Session, Farming and Game"),
]

_BALANCE = {
    "availableBalance": "1250.5",
    "playPasses": 3,
    "isFastFarmingEnabled": True,
    "timestamp": 1_700_000_000_000,
    "farming": {
        "startTime": 1_700_000_000_000,
        "endTime": 1_700_028_800_000,
        "earningsRate": "0.002",
        "balance": "57.6",
    },
}


def _settings(**overrides) -> Settings:
    return Settings(auth=AuthSettings(query_id="query_id=abc"), **overrides)


def _client(handler) -> BlumHttpClient:
    return BlumHttpClient(transport=httpx.MockTransport(handler))


def _auth_ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"token": {"access": "jwt-1", "refresh": "r"}})


def test_authenticate_installs_bearer_token() -> None:
    bodies: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.read()))
        assert request.url.path == "/api/v1/auth/provider/PROVIDER_TELEGRAM_MINI_APP"
        return _auth_ok(request)

    with _client(handler) as client:
        token = authenticate(client, _settings())

    assert token == "Bearer jwt-1"
    assert client.authorization == "Bearer jwt-1"
    assert bodies == [{"query": "query_id=abc"}]


def test_authenticate_sends_referral_token_when_configured() -> None:
    bodies: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.read()))
        return _auth_ok(request)

    settings = Settings(auth=AuthSettings(query_id="q", referral_token="ref"))
    with _client(handler) as client:
        authenticate(client, settings)

    assert bodies == [{"query": "q", "referralToken": "ref"}]


def test_authenticate_rejected_init_data_raises() -> None:
    handler = lambda request: httpx.Response(400, json={"message": "Invalid init data"})  # noqa: E731

    with _client(handler) as client, pytest.raises(AuthorizationError, match="Invalid init data"):
        authenticate(client, _settings())


def test_authenticate_without_access_token_raises() -> None:
    with _client(lambda request: httpx.Response(200, json={"token": {}})) as client:
        with pytest.raises(ResponseParseError, match="token.access"):
            authenticate(client, _settings())


def test_authenticated_client_yields_ready_session() -> None:
    seen: list[str | None] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("PROVIDER_TELEGRAM_MINI_APP"):
            return _auth_ok(request)
        seen.append(request.headers.get("Authorization"))
        return httpx.Response(200, json={"username": "alice"})

    settings = _settings()
    with authenticated_client(settings, transport=httpx.MockTransport(handler)) as client:
        assert AccountService(client, settings).get_username() == "alice"

    assert seen == ["Bearer jwt-1"]


def test_get_balance_parses_farming_cycle() -> None:
    with _client(lambda request: httpx.Response(200, json=_BALANCE)) as client:
        balance = AccountService(client, _settings()).get_balance()

    assert balance.available_balance == "1250.5"
    assert balance.play_passes == 3
    assert balance.is_fast_farming_enabled is True
    assert balance.farming is not None
    assert balance.farming.balance == "57.6"
    assert balance.farming.end_time == 1_700_028_800_000


def test_get_balance_without_farming() -> None:
    payload = {"availableBalance": "0", "playPasses": 0}
    with _client(lambda request: httpx.Response(200, json=payload)) as client:
        balance = AccountService(client, _settings()).get_balance()

    assert balance.farming is None
    assert balance.play_passes == 0


def test_get_balance_rejects_non_numeric_play_passes() -> None:
    payload = {"availableBalance": "0", "playPasses": "lots"}
    with _client(lambda request: httpx.Response(200, json=payload)) as client:
        with pytest.raises(ResponseParseError, match="Expected an integer"):
            AccountService(client, _settings()).get_balance()


def test_claim_farming_returns_remote_message() -> None:
    payload = {"message": "Need to start farm"}
    with _client(lambda request: httpx.Response(400, json=payload)) as client:
        assert AccountService(client, _settings()).claim_farming() == "Need to start farm"


def test_start_farming_returns_session() -> None:
    payload = {"startTime": 1, "endTime": 2, "earningsRate": "0.002", "balance": "0"}
    with _client(lambda request: httpx.Response(200, json=payload)) as client:
        session = AccountService(client, _settings()).start_farming()

    assert (session.start_time, session.end_time, session.earnings_rate) == (1, 2, "0.002")


def test_claim_daily_reward_sends_offset() -> None:
    urls: list[httpx.URL] = []

    def handler(request: httpx.Request) -> httpx.Response:
        urls.append(request.url)
        return httpx.Response(200, json={"message": "same day"})

    with _client(handler) as client:
        message = AccountService(client, _settings(daily_reward_offset=-180)).claim_daily_reward()

    assert message == "same day"
    assert urls[0].path == "/api/v1/daily-reward"
    assert urls[0].params["offset"] == "-180"


class _FixedRandom(random.Random):
    def randint(self, a: int, b: int) -> int:
        return b


def test_play_round_waits_then_claims_points_in_range() -> None:
    claims: list[dict[str, object]] = []
    pauses: list[float] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/game/play"):
            return httpx.Response(200, json={"gameId": "game-7"})
        claims.append(json.loads(request.read()))
        return httpx.Response(200, text="OK")

    settings = _settings(game=GameSettings(min_points=200, max_points=240, duration_seconds=30))
    with _client(handler) as client:
        game = GameService(client, settings, sleep=pauses.append, rng=_FixedRandom())
        game_round = game.play_round()

    assert game_round.game_id == "game-7"
    assert game_round.points == 240
    assert game_round.status == "OK"
    assert claims == [{"gameId": "game-7", "points": 240}]
    assert pauses == [30]


def test_play_round_without_game_id_raises() -> None:
    handler = lambda request: httpx.Response(400, json={"message": "not enough play passes"})  # noqa: E731

    with _client(handler) as client, pytest.raises(ResponseParseError, match="gameId"):
        GameService(client, _settings(), sleep=lambda _: None).play_round()


@pytest.mark.parametrize(("passes", "max_rounds", "expected"), [(3, 1, 1), (1, 5, 1), (0, 2, 0)])
def test_play_available_is_bounded(passes: int, max_rounds: int, expected: int) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/game/play"):
            return httpx.Response(200, json={"gameId": "g"})
        return httpx.Response(200, text="OK")

    settings = _settings(game=GameSettings(duration_seconds=0, max_rounds=max_rounds))
    with _client(handler) as client:
        rounds = GameService(client, settings, rng=random.Random(1)).play_available(passes)

    assert len(rounds) == expected
    assert all(200 <= game_round.points <= 240 for game_round in rounds)
