"""Tests for the zKillboard client."""

import asyncio

import httpx
import pytest

from data.clients import FixedDelayRateLimiter, ZKillboardClient
from utils.exceptions import ZKillboardError


class RecordingSleep:
    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def make_client(handler, sleep=None, delay=1.1, timeout=5.0) -> ZKillboardClient:
    limiter = FixedDelayRateLimiter(delay=delay, sleep=sleep or RecordingSleep())
    return ZKillboardClient(
        rate_limiter=limiter,
        request_timeout=timeout,
        base_url="https://zkill.test/api",
        user_agent="eve-local-scanner/test",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.mark.asyncio
async def test_stats_request_headers_and_parsing():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["headers"] = request.headers
        return httpx.Response(
            200,
            json={
                "dangerRatio": 80,
                "gangRatio": "abc",
                "shipsLost": 3,
                "topLists": [{"type": "character", "values": []}],
                "activepvp": {"kills": 4},
            },
        )

    client = make_client(handler)
    stats = await client.get_character_stats(90000001)

    assert seen["path"] == "/api/stats/characterID/90000001/"
    assert seen["headers"]["Accept-Encoding"] == "gzip"
    assert seen["headers"]["If-None-Match"] == "0"
    assert seen["headers"]["User-Agent"] == "eve-local-scanner/test"
    assert stats.danger_ratio == 80
    assert stats.gang_ratio is None
    assert stats.ships_lost == 3
    assert stats.top_lists == []


@pytest.mark.asyncio
async def test_stats_non_object_body_is_none():
    client = make_client(lambda request: httpx.Response(200, content=b"null"))

    assert await client.get_character_stats(1) is None


@pytest.mark.asyncio
async def test_recent_kills_skips_malformed_entries():
    payload = [
        {"killmail_id": 1, "zkb": {"hash": "a"}},
        {"killmail_id": 2},
        "garbage",
        {"killmail_id": 3, "zkb": {"hash": "c", "totalValue": 1000.0}},
    ]
    client = make_client(lambda request: httpx.Response(200, json=payload))

    entries = await client.get_recent_kills(1)

    assert [e.killmail_id for e in entries] == [1, 3]
    assert entries[1].zkb.hash == "c"


@pytest.mark.asyncio
async def test_recent_kills_non_list_body_is_none():
    client = make_client(lambda request: httpx.Response(200, json={"error": "x"}))

    assert await client.get_recent_kills(1) is None


@pytest.mark.asyncio
async def test_every_successful_call_waits_once():
    sleep = RecordingSleep()
    client = make_client(lambda request: httpx.Response(200, json=[]), sleep=sleep)

    for character_id in (1, 2, 3):
        await client.get_recent_kills(character_id)

    assert sleep.calls == [1.1, 1.1, 1.1]


@pytest.mark.asyncio
async def test_failed_call_raises_without_waiting():
    sleep = RecordingSleep()
    client = make_client(lambda request: httpx.Response(500), sleep=sleep)

    with pytest.raises(ZKillboardError):
        await client.get_character_stats(1)

    assert sleep.calls == []


@pytest.mark.asyncio
async def test_invalid_json_raises():
    client = make_client(lambda request: httpx.Response(200, content=b"<html>"))

    with pytest.raises(ZKillboardError):
        await client.get_recent_kills(1)


@pytest.mark.asyncio
async def test_timeout_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("slow", request=request)

    with pytest.raises(ZKillboardError):
        await make_client(handler).get_character_stats(1)


@pytest.mark.asyncio
async def test_recent_kills_limit_applies_before_validation():
    payload = [
        {"killmail_id": 1, "zkb": {"hash": "a"}},
        {"killmail_id": 2},
        {"killmail_id": 3, "zkb": {"hash": "c"}},
        {"killmail_id": 4, "zkb": {"hash": "d"}},
        {"killmail_id": 5, "zkb": {"hash": "e"}},
        {"killmail_id": 6, "zkb": {"hash": "f"}},
    ]
    client = make_client(lambda request: httpx.Response(200, json=payload))

    entries = await client.get_recent_kills(1, limit=5)

    assert [e.killmail_id for e in entries] == [1, 3, 4, 5]


@pytest.mark.asyncio
async def test_slow_response_hits_whole_call_timeout():
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(1)
        return httpx.Response(200, json={})

    sleep = RecordingSleep()
    client = make_client(handler, sleep=sleep, timeout=0.05)

    with pytest.raises(ZKillboardError, match="timed out"):
        await client.get_character_stats(1)

    assert sleep.calls == []


class GatedSleep:
    """Holds every rate-limit pause until released."""

    def __init__(self, expected: int):
        self.expected = expected
        self.waiting = 0
        self.all_waiting = asyncio.Event()
        self.release = asyncio.Event()

    async def __call__(self, seconds: float) -> None:
        self.waiting += 1
        if self.waiting == self.expected:
            self.all_waiting.set()
        await self.release.wait()


@pytest.mark.asyncio
async def test_concurrent_calls_pause_independently():
    sleep = GatedSleep(expected=2)
    client = make_client(lambda request: httpx.Response(200, json={}), sleep=sleep)

    calls = asyncio.gather(client.get_character_stats(1), client.get_character_stats(2))
    # Both calls are parked in their pause at the same time
    await asyncio.wait_for(sleep.all_waiting.wait(), timeout=1)
    sleep.release.set()
    results = await calls

    assert len(results) == 2
    assert sleep.waiting == 2
