"""Tests for the ESI client and its endpoint namespaces."""

import asyncio
import json

import httpx
import pytest

from data.clients import ESIClient
from utils.exceptions import ESIError, ESIRateLimitError, ESIServerError


def make_client(handler, timeout=10.0) -> ESIClient:
    transport = httpx.MockTransport(handler)
    return ESIClient(
        base_url="https://esi.test/latest",
        request_timeout=timeout,
        http_client=httpx.AsyncClient(transport=transport),
    )


@pytest.mark.asyncio
async def test_resolve_character_names_posts_batch_and_reads_characters():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "characters": [{"id": 90000001, "name": "Alpha Pilot"}],
                "corporations": [{"id": 98000001, "name": "Alpha Pilot"}],
            },
        )

    client = make_client(handler)
    resolved = await client.universe.resolve_character_names(
        ["Alpha Pilot", "Nobody Here"]
    )

    assert seen == {
        "method": "POST",
        "path": "/latest/universe/ids/",
        "body": ["Alpha Pilot", "Nobody Here"],
    }
    assert [(r.id, r.name) for r in resolved] == [(90000001, "Alpha Pilot")]


@pytest.mark.asyncio
async def test_resolve_character_names_without_characters_section():
    client = make_client(lambda request: httpx.Response(200, json={}))

    assert await client.universe.resolve_character_names(["Nobody"]) == []


@pytest.mark.asyncio
async def test_character_without_alliance():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/latest/characters/90000001/"
        return httpx.Response(
            200, json={"name": "Alpha Pilot", "corporation_id": 98000001}
        )

    character = await make_client(handler).characters.get_character(90000001)

    assert character.corporation_id == 98000001
    assert character.alliance_id is None


@pytest.mark.asyncio
async def test_killmail_path_includes_hash():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/latest/killmails/123/abc/"
        return httpx.Response(
            200,
            json={
                "killmail_id": 123,
                "victim": {"character_id": 1, "ship_type_id": 587},
                "attackers": [{"character_id": 2, "ship_type_id": 11198}],
            },
        )

    killmail = await make_client(handler).killmails.get_killmail(123, "abc")

    assert killmail.victim.ship_type_id == 587
    assert killmail.attacker_for(2).ship_type_id == 11198
    assert killmail.attacker_for(3) is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "error"),
    [
        (429, ESIRateLimitError),
        (502, ESIServerError),
        (404, ESIError),
    ],
)
async def test_http_errors_map_to_exceptions(status, error):
    client = make_client(lambda request: httpx.Response(status, json={"error": "x"}))

    with pytest.raises(error):
        await client.universe.get_type(587)


@pytest.mark.asyncio
async def test_transport_failure_raises_esi_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(ESIError):
        await make_client(handler).corporations.get_corporation(98000001)


@pytest.mark.asyncio
async def test_timeout_raises_esi_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(ESIError):
        await make_client(handler).alliances.get_alliance(99000001)


@pytest.mark.asyncio
async def test_slow_response_hits_whole_call_timeout():
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(1)
        return httpx.Response(200, json={})

    client = make_client(handler, timeout=0.05)

    with pytest.raises(ESIError, match="timed out"):
        await client.corporations.get_corporation(98000001)


@pytest.mark.asyncio
async def test_malformed_payload_raises_esi_error():
    client = make_client(lambda request: httpx.Response(200, json={"name": "x"}))

    with pytest.raises(ESIError):
        await client.universe.get_type(587)


@pytest.mark.asyncio
async def test_close_leaves_injected_client_open():
    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda r: httpx.Response(200, json={}))
    )
    client = ESIClient(http_client=http_client)

    await client.close()

    assert not http_client.is_closed
    await http_client.aclose()
