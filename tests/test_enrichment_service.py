"""Tests for the per-character enrichment pipeline."""

import asyncio
from types import SimpleNamespace

import pytest

from models.app import AffiliationInfo, CharacterRef
from models.eve import FleetAnalysis, FleetMember, ShipUsageEntry
from models.zkill import KillboardStats
from services import EnrichmentService, ProfileService

RIFTER = ShipUsageEntry(ship_type_id=587, ship_name="Rifter")


def affiliation(id_: int, name: str) -> AffiliationInfo:
    return AffiliationInfo(id=id_, name=name, ticker="T", logo=f"logo/{id_}")


class StubCharacters:
    """Per-method results; an exception instance is raised instead."""

    def __init__(self, **overrides):
        self.results = {
            "get_killboard_stats": KillboardStats.from_payload(
                {"dangerRatio": 60, "topLists": [{"type": "x", "values": []}]}
            ),
            "get_corporation": affiliation(98000001, "Test Corp"),
            "get_alliance": None,
            "get_recent_ships": [RIFTER],
        }
        self.results.update(overrides)
        self.delays: dict[int, float] = {}

    async def _result(self, name, character_id):
        await asyncio.sleep(self.delays.get(character_id, 0))
        result = self.results[name]
        if isinstance(result, Exception):
            raise result
        return result

    async def get_killboard_stats(self, character_id):
        return await self._result("get_killboard_stats", character_id)

    async def get_corporation(self, character_id):
        return await self._result("get_corporation", character_id)

    async def get_alliance(self, character_id):
        return await self._result("get_alliance", character_id)

    async def get_recent_ships(self, character_id):
        return await self._result("get_recent_ships", character_id)


class StubFleet:
    def __init__(self, result=None):
        self.result = result

    async def estimate(self, character_id):
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class StubProfiles:
    def __init__(self, fail_for: set[int] | None = None):
        self.calls = []
        self.fail_for = fail_for or set()

    async def generate(self, stats, recent_ships):
        self.calls.append((stats, recent_ships))
        if stats is not None and stats.danger_ratio in self.fail_for:
            raise RuntimeError("unexpected")
        return "Pilot Type: PvPer"


def make_service(characters=None, fleet=None, profiles=None):
    return EnrichmentService(
        characters or StubCharacters(),
        fleet or StubFleet(),
        profiles or StubProfiles(),
        image_base_url="https://images.test",
    )


@pytest.mark.asyncio
async def test_record_assembled_from_all_branches():
    fleet = FleetAnalysis(
        fleet_members=[FleetMember(ship_type_id=587, ship_name="Rifter", count=3)]
    )
    profiles = StubProfiles()
    service = make_service(fleet=StubFleet(fleet), profiles=profiles)

    record = await service.enrich_character(CharacterRef(id=1, name="Alpha Pilot"))

    assert record.character_id == 1
    assert record.portrait == "https://images.test/characters/1/portrait"
    assert record.corporation.name == "Test Corp"
    assert record.alliance is None
    assert record.fleet_analysis == fleet
    assert record.pilot_profile == "Pilot Type: PvPer"
    assert profiles.calls[0][0].danger_ratio == 60
    assert profiles.calls[0][1] == [RIFTER]


@pytest.mark.asyncio
async def test_top_lists_replaced_with_recent_ships():
    service = make_service()

    record = await service.enrich_character(CharacterRef(id=1, name="Alpha Pilot"))

    wire = record.to_wire()
    assert wire["killboardStats"]["topLists"] == [
        {"type": "shipType", "values": [{"id": 587, "name": "Rifter"}]}
    ]


@pytest.mark.asyncio
async def test_missing_stats_still_carry_ship_usage():
    service = make_service(StubCharacters(get_killboard_stats=None))

    record = await service.enrich_character(CharacterRef(id=1, name="Alpha Pilot"))

    assert record.killboard_stats.danger_ratio is None
    assert record.killboard_stats.ship_usage() == [RIFTER]


@pytest.mark.asyncio
async def test_failing_branch_does_not_cancel_siblings():
    characters = StubCharacters(
        get_corporation=RuntimeError("boom"),
        get_recent_ships=RuntimeError("boom"),
    )
    service = make_service(characters, fleet=StubFleet(RuntimeError("boom")))

    record = await service.enrich_character(CharacterRef(id=1, name="Alpha Pilot"))

    assert record.corporation is None
    assert record.fleet_analysis is None
    assert record.killboard_stats.danger_ratio == 60
    assert record.killboard_stats.ship_usage() == []


@pytest.mark.asyncio
async def test_wire_format_uses_camel_case_and_nulls():
    service = make_service(StubCharacters(get_corporation=None))

    wire = (await service.enrich_character(CharacterRef(id=1, name="A"))).to_wire()

    assert set(wire) == {
        "characterId",
        "name",
        "portrait",
        "killboardStats",
        "corporation",
        "alliance",
        "fleetAnalysis",
        "pilotProfile",
    }
    assert wire["corporation"] is None
    assert wire["fleetAnalysis"] is None


@pytest.mark.asyncio
async def test_failed_character_is_dropped():
    class PerCharacterShips(StubCharacters):
        async def get_recent_ships(self, character_id):
            # A list that cannot become ship usage breaks record assembly
            return [RIFTER] if character_id == 1 else ["not a ship"]

    service = make_service(PerCharacterShips())
    refs = [CharacterRef(id=1, name="A"), CharacterRef(id=2, name="B")]

    records = await service.enrich_characters(refs)

    assert [r.name for r in records] == ["A"]


@pytest.mark.asyncio
async def test_profile_failure_keeps_character():
    class PerCharacterStats(StubCharacters):
        async def get_killboard_stats(self, character_id):
            return KillboardStats.from_payload({"dangerRatio": character_id})

    service = make_service(PerCharacterStats(), profiles=StubProfiles(fail_for={2}))
    refs = [CharacterRef(id=1, name="A"), CharacterRef(id=2, name="B")]

    records = {r.name: r for r in await service.enrich_characters(refs)}

    assert set(records) == {"A", "B"}
    assert records["A"].pilot_profile == "Pilot Type: PvPer"
    assert records["B"].pilot_profile is None
    assert records["B"].corporation.name == "Test Corp"
    assert records["B"].killboard_stats.ship_usage() == [RIFTER]


@pytest.mark.asyncio
async def test_unexpected_client_error_in_profile_service_keeps_character():
    class BrokenCompletions:
        async def create(self, **kwargs):
            raise TypeError("unexpected keyword")

    client = SimpleNamespace(chat=SimpleNamespace(completions=BrokenCompletions()))
    service = make_service(profiles=ProfileService(client))

    records = await service.enrich_characters([CharacterRef(id=1, name="A")])

    assert len(records) == 1
    assert records[0].pilot_profile is None
    assert records[0].killboard_stats.danger_ratio == 60


class InFlight:
    """Tracks how many lookups are running at once."""

    def __init__(self):
        self.active = 0
        self.peak = 0

    async def run(self, result):
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            await asyncio.sleep(0.01)
        finally:
            self.active -= 1
        return result


class CountingCharacters(StubCharacters):
    def __init__(self, in_flight: InFlight):
        super().__init__()
        self.in_flight = in_flight

    async def _result(self, name, character_id):
        return await self.in_flight.run(self.results[name])


class CountingFleet(StubFleet):
    def __init__(self, in_flight: InFlight):
        super().__init__()
        self.in_flight = in_flight

    async def estimate(self, character_id):
        return await self.in_flight.run(None)


@pytest.mark.asyncio
async def test_five_lookups_run_concurrently_per_character():
    in_flight = InFlight()
    service = make_service(CountingCharacters(in_flight), CountingFleet(in_flight))

    await service.enrich_character(CharacterRef(id=1, name="A"))

    assert in_flight.peak == 5


@pytest.mark.asyncio
async def test_characters_are_enriched_concurrently():
    in_flight = InFlight()
    service = make_service(CountingCharacters(in_flight), CountingFleet(in_flight))
    refs = [CharacterRef(id=1, name="A"), CharacterRef(id=2, name="B")]

    records = await service.enrich_characters(refs)

    assert len(records) == 2
    assert in_flight.peak == 10


@pytest.mark.asyncio
async def test_output_follows_completion_order():
    characters = StubCharacters()
    characters.delays = {1: 0.05, 2: 0}
    service = make_service(characters)
    refs = [CharacterRef(id=1, name="Slow"), CharacterRef(id=2, name="Fast")]

    records = await service.enrich_characters(refs)

    assert [r.name for r in records] == ["Fast", "Slow"]


@pytest.mark.asyncio
async def test_empty_batch():
    assert await make_service().enrich_characters([]) == []
