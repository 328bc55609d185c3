"""Tests for the reference data cache."""

import asyncio

import pytest

from futdash import constants
from futdash.models import UNKNOWN_ENTITY
from futdash.providers import NetworkError, ReferenceDataCache
from futdash.providers.reference_provider import (
    build_catalog,
    build_entity_maps,
    image_url,
)


class TestBuilders:
    """Catalog and entity map construction."""

    def test_catalog_merges_and_last_duplicate_wins(self, players_json):
        catalog = build_catalog(players_json)

        assert set(catalog) == {190042, 100, 231747, 209331}
        assert catalog[100].first_name == "Regular"

    def test_catalog_tolerates_missing_arrays(self):
        assert build_catalog({"Players": None}) == {}

    def test_sibling_club_registered(self, core_data):
        teams, leagues, nations = build_entity_maps(core_data)

        assert teams[243].name == "Real Madrid"
        assert teams[112658].name == "Real Madrid"
        assert teams[112658].img_url.endswith("/clubs/dark/112658.png")
        assert teams[243].img_url.endswith("/clubs/dark/243.png")
        assert leagues[13].img_url.endswith("/leagues/dark/13.png")
        assert nations[18].img_url.endswith("/flags/light/18.png")

    def test_image_url(self):
        assert image_url("nation", 14) == f"{constants.EA_IMAGES_URL}/flags/light/14.png"


class TestReferenceDataCache:
    """Test ReferenceDataCache."""

    @pytest.mark.asyncio
    async def test_loads_once(self, make_client, players_json, core_data):
        client = make_client({"players.json": players_json, "fc-core-data": core_data})
        cache = ReferenceDataCache(client)

        first = await cache.get_reference_data()
        second = await cache.get_reference_data()

        assert first is second
        assert client.calls_to("players.json") == 1
        assert client.calls_to("fc-core-data") == 1
        assert first.player_name(231747) == "Mbappé"
        assert first.player_name(209331) == "Mohamed Salah"

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_download(
        self, make_client, players_json, core_data
    ):
        client = make_client({"players.json": players_json, "fc-core-data": core_data})
        cache = ReferenceDataCache(client)

        results = await asyncio.gather(*(cache.get_reference_data() for _ in range(5)))

        assert all(result is results[0] for result in results)
        assert client.calls_to("players.json") == 1
        assert client.calls_to("fc-core-data") == 1

    @pytest.mark.asyncio
    async def test_catalog_url_is_cache_busted(self, make_client, players_json, core_data):
        client = make_client({"players.json": players_json, "fc-core-data": core_data})

        await ReferenceDataCache(client).get_reference_data()

        catalog_url = next(url for url, _ in client.calls if "players.json" in url)
        assert catalog_url.startswith(f"{constants.EA_STATIC_URL}/players.json?_=")

    @pytest.mark.asyncio
    async def test_failure_propagates_and_next_call_retries(
        self, make_client, players_json, core_data
    ):
        responses = iter([NetworkError("Service Unavailable", 503), core_data])
        client = make_client(
            {"players.json": players_json, "fc-core-data": lambda: next(responses)}
        )
        cache = ReferenceDataCache(client)

        with pytest.raises(NetworkError):
            await cache.get_reference_data()
        assert not cache.is_loaded

        data = await cache.get_reference_data()

        assert data.team(9).name == "Liverpool"

    @pytest.mark.asyncio
    async def test_invalidate_forces_reload(self, make_client, players_json, core_data):
        client = make_client({"players.json": players_json, "fc-core-data": core_data})
        cache = ReferenceDataCache(client)

        await cache.get_reference_data()
        cache.invalidate()
        await cache.get_reference_data()

        assert client.calls_to("players.json") == 2

    @pytest.mark.asyncio
    async def test_unknown_ids_resolve_to_sentinel(
        self, make_client, players_json, core_data
    ):
        client = make_client({"players.json": players_json, "fc-core-data": core_data})
        data = await ReferenceDataCache(client).get_reference_data()

        assert data.player_name(1) == "Unknown"
        assert data.team(1) is UNKNOWN_ENTITY
        assert data.league(1).name == "Unknown"
        assert data.nation(1).img_url is None
