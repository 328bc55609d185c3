"""Pytest configuration and fixtures for FUTDash tests."""

import asyncio
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from futdash.models import AggregatedPlayer, ItemCategory, NormalizedPlayer
from futdash.providers import NetworkError, RelayClient

SID = "test-session-id"


class FakeRelayClient(RelayClient):
    """
    RelayClient answering from canned responses instead of the network.

    Routes map a URL fragment to a JSON value, an exception to raise,
    or a callable returning either. Retries go through the real
    fetch_with_retry, without delays.
    """

    def __init__(self, routes: Dict[str, Any]) -> None:
        super().__init__(relay_prefix="", timeout=5, max_attempts=3, retry_delay=0)
        self.routes = routes
        self.calls: List[Tuple[str, Optional[Dict[str, str]]]] = []

    def calls_to(self, fragment: str) -> int:
        """Number of requests made to URLs containing the fragment."""
        return sum(1 for url, _ in self.calls if fragment in url)

    async def fetch_json(self, url: str, headers: Optional[Dict[str, str]] = None) -> Any:
        self.calls.append((url, headers))
        # Yield like a real request would
        await asyncio.sleep(0)

        for fragment, response in self.routes.items():
            if fragment not in url:
                continue
            if callable(response):
                response = response()
            if isinstance(response, BaseException):
                raise response
            return response

        raise NetworkError("Not Found", 404, url)


@pytest.fixture
def make_client() -> Callable[[Dict[str, Any]], FakeRelayClient]:
    """Factory for FakeRelayClient."""
    return FakeRelayClient


@pytest.fixture
def sid() -> str:
    """Session id used by every test."""
    return SID


@pytest.fixture
def players_json() -> Dict[str, Any]:
    """Small players.json catalog."""
    return {
        "LegendsPlayers": [
            {"id": 190042, "f": "Wayne", "l": "Rooney", "r": 89, "n": 14},
            {"id": 100, "f": "Legend", "l": "Duplicate", "r": 80, "n": 14},
        ],
        "Players": [
            {"id": 231747, "f": "Kylian", "l": "Mbappé Lottin", "c": "Mbappé", "r": 91, "n": 18},
            {"id": 209331, "f": "Mohamed", "l": "Salah", "r": 89, "n": 111},
            {"id": 100, "f": "Regular", "l": "Duplicate", "r": 70, "n": 14},
        ],
    }


@pytest.fixture
def core_data() -> Dict[str, Any]:
    """Small fut.gg core data response."""
    return {
        "data": {
            "clubs": [
                {"eaId": 243, "name": "Real Madrid", "siblingClubEaId": 112658},
                {"eaId": 9, "name": "Liverpool"},
            ],
            "nations": [
                {"eaId": 18, "name": "France"},
                {"eaId": 111, "name": "Egypt"},
                {"eaId": 14, "name": "England"},
            ],
            "leagues": [
                {"eaId": 53, "name": "LALIGA EA SPORTS"},
                {"eaId": 13, "name": "Premier League"},
            ],
        }
    }


def item(
    asset_id: int,
    rating: int,
    positions: Optional[List[str]] = None,
    nation: int = 18,
    league_id: int = 53,
    team_id: int = 243,
) -> Dict[str, Any]:
    """Raw item as the game API returns it."""
    return {
        "id": asset_id * 10,
        "assetId": asset_id,
        "rating": rating,
        "possiblePositions": positions if positions is not None else ["ST"],
        "nation": nation,
        "leagueId": league_id,
        "teamid": team_id,
    }


@pytest.fixture
def make_item() -> Callable[..., Dict[str, Any]]:
    """Factory for raw game API items."""
    return item


def normalized_player(
    asset_id: int = 1,
    rating: int = 80,
    item_type: ItemCategory = ItemCategory.STORAGE,
    position: str = "ST",
    nation: str = "France",
    league: str = "LALIGA EA SPORTS",
    team: str = "Real Madrid",
    name: str = "",
) -> NormalizedPlayer:
    """Normalized player with sensible defaults."""
    return NormalizedPlayer(
        asset_id=asset_id,
        name=name or f"Player {asset_id}",
        rating=rating,
        position=position,
        nation=nation,
        nation_id=1,
        nation_img=f"https://img/nation/{nation}.png",
        league=league,
        league_id=2,
        league_img=f"https://img/league/{league}.png",
        team=team,
        team_id=3,
        team_img=f"https://img/team/{team}.png",
        type=item_type,
    )


@pytest.fixture
def make_player() -> Callable[..., NormalizedPlayer]:
    """Factory for normalized players."""
    return normalized_player


@pytest.fixture
def make_aggregated() -> Callable[..., AggregatedPlayer]:
    """Factory for aggregated players."""

    def _make(
        copies: int = 1, types: Optional[List[ItemCategory]] = None, **kwargs: Any
    ) -> AggregatedPlayer:
        player = normalized_player(**kwargs)
        return AggregatedPlayer(
            **player.model_dump(), copies=copies, types=types or [player.type]
        )

    return _make
