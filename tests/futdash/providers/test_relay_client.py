"""Tests for the relay HTTP client and its retry logic."""

import contextlib
from typing import AsyncIterator, Awaitable, Callable, List

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from futdash.providers import ExhaustedRetriesError, NetworkError, RelayClient
from futdash.providers import relay_client as relay_client_module

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@contextlib.asynccontextmanager
async def relay(handler: Handler) -> AsyncIterator[RelayClient]:
    """Serve `handler` behind /relay/ and yield a client pointed at it."""
    app = web.Application()
    app.router.add_route("GET", "/relay/{tail:.*}", handler)
    server = TestServer(app)
    await server.start_server()
    try:
        async with RelayClient(
            relay_prefix=str(server.make_url("/relay/")),
            timeout=5,
            max_attempts=3,
            retry_delay=0,
        ) as client:
            yield client
    finally:
        await server.close()


class TestBuildHeaders:
    """Test RelayClient.build_headers()."""

    def test_defaults_added(self):
        headers = RelayClient.build_headers({"X-UT-SID": "abc"})

        assert headers == {
            "X-UT-SID": "abc",
            "X-Requested-With": "XMLHttpRequest",
            "Accept": "application/json",
        }

    def test_accept_override_kept(self):
        headers = RelayClient.build_headers({"accept": "text/plain"})

        assert headers["accept"] == "text/plain"
        assert "Accept" not in headers

    def test_requested_with_always_fixed(self):
        headers = RelayClient.build_headers({"x-requested-with": "curl"})

        assert headers == {
            "X-Requested-With": "XMLHttpRequest",
            "Accept": "application/json",
        }


class TestFetchJson:
    """Test RelayClient.fetch_json()."""

    @pytest.mark.asyncio
    async def test_goes_through_relay_with_headers(self):
        seen: List[web.Request] = []

        async def handler(request: web.Request) -> web.Response:
            seen.append(request)
            return web.json_response({"ok": True, "path": request.match_info["tail"]})

        async with relay(handler) as client:
            data = await client.fetch_json("tradepile", {"X-UT-SID": "abc"})

        assert data == {"ok": True, "path": "tradepile"}
        assert seen[0].headers["X-Requested-With"] == "XMLHttpRequest"
        assert seen[0].headers["Accept"] == "application/json"
        assert seen[0].headers["X-UT-SID"] == "abc"

    @pytest.mark.asyncio
    async def test_non_2xx_raises_with_status(self):
        async def handler(request: web.Request) -> web.Response:
            return web.Response(status=401, reason="Unauthorized")

        async with relay(handler) as client:
            with pytest.raises(NetworkError) as excinfo:
                await client.fetch_json("tradepile")

        assert excinfo.value.status == 401
        assert str(excinfo.value) == "API Error: 401 Unauthorized"

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self):
        async def handler(request: web.Request) -> web.Response:
            return web.Response(text="<html>maintenance</html>")

        async with relay(handler) as client:
            with pytest.raises(NetworkError, match="Invalid JSON"):
                await client.fetch_json("tradepile")

    @pytest.mark.asyncio
    async def test_transport_failure_has_no_status(self):
        async with RelayClient(relay_prefix="http://127.0.0.1:9/", timeout=5) as client:
            with pytest.raises(NetworkError) as excinfo:
                await client.fetch_json("tradepile")

        assert excinfo.value.status is None

    @pytest.mark.asyncio
    async def test_requires_open_session(self):
        client = RelayClient(relay_prefix="")

        with pytest.raises(RuntimeError):
            await client.fetch_json("https://example.invalid/")


class TestFetchWithRetry:
    """Test RelayClient.fetch_with_retry()."""

    @pytest.mark.asyncio
    async def test_recovers_after_failures(self):
        attempts = []

        async def handler(request: web.Request) -> web.Response:
            attempts.append(request)
            if len(attempts) < 3:
                return web.Response(status=502, reason="Bad Gateway")
            return web.json_response({"itemData": []})

        async with relay(handler) as client:
            data = await client.fetch_with_retry("storagepile", None, "Storage")

        assert data == {"itemData": []}
        assert len(attempts) == 3

    @pytest.mark.asyncio
    async def test_exhausted_keeps_last_error(self):
        attempts = []

        async def handler(request: web.Request) -> web.Response:
            attempts.append(request)
            return web.Response(status=500 + len(attempts), reason="Upstream")

        async with relay(handler) as client:
            with pytest.raises(ExhaustedRetriesError) as excinfo:
                await client.fetch_with_retry("storagepile", None, "Storage")

        assert len(attempts) == 3
        assert excinfo.value.attempts == 3
        assert excinfo.value.label == "Storage"
        assert excinfo.value.last_error.status == 503
        assert isinstance(excinfo.value.__cause__, NetworkError)

    @pytest.mark.asyncio
    async def test_empty_result_not_retried(self):
        attempts = []

        async def handler(request: web.Request) -> web.Response:
            attempts.append(request)
            return web.json_response({})

        async with relay(handler) as client:
            data = await client.fetch_with_retry("purchased/items", None, "Duplicated items")

        assert data == {}
        assert len(attempts) == 1

    @pytest.mark.asyncio
    async def test_backoff_grows_with_attempt(self, monkeypatch):
        delays: List[float] = []

        async def fake_sleep(delay: float) -> None:
            delays.append(delay)

        class AlwaysFailing(RelayClient):
            async def fetch_json(self, url, headers=None):
                raise NetworkError("Service Unavailable", 503, url)

        monkeypatch.setattr(relay_client_module.asyncio, "sleep", fake_sleep)
        client = AlwaysFailing(relay_prefix="", retry_delay=1.0)

        with pytest.raises(ExhaustedRetriesError):
            await client.fetch_with_retry("x", None, "Trade pile", max_attempts=4)

        assert delays == [1.0, 2.0, 3.0]

    @pytest.mark.asyncio
    async def test_single_attempt_honoured(self, make_client):
        client = make_client({"tradepile": NetworkError("Bad Gateway", 502)})

        with pytest.raises(ExhaustedRetriesError) as excinfo:
            await client.fetch_with_retry("tradepile", None, "Trade pile", max_attempts=1)

        assert excinfo.value.attempts == 1
        assert client.calls_to("tradepile") == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("max_attempts", [0, -2])
    async def test_attempts_below_one_rejected(self, make_client, max_attempts):
        client = make_client({"tradepile": {"auctionInfo": []}})

        with pytest.raises(ValueError):
            await client.fetch_with_retry(
                "tradepile", None, "Trade pile", max_attempts=max_attempts
            )

        assert client.calls == []

    def test_client_rejects_attempts_below_one(self):
        with pytest.raises(ValueError):
            RelayClient(relay_prefix="", max_attempts=0)
