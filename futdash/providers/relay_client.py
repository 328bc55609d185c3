"""Async HTTP client that goes through the CORS relay, with retry logic."""

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp
import orjson

from .. import constants
from ..futdash_config import FutdashConfig

LOGGER = logging.getLogger(__name__)


class FutdashError(Exception):
    """Base class for errors raised by FUTDash."""


class NetworkError(FutdashError):
    """
    Non-2xx response, transport failure or unreadable body.
    `status` is None when no HTTP response was received.
    """

    def __init__(
        self, message: str, status: Optional[int] = None, url: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.url = url

    def __str__(self) -> str:
        if self.status is not None:
            return f"API Error: {self.status} {self.message}".rstrip()
        return self.message


class ExhaustedRetriesError(FutdashError):
    """Every attempt of a retrying fetch failed."""

    def __init__(self, label: str, attempts: int, last_error: NetworkError) -> None:
        super().__init__(f"{last_error} (after {attempts} attempts)")
        self.label = label
        self.attempts = attempts
        self.last_error = last_error


class RelayClient:
    """
    Async JSON client for the upstream services.

    Handles:
    - Routing every request through the relay prefix
    - Default X-Requested-With / Accept headers
    - Retries with a growing delay for flaky endpoints

    Usage:
        async with RelayClient() as client:
            data = await client.fetch_json(url)
    """

    def __init__(
        self,
        relay_prefix: Optional[str] = None,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
        retry_delay: Optional[float] = None,
    ) -> None:
        config = FutdashConfig()
        self.relay_prefix = config.relay_prefix if relay_prefix is None else relay_prefix
        self.timeout = config.request_timeout if timeout is None else timeout
        self.max_attempts = config.max_attempts if max_attempts is None else max_attempts
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        self.retry_delay = config.retry_delay if retry_delay is None else retry_delay
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "RelayClient":
        await self.open()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def open(self) -> None:
        """Create the underlying HTTP session, if not already open."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    def build_url(self, url: str) -> str:
        """
        Upstream URL as reached through the relay
        :param url: Upstream URL
        :return: Relayed URL
        """
        return f"{self.relay_prefix}{url}"

    @staticmethod
    def build_headers(headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """
        Merge caller headers with the ones every request carries
        :param headers: Caller supplied headers
        :return: Headers to send
        """
        requested_with, requested_with_value = constants.REQUESTED_WITH_HEADER
        merged = {
            key: value
            for key, value in (headers or {}).items()
            if key.lower() != requested_with.lower()
        }
        merged[requested_with] = requested_with_value

        if not any(key.lower() == "accept" for key in merged):
            merged["Accept"] = constants.DEFAULT_ACCEPT

        return merged

    async def fetch_json(
        self, url: str, headers: Optional[Dict[str, str]] = None
    ) -> Any:
        """
        GET a JSON document through the relay
        :param url: Upstream URL
        :param headers: Extra headers
        :return: Decoded JSON
        :raises NetworkError: On non-2xx status, transport failure or bad JSON
        """
        if self._session is None:
            raise RuntimeError("Client not initialized. Use async context manager.")

        try:
            async with self._session.get(
                self.build_url(url), headers=self.build_headers(headers)
            ) as response:
                if not 200 <= response.status < 300:
                    raise NetworkError(response.reason or "", response.status, url)
                body = await response.read()
                status = response.status
        except (asyncio.TimeoutError, aiohttp.ClientError) as error:
            raise NetworkError(
                f"Request failed: {str(error) or type(error).__name__}", url=url
            ) from error

        try:
            data = orjson.loads(body)
        except orjson.JSONDecodeError as error:
            raise NetworkError(f"Invalid JSON response: {error}", status, url) from error

        LOGGER.debug(f"Downloaded {url}")
        return data

    async def fetch_with_retry(
        self,
        url: str,
        headers: Optional[Dict[str, str]],
        label: str,
        max_attempts: Optional[int] = None,
    ) -> Any:
        """
        fetch_json, re-attempted on NetworkError.
        Waits attempt * retry_delay seconds between attempts.
        :param url: Upstream URL
        :param headers: Extra headers
        :param label: Human readable name of what is fetched
        :param max_attempts: Attempts before giving up
        :return: Decoded JSON
        :raises ExhaustedRetriesError: When every attempt failed
        :raises ValueError: When max_attempts is below 1
        """
        if max_attempts is None:
            max_attempts = self.max_attempts
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

        last_error: Optional[NetworkError] = None

        for attempt in range(1, max_attempts + 1):
            try:
                return await self.fetch_json(url, headers)
            except NetworkError as error:
                last_error = error
                LOGGER.warning(f"{label}: attempt {attempt}/{max_attempts} failed: {error}")
                if attempt < max_attempts:
                    await asyncio.sleep(self.retry_delay * attempt)

        assert last_error is not None
        raise ExhaustedRetriesError(label, max_attempts, last_error) from last_error
