"""
Pytest configuration and shared fixtures.
"""
import asyncio
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional

import httpx
import pytest
from loguru import logger

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from reservations_client.config import Settings
from reservations_client.services.reservations_api import ReservationsAPI


TEST_BASE_URL = "http://reservations.test"


class FakeBackend:
    """
    Stand-in for the reservations backend behind an ``httpx.MockTransport``.

    Records every request and answers with a fixed response, optionally
    after a delay so tests can abort requests in flight.
    """

    def __init__(
        self,
        status_code: int = 200,
        json_body: Any = None,
        content: Optional[bytes] = None,
        delay: Optional[float] = None,
        error: Optional[Exception] = None
    ):
        self.status_code = status_code
        self.json_body = json_body if json_body is not None else {"data": {}}
        self.content = content
        self.delay = delay
        self.error = error
        self.requests: List[httpx.Request] = []
        self.started = asyncio.Event()

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.started.set()

        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error

        if self.status_code == 204:
            return httpx.Response(204)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "backend received no requests"
        return self.requests[-1]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at the fake backend, ignoring any local .env file."""
    return Settings(api_base_url=TEST_BASE_URL + "/", _env_file=None)


@pytest.fixture
def strict_settings() -> Settings:
    """Settings that treat non-2xx responses as failures."""
    return Settings(api_base_url=TEST_BASE_URL, strict_status=True, _env_file=None)


@pytest.fixture
def make_api(settings: Settings) -> Callable[..., ReservationsAPI]:
    """
    Factory building a client wired to a FakeBackend.

    Usage:
        async with make_api(backend) as api:
            ...
    """
    def _make(backend: FakeBackend, client_settings: Optional[Settings] = None) -> ReservationsAPI:
        return ReservationsAPI(client_settings or settings, transport=backend.transport)

    return _make


@pytest.fixture
def log_messages() -> List[str]:
    """Capture loguru messages emitted during a test."""
    messages: List[str] = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]),
        level="DEBUG"
    )
    yield messages
    logger.remove(handler_id)
