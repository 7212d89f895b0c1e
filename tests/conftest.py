"""Shared fixtures for the OpenX client tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from pathlib import Path

import httpx
import pytest

from openx_client import OpenXConfig
from openx_client.auth import OpenXAuth, TokenStore
from tests.fakes import FakeOpenX


@pytest.fixture
def config() -> OpenXConfig:
    """Create a test configuration."""
    return OpenXConfig(
        consumer_key="CK",
        consumer_secret="CS",
        realm="R",
        base_url="https://api.example.com",
    )


@pytest.fixture
def fake_openx() -> FakeOpenX:
    return FakeOpenX()


@pytest.fixture
async def http_client(fake_openx: FakeOpenX) -> AsyncGenerator[httpx.AsyncClient]:
    """HTTP client routed to the fake service."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake_openx.handler))
    yield client
    await client.aclose()


@pytest.fixture
def token_store(tmp_path: Path) -> TokenStore:
    return TokenStore(path=tmp_path / "token.json")


@pytest.fixture
def auth(
    config: OpenXConfig, token_store: TokenStore, http_client: httpx.AsyncClient
) -> OpenXAuth:
    return OpenXAuth(config, token_store=token_store, http_client=http_client)
