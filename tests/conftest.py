"""Test fixtures."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from jwtgate.codec import TokenCodec
from jwtgate.config import Config

from .support.app import build_app
from .support.config import build_config


@pytest.fixture(autouse=True)
def environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear any jwtgate settings from the environment."""
    for setting in ("JWTGATE_CONFIG_PATH", "JWTGATE_KEY", "JWTGATE_REALM"):
        monkeypatch.delenv(setting, raising=False)


@pytest.fixture
def config() -> Config:
    """Return a configuration with refresh enabled and prompting on."""
    return build_config(timeout="1h", max_refresh="2h", need_prompt=True)


@pytest.fixture
def codec(config: Config) -> TokenCodec:
    return TokenCodec.from_config(config)


@pytest.fixture
def app(config: Config) -> FastAPI:
    """Return a configured test application."""
    return build_app(config)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Return an ``httpx.AsyncClient`` configured to talk to the test app."""
    async with AsyncClient(
        base_url="https://example.com", transport=ASGITransport(app=app)
    ) as client:
        yield client
