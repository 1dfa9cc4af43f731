"""Tests for the process context."""

from __future__ import annotations

import pytest
from fastapi import Request

from jwtgate.callbacks import permit_all
from jwtgate.config import Config
from jwtgate.exceptions import InvalidConfigurationError
from jwtgate.factory import ProcessContext

from .support.app import check_password, only_admin


def test_from_config(config: Config) -> None:
    process = ProcessContext.from_config(config, check_password)
    assert process.config == config
    assert process.authenticator is check_password
    assert process.authorizer is permit_all
    assert process.codec.refresh_enabled


def test_invalid_callbacks(config: Config) -> None:
    with pytest.raises(InvalidConfigurationError):
        ProcessContext.from_config(config, None)
    with pytest.raises(InvalidConfigurationError):
        ProcessContext.from_config(config, "alice")  # type: ignore[arg-type]
    with pytest.raises(InvalidConfigurationError):
        ProcessContext.from_config(
            config,
            check_password,
            True,  # type: ignore[arg-type]
        )


@pytest.mark.asyncio
async def test_callbacks(config: Config) -> None:
    class Authenticator:
        async def __call__(self, username: str, password: str) -> bool:
            return password == "async-secret"

    request = Request({"type": "http", "method": "GET", "path": "/"})
    process = ProcessContext.from_config(config, Authenticator(), only_admin)
    assert await process.authenticate("alice", "async-secret")
    assert not await process.authenticate("alice", "secret")
    assert await process.authorize("admin", request)
    assert not await process.authorize("alice", request)
    assert await process.authorize("alice", request, permit_all)

    process = ProcessContext.from_config(config, check_password)
    assert await process.authenticate("alice", "secret")
    assert not await process.authenticate("bob", "secret")
    assert await process.authorize("alice", request)
