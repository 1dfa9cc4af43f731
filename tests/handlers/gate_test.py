"""Tests for the authentication dependency on protected routes."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient
from safir.datetime import current_datetime

from jwtgate.codec import TokenCodec
from jwtgate.config import Config
from jwtgate.models.claims import ClaimSet

from ..support.app import build_app
from ..support.headers import assert_unauthorized_is_correct, bearer
from ..support.tokens import encode_payload, tamper


@pytest.mark.asyncio
async def test_authenticated(
    client: AsyncClient, app: FastAPI, codec: TokenCodec
) -> None:
    token = codec.mint("alice")
    r = await client.get("/hello", headers=bearer(token))
    assert r.status_code == 200
    assert r.json() == {
        "identity": "alice",
        "remote_user": "alice",
        "from_helper": "alice",
    }
    assert app.state.calls == ["alice"]


@pytest.mark.asyncio
async def test_no_header(
    client: AsyncClient, app: FastAPI, config: Config
) -> None:
    r = await client.get("/hello")
    assert_unauthorized_is_correct(r, config)
    assert app.state.calls == []


@pytest.mark.asyncio
async def test_bad_header(
    client: AsyncClient, app: FastAPI, codec: TokenCodec, config: Config
) -> None:
    token = codec.mint("alice")
    headers = [
        "Bearer",
        "Bearer ",
        f"bearer {token}",
        f"BEARER {token}",
        f"Basic {token}",
        f"Token {token}",
        f"Bearer  {token}",
        f"Bearer {token} extra",
        token,
    ]
    for header in headers:
        r = await client.get("/hello", headers={"Authorization": header})
        assert_unauthorized_is_correct(r, config)
    assert app.state.calls == []


@pytest.mark.asyncio
async def test_invalid_token(
    client: AsyncClient, app: FastAPI, codec: TokenCodec, config: Config
) -> None:
    now = current_datetime()
    expired = codec.mint("alice", now=now - config.timeout)
    token = codec.mint("alice")
    exp = int((now + timedelta(hours=1)).timestamp())
    tokens = [
        "garbage",
        expired,
        tamper(token, 1),
        tamper(token, 2),
        encode_payload({"exp": exp}),
        encode_payload({"id": ["alice"], "exp": exp}),
        encode_payload({"id": "alice", "exp": exp}, key="other-key" * 4),
    ]
    for bad_token in tokens:
        r = await client.get("/hello", headers=bearer(bad_token))
        assert_unauthorized_is_correct(r, config)
    assert app.state.calls == []


@pytest.mark.asyncio
async def test_authorizer(config: Config) -> None:
    seen: list[tuple[str, str]] = []

    def authorizer(identity: str, request: Request) -> bool:
        seen.append((identity, request.url.path))
        return identity != "mallory"

    app = build_app(config, authorizer=authorizer)
    codec = TokenCodec.from_config(config)
    transport = ASGITransport(app=app)
    async with AsyncClient(
        base_url="https://example.com", transport=transport
    ) as client:
        r = await client.get("/hello", headers=bearer(codec.mint("alice")))
        assert r.status_code == 200
        r = await client.get("/hello", headers=bearer(codec.mint("mallory")))
        assert_unauthorized_is_correct(r, config)

    assert seen == [("alice", "/hello"), ("mallory", "/hello")]
    assert app.state.calls == ["alice"]


@pytest.mark.asyncio
async def test_route_authorizer(
    client: AsyncClient, app: FastAPI, codec: TokenCodec, config: Config
) -> None:
    r = await client.get("/admin", headers=bearer(codec.mint("alice")))
    assert_unauthorized_is_correct(r, config)
    r = await client.get("/admin", headers=bearer(codec.mint("admin")))
    assert r.status_code == 200
    assert r.json() == {"identity": "admin"}
    assert app.state.calls == ["admin"]


@pytest.mark.asyncio
async def test_authorizer_error(config: Config) -> None:
    async def authorizer(identity: str, request: Request) -> bool:
        raise RuntimeError("authorization backend down")

    app = build_app(config, authorizer=authorizer)
    codec = TokenCodec.from_config(config)
    transport = ASGITransport(app=app)
    async with AsyncClient(
        base_url="https://example.com", transport=transport
    ) as client:
        with pytest.raises(RuntimeError):
            await client.get("/hello", headers=bearer(codec.mint("alice")))
    assert app.state.calls == []


@pytest.mark.asyncio
async def test_bad_header_skips_verify(
    client: AsyncClient,
    app: FastAPI,
    codec: TokenCodec,
    config: Config,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    process_codec = app.state.jwtgate.codec
    verify = process_codec.verify
    verified: list[str] = []

    def spy(token: str, **kwargs: Any) -> ClaimSet:
        verified.append(token)
        return verify(token, **kwargs)

    monkeypatch.setattr(process_codec, "verify", spy)
    token = codec.mint("alice")
    for header in ("Bearer", f"bearer {token}", f"Basic {token}", token):
        r = await client.get("/hello", headers={"Authorization": header})
        assert_unauthorized_is_correct(r, config)
    r = await client.get("/hello")
    assert_unauthorized_is_correct(r, config)
    assert verified == []

    r = await client.get("/hello", headers=bearer(token))
    assert r.status_code == 200
    assert verified == [token]
