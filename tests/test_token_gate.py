from __future__ import annotations

import json

import httpx
import pytest

from discord_cli.client import (
    ApiError,
    ConfigurationError,
    DiscordClient,
    LocalTokenGate,
    TokenPlacement,
    TokenSpec,
    TransportError,
    load_token_specs,
)
from discord_cli.client.exceptions import CredentialError
from discord_cli.config import CLIConfig


def _gate(handler, environ=None) -> LocalTokenGate:
    return LocalTokenGate(
        transport=httpx.MockTransport(handler),
        environ={"DISCORD_TOKEN": "abc123"} if environ is None else environ,
    )


@pytest.mark.asyncio
async def test_injects_bot_authorization_header() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        seen["accept"] = request.headers.get("Accept")
        seen["method"] = request.method
        seen["body"] = request.content
        return httpx.Response(200, json={"id": "1"})

    gate = _gate(handler)
    response = await gate.authenticated_fetch(
        "discord",
        "https://discord.com/api/v9/channels/1/messages",
        method="POST",
        headers={"Accept": "*/*"},
        body=json.dumps({"content": "hi"}),
    )

    assert response.ok
    assert response.status == 200
    assert response.json() == {"id": "1"}
    assert seen == {
        "auth": "Bot abc123",
        "accept": "*/*",
        "method": "POST",
        "body": b'{"content": "hi"}',
    }


def test_has_token_reads_environment() -> None:
    assert LocalTokenGate(environ={"DISCORD_TOKEN": "x"}).has_token("discord")
    assert not LocalTokenGate(environ={"DISCORD_TOKEN": "  "}).has_token("discord")
    assert not LocalTokenGate(environ={}).has_token("discord")
    assert not LocalTokenGate(environ={"DISCORD_TOKEN": "x"}).has_token("slack")


@pytest.mark.asyncio
async def test_missing_token_raises_token_not_found() -> None:
    gate = _gate(lambda request: httpx.Response(200), environ={})
    with pytest.raises(CredentialError, match="Token not found"):
        await gate.authenticated_fetch("discord", "https://discord.com/api/v9/users/@me")


@pytest.mark.asyncio
async def test_domain_allow_list() -> None:
    gate = _gate(lambda request: httpx.Response(200, json={}))

    with pytest.raises(CredentialError, match="not allowed"):
        await gate.authenticated_fetch("discord", "https://example.com/api")

    response = await gate.authenticated_fetch("discord", "https://cdn.discord.com/x")
    assert response.ok


@pytest.mark.asyncio
async def test_timeout_is_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    gate = _gate(handler)
    with pytest.raises(TransportError, match="timed out after 2000ms"):
        await gate.authenticated_fetch(
            "discord", "https://discord.com/api/v9/users/@me", timeout=2000
        )


@pytest.mark.asyncio
async def test_connection_error_is_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("name resolution failed", request=request)

    gate = _gate(handler)
    with pytest.raises(TransportError, match="Network error"):
        await gate.authenticated_fetch("discord", "https://discord.com/api/v9/users/@me")


@pytest.mark.asyncio
async def test_client_over_local_gate_reports_api_error() -> None:
    gate = _gate(lambda request: httpx.Response(403, json={"message": "Missing Access", "code": 50001}))
    client = DiscordClient(gate, CLIConfig())

    with pytest.raises(ApiError) as exc_info:
        await client.get_guild_channels("1")

    assert exc_info.value.status == 403
    assert exc_info.value.message == "Missing Access"


@pytest.mark.asyncio
async def test_client_over_local_gate_rejects_foreign_base_url() -> None:
    gate = _gate(lambda request: httpx.Response(200, json={}))
    client = DiscordClient(gate, CLIConfig(base_url="https://evil.example/api"))

    with pytest.raises(ConfigurationError, match="not allowed"):
        await client.get_current_user()


def test_load_token_specs_defaults() -> None:
    specs = load_token_specs(None)
    assert specs["discord"].env == "DISCORD_TOKEN"
    assert specs["discord"].placement.format == "Bot {token}"


def test_load_token_specs_from_file(tmp_path) -> None:
    path = tmp_path / "permissions.json"
    path.write_text(
        json.dumps(
            {
                "tokens": {
                    "discord": {
                        "env": "MY_BOT_TOKEN",
                        "type": "api_key",
                        "domains": ["discord.com"],
                        "placement": {"type": "header", "name": "Authorization", "format": "Bot {token}"},
                    }
                }
            }
        ),
        encoding="utf-8",
    )

    specs = load_token_specs(str(path))

    assert specs["discord"] == TokenSpec(
        env="MY_BOT_TOKEN",
        domains=["discord.com"],
        placement=TokenPlacement(name="Authorization", format="Bot {token}"),
    )


def test_load_token_specs_errors(tmp_path) -> None:
    with pytest.raises(ConfigurationError, match="Cannot read permissions file"):
        load_token_specs(str(tmp_path / "missing.json"))

    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"tokens": {"discord": {"domains": "nope"}}}), encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Invalid token record 'discord'"):
        load_token_specs(str(bad))
