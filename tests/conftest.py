from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple, Union

import pytest

from discord_cli.client import DiscordClient
from discord_cli.config import CLIConfig

BASE_URL = "https://discord.com/api/v9"


class FakeResponse:
    def __init__(self, status: int = 200, payload: Any = None, invalid_json: bool = False) -> None:
        self.status = status
        self.payload = payload
        self.invalid_json = invalid_json

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        if self.invalid_json:
            raise ValueError("Unexpected token < in JSON")
        return self.payload


Route = Union[FakeResponse, Exception]


class FakeGate:
    """In-memory credential gate that records every fetch."""

    def __init__(self, token_configured: bool = True) -> None:
        self.token_configured = token_configured
        self.routes: Dict[Tuple[str, str], Route] = {}
        self.calls: List[Dict[str, Any]] = []
        self.has_token_calls: List[str] = []

    def route(
        self,
        method: str,
        path: str,
        status: int = 200,
        payload: Any = None,
        invalid_json: bool = False,
    ) -> None:
        self.routes[(method, path)] = FakeResponse(status, payload, invalid_json)

    def fail(self, method: str, path: str, error: Exception) -> None:
        self.routes[(method, path)] = error

    def has_token(self, name: str) -> bool:
        self.has_token_calls.append(name)
        return self.token_configured

    async def authenticated_fetch(
        self,
        name: str,
        url: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        body: Optional[str] = None,
        timeout: int = 15000,
    ) -> FakeResponse:
        self.calls.append(
            {
                "name": name,
                "url": url,
                "method": method,
                "headers": dict(headers or {}),
                "body": body,
                "timeout": timeout,
            }
        )
        path = url[len(BASE_URL):]
        result = self.routes.get((method, path))
        if isinstance(result, Exception):
            raise result
        if result is None:
            return FakeResponse(404, {"message": f"No route for {method} {path}", "code": 0})
        return result

    @property
    def last_call(self) -> Dict[str, Any]:
        return self.calls[-1]

    @property
    def last_body(self) -> Any:
        return json.loads(self.calls[-1]["body"])


@pytest.fixture
def config() -> CLIConfig:
    return CLIConfig()


@pytest.fixture
def gate() -> FakeGate:
    return FakeGate()


@pytest.fixture
def client(gate: FakeGate, config: CLIConfig) -> DiscordClient:
    return DiscordClient(gate, config)
