# tests/conftest.py
from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from agent_auth.adapters.storage.memory import MemoryStorageAdapter
from agent_auth.application.token_manager import TokenLifecycleManager
from agent_auth.config.settings import RuntimeSettings
from agent_auth.domain.ports import TransportResponse
from agent_auth.domain.value_objects import Challenge

BASE_URL = "https://api.example.com"


def ok(body: Any = None) -> TransportResponse:
    return TransportResponse(status_code=200, reason="OK", body=body)


def fail(status_code: int, reason: str = "", body: Any = None) -> TransportResponse:
    return TransportResponse(status_code=status_code, reason=reason, body=body)


@dataclass
class Call:
    method: str
    path: str
    headers: Dict[str, str]
    json: Any


class FakeTransport:
    """
    In-process Transport double.

    Routes map (method, path) to a response, an exception, or a (possibly
    async) callable receiving the JSON body.
    """

    def __init__(self, base_url: str = BASE_URL) -> None:
        self.base_url = base_url
        self.calls: List[Call] = []
        self.routes: Dict[Tuple[str, str], Any] = {}

    def on(self, method: str, path: str, response: Any) -> None:
        self.routes[(method, path)] = response

    def count(self, path: str) -> int:
        return sum(1 for c in self.calls if c.path == path)

    def paths(self) -> List[str]:
        return [c.path for c in self.calls]

    async def request(self, method, url, *, headers=None, json=None) -> TransportResponse:
        assert url.startswith(self.base_url), url
        path = url[len(self.base_url):]
        self.calls.append(Call(method, path, dict(headers or {}), json))

        route = self.routes.get((method, path))
        if route is None:
            return fail(404, "Not Found")
        if callable(route):
            route = route(json)
            if inspect.isawaitable(route):
                route = await route
        if isinstance(route, Exception):
            raise route
        return route


@dataclass
class FakeSigner:
    signature: str = "sig"
    error: Optional[Exception] = None
    seen: List[Challenge] = field(default_factory=list)

    async def sign_challenge(self, challenge: Challenge) -> str:
        self.seen.append(challenge)
        if self.error is not None:
            raise self.error
        return self.signature


@dataclass
class FakeWallet:
    signer: FakeSigner = field(default_factory=FakeSigner)


@pytest.fixture
def settings() -> RuntimeSettings:
    return RuntimeSettings(base_url=BASE_URL, agent_ref="a1", credential_id="c1")


@pytest.fixture
def transport() -> FakeTransport:
    t = FakeTransport()
    t.on("POST", "/auth/challenge", ok({"id": "ch1", "payload": "p"}))
    t.on("POST", "/auth/exchange", ok({"accessToken": "AT1", "refreshToken": "RT1"}))
    return t


@pytest.fixture
def wallet() -> FakeWallet:
    return FakeWallet()


@pytest.fixture
def storage() -> MemoryStorageAdapter:
    return MemoryStorageAdapter()


@pytest.fixture
def make_manager(transport, wallet, settings, storage) -> Callable[..., TokenLifecycleManager]:
    def _make(**overrides) -> TokenLifecycleManager:
        kwargs = {
            "transport": transport,
            "signer": wallet.signer,
            "settings": settings,
            "storage": storage,
        }
        kwargs.update(overrides)
        return TokenLifecycleManager(**kwargs)

    return _make
