# tests/test_runtime.py
from agent_auth.adapters.storage.memory import MemoryStorageAdapter
from agent_auth.config.settings import RuntimeSettings
from agent_auth.domain.constants import REFRESH_TOKEN_KEY, TokenState
from agent_auth.runtime import AgentRuntime, AgentRuntimeConfig

from .conftest import fail, ok


def _config(transport, wallet, settings, storage=None) -> AgentRuntimeConfig:
    return AgentRuntimeConfig(
        wallet=wallet,
        settings=settings,
        transport=transport,
        storage=storage,
    )


async def test_load_refreshes_stored_token(transport, wallet, settings):
    transport.on("POST", "/auth/refresh", ok({"accessToken": "AT9"}))
    storage = MemoryStorageAdapter({REFRESH_TOKEN_KEY: "RT0"})

    runtime = await AgentRuntime.load(_config(transport, wallet, settings, storage))

    assert runtime.state is TokenState.AUTHENTICATED
    assert await runtime.ensure_access_token() == "AT9"
    assert transport.paths() == ["/auth/refresh"]
    assert wallet.signer.seen == []


async def test_load_discards_rejected_token(transport, wallet, settings):
    transport.on("POST", "/auth/refresh", fail(401, "Unauthorized"))
    storage = MemoryStorageAdapter({REFRESH_TOKEN_KEY: "RT0"})

    runtime = await AgentRuntime.load(_config(transport, wallet, settings, storage))

    assert runtime.state is TokenState.UNAUTHENTICATED
    assert await storage.get(REFRESH_TOKEN_KEY) is None

    assert await runtime.ensure_access_token() == "AT1"
    assert await storage.get(REFRESH_TOKEN_KEY) == "RT1"


async def test_load_without_storage_does_no_io(transport, wallet, settings):
    runtime = await AgentRuntime.load(_config(transport, wallet, settings))

    assert runtime.state is TokenState.UNAUTHENTICATED
    assert transport.calls == []


async def test_load_without_base_url_keeps_refresh_token(transport, wallet):
    storage = MemoryStorageAdapter({REFRESH_TOKEN_KEY: "RT0"})

    runtime = await AgentRuntime.load(_config(transport, wallet, RuntimeSettings(), storage))

    assert runtime.state is TokenState.HAS_REFRESH_ONLY
    assert transport.calls == []


async def test_runtime_api_shares_token_manager(transport, wallet, settings):
    transport.on("GET", "/agents", ok({"items": ["x"]}))

    async with AgentRuntime(_config(transport, wallet, settings)) as runtime:
        token = await runtime.ensure_access_token()
        agents = await runtime.api.list_agents()

    assert token == "AT1"
    assert agents.items == ["x"]
    assert transport.count("/auth/challenge") == 1


async def test_default_transport_is_httpx(wallet):
    runtime = AgentRuntime(AgentRuntimeConfig(wallet=wallet))
    try:
        assert runtime._owned_transport is not None
    finally:
        await runtime.close()


async def test_constructed_runtime_uses_stored_refresh_token(transport, wallet, settings):
    transport.on("POST", "/auth/refresh", ok({"accessToken": "AT9"}))
    storage = MemoryStorageAdapter({REFRESH_TOKEN_KEY: "RT0"})

    runtime = AgentRuntime(_config(transport, wallet, settings, storage))

    assert await runtime.ensure_access_token() == "AT9"
    assert transport.count("/auth/challenge") == 0
    assert await storage.get(REFRESH_TOKEN_KEY) == "RT0"
