from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..adapters.httpx.transport import HttpxTransport
from ..application.token_manager import TokenLifecycleManager
from ..config.settings import RuntimeSettings
from ..domain.constants import TokenState
from ..domain.ports import AgentRuntimeWallet, StorageAdapter, Transport
from .api_client import AgentApiClient

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AgentRuntimeConfig:
    """
    Construction-time wiring for an AgentRuntime.

    Only `wallet` is required; without `transport` an httpx transport is
    created (and closed) by the runtime.
    """
    wallet: AgentRuntimeWallet
    settings: RuntimeSettings = field(default_factory=RuntimeSettings)
    transport: Optional[Transport] = None
    storage: Optional[StorageAdapter] = None


class AgentRuntime:
    """
    Credential runtime for one agent process.

    Exposes `ensure_access_token()` for callers that attach the token
    themselves, and `api` for the built-in signed API operations.
    Use `AgentRuntime.load(config)` so a stored refresh token is picked up.
    """

    def __init__(self, config: AgentRuntimeConfig) -> None:
        self.settings = config.settings
        self._owned_transport: Optional[HttpxTransport] = None

        transport = config.transport
        if transport is None:
            transport = self._owned_transport = HttpxTransport(
                timeout=self.settings.timeout,
                verify_ssl=self.settings.verify_ssl,
            )

        self.tokens = TokenLifecycleManager(
            transport=transport,
            signer=config.wallet.signer,
            settings=self.settings,
            storage=config.storage,
        )
        self.api = AgentApiClient(
            transport=transport,
            tokens=self.tokens,
            settings=self.settings,
        )

    @classmethod
    async def load(cls, config: AgentRuntimeConfig) -> "AgentRuntime":
        """
        Build a runtime, read the stored refresh token and, if there is one,
        trade it for an access token straight away.

        A rejected stored token is discarded silently; the first
        `ensure_access_token()` then authenticates from scratch.
        """
        runtime = cls(config)
        state = await runtime.tokens.load()
        if state is TokenState.HAS_REFRESH_ONLY and runtime.settings.base_url:
            await runtime.tokens.refresh()
        logger.debug("Agent runtime loaded in state %s", runtime.tokens.state.value)
        return runtime

    @property
    def state(self) -> TokenState:
        return self.tokens.state

    async def ensure_access_token(self) -> str:
        return await self.tokens.ensure_access_token()

    async def close(self) -> None:
        if self._owned_transport is not None:
            await self._owned_transport.close()

    async def __aenter__(self) -> "AgentRuntime":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
