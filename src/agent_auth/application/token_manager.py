from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from ..config.settings import RuntimeSettings
from ..domain.constants import REFRESH_TOKEN_KEY, TokenState
from ..domain.exceptions import AuthenticationError, RefreshError
from ..domain.ports import ChallengeSigner, StorageAdapter, Transport
from ..domain.value_objects import CredentialPair
from .use_cases.authenticate import ChallengeResponseUseCase
from .use_cases.refresh import RefreshTokenUseCase

logger = logging.getLogger(__name__)


class TokenLifecycleManager:
    """
    Owns the access/refresh token pair of one agent runtime.

    - returns the cached access token without any I/O
    - otherwise refreshes, falling back to challenge-response authentication
    - runs at most one exchange at a time; concurrent callers share it
    - persists the refresh token and deletes it once it is rejected
    """

    def __init__(
        self,
        *,
        transport: Transport,
        signer: ChallengeSigner,
        settings: RuntimeSettings,
        storage: Optional[StorageAdapter] = None,
    ) -> None:
        self._settings = settings
        self._storage = storage
        self._authenticate = ChallengeResponseUseCase(
            transport=transport,
            signer=signer,
            settings=settings,
        )
        self._refresh = RefreshTokenUseCase(transport=transport, settings=settings)

        self._access_token: Optional[str] = None
        self._refresh_token: Optional[str] = None
        self._inflight: Optional[asyncio.Task[Optional[str]]] = None
        self._loaded = False

    # ------------------------------------------------------------------ #
    # state
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> TokenState:
        if self._inflight is not None and not self._inflight.done():
            return TokenState.EXCHANGING
        if self._access_token:
            return TokenState.AUTHENTICATED
        if self._refresh_token:
            return TokenState.HAS_REFRESH_ONLY
        return TokenState.UNAUTHENTICATED

    @property
    def has_refresh_token(self) -> bool:
        return self._refresh_token is not None

    async def load(self) -> TokenState:
        """
        Read the persisted refresh token. Only the first call touches storage.
        """
        if self._loaded:
            return self.state
        self._loaded = True

        if self._storage is not None and self._refresh_token is None:
            stored = await self._storage.get(REFRESH_TOKEN_KEY)
            if stored:
                self._refresh_token = stored
                logger.debug("Loaded refresh token from storage")
        return self.state

    # ------------------------------------------------------------------ #
    # public operations
    # ------------------------------------------------------------------ #

    async def ensure_access_token(self) -> str:
        """
        Return a usable bearer token, authenticating only when needed.

        Raises:
            ConfigurationError
            ChallengeRequestError
            TokenExchangeError
        """
        while True:
            # fast path: no lock, no I/O
            token = self._access_token
            if token:
                return token

            token = await self._join_or_start(self._acquire)
            if token:
                return token
            # joined a refresh-only exchange that failed; go again

    async def refresh(self) -> bool:
        """
        Force a refresh exchange, even if an access token is cached.

        Returns True if an access token is cached afterwards. A rejected
        refresh token is dropped, never raised.
        """
        await self.load()
        if self._refresh_token is None and self._inflight is None:
            return False
        try:
            token = await self._join_or_start(self._refresh_only)
        except AuthenticationError as exc:
            # joined a full authentication that failed
            logger.debug("Exchange joined by refresh() failed: %s", exc)
            return self._access_token is not None
        return token is not None

    def invalidate_access_token(self) -> None:
        """Drop the cached access token so the next call refreshes it."""
        self._access_token = None

    # ------------------------------------------------------------------ #
    # single flight
    # ------------------------------------------------------------------ #

    async def _join_or_start(
        self,
        factory: Callable[[], Awaitable[Optional[str]]],
    ) -> Optional[str]:
        task = self._inflight
        if task is None or task.done():
            task = asyncio.ensure_future(factory())
            self._inflight = task
            task.add_done_callback(self._exchange_done)
        # a cancelled caller must not cancel the exchange others wait on
        return await asyncio.shield(task)

    def _exchange_done(self, task: "asyncio.Task[Optional[str]]") -> None:
        if self._inflight is task:
            self._inflight = None
        if not task.cancelled():
            # every waiter re-raises it; mark as retrieved
            task.exception()

    # ------------------------------------------------------------------ #
    # exchanges (run inside the single-flight task)
    # ------------------------------------------------------------------ #

    async def _acquire(self) -> str:
        if self._access_token:
            return self._access_token

        # runtimes built without load() still pick up the stored token
        if not self._loaded:
            await self.load()

        if self._refresh_token is not None:
            token = await self._refresh_only()
            if token:
                return token

        pair = await self._authenticate.execute()
        await self._accept(pair)
        logger.info(
            "Authenticated agent %s via challenge-response",
            self._settings.agent_ref or "<unset>",
        )
        return pair.access_token or ""

    async def _refresh_only(self) -> Optional[str]:
        refresh_token = self._refresh_token
        if refresh_token is None:
            return None

        try:
            pair = await self._refresh.execute(refresh_token)
        except RefreshError as exc:
            logger.warning("Refresh token rejected, discarding it: %s", exc)
            await self._revoke(refresh_token)
            return None

        await self._accept(pair)
        logger.info("Refreshed access token")
        return pair.access_token

    # ------------------------------------------------------------------ #
    # state mutation + persistence
    # ------------------------------------------------------------------ #

    async def _accept(self, pair: CredentialPair) -> None:
        self._access_token = pair.access_token
        if not pair.refresh_token:
            return

        self._refresh_token = pair.refresh_token
        if self._storage is None:
            return
        try:
            await self._storage.set(REFRESH_TOKEN_KEY, pair.refresh_token)
        except Exception:
            # the in-memory pair stays usable for this process
            logger.exception("Failed to persist refresh token")

    async def _revoke(self, refresh_token: str) -> None:
        if self._refresh_token == refresh_token:
            self._refresh_token = None
        self._access_token = None

        if self._storage is None:
            return
        try:
            await self._storage.delete(REFRESH_TOKEN_KEY)
        except Exception:
            logger.exception("Failed to delete revoked refresh token from storage")
