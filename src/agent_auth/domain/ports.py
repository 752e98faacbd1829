from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol

from .value_objects import Challenge


class StorageAdapter(Protocol):
    """
    Port for persisting opaque string values by key.

    The runtime only uses the ``refresh_token`` key. Implementations live in
    the adapters layer (in-memory, JSON file, keychain, ...).
    """

    async def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""
        ...

    async def set(self, key: str, value: str) -> None:
        ...

    async def delete(self, key: str) -> None:
        """Remove the key. Deleting an absent key is not an error."""
        ...


class ChallengeSigner(Protocol):
    """
    Port for the wallet capability that proves possession of the agent key.

    The returned signature is sent to the identity service as-is; the runtime
    does not verify it.
    """

    async def sign_challenge(self, challenge: Challenge) -> str:
        ...


class AgentRuntimeWallet(Protocol):
    """Any object exposing a `signer` attribute."""

    @property
    def signer(self) -> ChallengeSigner:
        ...


@dataclass(frozen=True, slots=True)
class TransportResponse:
    status_code: int
    reason: str = ""
    body: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    """
    Port for issuing JSON requests to the identity service.

    Should:
      - return a TransportResponse for any HTTP response, success or not
      - apply its own timeout policy
    Raises:
      - TransportError when no response was received
    """

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        json: Optional[Any] = None,
    ) -> TransportResponse:
        ...
