from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..domain.exceptions import ConfigurationError


@dataclass(frozen=True, slots=True)
class RuntimeSettings:
    """
    Identity service connection settings for one agent runtime.

    Host code decides how to construct this (env, config file, etc.).
    Immutable once the runtime is built.
    """
    base_url: Optional[str] = None
    agent_ref: Optional[str] = None
    credential_id: Optional[str] = None
    scopes: Tuple[str, ...] = ()

    # Advisory only: access tokens are opaque, so there is no expiry to lead.
    refresh_lead_time_ms: Optional[int] = None

    # Used by the default httpx transport only
    timeout: float = 30.0
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        # accept lists from callers without breaking immutability
        object.__setattr__(self, "scopes", tuple(self.scopes or ()))

    def require_base_url(self) -> str:
        base = (self.base_url or "").strip()
        if not base:
            raise ConfigurationError("Base URL is required for authentication")
        return base.rstrip("/")

    def endpoint(self, path: str) -> str:
        return f"{self.require_base_url()}/{path.lstrip('/')}"
