"""
agent_auth.runtime

Async agent credential runtime:

- AgentRuntimeConfig: wallet, settings, optional transport and storage.
- AgentRuntime: owns the token manager and the signed API client;
  `AgentRuntime.load(config)` restores a persisted refresh token.
- AgentApiClient: bearer-authenticated agent and wallet operations.
"""

from __future__ import annotations

from .api_client import AgentApiClient
from .runtime import AgentRuntime, AgentRuntimeConfig

__all__ = [
    "AgentApiClient",
    "AgentRuntime",
    "AgentRuntimeConfig",
]
