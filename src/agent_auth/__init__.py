"""
agent_auth

Credential runtime for autonomous agents: challenge-response
authentication with a wallet signer, plus access/refresh token lifecycle
management behind a single `ensure_access_token()` call.
"""

__version__ = "0.1.0"

from .domain.constants import REFRESH_TOKEN_KEY, Endpoint, TokenState
from .domain.entities import AgentList, AgentProfile, SignatureResult
from .domain.exceptions import (
    ApiError,
    AuthenticationError,
    ChallengeRequestError,
    ConfigurationError,
    RefreshError,
    TokenExchangeError,
    TransportError,
)
from .domain.ports import (
    AgentRuntimeWallet,
    ChallengeSigner,
    StorageAdapter,
    Transport,
    TransportResponse,
)
from .domain.value_objects import Challenge, CredentialPair, TypedDataPayload

from .application.token_manager import TokenLifecycleManager
from .config import RuntimeSettings, settings_from_env

from .adapters.httpx.transport import HttpxTransport
from .adapters.storage.json_file import JsonFileStorageAdapter
from .adapters.storage.memory import MemoryStorageAdapter

from .runtime import AgentApiClient, AgentRuntime, AgentRuntimeConfig

__all__ = [
    "__version__",
    # domain core
    "REFRESH_TOKEN_KEY",
    "Endpoint",
    "TokenState",
    "Challenge",
    "CredentialPair",
    "TypedDataPayload",
    "AgentProfile",
    "AgentList",
    "SignatureResult",
    # ports
    "StorageAdapter",
    "ChallengeSigner",
    "AgentRuntimeWallet",
    "Transport",
    "TransportResponse",
    # exceptions
    "AuthenticationError",
    "ConfigurationError",
    "ChallengeRequestError",
    "TokenExchangeError",
    "RefreshError",
    "TransportError",
    "ApiError",
    # configuration
    "RuntimeSettings",
    "settings_from_env",
    # application
    "TokenLifecycleManager",
    # adapters
    "HttpxTransport",
    "MemoryStorageAdapter",
    "JsonFileStorageAdapter",
    # runtime
    "AgentRuntime",
    "AgentRuntimeConfig",
    "AgentApiClient",
]
