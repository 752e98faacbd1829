from enum import Enum


REFRESH_TOKEN_KEY = "refresh_token"


class Endpoint(str, Enum):
    CHALLENGE = "/auth/challenge"
    EXCHANGE = "/auth/exchange"
    REFRESH = "/auth/refresh"
    AGENT_ME = "/agents/me"
    AGENTS = "/agents"
    SIGN_TYPED_DATA = "/wallet/sign-typed-data"
    SIGN_MESSAGE = "/wallet/sign-message"


class TokenState(Enum):
    UNAUTHENTICATED = "unauthenticated"
    HAS_REFRESH_ONLY = "has_refresh_only"
    AUTHENTICATED = "authenticated"
    EXCHANGING = "exchanging"
