# src/agent_auth/domain/value_objects.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


# --- Authentication value objects ----------------------------------------


@dataclass(frozen=True, slots=True)
class Challenge:
    """
    Server-issued nonce/payload pair for one authentication attempt.

    Consumed by exactly one signature exchange and never persisted.
    """
    id: str
    payload: str

    @classmethod
    def from_payload(cls, data: Any) -> "Challenge":
        if not isinstance(data, Mapping):
            raise ValueError("challenge response is not a JSON object")
        challenge_id = data.get("id")
        payload = data.get("payload")
        if not isinstance(challenge_id, str) or not challenge_id:
            raise ValueError("challenge response has no id")
        if not isinstance(payload, str):
            raise ValueError("challenge response has no payload")
        return cls(id=challenge_id, payload=payload)


@dataclass(frozen=True, slots=True)
class CredentialPair:
    """
    Access/refresh token pair as issued by the identity service.

    Both values are opaque; the runtime never looks inside them.
    """
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None

    def __repr__(self) -> str:
        # keep secrets out of logs and tracebacks
        return (
            f"CredentialPair(access_token={'***' if self.access_token else None}, "
            f"refresh_token={'***' if self.refresh_token else None})"
        )

    @classmethod
    def from_payload(cls, data: Any) -> "CredentialPair":
        if not isinstance(data, Mapping):
            raise ValueError("token response is not a JSON object")
        access = data.get("accessToken")
        refresh = data.get("refreshToken")
        if not isinstance(access, str) or not access:
            raise ValueError("token response has no accessToken")
        if refresh is not None and not isinstance(refresh, str):
            raise ValueError("token response has a non-string refreshToken")
        return cls(access_token=access, refresh_token=refresh or None)


# --- Wallet signing value objects ----------------------------------------


@dataclass(frozen=True, slots=True)
class TypedDataPayload:
    """
    Structured (EIP-712 style) data handed to the remote wallet for signing.

    The runtime does not interpret the fields; it only shapes the request.
    """
    domain: Dict[str, Any] = field(default_factory=dict)
    types: Dict[str, List[Dict[str, str]]] = field(default_factory=dict)
    message: Dict[str, Any] = field(default_factory=dict)
    primary_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.domain:
            data["domain"] = dict(self.domain)
        if self.types:
            data["types"] = {k: list(v) for k, v in self.types.items()}
        if self.message:
            data["message"] = dict(self.message)
        if self.primary_type:
            data["primary_type"] = self.primary_type
        return data
