from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


def _nested_str(data: Mapping[str, Any], *path: str) -> Optional[str]:
    current: Any = data
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current if isinstance(current, str) and current else None


@dataclass(slots=True)
class AgentProfile:
    """
    The calling agent's own profile as returned by ``GET /agents/me``.

    The service has shipped the wallet address under several keys over time;
    `wallet_address` resolves whichever one is present.
    """
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def wallet_address(self) -> Optional[str]:
        return (
            _nested_str(self.raw, "billing", "wallet", "address")
            or _nested_str(self.raw, "wallet", "address")
            or _nested_str(self.raw, "billingWallet", "address")
        )

    @classmethod
    def from_payload(cls, data: Any) -> "AgentProfile":
        return cls(raw=dict(data) if isinstance(data, Mapping) else {})


@dataclass(slots=True)
class SignatureResult:
    """
    Result of a remote wallet signing call.
    """
    wallet_address: Optional[str] = None
    signature: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, data: Any) -> "SignatureResult":
        raw = dict(data) if isinstance(data, Mapping) else {}
        return cls(
            wallet_address=_nested_str(raw, "wallet", "address"),
            signature=_nested_str(raw, "signed", "signature"),
            raw=raw,
        )


@dataclass(slots=True)
class AgentList:
    items: List[Any] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, data: Any) -> "AgentList":
        raw = dict(data) if isinstance(data, Mapping) else {}
        items = raw.get("items")
        return cls(items=list(items) if isinstance(items, list) else [], raw=raw)
