from __future__ import annotations

import os
from typing import Optional

from ..domain.exceptions import ConfigurationError
from .settings import RuntimeSettings


def settings_from_env() -> RuntimeSettings:
    def _bool(key: str, default: bool = True) -> bool:
        raw = os.getenv(key)
        if raw is None:
            return default
        return str(raw).strip().lower() in {"1", "true", "yes", "on"}

    def _split_csv(key: str) -> list[str]:
        raw = os.getenv(key)
        if not raw:
            return []
        return [x.strip() for x in raw.split(",") if x and x.strip()]

    def _number(key: str, cast, default):
        raw = os.getenv(key)
        if raw is None or not raw.strip():
            return default
        try:
            return cast(raw.strip())
        except ValueError as exc:
            raise ConfigurationError(f"Invalid value for {key}: {raw!r}") from exc

    base_url = os.getenv("AGENT_AUTH_BASE_URL")
    if not base_url:
        raise ConfigurationError("Missing agent auth settings: AGENT_AUTH_BASE_URL")

    lead_time: Optional[int] = _number("AGENT_AUTH_REFRESH_LEAD_TIME_MS", int, None)

    return RuntimeSettings(
        base_url=base_url,
        agent_ref=os.getenv("AGENT_AUTH_AGENT_REF"),
        credential_id=os.getenv("AGENT_AUTH_CREDENTIAL_ID"),
        scopes=tuple(_split_csv("AGENT_AUTH_SCOPES")),
        refresh_lead_time_ms=lead_time,
        timeout=_number("AGENT_AUTH_TIMEOUT", float, 30.0),
        verify_ssl=_bool("AGENT_AUTH_VERIFY_SSL", True),
    )
