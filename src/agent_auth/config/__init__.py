"""
agent_auth.config

- RuntimeSettings: identity service connection settings for one runtime.
- settings_from_env: build RuntimeSettings from AGENT_AUTH_* variables.
"""

from __future__ import annotations

from .env import settings_from_env
from .settings import RuntimeSettings

__all__ = ["RuntimeSettings", "settings_from_env"]
