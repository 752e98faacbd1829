# src/agent_auth/runtime/cli.py

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Any, Sequence

from ..adapters.storage.json_file import JsonFileStorageAdapter
from ..config.env import settings_from_env
from ..domain.exceptions import AuthenticationError
from ..domain.value_objects import Challenge
from .runtime import AgentRuntime, AgentRuntimeConfig

DEFAULT_TOKEN_FILE = "~/.agent-auth/tokens.json"


class _NoKeySigner:
    """The CLI holds no key material; it lives off a stored refresh token."""

    async def sign_challenge(self, challenge: Challenge) -> str:
        raise AuthenticationError(
            "No signer available: stored refresh token is missing or was rejected"
        )


class _CliWallet:
    signer = _NoKeySigner()


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="agent-auth",
        description="Inspect an agent identity using a stored refresh token",
    )
    parser.add_argument(
        "command",
        choices=["me", "agents"],
        help="me: show this agent's profile; agents: list agents",
    )
    parser.add_argument(
        "--token-file",
        default=os.getenv("AGENT_AUTH_TOKEN_FILE", DEFAULT_TOKEN_FILE),
        help="JSON file holding the refresh token "
             "(default: env AGENT_AUTH_TOKEN_FILE or ~/.agent-auth/tokens.json).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log token lifecycle events to stderr.",
    )
    return parser.parse_args(args=argv)


async def _run(args: argparse.Namespace) -> dict[str, Any]:
    config = AgentRuntimeConfig(
        wallet=_CliWallet(),
        settings=settings_from_env(),
        storage=JsonFileStorageAdapter(os.path.expanduser(args.token_file)),
    )
    runtime = await AgentRuntime.load(config)
    try:
        if args.command == "me":
            profile = await runtime.api.get_agent()
            return {"agent": profile.raw, "wallet_address": profile.wallet_address}
        agents = await runtime.api.list_agents()
        return {"items": agents.items}
    finally:
        await runtime.close()


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        summary = asyncio.run(_run(args))
        json.dump({"ok": True, **summary}, sys.stdout, indent=2)
        sys.stdout.write("\n")
    except Exception as exc:  # noqa: BLE001
        json.dump({"ok": False, "error": str(exc)}, sys.stdout, indent=2)
        sys.stdout.write("\n")
        raise


if __name__ == "__main__":
    main()
