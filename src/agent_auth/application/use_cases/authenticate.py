from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict

from ...config.settings import RuntimeSettings
from ...domain.constants import Endpoint
from ...domain.exceptions import ChallengeRequestError, TokenExchangeError
from ...domain.ports import ChallengeSigner, Transport
from ...domain.value_objects import Challenge, CredentialPair
from ._http import post_json

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ChallengeResponseUseCase:
    """
    Application use case:
    - Request a challenge for the configured agent/credential
    - Have the wallet signer sign it
    - Exchange challenge id + signature for a CredentialPair

    Stateless: the caller decides what to cache and persist. A failure at any
    step discards the attempt; nothing is retried here.
    """

    transport: Transport
    signer: ChallengeSigner
    settings: RuntimeSettings

    async def execute(self) -> CredentialPair:
        """
        Run one full challenge-response exchange.

        Raises:
            ConfigurationError
            ChallengeRequestError
            TokenExchangeError
        """
        challenge = await self._request_challenge()
        signature = await self._sign(challenge)
        return await self._exchange(challenge, signature)

    # ------------------------------------------------------------------ #
    # Internal steps
    # ------------------------------------------------------------------ #

    async def _request_challenge(self) -> Challenge:
        url = self.settings.endpoint(Endpoint.CHALLENGE.value)
        body: Dict[str, Any] = {
            "agentRef": self.settings.agent_ref,
            "credentialId": self.settings.credential_id,
        }

        data = await post_json(
            self.transport,
            url,
            body,
            error_cls=ChallengeRequestError,
            action="Challenge request",
        )
        try:
            challenge = Challenge.from_payload(data)
        except ValueError as exc:
            raise ChallengeRequestError(f"Malformed challenge: {exc}") from exc

        logger.debug("Received challenge %s", challenge.id)
        return challenge

    async def _sign(self, challenge: Challenge) -> str:
        try:
            signature = await self.signer.sign_challenge(challenge)
        except Exception as exc:
            raise TokenExchangeError(f"Signer failed for challenge {challenge.id}: {exc}") from exc

        if not isinstance(signature, str) or not signature:
            raise TokenExchangeError(f"Signer returned no signature for challenge {challenge.id}")
        return signature

    async def _exchange(self, challenge: Challenge, signature: str) -> CredentialPair:
        url = self.settings.endpoint(Endpoint.EXCHANGE.value)
        data = await post_json(
            self.transport,
            url,
            {"challengeId": challenge.id, "signature": signature},
            error_cls=TokenExchangeError,
            action="Token exchange",
        )
        try:
            return CredentialPair.from_payload(data)
        except ValueError as exc:
            raise TokenExchangeError(f"Malformed token response: {exc}") from exc
