from __future__ import annotations

from dataclasses import dataclass

from ...config.settings import RuntimeSettings
from ...domain.constants import Endpoint
from ...domain.exceptions import RefreshError
from ...domain.ports import Transport
from ...domain.value_objects import CredentialPair
from ._http import post_json


@dataclass(slots=True)
class RefreshTokenUseCase:
    """
    Application use case: trade a refresh token for a new access token.

    The returned pair carries a refresh token only when the service rotated it.
    """

    transport: Transport
    settings: RuntimeSettings

    async def execute(self, refresh_token: str) -> CredentialPair:
        """
        Raises:
            ConfigurationError
            RefreshError
        """
        url = self.settings.endpoint(Endpoint.REFRESH.value)
        data = await post_json(
            self.transport,
            url,
            {"refreshToken": refresh_token},
            error_cls=RefreshError,
            action="Token refresh",
        )
        try:
            return CredentialPair.from_payload(data)
        except ValueError as exc:
            raise RefreshError(f"Malformed refresh response: {exc}") from exc
