from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from ..config.settings import RuntimeSettings
from ..domain.constants import Endpoint
from ..domain.entities import AgentList, AgentProfile, SignatureResult
from ..domain.exceptions import ApiError
from ..domain.ports import Transport, TransportResponse
from ..domain.value_objects import TypedDataPayload
from ..application.token_manager import TokenLifecycleManager

logger = logging.getLogger(__name__)


class AgentApiClient:
    """
    Bearer-authenticated client for the agent API.

    - asks the token manager for a token before every call
    - raises ApiError on any non-success status
    - does not retry on 401; call `tokens.invalidate_access_token()` and
      retry if you need that
    """

    def __init__(
        self,
        *,
        transport: Transport,
        tokens: TokenLifecycleManager,
        settings: RuntimeSettings,
    ) -> None:
        self._transport = transport
        self._tokens = tokens
        self.s = settings

    # ------------------------------------------------------------------ #
    # agents
    # ------------------------------------------------------------------ #

    async def get_agent(self) -> AgentProfile:
        data = await self._request("GET", Endpoint.AGENT_ME, action="get agent")
        return AgentProfile.from_payload(data)

    async def list_agents(self) -> AgentList:
        data = await self._request("GET", Endpoint.AGENTS, action="list agents")
        return AgentList.from_payload(data)

    # ------------------------------------------------------------------ #
    # wallet
    # ------------------------------------------------------------------ #

    async def sign_typed_data(
        self,
        typed_data: Union[TypedDataPayload, Mapping[str, Any]],
        *,
        idempotency_key: Optional[str] = None,
    ) -> SignatureResult:
        if isinstance(typed_data, TypedDataPayload):
            typed = typed_data.to_dict()
        else:
            typed = dict(typed_data)

        payload: Dict[str, Any] = {"typed_data": typed}
        if idempotency_key:
            payload["idempotency_key"] = idempotency_key

        data = await self._request(
            "POST",
            Endpoint.SIGN_TYPED_DATA,
            json=payload,
            action="sign typed data",
        )
        return SignatureResult.from_payload(data)

    async def sign_message(self, message: str) -> SignatureResult:
        data = await self._request(
            "POST",
            Endpoint.SIGN_MESSAGE,
            json={"message": message},
            action="sign message",
        )
        return SignatureResult.from_payload(data)

    # ------------------------------------------------------------------ #
    # base helpers
    # ------------------------------------------------------------------ #

    def _auth_headers(self, token: str, *, with_body: bool) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {token}"}
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def _request(
        self,
        method: str,
        endpoint: Endpoint,
        *,
        action: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = self.s.endpoint(endpoint.value)
        token = await self._tokens.ensure_access_token()
        resp: TransportResponse = await self._transport.request(
            method,
            url,
            headers=self._auth_headers(token, with_body=json is not None),
            json=json,
        )
        if not resp.ok:
            logger.debug("%s %s returned %s", method, endpoint.value, resp.status_code)
            raise ApiError(
                f"Failed to {action}: {resp.status_code} {resp.reason}".strip(),
                status_code=resp.status_code,
                reason=resp.reason,
                body=resp.body,
            )
        return resp.body
