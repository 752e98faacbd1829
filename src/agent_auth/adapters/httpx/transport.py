from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from ...domain.exceptions import TransportError
from ...domain.ports import Transport, TransportResponse

logger = logging.getLogger(__name__)


class HttpxTransport(Transport):
    """
    Adapter implementing the Transport port on top of httpx.AsyncClient.

    - owns the client unless one is passed in
    - never raises for HTTP status codes; callers inspect `ok`
    - converts connection/timeout failures into TransportError
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        timeout: float = 30.0,
        verify_ssl: bool = True,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(verify=verify_ssl, timeout=timeout)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        json: Optional[Any] = None,
    ) -> TransportResponse:
        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)

        logger.debug("%s %s", method, url)
        try:
            resp = await self._client.request(
                method,
                url,
                headers=request_headers,
                json=json,
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        return TransportResponse(
            status_code=resp.status_code,
            reason=resp.reason_phrase,
            body=self._decode_body(resp),
        )

    # ------------------------------------------------------------------ #
    # helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _decode_body(resp: httpx.Response) -> Any:
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            # error pages are often plain text or HTML
            return resp.text
