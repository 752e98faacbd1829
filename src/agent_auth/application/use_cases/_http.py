from __future__ import annotations

from typing import Any, Mapping, Type

from ...domain.exceptions import AuthenticationError
from ...domain.ports import Transport, TransportResponse


async def post_json(
    transport: Transport,
    url: str,
    payload: Mapping[str, Any],
    *,
    error_cls: Type[AuthenticationError],
    action: str,
) -> Any:
    """
    POST a JSON body on an authentication path and return the decoded body.

    Any transport failure or non-success status is raised as `error_cls`.
    """
    try:
        resp: TransportResponse = await transport.request(
            "POST",
            url,
            headers={"Content-Type": "application/json"},
            json=dict(payload),
        )
    except Exception as exc:
        raise error_cls(f"{action} failed: {exc}") from exc

    if not resp.ok:
        raise error_cls(f"{action} failed: {_status_text(resp)}")
    return resp.body


def _status_text(resp: TransportResponse) -> str:
    return f"{resp.status_code} {resp.reason}".strip()
