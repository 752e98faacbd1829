# tests/test_httpx_transport.py
import json

import httpx
import pytest

from agent_auth.adapters.httpx.transport import HttpxTransport
from agent_auth.domain.exceptions import TransportError


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def test_posts_json_and_decodes_response():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        seen["auth"] = request.headers.get("Authorization")
        seen["accept"] = request.headers.get("Accept")
        return httpx.Response(200, json={"id": "ch1", "payload": "p"})

    transport = HttpxTransport(_client(handler))
    resp = await transport.request(
        "POST",
        "https://api.example.com/auth/challenge",
        headers={"Authorization": "Bearer AT1"},
        json={"agentRef": "a1"},
    )

    assert resp.ok
    assert resp.status_code == 200
    assert resp.reason == "OK"
    assert resp.body == {"id": "ch1", "payload": "p"}
    assert seen == {
        "method": "POST",
        "url": "https://api.example.com/auth/challenge",
        "body": {"agentRef": "a1"},
        "auth": "Bearer AT1",
        "accept": "application/json",
    }


async def test_error_status_is_returned_not_raised():
    transport = HttpxTransport(_client(lambda request: httpx.Response(401, text="nope")))

    resp = await transport.request("GET", "https://api.example.com/agents/me")

    assert not resp.ok
    assert resp.status_code == 401
    assert resp.reason == "Unauthorized"
    assert resp.body == "nope"


async def test_empty_body_is_none():
    transport = HttpxTransport(_client(lambda request: httpx.Response(204)))

    resp = await transport.request("POST", "https://api.example.com/auth/refresh", json={})

    assert resp.ok
    assert resp.body is None


async def test_connection_failure_raises_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = HttpxTransport(_client(handler))

    with pytest.raises(TransportError, match="connection refused"):
        await transport.request("GET", "https://api.example.com/agents")


async def test_close_leaves_injected_client_open():
    client = _client(lambda request: httpx.Response(200, json={}))
    transport = HttpxTransport(client)

    await transport.close()

    assert not client.is_closed
    await client.aclose()


async def test_close_owned_client():
    transport = HttpxTransport(timeout=5.0)

    await transport.close()

    assert transport._client.is_closed
