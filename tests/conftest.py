"""
Shared fixtures: an in-process fake of the Monerium HTTP API and a static token source.
"""
import asyncio
import json

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from monerium_sdk import AuthConfig, Client, Environment, Token


class StaticTokenSource:
    """Token source that always hands out the same token."""

    def __init__(self, access_token: str = "test-token"):
        self.access_token = access_token
        self.calls = 0

    def token(self) -> Token:
        self.calls += 1
        return Token(access_token=self.access_token)


class FakeMonerium:
    """Records every request and answers with canned responses keyed by (method, path)."""

    def __init__(self):
        self.routes = {}
        self.requests = []
        self.base_url = ""

    def reply(self, method, path, body, status=200, headers=None, delay=0.0):
        self.routes[(method, path)] = (status, body, headers or {}, delay)

    async def handle(self, request: web.Request) -> web.Response:
        record = {
            "method": request.method,
            "path": request.path,
            "query": dict(request.query),
            "headers": dict(request.headers),
        }
        if request.content_type == "multipart/form-data":
            reader = await request.multipart()
            part = await reader.next()
            record["field"] = part.name
            record["filename"] = part.filename
            record["content"] = await part.read()
        else:
            raw = await request.read()
            record["json"] = json.loads(raw) if raw else None
        self.requests.append(record)

        status, body, headers, delay = self.routes.get(
            (request.method, request.path),
            (404, {"code": 404, "status": "Not Found", "message": "not found"}, {}, 0.0)
        )
        if delay:
            await asyncio.sleep(delay)
        text = body if isinstance(body, str) else json.dumps(body)
        return web.Response(status=status, text=text, headers=headers, content_type="application/json")


@pytest_asyncio.fixture
async def fake_api():
    fake = FakeMonerium()
    app = web.Application()
    app.router.add_route("*", "/{tail:.*}", fake.handle)
    server = TestServer(app)
    await server.start_server()
    fake.base_url = str(server.make_url("")).rstrip("/")
    yield fake
    await server.close()


@pytest.fixture
def token_source():
    return StaticTokenSource()


@pytest_asyncio.fixture
async def client(fake_api, token_source):
    environment = Environment(
        name="test",
        base_url=fake_api.base_url,
        ws_url="ws://127.0.0.1:1",
        token_url=f"{fake_api.base_url}/auth/token",
    )
    auth = AuthConfig(client_id="client-id", client_secret="client-secret", token_url=environment.token_url)
    async with Client(environment, auth, token_source=token_source) as c:
        yield c


@pytest.fixture
def order_payload():
    """Factory for order JSON as sent by the API."""
    def make(order_id="ord-1", state="placed", **overrides):
        payload = {
            "id": order_id,
            "profile": "prof-1",
            "accountId": "acc-1",
            "address": "0x59cFC7a4fE4bC6C8F9A55d9B6dDE5A6E1F2a3b4c",
            "kind": "redeem",
            "amount": "100.5",
            "currency": "eur",
            "counterpart": {
                "identifier": {"standard": "iban", "iban": "GR1601101250000000012300695"},
                "details": {"country": "GR", "firstName": "Nikos", "lastName": "Papadopoulos"},
            },
            "memo": "invoice 42",
            "meta": {
                "state": state,
                "placedBy": "user-1",
                "placedAt": "2023-05-02T09:30:00Z",
                "receivedAmount": "100.5",
                "sentAmount": "100.5",
            },
        }
        payload.update(overrides)
        return payload
    return make
