import json
from typing import Any, Callable, Dict, List, Union

import httpx
import pytest

from suite_broker import BrokerConfig, SuiteTransport, Ticket, TokenBroker

BASE_URL = "https://oapi.example.test/service"

Reply = Union[Dict[str, Any], httpx.Response, Callable[[httpx.Request], httpx.Response]]


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSuiteService:
    """Mock suite service plus a counting ticket supplier."""

    def __init__(self) -> None:
        self.clock = FakeClock()
        self.routes: Dict[str, Reply] = {
            "/get_suite_token": {"errcode": 0, "errmsg": "ok", "suite_access_token": "suite-tok", "expires_in": 7200},
        }
        self.requests: List[httpx.Request] = []
        self.ticket_calls = 0
        self.ticket_ttl = 1200.0

    async def get_ticket(self) -> Ticket:
        self.ticket_calls += 1
        return Ticket(value=f"ticket-{self.ticket_calls}", expires=self.clock() + self.ticket_ttl)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path[len("/service"):]
        reply = self.routes.get(path)
        if reply is None:
            return httpx.Response(404, json={"errcode": 404, "errmsg": "not found"})
        if callable(reply):
            return reply(request)
        if isinstance(reply, httpx.Response):
            return reply
        return httpx.Response(200, json=reply)

    def calls(self, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == f"/service{path}"]

    def body(self, request: httpx.Request) -> Dict[str, Any]:
        return json.loads(request.content)

    def broker(self, **config: Any) -> TokenBroker:
        conf = BrokerConfig(suite_key="suite-key", suite_secret="suite-secret", base_url=BASE_URL, **config)
        client = httpx.AsyncClient(transport=httpx.MockTransport(self.handle))
        transport = SuiteTransport(BASE_URL, client=client)
        return TokenBroker(conf, self.get_ticket, transport=transport, clock=self.clock)


@pytest.fixture
def service() -> FakeSuiteService:
    return FakeSuiteService()
