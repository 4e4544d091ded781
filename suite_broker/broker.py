"""Suite access token broker and the suite service operations it authorizes."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional

from .config import BrokerConfig
from .errors import RemoteAPIError
from .transport import SuiteTransport
from .types import (
    EXPIRED_TOKEN,
    Agent,
    AuthInfo,
    CachedToken,
    CorpToken,
    PermanentCode,
    Result,
    SuiteToken,
    Ticket,
)

logger = logging.getLogger(__name__)

TicketSupplier = Callable[[], Awaitable[Ticket]]


class TokenBroker:
    """Cache a suite access token and use it to call the suite service.

    The ticket and the token are cached separately, each by its own expiry.
    Refreshes are serialized by a lock so concurrent callers that observe an
    expired token trigger a single exchange.
    """

    def __init__(
        self,
        config: BrokerConfig,
        get_ticket: TicketSupplier,
        *,
        transport: Optional[SuiteTransport] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.suite_key = config.suite_key
        self.suite_secret = config.suite_secret
        self._get_ticket = get_ticket
        self._transport = transport or SuiteTransport(config.base_url, timeout=config.timeout)
        self._clock = clock
        self._ticket: Optional[Ticket] = None
        self._token: CachedToken = EXPIRED_TOKEN
        self._lock = asyncio.Lock()

    @property
    def cached_token(self) -> CachedToken:
        return self._token

    async def get_valid_ticket(self) -> Ticket:
        """Return the cached ticket, asking the supplier when it has expired."""
        if self._ticket is not None and self._ticket.is_valid(self._clock()):
            return self._ticket
        self._ticket = await self._get_ticket()
        return self._ticket

    async def refresh_token(self) -> CachedToken:
        """Exchange a ticket for a new suite token and store it in the cache."""
        ticket = await self.get_valid_ticket()
        envelope = await self._transport.post(
            "/get_suite_token",
            {
                "suite_key": self.suite_key,
                "suite_secret": self.suite_secret,
                "suite_ticket": ticket.value,
            },
        )
        token = SuiteToken.from_payload(envelope.unwrap())
        if not token.suite_access_token:
            raise RemoteAPIError("suite access token missing from response", errcode=envelope.errcode)
        self._token = CachedToken(value=token.suite_access_token, expires=self._clock() + token.expires_in)
        logger.info(f"Refreshed suite access token for {self.suite_key}, expires in {token.expires_in}s")
        return self._token

    async def get_token(self) -> CachedToken:
        """Return a valid suite token, refreshing it at most once per expiry."""
        if self._token.is_valid(self._clock()):
            return self._token
        async with self._lock:
            # Another caller may have refreshed while we waited.
            if self._token.is_valid(self._clock()):
                return self._token
            return await self.refresh_token()

    def invalidate(self) -> None:
        """Drop the cached token so the next call refreshes it."""
        self._token = EXPIRED_TOKEN

    async def _call(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        token = await self.get_token()
        envelope = await self._transport.post(path, body, query={"suite_access_token": token.value})
        return envelope.unwrap()

    async def get_permanent_code(self, tmp_auth_code: str) -> PermanentCode:
        payload = await self._call("/get_permanent_code", {"tmp_auth_code": tmp_auth_code})
        return PermanentCode.from_payload(payload)

    async def get_corp_token(self, auth_corpid: str, permanent_code: str) -> CorpToken:
        payload = await self._call(
            "/get_corp_token",
            {"auth_corpid": auth_corpid, "permanent_code": permanent_code},
        )
        return CorpToken.from_payload(payload)

    async def get_auth_info(self, auth_corpid: str, permanent_code: str) -> AuthInfo:
        payload = await self._call(
            "/get_auth_info",
            {"suite_key": self.suite_key, "auth_corpid": auth_corpid, "permanent_code": permanent_code},
        )
        return AuthInfo.from_payload(payload)

    async def get_agent(self, agentid: int, auth_corpid: str, permanent_code: str) -> Agent:
        payload = await self._call(
            "/get_agent",
            {
                "suite_key": self.suite_key,
                "auth_corpid": auth_corpid,
                "permanent_code": permanent_code,
                "agentid": agentid,
            },
        )
        return Agent.from_payload(payload)

    async def activate_suite(self, auth_corpid: str, permanent_code: str) -> Result:
        payload = await self._call(
            "/activate_suite",
            {"suite_key": self.suite_key, "auth_corpid": auth_corpid, "permanent_code": permanent_code},
        )
        return Result.from_payload(payload)

    async def set_corp_ipwhitelist(self, auth_corpid: str, ip_whitelist: List[str]) -> Result:
        payload = await self._call(
            "/set_corp_ipwhitelist",
            {"suite_key": self.suite_key, "auth_corpid": auth_corpid, "ip_whitelist": list(ip_whitelist)},
        )
        return Result.from_payload(payload)

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> "TokenBroker":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
