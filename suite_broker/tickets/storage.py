"""Ticket stores that back a broker's ticket supplier."""

from __future__ import annotations

import os
import time
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, Optional

import asyncpg

from ..config import TICKET_EXPIRES_IN
from ..errors import TicketUnavailableError
from ..types import Ticket


class TicketStore(ABC):
    """Holds the latest suite ticket pushed by the platform."""

    def __init__(
        self,
        suite_key: str,
        *,
        ticket_expires_in: int = TICKET_EXPIRES_IN,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.suite_key = suite_key
        self.ticket_expires_in = ticket_expires_in
        self._clock = clock

    async def __call__(self) -> Ticket:
        return await self.get_ticket()

    async def get_ticket(self) -> Ticket:
        """Return the stored ticket or raise :class:`TicketUnavailableError`."""
        ticket = await self._load()
        if ticket is None:
            raise TicketUnavailableError(f"no suite ticket stored for {self.suite_key}")
        if not ticket.is_valid(self._clock()):
            raise TicketUnavailableError(f"suite ticket for {self.suite_key} has expired")
        return ticket

    async def save_ticket(self, value: str, *, expires_in: Optional[int] = None) -> Ticket:
        """Store a freshly pushed ticket."""
        ticket = Ticket(value=value, expires=self._clock() + (expires_in or self.ticket_expires_in))
        await self._store(ticket)
        return ticket

    @abstractmethod
    async def _load(self) -> Optional[Ticket]:
        """Fetch the stored ticket, if any."""

    @abstractmethod
    async def _store(self, ticket: Ticket) -> None:
        """Persist a ticket, replacing any previous one."""

    async def close(self) -> None:
        """Release backend resources if needed."""


class InMemoryTicketStore(TicketStore):
    """Process-local ticket store."""

    def __init__(self, suite_key: str, **kwargs) -> None:
        super().__init__(suite_key, **kwargs)
        self.tickets: dict[str, Ticket] = {}

    async def _load(self) -> Optional[Ticket]:
        return self.tickets.get(self.suite_key)

    async def _store(self, ticket: Ticket) -> None:
        self.tickets[self.suite_key] = ticket


class PostgresTicketStore(TicketStore):
    """Postgres-backed ticket store using asyncpg."""

    def __init__(self, suite_key: str, dsn: str, **kwargs) -> None:
        super().__init__(suite_key, **kwargs)
        self.dsn = dsn
        self.pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        if self.pool is None:
            self.pool = await asyncpg.create_pool(dsn=self.dsn, min_size=1, max_size=4)

    async def close(self) -> None:
        if self.pool is not None:
            await self.pool.close()
            self.pool = None

    async def _load(self) -> Optional[Ticket]:
        await self.connect()
        assert self.pool is not None
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow("SELECT ticket, expires_at FROM suite_tickets WHERE suite_key=$1", self.suite_key)
            if row is None:
                return None
            return Ticket(value=row["ticket"], expires=row["expires_at"].timestamp())

    async def _store(self, ticket: Ticket) -> None:
        await self.connect()
        assert self.pool is not None
        async with self.pool.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO suite_tickets (suite_key, ticket, expires_at)
                VALUES ($1, $2, $3)
                ON CONFLICT (suite_key) DO UPDATE SET ticket = EXCLUDED.ticket, expires_at = EXCLUDED.expires_at
                """,
                self.suite_key,
                ticket.value,
                datetime.fromtimestamp(ticket.expires, tz=timezone.utc),
            )


def create_ticket_store_from_env(suite_key: str, **kwargs) -> TicketStore:
    """Create Postgres ticket store if env configured, otherwise in-memory."""
    dsn = os.getenv("SUITE_BROKER_PG_DSN") or os.getenv("DATABASE_URL")
    if dsn:
        return PostgresTicketStore(suite_key, dsn, **kwargs)
    return InMemoryTicketStore(suite_key, **kwargs)
