"""Suite token broker.

Caches a suite access token minted from an externally supplied ticket and uses
it to authorize suite service calls.
"""

from .broker import TicketSupplier, TokenBroker
from .config import BrokerConfig
from .errors import RemoteAPIError, SuiteBrokerError, TicketUnavailableError
from .tickets import InMemoryTicketStore, PostgresTicketStore, TicketStore, create_ticket_store_from_env
from .transport import SuiteTransport
from .types import (
    Agent,
    AgentSummary,
    AuthCorpInfo,
    AuthInfo,
    CachedToken,
    CorpToken,
    Envelope,
    PermanentCode,
    Result,
    SuiteToken,
    Ticket,
)

__all__ = [
    "TokenBroker",
    "TicketSupplier",
    "BrokerConfig",
    "SuiteTransport",
    "SuiteBrokerError",
    "RemoteAPIError",
    "TicketUnavailableError",
    "TicketStore",
    "InMemoryTicketStore",
    "PostgresTicketStore",
    "create_ticket_store_from_env",
    "Ticket",
    "CachedToken",
    "Envelope",
    "SuiteToken",
    "AuthCorpInfo",
    "PermanentCode",
    "CorpToken",
    "AgentSummary",
    "AuthInfo",
    "Agent",
    "Result",
]
