"""Suite ticket storage backends."""

from .storage import InMemoryTicketStore, PostgresTicketStore, TicketStore, create_ticket_store_from_env

__all__ = [
    "TicketStore",
    "InMemoryTicketStore",
    "PostgresTicketStore",
    "create_ticket_store_from_env",
]
