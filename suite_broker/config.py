"""Configuration for the suite token broker."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_BASE_URL = "https://oapi.dingtalk.com/service"
TICKET_EXPIRES_IN = 20 * 60


@dataclass
class BrokerConfig:
    """Suite identity and transport settings."""

    suite_key: str
    suite_secret: str
    base_url: str = DEFAULT_BASE_URL
    ticket_expires_in: int = TICKET_EXPIRES_IN
    timeout: float = 10.0

    @classmethod
    def from_env(cls) -> "BrokerConfig":
        """Build a config from ``SUITE_BROKER_*`` environment variables."""
        return cls(
            suite_key=os.getenv("SUITE_BROKER_SUITE_KEY", ""),
            suite_secret=os.getenv("SUITE_BROKER_SUITE_SECRET", ""),
            base_url=os.getenv("SUITE_BROKER_BASE_URL", DEFAULT_BASE_URL),
            ticket_expires_in=int(os.getenv("SUITE_BROKER_TICKET_EXPIRES_IN", str(TICKET_EXPIRES_IN))),
            timeout=float(os.getenv("SUITE_BROKER_TIMEOUT", "10")),
        )
