"""Exception types raised by the suite broker."""

from __future__ import annotations

from typing import Optional


class SuiteBrokerError(Exception):
    """Base class for suite broker errors."""


class RemoteAPIError(SuiteBrokerError):
    """Raised when the remote service answers with a non-zero ``errcode``."""

    def __init__(self, errmsg: str, *, errcode: Optional[int] = None) -> None:
        super().__init__(errmsg)
        self.errmsg = errmsg
        self.errcode = errcode


class TicketUnavailableError(SuiteBrokerError, LookupError):
    """Raised when a ticket store holds no usable ticket."""
