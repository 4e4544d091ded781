"""Credential records, the response envelope and per-operation response types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import RemoteAPIError


@dataclass(frozen=True)
class Ticket:
    """Externally supplied ticket; ``expires`` is epoch seconds."""

    value: str
    expires: float

    def is_valid(self, now: float) -> bool:
        return self.expires > now


@dataclass(frozen=True)
class CachedToken:
    """Suite access token held by a broker; ``expires`` is epoch seconds."""

    value: Optional[str] = None
    expires: float = 0

    def is_valid(self, now: float) -> bool:
        return self.value is not None and self.expires > now


EXPIRED_TOKEN = CachedToken()


@dataclass(frozen=True)
class Envelope:
    """Success/failure view over a ``{errcode, errmsg, ...}`` response body."""

    errcode: Optional[int]
    errmsg: str
    body: Dict[str, Any]

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Envelope":
        return cls(errcode=payload.get("errcode"), errmsg=payload.get("errmsg") or "", body=payload)

    @property
    def ok(self) -> bool:
        return self.errcode == 0

    def unwrap(self) -> Dict[str, Any]:
        """Return the body on success, otherwise raise :class:`RemoteAPIError`."""
        if self.ok:
            return self.body
        raise RemoteAPIError(self.errmsg or f"errcode={self.errcode}", errcode=self.errcode)


@dataclass(frozen=True)
class SuiteToken:
    suite_access_token: str
    expires_in: int
    raw: Dict[str, Any] = field(repr=False)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "SuiteToken":
        # Some deployments answer with ``access_token`` instead.
        token = payload.get("suite_access_token") or payload.get("access_token")
        return cls(suite_access_token=token, expires_in=int(payload.get("expires_in") or 0), raw=payload)


@dataclass(frozen=True)
class AuthCorpInfo:
    corpid: str
    corp_name: str
    corp_logo_url: Optional[str] = None
    industry: Optional[str] = None
    invite_code: Optional[str] = None
    license_code: Optional[str] = None
    auth_channel: Optional[str] = None
    is_authenticated: Optional[bool] = None
    auth_level: Optional[int] = None
    invite_url: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "AuthCorpInfo":
        return cls(
            corpid=payload.get("corpid", ""),
            corp_name=payload.get("corp_name", ""),
            corp_logo_url=payload.get("corp_logo_url"),
            industry=payload.get("industry"),
            invite_code=payload.get("invite_code"),
            license_code=payload.get("license_code"),
            auth_channel=payload.get("auth_channel"),
            is_authenticated=payload.get("is_authenticated"),
            auth_level=payload.get("auth_level"),
            invite_url=payload.get("invite_url"),
        )


@dataclass(frozen=True)
class PermanentCode:
    permanent_code: str
    auth_corp_info: AuthCorpInfo
    raw: Dict[str, Any] = field(repr=False)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "PermanentCode":
        return cls(
            permanent_code=payload.get("permanent_code", ""),
            auth_corp_info=AuthCorpInfo.from_payload(payload.get("auth_corp_info") or {}),
            raw=payload,
        )


@dataclass(frozen=True)
class CorpToken:
    access_token: str
    expires_in: int
    raw: Dict[str, Any] = field(repr=False)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "CorpToken":
        return cls(access_token=payload.get("access_token", ""), expires_in=int(payload.get("expires_in") or 0), raw=payload)


@dataclass(frozen=True)
class AgentSummary:
    agent_name: str
    agentid: int
    appid: Optional[int] = None
    logo_url: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "AgentSummary":
        return cls(
            agent_name=payload.get("agent_name", ""),
            agentid=payload.get("agentid", 0),
            appid=payload.get("appid"),
            logo_url=payload.get("logo_url"),
        )


@dataclass(frozen=True)
class AuthInfo:
    auth_corp_info: AuthCorpInfo
    auth_user_id: Optional[str]
    agents: List[AgentSummary]
    raw: Dict[str, Any] = field(repr=False)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "AuthInfo":
        user = payload.get("auth_user_info") or {}
        agents = (payload.get("auth_info") or {}).get("agent") or []
        return cls(
            auth_corp_info=AuthCorpInfo.from_payload(payload.get("auth_corp_info") or {}),
            auth_user_id=user.get("userId"),
            agents=[AgentSummary.from_payload(a) for a in agents],
            raw=payload,
        )


@dataclass(frozen=True)
class Agent:
    agentid: int
    name: str
    logo_url: Optional[str]
    description: Optional[str]
    close: Optional[int]
    raw: Dict[str, Any] = field(repr=False)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Agent":
        return cls(
            agentid=payload.get("agentid", 0),
            name=payload.get("name", ""),
            logo_url=payload.get("logo_url"),
            description=payload.get("description"),
            close=payload.get("close"),
            raw=payload,
        )


@dataclass(frozen=True)
class Result:
    """Bare success envelope for operations without a payload."""

    errcode: int
    errmsg: str
    raw: Dict[str, Any] = field(repr=False)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Result":
        return cls(errcode=payload.get("errcode", 0), errmsg=payload.get("errmsg", ""), raw=payload)
