"""Request metadata (client IP, user agent) held in a contextvar.

Set by middleware, read by the audit service and by registration when
it stamps consent records.
"""

import ipaddress
from contextvars import ContextVar
from dataclasses import dataclass

MAX_USER_AGENT_LENGTH = 500
MAX_IP_LENGTH = 45

_request_metadata: ContextVar["RequestMetadata | None"] = ContextVar(
    "request_metadata", default=None
)


@dataclass(frozen=True)
class RequestMetadata:
    ip_address: str | None = None
    user_agent: str | None = None
    request_id: str | None = None

    @classmethod
    def build(
        cls,
        ip_address: str | None = None,
        user_agent: str | None = None,
        request_id: str | None = None,
    ) -> "RequestMetadata":
        if user_agent and len(user_agent) > MAX_USER_AGENT_LENGTH:
            user_agent = user_agent[:MAX_USER_AGENT_LENGTH]
        return cls(ip_address=ip_address, user_agent=user_agent, request_id=request_id)


def set_request_metadata(metadata: RequestMetadata) -> None:
    _request_metadata.set(metadata)


def get_request_metadata() -> RequestMetadata:
    """Current request metadata, or an empty instance outside a request."""
    return _request_metadata.get() or RequestMetadata()


def clear_request_metadata() -> None:
    _request_metadata.set(None)


def _valid_ip(value: str | None) -> str | None:
    if not value:
        return None
    try:
        address = str(ipaddress.ip_address(value.strip()))
    except ValueError:
        return None
    return address if len(address) <= MAX_IP_LENGTH else None


def get_client_ip(forwarded_for: str | None, client_host: str | None) -> str | None:
    """First address of X-Forwarded-For, falling back to the socket peer.

    X-Forwarded-For is client-controlled: anything that does not parse as an
    IPv4/IPv6 address is ignored. Returns None when neither value is an address.
    """
    if forwarded_for:
        forwarded = _valid_ip(forwarded_for.split(",")[0])
        if forwarded:
            return forwarded
    return _valid_ip(client_host)
