"""Endpoint resolution and target classification."""

from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet
from urllib.parse import urlsplit

from .config import BASE_URL, CHECKS_HOST


class Target(str, Enum):
    """Which API family an endpoint belongs to."""
    PRIMARY = "primary"
    CHECKS = "checks"


@dataclass(frozen=True)
class ResolvedEndpoint:
    """Fully-resolved URL plus the error policy that applies to it."""

    url: str
    target: Target

    @property
    def is_checks(self) -> bool:
        return self.target is Target.CHECKS


def endpoint_host(endpoint: str) -> str:
    """
    Lower-cased host of an absolute endpoint, '' for relative ones.

    Only URLs with a scheme have a host: a scheme-relative ``//host/path``
    counts as a relative path. Malformed input (bad port, stray brackets)
    yields '' rather than raising, so such endpoints are treated as
    relative paths of the primary API.
    """
    try:
        parts = urlsplit(endpoint)
        if not parts.scheme:
            return ""
        return (parts.hostname or "").lower()
    except ValueError:
        return ""


def resolve_endpoint(
    endpoint: str,
    base_url: str = BASE_URL,
    checks_hosts: AbstractSet[str] = frozenset({CHECKS_HOST}),
) -> ResolvedEndpoint:
    """
    Resolve an endpoint against the primary base URL.

    Endpoints whose host is one of ``checks_hosts`` are used verbatim.
    Everything else is appended to ``base_url`` after dropping one
    leading slash.

    Examples:
        >>> resolve_endpoint("v1/domains").url
        'https://api.dns.constellix.com/v1/domains'
        >>> resolve_endpoint("https://api.sonar.constellix.com/rest/api/http").target
        <Target.CHECKS: 'checks'>
    """
    if endpoint_host(endpoint) in checks_hosts:
        return ResolvedEndpoint(url=endpoint, target=Target.CHECKS)

    if not base_url.endswith("/"):
        base_url += "/"
    if endpoint.startswith("/"):
        endpoint = endpoint[1:]
    return ResolvedEndpoint(url=base_url + endpoint, target=Target.PRIMARY)
