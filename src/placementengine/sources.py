"""Policy sources: inline documents or remote JSON endpoints."""

from __future__ import annotations

import json
from dataclasses import dataclass
from http import client
from typing import Any, Mapping, Protocol, Union, runtime_checkable
from urllib import error, request

import structlog
from pydantic import ValidationError

from .errors import PolicyConfigurationError, PolicyFetchError
from .schemas import Policies


@dataclass(frozen=True, slots=True)
class InlinePolicies:
    policies: Policies | Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class RemotePolicies:
    url: str


PolicySource = Union[InlinePolicies, RemotePolicies]


@runtime_checkable
class PolicyFetcher(Protocol):
    """Retrieves a parsed policy document from a URL."""

    def fetch(self, url: str) -> Any:
        """Return the decoded JSON body or raise ``PolicyFetchError``."""


class HTTPPolicyFetcher:
    """Fetch policy documents over HTTP(S)."""

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._timeout = timeout
        self._headers = {"Accept": "application/json", **(headers or {})}
        self._logger = structlog.get_logger(__name__)

    def fetch(self, url: str) -> Any:
        try:
            req = request.Request(url, headers=self._headers, method="GET")
            with request.urlopen(req, timeout=self._timeout) as resp:
                body = resp.read().decode("utf-8")
        except error.HTTPError as exc:
            raise PolicyFetchError(url, f"HTTP {exc.code}") from exc
        except (client.HTTPException, OSError, ValueError) as exc:
            raise PolicyFetchError(url, str(exc)) from exc

        try:
            data = json.loads(body)
        except json.JSONDecodeError as exc:
            raise PolicyFetchError(url, f"invalid JSON ({exc})") from exc
        self._logger.info("policies.fetched", url=url)
        return data


def as_policy_source(value: Any) -> PolicySource:
    """Wrap a raw ``policies`` argument: strings are URLs, anything else is inline."""
    if isinstance(value, (InlinePolicies, RemotePolicies)):
        return value
    if isinstance(value, str):
        return RemotePolicies(url=value)
    return InlinePolicies(policies=value)


def coerce_policies(policies: Policies | Mapping[str, Any] | None) -> Policies:
    """Validate a policy document into a complete ``Policies`` value."""
    if policies is None:
        raise PolicyConfigurationError("Policies must be provided")
    if isinstance(policies, Policies):
        return policies.model_copy(deep=True)
    if not isinstance(policies, Mapping):
        raise PolicyConfigurationError("Policies must be a mapping of policy blocks")

    required = list(Policies.model_fields)
    present = {Policies.field_for(str(key)) for key in policies}
    missing = [name for name in required if name not in present]
    if missing:
        raise PolicyConfigurationError(
            "Policies object must contain all required policy keys: "
            f"{', '.join(required)} (missing: {', '.join(missing)})"
        )
    try:
        return Policies.model_validate(policies)
    except ValidationError as exc:
        raise PolicyConfigurationError(f"Invalid policies: {exc}") from exc


def resolve_policies(source: PolicySource, fetcher: PolicyFetcher) -> Policies:
    """Resolve a source to one canonical ``Policies`` value."""
    if isinstance(source, RemotePolicies):
        return coerce_policies(fetcher.fetch(source.url))
    return coerce_policies(source.policies)


__all__ = [
    "HTTPPolicyFetcher",
    "InlinePolicies",
    "PolicyFetcher",
    "PolicySource",
    "RemotePolicies",
    "as_policy_source",
    "coerce_policies",
    "resolve_policies",
]
