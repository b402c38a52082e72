"""Failure kinds raised by recipe providers.

None of these reach callers of the orchestrator; they select the next stage
of the fallback chain and show up in logs and in ProviderResult.
"""

from typing import Optional


class ProviderError(Exception):
    """A provider attempt failed. `kind` names the failure for logs and results."""

    kind = "provider"

    def __init__(self, message: str, provider: Optional[str] = None) -> None:
        super().__init__(message)
        self.provider = provider


class ConfigurationError(ProviderError):
    """The provider has no credential or endpoint; it is skipped, not failed."""

    kind = "configuration"


class TransportError(ProviderError):
    """Network failure, timeout, or a non-success HTTP status."""

    kind = "transport"

    def __init__(self, message: str, provider: Optional[str] = None, status: Optional[int] = None) -> None:
        super().__init__(message, provider)
        self.status = status


class ParseError(ProviderError):
    """The provider answered, but no recipe could be decoded from the answer."""

    kind = "parse"
