"""Base class for recipe provider adapters.

Each adapter wraps exactly one outbound call. `generate()` raises a
ProviderError subclass on failure; `attempt()` wraps it into a tagged
ProviderResult so the orchestrator can fold over adapters without nested
exception handlers. Adapters never retry: moving on to the next provider is
the orchestrator's job.
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import aiohttp

from strugglemeal.models.models import Preferences, Recipe
from strugglemeal.providers.errors import ParseError, ProviderError, TransportError
from strugglemeal.utils.logger import logger


@dataclass(frozen=True)
class ProviderResult:
    """Outcome of one provider attempt: recipes on success, an error otherwise."""

    provider: str
    recipes: List[Recipe] = field(default_factory=list)
    error: Optional[ProviderError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> Optional[str]:
        return self.error.kind if self.error is not None else None


class RecipeProvider(ABC):
    """One upstream model that can turn preferences into recipes."""

    def __init__(self, name: str, timeout_seconds: float = 30.0) -> None:
        """Initialize provider.

        Args:
            name: Label used in logs and stored as recipe provenance.
            timeout_seconds: Upper bound for the whole outbound call.
        """
        if timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got: {timeout_seconds}")
        self.name = name
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    def is_configured(self) -> bool:
        """Return False when a credential or endpoint is missing."""
        return True

    @abstractmethod
    async def generate(self, preferences: Preferences, session: aiohttp.ClientSession) -> Sequence[Recipe]:
        """Produce recipes with a single outbound call.

        Raises:
            TransportError: Network failure, timeout, or non-success status.
            ParseError: Response could not be turned into recipes.
        """

    async def attempt(self, preferences: Preferences, session: aiohttp.ClientSession) -> ProviderResult:
        """Run generate() and convert any failure into a tagged result.

        Never raises except for cancellation. Unexpected exceptions are logged
        with a traceback and reported as generic provider failures.
        """
        try:
            recipes = await self.generate(preferences, session)
        except ProviderError as e:
            if e.provider is None:
                e.provider = self.name
            logger.warning(f"Provider {self.name} failed ({e.kind}): {e}", extra={"provider": self.name})
            return ProviderResult(provider=self.name, error=e)
        except Exception as e:
            logger.error(
                f"Provider {self.name} raised unexpectedly: {e}",
                exc_info=True,
                extra={"provider": self.name},
            )
            return ProviderResult(provider=self.name, error=ProviderError(str(e), provider=self.name))

        logger.info(f"Provider {self.name} returned {len(recipes)} recipe(s)", extra={"provider": self.name})
        return ProviderResult(provider=self.name, recipes=list(recipes))

    async def _post_json(
        self,
        session: aiohttp.ClientSession,
        url: str,
        payload: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None,
        decode_json: bool = True,
    ) -> Any:
        """POST a JSON body and return the response body.

        Args:
            decode_json: Decode the body as JSON. When False the raw text is
                returned and never fails to parse.

        Raises:
            TransportError: Connection error, timeout, or status outside 2xx.
            ParseError: decode_json is set and the body is not JSON.
        """
        request_headers = {"Content-Type": "application/json", **(headers or {})}
        try:
            async with session.post(url, json=payload, headers=request_headers, timeout=self.timeout) as response:
                if not 200 <= response.status < 300:
                    body = await response.text()
                    raise TransportError(
                        f"HTTP {response.status} from {self.name}: {body[:200]}",
                        provider=self.name,
                        status=response.status,
                    )
                if not decode_json:
                    return await response.text()
                return await self._read_json(response)
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"Request to {self.name} timed out after {self.timeout.total}s", provider=self.name
            ) from e
        except aiohttp.ClientError as e:
            raise TransportError(f"Request to {self.name} failed: {e}", provider=self.name) from e

    async def _read_json(self, response: aiohttp.ClientResponse) -> Any:
        try:
            return await response.json(content_type=None)
        except ValueError as e:
            raise ParseError(f"Response from {self.name} is not JSON: {e}", provider=self.name) from e
