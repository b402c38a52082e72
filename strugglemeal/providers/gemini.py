"""Gemini generateContent adapter.

Used twice in the fallback chain with the same prompt and wire format: once
for the primary model and once for the secondary model. Output is prose with
embedded JSON recipes, decoded by the structured-text parser.
"""

from typing import Any, Dict, Optional, Sequence

import aiohttp

from strugglemeal.models.models import Preferences, Recipe
from strugglemeal.prompts.prompts import build_recipe_prompt
from strugglemeal.providers.base import RecipeProvider
from strugglemeal.providers.errors import ConfigurationError
from strugglemeal.providers.parsing import parse_gemini_response
from strugglemeal.utils.logger import logger


class GeminiProvider(RecipeProvider):
    """Generate recipes through a Gemini model endpoint."""

    def __init__(
        self,
        name: str,
        url: str,
        api_key: Optional[str],
        timeout_seconds: float = 30.0,
    ) -> None:
        """Initialize GeminiProvider.

        Args:
            name: Label for logs and provenance, e.g. "gemini-2.0-flash".
            url: Full generateContent endpoint for the model.
            api_key: Bearer token. Empty or None leaves the provider unconfigured.
            timeout_seconds: Upper bound for the call.
        """
        super().__init__(name, timeout_seconds)
        self.url = url
        self.api_key = api_key or ""

    def is_configured(self) -> bool:
        return bool(self.api_key and self.url)

    @staticmethod
    def build_payload(prompt: str) -> Dict[str, Any]:
        return {"contents": [{"parts": [{"text": prompt}]}]}

    async def generate(self, preferences: Preferences, session: aiohttp.ClientSession) -> Sequence[Recipe]:
        if not self.is_configured():
            raise ConfigurationError(f"{self.name} has no API key configured", provider=self.name)

        prompt = build_recipe_prompt(preferences)
        logger.debug(f"Calling {self.name} ({len(prompt)} char prompt)", extra={"provider": self.name})

        payload = await self._post_json(
            session,
            self.url,
            self.build_payload(prompt),
            headers={"Authorization": f"Bearer {self.api_key}"},
        )
        return parse_gemini_response(payload, source=self.name)
