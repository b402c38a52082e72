"""Hugging Face Inference API adapter (tertiary provider).

The hosted general-purpose model gives no structured-output guarantee, so its
text is never parsed. A successful HTTP exchange is the only thing that
matters; the recipes come from the fixed template set in
strugglemeal.recipes.fallback via structure_unstructured_response().
"""

from typing import Any, Dict, Optional, Sequence

import aiohttp

from strugglemeal.models.models import Preferences, Recipe
from strugglemeal.prompts.prompts import build_recipe_prompt
from strugglemeal.providers.base import RecipeProvider
from strugglemeal.providers.errors import ConfigurationError
from strugglemeal.providers.parsing import structure_unstructured_response


class HuggingFaceProvider(RecipeProvider):
    """Generate recipes through a text-generation model on the Inference API."""

    def __init__(
        self,
        url: str,
        api_key: Optional[str] = None,
        name: str = "huggingface",
        timeout_seconds: float = 30.0,
        max_new_tokens: int = 1000,
        temperature: float = 0.7,
        top_p: float = 0.9,
    ) -> None:
        super().__init__(name, timeout_seconds)
        self.url = url
        self.api_key = api_key
        self.parameters: Dict[str, Any] = {
            "max_new_tokens": max_new_tokens,
            "temperature": temperature,
            "top_p": top_p,
            "do_sample": True,
        }

    def is_configured(self) -> bool:
        # Anonymous calls are allowed; only the endpoint is required
        return bool(self.url)

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {"inputs": prompt, "parameters": dict(self.parameters)}

    async def generate(self, preferences: Preferences, session: aiohttp.ClientSession) -> Sequence[Recipe]:
        if not self.is_configured():
            raise ConfigurationError(f"{self.name} has no endpoint configured", provider=self.name)

        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else None
        raw = await self._post_json(
            session,
            self.url,
            self.build_payload(build_recipe_prompt(preferences)),
            headers=headers,
            decode_json=False,
        )
        return structure_unstructured_response(raw, preferences, source=self.name)
