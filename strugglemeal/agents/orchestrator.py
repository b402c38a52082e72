"""Recipe generation orchestrator.

Turns Preferences into a list of Recipes by trying providers one at a time in
a fixed priority order and falling back to deterministic synthesis:

    NOT_STARTED -> TRYING_PRIMARY -> TRYING_SECONDARY -> TRYING_TERTIARY
                -> SYNTHESIZING -> DONE

Any provider success jumps straight to DONE. Providers without credentials are
skipped without an attempt. Synthesis always succeeds, so generate() never
raises for valid Preferences.

The orchestrator holds no per-request state: each call opens its own HTTP
session (unless one is passed in) and is safe to run concurrently.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence, Union

import aiohttp

from strugglemeal.models.models import Preferences, Recipe
from strugglemeal.providers.base import ProviderResult, RecipeProvider
from strugglemeal.providers.gemini import GeminiProvider
from strugglemeal.providers.huggingface import HuggingFaceProvider
from strugglemeal.recipes.fallback import FALLBACK_SOURCE, synthesize_fallback_recipes
from strugglemeal.utils.config import Config
from strugglemeal.utils.config import config as default_config
from strugglemeal.utils.logger import logger


class GenerationStage(str, Enum):
    NOT_STARTED = "not_started"
    TRYING_PRIMARY = "trying_primary"
    TRYING_SECONDARY = "trying_secondary"
    TRYING_TERTIARY = "trying_tertiary"
    SYNTHESIZING = "synthesizing"
    DONE = "done"


PROVIDER_STAGES = (
    GenerationStage.TRYING_PRIMARY,
    GenerationStage.TRYING_SECONDARY,
    GenerationStage.TRYING_TERTIARY,
)


@dataclass
class GenerationResult:
    """Recipes from one generate call plus how they were obtained."""

    recipes: List[Recipe]
    source: str
    stages: List[GenerationStage] = field(default_factory=list)
    attempts: List[ProviderResult] = field(default_factory=list)

    @property
    def synthesized(self) -> bool:
        return self.source == FALLBACK_SOURCE


def build_default_providers(config: Config) -> List[RecipeProvider]:
    """Create the primary, secondary and tertiary providers from configuration.

    Args:
        config: Application configuration with keys, endpoints and timeouts.

    Returns:
        Providers in priority order.
    """
    timeout = config.PROVIDER_TIMEOUT_SECONDS
    return [
        GeminiProvider(
            name=config.GEMINI_PRIMARY_MODEL,
            url=config.gemini_primary_url,
            api_key=config.GEMINI_API_KEY,
            timeout_seconds=timeout,
        ),
        GeminiProvider(
            name=config.GEMINI_FALLBACK_MODEL,
            url=config.gemini_fallback_url,
            api_key=config.GEMINI_API_KEY,
            timeout_seconds=timeout,
        ),
        HuggingFaceProvider(
            url=config.HUGGING_FACE_API_URL,
            api_key=config.HUGGING_FACE_API_KEY,
            timeout_seconds=timeout,
            max_new_tokens=config.HF_MAX_NEW_TOKENS,
            temperature=config.HF_TEMPERATURE,
            top_p=config.HF_TOP_P,
        ),
    ]


class RecipeOrchestrator:
    """Sequential fallback over recipe providers with a synthesized last resort."""

    def __init__(self, providers: Sequence[RecipeProvider]) -> None:
        """Initialize RecipeOrchestrator.

        Args:
            providers: Up to three providers in priority order
                (primary, secondary, tertiary).

        Raises:
            ValueError: If more than three providers are given.
        """
        if len(providers) > len(PROVIDER_STAGES):
            raise ValueError(f"At most {len(PROVIDER_STAGES)} providers are supported, got: {len(providers)}")
        self.providers = list(providers)

    @classmethod
    def from_config(cls, config: Config) -> "RecipeOrchestrator":
        return cls(build_default_providers(config))

    async def generate(
        self, preferences: Preferences, session: Optional[aiohttp.ClientSession] = None
    ) -> List[Recipe]:
        """Return recipes for the preferences. Never raises for valid Preferences."""
        result = await self.run(preferences, session=session)
        return result.recipes

    async def run(
        self, preferences: Preferences, session: Optional[aiohttp.ClientSession] = None
    ) -> GenerationResult:
        """Walk the fallback chain and report which stage produced the recipes.

        Args:
            preferences: Validated user preferences.
            session: Optional shared HTTP session. When omitted a session is
                opened for this call and closed before returning.

        Returns:
            GenerationResult with the recipes, their source and the stages visited.
        """
        if session is None:
            async with aiohttp.ClientSession() as own_session:
                return await self._run_chain(preferences, own_session)
        return await self._run_chain(preferences, session)

    async def _run_chain(self, preferences: Preferences, session: aiohttp.ClientSession) -> GenerationResult:
        stages: List[GenerationStage] = [GenerationStage.NOT_STARTED]
        attempts: List[ProviderResult] = []

        for stage, provider in zip(PROVIDER_STAGES, self.providers):
            if not provider.is_configured():
                logger.info(
                    f"Skipping {provider.name}: not configured",
                    extra={"provider": provider.name, "stage": stage.value},
                )
                continue

            stages.append(stage)
            logger.info(f"Trying {provider.name}", extra={"provider": provider.name, "stage": stage.value})
            result = await provider.attempt(preferences, session)
            attempts.append(result)

            if result.ok:
                stages.append(GenerationStage.DONE)
                return GenerationResult(
                    recipes=result.recipes, source=provider.name, stages=stages, attempts=attempts
                )

        stages.append(GenerationStage.SYNTHESIZING)
        logger.warning(
            f"All providers failed ({len(attempts)} attempted), synthesizing fallback recipes",
            extra={"stage": GenerationStage.SYNTHESIZING.value},
        )
        recipes = list(synthesize_fallback_recipes(preferences))
        stages.append(GenerationStage.DONE)
        return GenerationResult(recipes=recipes, source=FALLBACK_SOURCE, stages=stages, attempts=attempts)


async def generate_recipes(
    preferences: Union[Preferences, Mapping[str, Any]], config: Optional[Config] = None
) -> List[Recipe]:
    """Generate recipes with the default provider chain.

    Args:
        preferences: Preferences model or a mapping in wire (camelCase) or
            attribute (snake_case) form.
        config: Configuration to use. Defaults to the environment configuration.

    Returns:
        List[Recipe]: Always a successful result; three synthesized recipes
        when no provider succeeds.

    Raises:
        pydantic.ValidationError: If a mapping is not valid Preferences.
    """
    if not isinstance(preferences, Preferences):
        preferences = Preferences.model_validate(preferences)
    if config is None:
        config = default_config

    return await RecipeOrchestrator.from_config(config).generate(preferences)
