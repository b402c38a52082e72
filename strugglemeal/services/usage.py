"""Usage tracking around recipe generation.

The persistence backend is an external collaborator; UsageTracker describes
the calls this package makes on it. RecipeGenerationService is the caller the
orchestrator expects: it runs generation, then records usage for signed-in
users.
"""

from typing import Optional, Protocol, Sequence

from strugglemeal.agents.orchestrator import RecipeOrchestrator
from strugglemeal.models.models import Preferences, Recipe
from strugglemeal.utils.config import Config
from strugglemeal.utils.logger import logger


PREMIUM_STATUS = "premium"
DEFAULT_FREE_RECIPE_LIMIT = 3


class UsageTracker(Protocol):
    """Per-user counters and subscription status kept by the backend."""

    async def increment_usage(self, user_id: str) -> int:
        """Add one generation for the user and return the new count."""
        ...

    async def get_usage_count(self, user_id: str) -> int:
        ...

    async def get_subscription_status(self, user_id: str) -> Optional[str]:
        ...


def should_offer_premium(
    usage_count: int, subscription_status: Optional[str], free_limit: int = DEFAULT_FREE_RECIPE_LIMIT
) -> bool:
    """True once a non-premium user has generated more than the free limit."""
    return usage_count > free_limit and subscription_status != PREMIUM_STATUS


class RecipeGenerationService:
    """Generate recipes for a caller and record usage afterwards."""

    def __init__(
        self,
        orchestrator: RecipeOrchestrator,
        usage_tracker: Optional[UsageTracker] = None,
        free_limit: int = DEFAULT_FREE_RECIPE_LIMIT,
    ) -> None:
        """Initialize RecipeGenerationService.

        Args:
            orchestrator: Generation chain to run.
            usage_tracker: Backend counters, or None to skip tracking.
            free_limit: Generations allowed before the upgrade prompt.
        """
        self.orchestrator = orchestrator
        self.usage_tracker = usage_tracker
        self.free_limit = free_limit

    @classmethod
    def from_config(cls, config: Config, usage_tracker: Optional[UsageTracker] = None) -> "RecipeGenerationService":
        return cls(
            RecipeOrchestrator.from_config(config),
            usage_tracker=usage_tracker,
            free_limit=config.FREE_RECIPE_LIMIT,
        )

    async def generate_for_user(self, preferences: Preferences, user_id: Optional[str] = None) -> Sequence[Recipe]:
        """Generate recipes and, for a known user, increment their usage count.

        Generation itself never fails. Errors from the usage tracker propagate
        unchanged; they are the only failure a caller can see.

        Args:
            preferences: Validated user preferences.
            user_id: Signed-in user, or None for anonymous use (no tracking).

        Returns:
            The generated recipes.
        """
        recipes = await self.orchestrator.generate(preferences)

        if user_id and self.usage_tracker is not None:
            count = await self.usage_tracker.increment_usage(user_id)
            logger.info(f"Recorded recipe generation (total: {count})", extra={"user_id": user_id})

        return recipes

    async def upgrade_prompt_due(self, user_id: str) -> bool:
        """Check the backend counters against the free limit."""
        if self.usage_tracker is None:
            return False
        usage_count = await self.usage_tracker.get_usage_count(user_id)
        status = await self.usage_tracker.get_subscription_status(user_id)
        return should_offer_premium(usage_count, status, self.free_limit)
