"""Data models and schemas for StruggleMeal recipe generation.

Defines Pydantic models for preferences, recipes and the supporting records
(videos, shopping lists). All models use Pydantic v2, are immutable, and accept
both the camelCase wire names used by providers and the snake_case attribute names.

Recipe costs are derived values: `total_cost` and `cost_per_serving` are always
recomputed from the ingredient list when a Recipe is built, so any totals a
provider supplies are discarded.
"""

import uuid
from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


def new_recipe_id(prefix: str = "generated") -> str:
    """Return a fresh recipe identifier, unique within any generation batch."""
    return f"{prefix}-{uuid.uuid4().hex}"


class SkillLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class WireModel(BaseModel):
    """Base for models exchanged with providers and callers in camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        frozen=True,
    )


class Preferences(WireModel):
    """User input for one generation request.

    Free-text fields are passed to providers verbatim. `pantry_items` accepts
    either a list or a comma-separated string.
    """

    food_preferences: Annotated[
        str, Field(min_length=1, description="What the user wants to eat, e.g. 'spicy chicken, rice'")
    ]
    dietary_restrictions: Annotated[
        str, Field("", description="Free-text dietary restrictions, e.g. 'no dairy, vegetarian'")
    ]
    skill_level: Annotated[SkillLevel, Field(SkillLevel.BEGINNER, description="Cooking skill level")]
    budget: Annotated[float, Field(0.0, ge=0, description="Weekly budget in USD")]
    pantry_items: Annotated[
        List[str], Field(default_factory=list, description="Ingredients the user already has")
    ]

    @field_validator("dietary_restrictions", mode="before")
    @classmethod
    def none_restrictions_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("skill_level", mode="before")
    @classmethod
    def normalize_skill_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("pantry_items", mode="before")
    @classmethod
    def parse_pantry_items(cls, value: Any) -> Any:
        """Split comma-separated strings and drop blank entries."""
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple)):
            return [item.strip() for item in value if isinstance(item, str) and item.strip()]
        return value


class Ingredient(WireModel):
    """One recipe ingredient. `amount` is free text; no unit normalization."""

    name: Annotated[str, Field(min_length=1)]
    amount: Annotated[str, Field(description="Free-text quantity, e.g. '1 cup'")]
    cost: Annotated[float, Field(ge=0, allow_inf_nan=False, description="Approximate cost in USD")]

    @field_validator("amount", mode="before")
    @classmethod
    def stringify_amount(cls, value: Any) -> Any:
        # Models often emit bare numbers ("amount": 2) for countable items
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class Recipe(WireModel):
    """A generated or synthesized recipe.

    Invariants, enforced on every construction:
    - total_cost == sum of ingredient costs
    - cost_per_serving == total_cost / servings
    - servings >= 1
    """

    id: Annotated[str, Field(min_length=1, description="Unique within one generation result")]
    name: Annotated[str, Field(min_length=1)]
    ingredients: Annotated[List[Ingredient], Field(description="Ordered ingredient list")]
    instructions: Annotated[List[str], Field(description="Ordered step strings")]
    prep_time: Annotated[str, Field(description="Free-text duration, e.g. '15 minutes'")]
    total_cost: Annotated[float, Field(ge=0)]
    cost_per_serving: Annotated[float, Field(ge=0)]
    servings: Annotated[int, Field(ge=1)]
    search_keywords: Annotated[str, Field(alias="youtubeKeywords", description="Video search terms")]
    source: Annotated[
        Optional[str], Field(None, description="Provider or synthesizer that produced the recipe")
    ]

    @model_validator(mode="before")
    @classmethod
    def derive_costs(cls, data: Any) -> Any:
        """Recompute total_cost and cost_per_serving from the ingredients.

        Runs before field validation so supplied totals never survive. When the
        ingredient list or servings are malformed the derived fields are left out
        and field validation reports the real problem.
        """
        if not isinstance(data, dict):
            return data

        ingredients = data.get("ingredients")
        servings = data.get("servings")
        if not isinstance(ingredients, list):
            return data

        try:
            total = sum(
                float(item.cost if isinstance(item, Ingredient) else item["cost"]) for item in ingredients
            )
            servings_count = int(servings)
        except (KeyError, TypeError, ValueError, OverflowError):
            return data
        if servings_count < 1:
            return data

        data = {k: v for k, v in data.items() if k not in ("totalCost", "costPerServing")}
        data["total_cost"] = total
        data["cost_per_serving"] = total / servings_count
        return data

    @field_validator("instructions")
    @classmethod
    def drop_blank_steps(cls, steps: List[str]) -> List[str]:
        return [step for step in steps if step]

    def with_ingredients(self, ingredients: List[Ingredient]) -> "Recipe":
        """Return a new Recipe with the given ingredients and recomputed costs."""
        data = self.model_dump()
        data["ingredients"] = [ingredient.model_dump() for ingredient in ingredients]
        return Recipe.model_validate(data)


class VideoResult(WireModel):
    """First video hit for a recipe's search keywords."""

    id: str
    title: str
    thumbnail: Optional[str] = None


class ShoppingItem(WireModel):
    name: str
    amount: str
    cost: Annotated[float, Field(ge=0)]
    completed: bool = False


class ShoppingList(WireModel):
    """Ingredients merged across selected recipes."""

    items: Annotated[List[ShoppingItem], Field(default_factory=list)]
    total_cost: Annotated[float, Field(0.0, ge=0)]
