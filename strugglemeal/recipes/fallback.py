"""Deterministic recipe synthesis from preferences alone.

Two template sets built from a fixed catalog of cheap staples:

- synthesize_fallback_recipes(): the terminal stage of the generation chain,
  used when every provider failed. Named after the first three comma-separated
  food preferences.
- synthesize_provider_recipes(): the set returned for the general-purpose
  model, whose free text is never parsed. Named after the first word of the
  food preferences.

Both apply the dietary filter and neither can fail for valid Preferences.
"""

from typing import List, Sequence

from strugglemeal.models.models import Preferences, Recipe, new_recipe_id
from strugglemeal.recipes.filters import filter_recipes_by_dietary_restrictions


FALLBACK_SOURCE = "fallback"

# Substituted per slot when the user gave fewer than three comma-separated preferences
DEFAULT_FOOD_TERMS = ("Pasta", "Chicken", "Rice")
DEFAULT_KEYWORD = "Budget"


def food_terms(food_preferences: str) -> List[str]:
    """Return exactly three food terms, defaulting missing or blank slots."""
    tokens = [token.strip() for token in food_preferences.split(",")]
    return [
        tokens[slot] if slot < len(tokens) and tokens[slot] else default
        for slot, default in enumerate(DEFAULT_FOOD_TERMS)
    ]


def first_keyword(food_preferences: str) -> str:
    words = food_preferences.split()
    return words[0] if words else DEFAULT_KEYWORD


def _recipe(prefix: str, source: str, **fields) -> Recipe:
    return Recipe.model_validate({"id": new_recipe_id(prefix), "source": source, **fields})


def synthesize_fallback_recipes(preferences: Preferences, source: str = FALLBACK_SOURCE) -> Sequence[Recipe]:
    """Build the three always-available recipes for when every provider failed.

    Args:
        preferences: User preferences; only food preferences and dietary
            restrictions are used.
        source: Provenance label stored on each recipe.

    Returns:
        Three recipes after dietary filtering.
    """
    first, second, third = food_terms(preferences.food_preferences)

    recipes = [
        _recipe(
            "mock",
            source,
            name=f"Budget-Friendly {first} Bowl",
            ingredients=[
                {"name": "Rice", "amount": "1 cup", "cost": 0.50},
                {"name": "Beans", "amount": "1 can", "cost": 0.99},
                {"name": "Frozen Vegetables", "amount": "1 cup", "cost": 1.50},
                {"name": "Olive Oil", "amount": "2 tbsp", "cost": 0.75},
                {"name": first, "amount": "8 oz", "cost": 1.20},
            ],
            instructions=[
                "Cook rice according to package instructions.",
                "Heat beans in a small pot.",
                "Microwave frozen vegetables.",
                "Combine all ingredients in a bowl and drizzle with olive oil.",
                "Season with salt and pepper to taste.",
            ],
            prep_time="15 minutes",
            servings=2,
            search_keywords=f"easy {first.lower()} bowl recipe student budget",
        ),
        _recipe(
            "mock",
            source,
            name=f"Student-Friendly {second} Stir Fry",
            ingredients=[
                {"name": second, "amount": "8 oz", "cost": 2.50},
                {"name": "Rice", "amount": "1 cup", "cost": 0.50},
                {"name": "Frozen Stir Fry Vegetables", "amount": "2 cups", "cost": 2.00},
                {"name": "Soy Sauce", "amount": "2 tbsp", "cost": 0.30},
                {"name": "Garlic", "amount": "2 cloves", "cost": 0.20},
            ],
            instructions=[
                "Cook rice according to package instructions.",
                f"Cook {second.lower()} in a pan until done.",
                "Add frozen vegetables and garlic to the pan.",
                "Stir fry for 5-7 minutes until vegetables are tender.",
                "Add soy sauce and stir to combine.",
                "Serve over rice.",
            ],
            prep_time="20 minutes",
            servings=2,
            search_keywords=f"quick {second.lower()} stir fry student recipe",
        ),
        _recipe(
            "mock",
            source,
            name=f"Easy {third} and Egg Bowl",
            ingredients=[
                {"name": "Eggs", "amount": "2", "cost": 0.50},
                {"name": "Rice", "amount": "1 cup", "cost": 0.50},
                {"name": "Green Onions", "amount": "2", "cost": 0.30},
                {"name": "Soy Sauce", "amount": "1 tbsp", "cost": 0.15},
                {"name": "Vegetable Oil", "amount": "1 tbsp", "cost": 0.10},
            ],
            instructions=[
                "Cook rice according to package instructions.",
                "Heat oil in a pan over medium heat.",
                "Crack eggs into the pan and cook to your preference.",
                "Place eggs over rice in a bowl.",
                "Drizzle with soy sauce and garnish with chopped green onions.",
            ],
            prep_time="10 minutes",
            servings=1,
            search_keywords=f"easy {third.lower()} egg bowl student recipe",
        ),
    ]

    return filter_recipes_by_dietary_restrictions(recipes, preferences.dietary_restrictions)


def synthesize_provider_recipes(preferences: Preferences, source: str = FALLBACK_SOURCE) -> Sequence[Recipe]:
    """Build the fixed recipe set reported for the general-purpose model.

    Args:
        preferences: User preferences.
        source: Provenance label stored on each recipe.

    Returns:
        Three recipes after dietary filtering.
    """
    keyword = first_keyword(preferences.food_preferences)
    search_terms = preferences.food_preferences.strip() or keyword.lower()

    recipes = [
        _recipe(
            "generated",
            source,
            name=f"Broke but Bougie {keyword} Bowl",
            ingredients=[
                {"name": "Rice", "amount": "1 cup", "cost": 0.50},
                {"name": "Beans", "amount": "1 can", "cost": 0.99},
                {"name": "Frozen Vegetables", "amount": "1 cup", "cost": 1.50},
                {"name": "Sauce", "amount": "2 tbsp", "cost": 0.75},
            ],
            instructions=[
                "Cook rice according to package instructions.",
                "Heat beans in a small pot.",
                "Microwave frozen vegetables.",
                "Combine all ingredients in a bowl and top with sauce.",
            ],
            prep_time="15 minutes",
            servings=2,
            search_keywords=f"easy {search_terms} bowl recipe student budget",
        ),
        _recipe(
            "generated",
            source,
            name=f"Student Survival {keyword} Pasta",
            ingredients=[
                {"name": "Pasta", "amount": "8 oz", "cost": 1.00},
                {"name": "Canned Tomatoes", "amount": "1 can", "cost": 0.89},
                {"name": "Garlic", "amount": "2 cloves", "cost": 0.30},
                {"name": "Olive Oil", "amount": "1 tbsp", "cost": 0.40},
            ],
            instructions=[
                "Boil pasta according to package instructions.",
                "In a pan, sauté garlic in olive oil.",
                "Add canned tomatoes and simmer for 10 minutes.",
                "Drain pasta and combine with sauce.",
            ],
            prep_time="20 minutes",
            servings=2,
            search_keywords=f"quick {search_terms} pasta student recipe",
        ),
        _recipe(
            "generated",
            source,
            name=f"Dorm Room {keyword} Delight",
            ingredients=[
                {"name": "Eggs", "amount": "2", "cost": 0.50},
                {"name": "Bread", "amount": "2 slices", "cost": 0.40},
                {"name": "Cheese", "amount": "1 slice", "cost": 0.30},
                {"name": "Spinach", "amount": "handful", "cost": 0.75},
            ],
            instructions=[
                "Toast bread.",
                "Scramble eggs in a microwave-safe bowl.",
                "Layer eggs, cheese, and spinach on toast.",
            ],
            prep_time="10 minutes",
            servings=1,
            search_keywords=f"easy {search_terms} breakfast student recipe",
        ),
    ]

    return filter_recipes_by_dietary_restrictions(recipes, preferences.dietary_restrictions)
