"""Dietary restriction filtering for recipe lists.

Restriction categories are matched against the free-text restriction by
substring, and ingredients are excluded by case-insensitive substring of their
name. Both matches are intentionally coarse: "non-vegetarian friends" still
triggers the vegetarian list, and "butternut squash" is removed under dairy.
"""

from typing import Dict, List, Optional, Sequence

from strugglemeal.models.models import Recipe
from strugglemeal.utils.logger import logger


EXCLUDED_INGREDIENTS: Dict[str, tuple] = {
    "dairy": ("milk", "cheese", "butter", "cream", "yogurt"),
    "gluten": ("wheat", "flour", "pasta", "bread", "cereal", "barley", "rye"),
    "nuts": ("peanut", "almond", "cashew", "walnut", "pecan", "hazelnut"),
    "vegetarian": ("meat", "chicken", "beef", "pork", "fish", "seafood"),
    "vegan": (
        "meat", "chicken", "beef", "pork", "fish", "seafood",
        "egg", "milk", "cheese", "butter", "cream", "yogurt", "honey",
    ),
}


def excluded_terms_for(restrictions: str) -> List[str]:
    """Collect the excluded ingredient terms for every category named in the text.

    Args:
        restrictions: Free-text restriction description (any case).

    Returns:
        Distinct lower-case terms in category order.
    """
    text = restrictions.lower()
    terms: List[str] = []
    for category, category_terms in EXCLUDED_INGREDIENTS.items():
        if category in text:
            terms.extend(term for term in category_terms if term not in terms)
    return terms


def filter_recipes_by_dietary_restrictions(
    recipes: Sequence[Recipe], restrictions: Optional[str]
) -> Sequence[Recipe]:
    """Remove ingredients that conflict with the dietary restrictions.

    Args:
        recipes: Recipes to filter. Never modified.
        restrictions: Free-text restrictions. Empty or None disables filtering.

    Returns:
        The input sequence itself when there are no restrictions. Otherwise a new
        list where recipes that lost ingredients are rebuilt with recomputed
        costs and untouched recipes are the original objects.
    """
    if not restrictions:
        return recipes

    terms = excluded_terms_for(restrictions)
    if not terms:
        return list(recipes)

    filtered: List[Recipe] = []
    for recipe in recipes:
        kept = [
            ingredient
            for ingredient in recipe.ingredients
            if not any(term in ingredient.name.lower() for term in terms)
        ]
        if len(kept) < len(recipe.ingredients):
            logger.debug(
                f"Removed {len(recipe.ingredients) - len(kept)} ingredient(s) from '{recipe.name}' "
                f"for restrictions: {restrictions}"
            )
            filtered.append(recipe.with_ingredients(kept))
        else:
            filtered.append(recipe)

    return filtered
