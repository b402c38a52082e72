"""Sorting and quick-filter helpers for displaying recipe lists."""

import re
from typing import List, Optional, Sequence

from strugglemeal.models.models import Recipe


SORT_OPTIONS = ("price-asc", "price-desc", "time-asc")
QUICK_RECIPE_MINUTES = 30


def parse_prep_minutes(prep_time: str) -> Optional[int]:
    """Read the free-text prep time as minutes.

    All digits are concatenated, matching how the list view has always read
    the field ("15 minutes" -> 15). Returns None when there are no digits.
    """
    digits = re.sub(r"\D", "", prep_time or "")
    return int(digits) if digits else None


def filter_quick_recipes(recipes: Sequence[Recipe], max_minutes: int = QUICK_RECIPE_MINUTES) -> List[Recipe]:
    """Keep recipes whose prep time is known and at most max_minutes."""
    quick = []
    for recipe in recipes:
        minutes = parse_prep_minutes(recipe.prep_time)
        if minutes is not None and minutes <= max_minutes:
            quick.append(recipe)
    return quick


def sort_recipes(recipes: Sequence[Recipe], sort_by: Optional[str]) -> List[Recipe]:
    """Sort by cost per serving or prep time.

    Args:
        recipes: Recipes to sort; not modified.
        sort_by: One of SORT_OPTIONS. Anything else keeps the original order.

    Returns:
        New list. Sorting is stable; unparseable prep times sort last.
    """
    if sort_by == "price-asc":
        return sorted(recipes, key=lambda recipe: recipe.cost_per_serving)
    if sort_by == "price-desc":
        return sorted(recipes, key=lambda recipe: recipe.cost_per_serving, reverse=True)
    if sort_by == "time-asc":

        def _minutes(recipe: Recipe) -> tuple:
            minutes = parse_prep_minutes(recipe.prep_time)
            return (minutes is None, minutes or 0)

        return sorted(recipes, key=_minutes)
    return list(recipes)
