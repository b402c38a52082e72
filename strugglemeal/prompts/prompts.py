"""Prompt construction for recipe generation.

The same prompt goes to the primary and secondary Gemini models and to the
tertiary model. It ends with a literal JSON template the model is asked to
echo back once per recipe; the structured-text parser relies on that shape.
"""

from strugglemeal.models.models import Preferences


RECIPE_COUNT = 3

RECIPE_JSON_TEMPLATE = """{
  "name": "Recipe Name",
  "ingredients": [{"name": "ingredient", "amount": "amount", "cost": cost}],
  "instructions": ["step 1", "step 2", ...],
  "prepTime": "XX minutes",
  "totalCost": XX.XX,
  "costPerServing": XX.XX,
  "servings": X,
  "youtubeKeywords": "keywords for searching"
}"""


def _format_budget(budget: float) -> str:
    return f"{budget:g}" if float(budget).is_integer() else f"{budget:.2f}"


def build_recipe_prompt(preferences: Preferences) -> str:
    """Build the generation request for one set of preferences.

    The pantry line is only present when the user listed pantry items.

    Args:
        preferences: Validated user preferences.

    Returns:
        str: Natural-language prompt requesting exactly three recipes.
    """
    lines = [
        f'Generate {RECIPE_COUNT} budget-friendly "struggle meal" recipes for a student '
        "with the following preferences:",
        f"- Food preferences: {preferences.food_preferences}",
        f"- Dietary restrictions: {preferences.dietary_restrictions}",
        f"- Cooking skill level: {preferences.skill_level.value}",
        f"- Weekly budget: ${_format_budget(preferences.budget)}",
    ]
    if preferences.pantry_items:
        lines.append(f"- Available pantry items: {', '.join(preferences.pantry_items)}")

    return "\n".join(lines) + f"""

Each recipe should include:
1. A creative name (something fun like "Broke but Bougie Burritos")
2. List of ingredients with approximate costs
3. Step-by-step instructions
4. Prep time
5. Total cost per serving
6. Keywords for YouTube search

Format each recipe as JSON with the following structure:
{RECIPE_JSON_TEMPLATE}

Prioritize cheap, common ingredients suitable for students. Ensure all dietary restrictions are respected."""
