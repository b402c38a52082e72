"""Parsing provider output into Recipe records.

Two variants:

1. STRUCTURED TEXT (Gemini):
   - extract_gemini_text() pulls candidates[0].content.parts[0].text
   - iter_json_fragments() finds brace-delimited JSON values in prose
   - parse_recipes_from_text() validates each fragment as a Recipe, discards
     the ones that fail, assigns fresh ids, and raises ParseError when nothing
     survives

2. UNSTRUCTURED TEXT (general-purpose model):
   - structure_unstructured_response() ignores the model output entirely and
     returns the fixed template set built from the preferences
"""

import json
from typing import Any, Iterator, List, Optional, Sequence

from pydantic import ValidationError

from strugglemeal.models.models import Preferences, Recipe, new_recipe_id
from strugglemeal.providers.errors import ParseError
from strugglemeal.recipes.fallback import synthesize_provider_recipes
from strugglemeal.utils.logger import logger


_decoder = json.JSONDecoder()


def extract_gemini_text(payload: Any) -> str:
    """Return the generated text from a generateContent response body.

    Raises:
        ParseError: If the candidates/content/parts path is missing or empty.
    """
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise ParseError(f"Unexpected response shape: missing {e}") from e

    if not isinstance(text, str) or not text.strip():
        raise ParseError("Response text is empty")
    return text


def iter_json_fragments(text: str, start: int = 0) -> Iterator[tuple]:
    """Yield (start, end, value) for every JSON object that decodes at a '{'.

    Scanning resumes one character after each opening brace, so objects nested
    inside a decoded value are yielded too; callers skip them by position.
    Fragments that are not valid JSON are skipped silently.
    """
    position = text.find("{", start)
    while position != -1:
        try:
            value, end = _decoder.raw_decode(text, position)
        except json.JSONDecodeError:
            pass
        else:
            if isinstance(value, dict):
                yield position, end, value
        position = text.find("{", position + 1)


def _to_recipe(fragment: dict, source: Optional[str]) -> Optional[Recipe]:
    data = {key: value for key, value in fragment.items() if key != "id"}
    data["id"] = new_recipe_id()
    if source and "source" not in data:
        data["source"] = source
    try:
        return Recipe.model_validate(data)
    except ValidationError as e:
        logger.debug(f"Discarding fragment that is not a recipe: {e.error_count()} validation error(s)")
        return None


def parse_recipes_from_text(text: str, source: Optional[str] = None) -> List[Recipe]:
    """Decode every recipe-shaped JSON fragment in provider prose.

    Fragments are taken in the order found. Once a fragment is accepted as a
    recipe, anything nested inside it (its ingredient objects) is skipped.
    A fragment that decodes but is not a recipe, such as {"recipes": [...]},
    is looked into for nested recipes.

    Args:
        text: Provider output text.
        source: Provenance label stored on each recipe.

    Returns:
        Recipes with fresh unique ids.

    Raises:
        ParseError: If no fragment decodes into a valid recipe.
    """
    recipes: List[Recipe] = []
    consumed_until = 0
    candidates = 0

    for start, end, fragment in iter_json_fragments(text):
        if start < consumed_until:
            continue
        candidates += 1
        recipe = _to_recipe(fragment, source)
        if recipe is not None:
            recipes.append(recipe)
            consumed_until = end

    if not recipes:
        raise ParseError(f"No valid recipe found in response ({candidates} JSON fragment(s) rejected)")

    logger.debug(f"Parsed {len(recipes)} recipe(s) from {candidates} JSON fragment(s)")
    return recipes


def parse_gemini_response(payload: Any, source: Optional[str] = None) -> List[Recipe]:
    """Parse a full Gemini generateContent response body into recipes.

    Raises:
        ParseError: If the body has no text or the text holds no valid recipe.
    """
    return parse_recipes_from_text(extract_gemini_text(payload), source=source)


def structure_unstructured_response(raw: Any, preferences: Preferences, source: Optional[str] = None) -> Sequence[Recipe]:
    """Build recipes for a provider whose output cannot be parsed.

    `raw` only signals that the call succeeded; its content is not used.
    """
    logger.debug(f"Ignoring {type(raw).__name__} body from unstructured provider")
    return synthesize_provider_recipes(preferences, source=source)
