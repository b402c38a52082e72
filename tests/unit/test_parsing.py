"""Unit tests for provider response parsing.

Tests cover:
- Gemini response text extraction
- Recipe fragments embedded in prose, fenced blocks and wrapper objects
- Malformed and non-recipe fragments being discarded
- ParseError when nothing usable is found
"""

import json

import pytest

from strugglemeal.providers.errors import ParseError
from strugglemeal.providers.parsing import (
    extract_gemini_text,
    iter_json_fragments,
    parse_gemini_response,
    parse_recipes_from_text,
    structure_unstructured_response,
)

from conftest import gemini_payload, recipe_dict


class TestExtractGeminiText:
    """Test candidates[0].content.parts[0].text extraction."""

    def test_extracts_text(self):
        assert extract_gemini_text(gemini_payload("hello")) == "hello"

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"candidates": []},
            {"candidates": [{"content": {}}]},
            {"candidates": [{"content": {"parts": []}}]},
            None,
            "not a dict",
        ],
    )
    def test_bad_shape_raises_parse_error(self, payload):
        with pytest.raises(ParseError):
            extract_gemini_text(payload)

    def test_empty_text_raises_parse_error(self):
        with pytest.raises(ParseError, match="empty"):
            extract_gemini_text(gemini_payload("   "))


class TestParseRecipesFromText:
    """Test decoding recipe-shaped JSON fragments from free text."""

    def test_two_valid_one_malformed(self):
        """Two valid recipe objects and one broken object yield exactly two recipes."""
        text = (
            "Here are your meals!\n"
            f"{json.dumps(recipe_dict(name='Bean Bowl'))}\n"
            "And another:\n"
            f"{json.dumps(recipe_dict(name='Egg Fried Rice'))}\n"
            '{"name": "Broken", "ingredients": [ oops }\n'
            "Enjoy!"
        )

        recipes = parse_recipes_from_text(text)

        assert [r.name for r in recipes] == ["Bean Bowl", "Egg Fried Rice"]
        assert len({r.id for r in recipes}) == 2

    def test_costs_recomputed_from_ingredients(self):
        text = json.dumps(recipe_dict(totalCost=500, costPerServing=250, servings=2))
        [recipe] = parse_recipes_from_text(text)
        assert recipe.total_cost == pytest.approx(1.49)
        assert recipe.cost_per_serving == pytest.approx(0.745)

    def test_nested_ingredient_objects_not_treated_as_recipes(self):
        [recipe] = parse_recipes_from_text(json.dumps(recipe_dict()))
        assert len(recipe.ingredients) == 2

    def test_markdown_fenced_json(self):
        text = f"```json\n{json.dumps(recipe_dict(name='Fenced'))}\n```"
        [recipe] = parse_recipes_from_text(text)
        assert recipe.name == "Fenced"

    def test_wrapper_object_with_recipe_array(self):
        """A {"recipes": [...]} wrapper is looked into for nested recipes."""
        text = json.dumps({"recipes": [recipe_dict(name="A"), recipe_dict(name="B"), recipe_dict(name="C")]})
        recipes = parse_recipes_from_text(text)
        assert [r.name for r in recipes] == ["A", "B", "C"]

    def test_object_missing_required_field_discarded(self):
        incomplete = recipe_dict(name="No Servings")
        del incomplete["servings"]
        text = f"{json.dumps(incomplete)} {json.dumps(recipe_dict(name='Complete'))}"

        [recipe] = parse_recipes_from_text(text)
        assert recipe.name == "Complete"

    @pytest.mark.parametrize("constant", ["Infinity", "-Infinity", "NaN"])
    def test_non_finite_cost_fragment_discarded(self, constant):
        """JSON constants the decoder accepts never reach a recipe's costs."""
        bad = json.dumps(recipe_dict(name="Bad")).replace('"cost": 0.5', f'"cost": {constant}')
        text = f"{bad}\n{json.dumps(recipe_dict(name='Good'))}"

        [recipe] = parse_recipes_from_text(text)

        assert recipe.name == "Good"
        assert abs(recipe.total_cost - sum(i.cost for i in recipe.ingredients)) < 1e-6

    def test_infinite_servings_fragment_discarded(self):
        bad = json.dumps(recipe_dict(name="Bad")).replace('"servings": 2', '"servings": Infinity')
        with pytest.raises(ParseError):
            parse_recipes_from_text(bad)

    def test_provider_ids_replaced(self):
        text = f"{json.dumps(recipe_dict(id='1'))} {json.dumps(recipe_dict(id='1'))}"
        recipes = parse_recipes_from_text(text)
        assert all(r.id != "1" for r in recipes)
        assert recipes[0].id != recipes[1].id

    def test_source_recorded(self):
        [recipe] = parse_recipes_from_text(json.dumps(recipe_dict()), source="gemini-2.0-flash")
        assert recipe.source == "gemini-2.0-flash"

    @pytest.mark.parametrize(
        "text",
        [
            "Sorry, I cannot help with that.",
            '{"name": "Broken"',
            '{"greeting": "hi"}',
            "",
        ],
    )
    def test_no_valid_recipe_raises_parse_error(self, text):
        with pytest.raises(ParseError):
            parse_recipes_from_text(text)


class TestIterJsonFragments:
    """Test the raw fragment scanner."""

    def test_yields_positions_and_values(self):
        text = 'x {"a": 1} y {"b": {"c": 2}}'
        fragments = list(iter_json_fragments(text))

        assert [value for _, _, value in fragments] == [{"a": 1}, {"b": {"c": 2}}, {"c": 2}]
        start, end, _ = fragments[0]
        assert text[start:end] == '{"a": 1}'

    def test_skips_undecodable_braces(self):
        assert list(iter_json_fragments("{ not json } {also not}")) == []


class TestParseGeminiResponse:
    """Test full response body parsing."""

    def test_parses_embedded_recipes(self):
        payload = gemini_payload(f"Recipes:\n{json.dumps(recipe_dict())}")
        [recipe] = parse_gemini_response(payload, source="primary")
        assert recipe.name == "Rice Bowl"
        assert recipe.source == "primary"

    def test_text_without_recipes_raises(self):
        with pytest.raises(ParseError):
            parse_gemini_response(gemini_payload("no json here"))


class TestStructureUnstructuredResponse:
    """The unstructured provider's text is ignored."""

    def test_body_content_does_not_matter(self, preferences):
        first = structure_unstructured_response("garbage text", preferences, source="huggingface")
        second = structure_unstructured_response([{"generated_text": "x"}], preferences, source="huggingface")

        assert [r.name for r in first] == [r.name for r in second]
        assert len(first) == 3
        assert all(r.source == "huggingface" for r in first)
