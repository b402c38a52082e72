"""Unit tests for shopping list aggregation."""

import pytest

from strugglemeal.models.models import Recipe
from strugglemeal.services.shopping import build_shopping_list, format_shopping_list, toggle_item

from conftest import recipe_dict


def make_recipe(recipe_id, ingredients):
    return Recipe.model_validate({"id": recipe_id, **recipe_dict(ingredients=ingredients)})


class TestBuildShoppingList:
    """Test ingredient merging across recipes."""

    def test_merges_by_case_insensitive_name(self):
        recipes = [
            make_recipe("a", [{"name": "Rice", "amount": "1 cup", "cost": 0.5}, {"name": "Eggs", "amount": "2", "cost": 0.5}]),
            make_recipe("b", [{"name": "rice", "amount": "2 cups", "cost": 1.0}]),
        ]

        shopping_list = build_shopping_list(recipes)

        assert [item.name for item in shopping_list.items] == ["Rice", "Eggs"]
        rice = shopping_list.items[0]
        assert rice.amount == "1 cup + 2 cups"
        assert rice.cost == pytest.approx(1.5)
        assert rice.completed is False
        assert shopping_list.total_cost == pytest.approx(2.0)

    def test_total_matches_recipe_totals(self, sample_recipe):
        other = make_recipe("b", [{"name": "Garlic", "amount": "2 cloves", "cost": 0.2}])
        shopping_list = build_shopping_list([sample_recipe, other])
        assert shopping_list.total_cost == pytest.approx(sample_recipe.total_cost + other.total_cost)

    def test_empty_selection(self):
        shopping_list = build_shopping_list([])
        assert shopping_list.items == []
        assert shopping_list.total_cost == 0.0


class TestFormatShoppingList:
    def test_plain_text_lines(self, sample_recipe):
        text = format_shopping_list(build_shopping_list([sample_recipe]))
        assert text.splitlines() == ["Rice (1 cup) - $0.50", "Beans (1 can) - $0.99"]


class TestToggleItem:
    """Test checking items off the list."""

    def test_flips_only_the_chosen_item(self, sample_recipe):
        shopping_list = build_shopping_list([sample_recipe])

        toggled = toggle_item(shopping_list, 1)

        assert [item.completed for item in toggled.items] == [False, True]
        assert [item.completed for item in shopping_list.items] == [False, False]
        assert toggled.total_cost == shopping_list.total_cost

    def test_toggle_twice_restores(self, sample_recipe):
        shopping_list = build_shopping_list([sample_recipe])
        assert toggle_item(toggle_item(shopping_list, 0), 0).items[0].completed is False

    def test_out_of_range_raises(self, sample_recipe):
        with pytest.raises(IndexError):
            toggle_item(build_shopping_list([sample_recipe]), 5)
