"""Shopping list aggregation across selected recipes."""

from typing import Dict, Iterable

from strugglemeal.models.models import Recipe, ShoppingItem, ShoppingList


def build_shopping_list(recipes: Iterable[Recipe]) -> ShoppingList:
    """Merge the ingredients of the selected recipes into one shopping list.

    Ingredients are merged by case-insensitive name. The first spelling and
    position win, amounts are joined with " + " (no unit arithmetic) and costs
    are summed.

    Args:
        recipes: Recipes the user selected.

    Returns:
        ShoppingList with merged items and their total cost.
    """
    merged: Dict[str, ShoppingItem] = {}

    for recipe in recipes:
        for ingredient in recipe.ingredients:
            key = ingredient.name.lower()
            existing = merged.get(key)
            if existing is None:
                merged[key] = ShoppingItem(name=ingredient.name, amount=ingredient.amount, cost=ingredient.cost)
            else:
                merged[key] = existing.model_copy(
                    update={
                        "amount": f"{existing.amount} + {ingredient.amount}",
                        "cost": existing.cost + ingredient.cost,
                    }
                )

    items = list(merged.values())
    return ShoppingList(items=items, total_cost=sum(item.cost for item in items))


def format_shopping_list(shopping_list: ShoppingList) -> str:
    """Render the list as plain text lines, e.g. for copying or email."""
    return "\n".join(f"{item.name} ({item.amount}) - ${item.cost:.2f}" for item in shopping_list.items)


def toggle_item(shopping_list: ShoppingList, index: int) -> ShoppingList:
    """Return a copy of the list with one item's completed flag flipped.

    Raises:
        IndexError: If index is out of range.
    """
    items = list(shopping_list.items)
    item = items[index]
    items[index] = item.model_copy(update={"completed": not item.completed})
    return shopping_list.model_copy(update={"items": items})
