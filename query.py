#!/usr/bin/env python3
"""Ad hoc recipe generation runner.

Run the full provider chain from the command line without any UI.

Usage:
    python query.py "spicy chicken, rice"
    python query.py --restrictions "no dairy" --budget 25 --skill intermediate "tofu, noodles"
    python query.py --pantry "rice, beans" "chili"
    python query.py --debug "pasta"        # Show full JSON including provenance
    python query.py --shopping "pasta"     # Also print a merged shopping list

Features:
- Builds Preferences from flags, runs generate_recipes() via the orchestrator
- Renders recipes as rich tables and markdown steps
- Debug mode prints the wire-format JSON and the stages visited
"""

import asyncio
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from strugglemeal.agents.orchestrator import RecipeOrchestrator
from strugglemeal.models.models import Preferences, Recipe
from strugglemeal.services.shopping import build_shopping_list
from strugglemeal.utils.config import config
from strugglemeal.utils.logger import logger

console = Console()

USAGE = 'Usage: python query.py [--restrictions TEXT] [--skill LEVEL] [--budget N] [--pantry "a, b"] [--debug] [--shopping] "<food preferences>"'

VALUE_FLAGS = {
    "--restrictions": "dietary_restrictions",
    "--skill": "skill_level",
    "--budget": "budget",
    "--pantry": "pantry_items",
}


def render_recipe(recipe: Recipe) -> None:
    """Print one recipe: summary line, ingredient table, numbered steps."""
    console.print(
        f"[bold]{recipe.name}[/bold]  [dim]{recipe.prep_time} · serves {recipe.servings} · "
        f"${recipe.total_cost:.2f} total · ${recipe.cost_per_serving:.2f}/serving[/dim]"
    )

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Ingredient")
    table.add_column("Amount")
    table.add_column("Cost", justify="right")
    for ingredient in recipe.ingredients:
        table.add_row(ingredient.name, ingredient.amount, f"${ingredient.cost:.2f}")
    console.print(table)

    steps = "\n".join(f"{index}. {step}" for index, step in enumerate(recipe.instructions, start=1))
    console.print(Markdown(steps))
    console.print(f"[dim]Video search: {recipe.search_keywords}[/dim]")
    console.print()


def run_query(preferences: Preferences, debug: bool = False, shopping: bool = False) -> None:
    """Generate recipes for the preferences and print them.

    Args:
        preferences: Preferences built from the command line.
        debug: If True, display full JSON and the fallback stages visited.
        shopping: If True, print a merged shopping list for all recipes.
    """
    try:
        logger.info(f"Generating recipes for: {preferences.food_preferences}")
        orchestrator = RecipeOrchestrator.from_config(config)
        result = asyncio.run(orchestrator.run(preferences))
        logger.info(f"Recipes provided by: {result.source}")
        console.print()

        if debug:
            console.print("[bold cyan]Debug Mode: Full Response[/bold cyan]")
            console.print("[dim]" + "=" * 60 + "[/dim]")
            console.print_json(data=[recipe.model_dump(by_alias=True) for recipe in result.recipes])
            console.print(f"Stages: {' -> '.join(stage.value for stage in result.stages)}")
            for attempt in result.attempts:
                status = "ok" if attempt.ok else f"{attempt.error_kind}: {attempt.error}"
                console.print(f"  {attempt.provider}: {status}")
            console.print("[dim]" + "=" * 60 + "[/dim]")
            console.print()

        for recipe in result.recipes:
            render_recipe(recipe)

        if shopping:
            shopping_list = build_shopping_list(result.recipes)
            console.print("[bold]Shopping list[/bold]")
            for item in shopping_list.items:
                console.print(f"  ☐ {item.name} ({item.amount}) - ${item.cost:.2f}")
            console.print(f"[bold]Total: ${shopping_list.total_cost:.2f}[/bold]")

    except KeyboardInterrupt:
        logger.info("\nQuery interrupted by user.")
        sys.exit(0)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(USAGE)
        print("")
        print("Examples:")
        print('  python query.py "spicy chicken, rice"')
        print('  python query.py --restrictions vegan --budget 20 "chicken"')
        print('  python query.py --debug --shopping "pasta, eggs"')
        sys.exit(1)

    debug_mode = False
    shopping_mode = False
    fields = {}
    argv_start = 1

    while argv_start < len(sys.argv) and sys.argv[argv_start].startswith("--"):
        flag = sys.argv[argv_start]
        if flag == "--debug":
            debug_mode = True
            argv_start += 1
        elif flag == "--shopping":
            shopping_mode = True
            argv_start += 1
        elif flag in VALUE_FLAGS:
            argv_start += 1
            if argv_start >= len(sys.argv):
                print(f"Error: {flag} flag requires a value")
                sys.exit(1)
            fields[VALUE_FLAGS[flag]] = sys.argv[argv_start]
            argv_start += 1
        else:
            print(f"Unknown flag: {flag}")
            sys.exit(1)

    if argv_start >= len(sys.argv):
        print("Error: No food preferences provided")
        print(USAGE)
        sys.exit(1)

    fields["food_preferences"] = " ".join(sys.argv[argv_start:])

    try:
        query_preferences = Preferences.model_validate(fields)
    except ValidationError as e:
        console.print(f"[red]✗ Invalid preferences:[/red]\n{e}")
        sys.exit(1)

    run_query(query_preferences, debug=debug_mode, shopping=shopping_mode)
