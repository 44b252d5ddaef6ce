#!/usr/bin/env python3
"""Ad hoc query runner for the Recipe Catalog.

Run natural-language searches or recipe parses without starting the API server.

Usage:
    python query.py "quick vegan dinner"
    python query.py --debug "italian pasta with chicken and garlic"  # Show full JSON response
    python query.py --parse "Make a quick Italian carbonara with 400g spaghetti..."  # Dry run, nothing stored

Features:
- Same components as the API (MongoDB vocabulary and store, Gemini oracle)
- Search results rendered as a table
- --parse shows the draft the model produced and whether it would validate
- Clean connection shutdown on exit
"""

import asyncio
import sys

from rich.console import Console
from rich.table import Table

from recipe_catalog.ai.gemini import GeminiOracle
from recipe_catalog.api.app import build_catalog
from recipe_catalog.db.mongo import MongoConnection
from recipe_catalog.errors.errors import RecipeCatalogError, RecipeValidationError
from recipe_catalog.models.models import AISearchResponse
from recipe_catalog.recipes.normalizer import normalize_recipe
from recipe_catalog.utils.config import config
from recipe_catalog.utils.logger import logger

console = Console()

USAGE = 'Usage: python query.py [--debug] [--parse] "<your query or recipe text>"'


def render_search(result: AISearchResponse) -> None:
    """Print synthesized search parameters and matching recipes."""
    params = result.search_params
    console.print(f"[bold]Tags:[/bold] {', '.join(params.tags) or '-'}")
    console.print(f"[bold]Cuisines:[/bold] {', '.join(params.cuisines) or '-'}")
    console.print(f"[bold]Ingredients:[/bold] {', '.join(params.ingredients) or '-'}")
    console.print()

    if not result.recipes:
        console.print("[yellow]No matching recipes[/yellow]")
        return

    table = Table(title=f"{len(result.recipes)} matching recipe(s)")
    table.add_column("Name", style="bold")
    table.add_column("Cuisine")
    table.add_column("Tags")
    for recipe in result.recipes:
        table.add_row(
            recipe.name,
            recipe.cuisine.name if recipe.cuisine else "",
            ", ".join(tag.name for tag in recipe.tags),
        )
    console.print(table)


async def run(text: str, debug: bool = False, parse: bool = False) -> None:
    """Execute a single search or parse against the configured services.

    Args:
        text: Natural-language search query, or recipe text with parse=True.
        debug: If True, also print the full JSON result.
        parse: If True, parse text as a recipe and validate it without storing.
    """
    connection = MongoConnection(config.MONGO_URI, config.MONGO_DB_NAME)
    try:
        await connection.connect()
        oracle = GeminiOracle(config.GEMINI_API_KEY, config.GEMINI_MODEL, config.TEMPERATURE)
        catalog = build_catalog(connection, oracle)

        if parse:
            draft = await catalog.parse_recipe(text)
            console.print_json(data=draft.model_dump(by_alias=True))
            try:
                await normalize_recipe(draft, catalog.vocabulary)
                console.print("[green]✓ Draft references valid cuisine and tags[/green]")
            except RecipeValidationError as e:
                console.print(f"[red]✗ {e.message}[/red]")
            return

        result = await catalog.ai_search(text)
        if debug:
            console.print_json(data=result.model_dump(by_alias=True))
            console.print()
        render_search(result)
    finally:
        await connection.close()


if __name__ == "__main__":
    args = sys.argv[1:]
    debug_mode = False
    parse_mode = False

    while args and args[0].startswith("--"):
        flag = args.pop(0)
        if flag == "--debug":
            debug_mode = True
        elif flag == "--parse":
            parse_mode = True
        else:
            print(f"Unknown flag: {flag}")
            print(USAGE)
            sys.exit(1)

    if not args:
        print(USAGE)
        sys.exit(1)

    # Join all remaining arguments (handles unquoted text with spaces)
    try:
        asyncio.run(run(" ".join(args), debug=debug_mode, parse=parse_mode))
    except KeyboardInterrupt:
        logger.info("Query interrupted by user.")
        sys.exit(0)
    except RecipeCatalogError as e:
        logger.error(f"Query failed: {e.message}")
        sys.exit(1)
