#!/usr/bin/env python3
"""Ad hoc photo search runner for a single recipe.

Run the photo pipeline directly without the host application.

Usage:
    python query.py "Doc Bear's Vegan Alfredo Sauce I"
    python query.py --ingredients "cashews,nutritional yeast" "Vegan Alfredo Sauce"
    python query.py --category sauces --description "creamy" "Alfredo"
    python query.py --dry-run "Cheesy Lasagna Sheet Pasta"   # Classification only, no API calls
    python query.py --first-match "Sweet and Sour Pineapple Chicken"
    python query.py --debug "Chicken Alfredo"                 # Show full JSON and score breakdown

Features:
- Classification and planned queries shown for every run
- Dry-run mode that never calls a provider
- Scored (default) or first-match orchestration
- Debug mode to display the full JSON result with the score breakdown
"""

import asyncio
import sys

from rich.console import Console
from rich.table import Table

from recipe_photos.engine.scorer import score_breakdown
from recipe_photos.models.models import Recipe, ScoredCandidate, SearchMode
from recipe_photos.services.photo_finder import RecipePhotoFinder, to_assignment
from recipe_photos.utils.config import config
from recipe_photos.utils.logger import logger

console = Console()

USAGE = (
    'Usage: python query.py [--debug] [--dry-run] [--first-match] [--ingredients a,b] '
    '[--category c] [--description d] "<recipe title>"'
)


def print_analysis(analysis) -> None:
    """Print classification and planned queries as a table."""
    classification = analysis.classification
    console.print(
        f"[bold cyan]Dish:[/bold cyan] {classification.dish_type.value}"
        + (f" ({classification.sub_type})" if classification.sub_type else "")
        + f"  [bold cyan]Dietary:[/bold cyan] {classification.dietary.value}"
        + f"  [bold cyan]Restricted:[/bold cyan] {analysis.is_dietary_restricted}"
    )
    table = Table(title="Planned queries")
    table.add_column("#", justify="right")
    table.add_column("Query")
    table.add_column("Sent as", style="dim")
    for index, planned in enumerate(analysis.planned_queries, start=1):
        table.add_row(str(index), planned.query, planned.search_text)
    console.print(table)


def run_query(recipe: Recipe, debug: bool = False, dry_run: bool = False, first_match: bool = False) -> None:
    """Run one recipe through the pipeline and print the result.

    Args:
        recipe: Recipe to illustrate.
        debug: If True, display the full JSON result and score breakdown.
        dry_run: If True, classify only and never call a provider.
        first_match: If True, use first-match mode instead of the configured mode.
    """
    try:
        overrides = {"mode": SearchMode.FIRST_MATCH} if first_match else {}
        finder = RecipePhotoFinder.from_config(config, **overrides)

        analysis = finder.analyze(recipe)
        print_analysis(analysis)
        if dry_run:
            return

        selection = asyncio.run(finder.find_photo(recipe))
        console.print()

        if selection is None:
            console.print("[yellow]No suitable photo found[/yellow]")
            return

        assignment = to_assignment(selection)
        console.print(f"[bold green]✓ {assignment.attribution}[/bold green]")
        console.print(f"  URL: {assignment.url}")
        console.print(f"  Query: {assignment.search_term}")
        console.print(f"  Description: {assignment.description}")
        if assignment.score is not None:
            console.print(f"  Score: {assignment.score}  Confidence: {assignment.confidence:.2f}")

        if debug:
            console.print("[bold cyan]Debug Mode: Full Result[/bold cyan]")
            console.print("[dim]" + "=" * 60 + "[/dim]")
            console.print_json(data=assignment.model_dump(mode="json"))
            if isinstance(selection, ScoredCandidate):
                console.print(
                    score_breakdown(
                        selection.description,
                        analysis.context,
                        selection.matched_query,
                        analysis.is_dietary_restricted,
                    )
                )
            console.print("[dim]" + "=" * 60 + "[/dim]")

    except KeyboardInterrupt:
        logger.info("\nQuery interrupted by user.")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Query execution failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(USAGE)
        sys.exit(1)

    debug_mode = False
    dry_run_mode = False
    first_match_mode = False
    fields = {}
    argv_start = 1
    value_flags = {"--ingredients": "ingredients", "--category": "category", "--description": "description"}

    while argv_start < len(sys.argv) and sys.argv[argv_start].startswith("--"):
        flag = sys.argv[argv_start]
        if flag == "--debug":
            debug_mode = True
            argv_start += 1
        elif flag == "--dry-run":
            dry_run_mode = True
            argv_start += 1
        elif flag == "--first-match":
            first_match_mode = True
            argv_start += 1
        elif flag in value_flags:
            argv_start += 1
            if argv_start >= len(sys.argv):
                print(f"Error: {flag} flag requires a value")
                sys.exit(1)
            fields[value_flags[flag]] = sys.argv[argv_start]
            argv_start += 1
        else:
            print(f"Unknown flag: {flag}")
            sys.exit(1)

    if argv_start >= len(sys.argv):
        print("Error: No recipe title provided")
        print(USAGE)
        sys.exit(1)

    if "ingredients" in fields:
        fields["ingredients"] = [item.strip() for item in fields["ingredients"].split(",") if item.strip()]

    # Join all arguments after flags as the title (handles titles with spaces)
    recipe = Recipe(title=" ".join(sys.argv[argv_start:]), **fields)

    run_query(recipe, debug=debug_mode, dry_run=dry_run_mode, first_match=first_match_mode)
