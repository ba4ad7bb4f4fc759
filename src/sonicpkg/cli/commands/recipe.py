"""Recipe inspection commands."""

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sonicpkg.core.builder import RecipeBuilder
from sonicpkg.core.config import get_environment
from sonicpkg.core.exceptions import RecipeNotFoundError
from sonicpkg.core.models import DscSource, Recipe
from sonicpkg.recipes import get_registry

console = Console()


def _get_recipe(name: str) -> Recipe:
    try:
        return get_registry().get(name)
    except RecipeNotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/]")
        console.print(f"Available: {', '.join(get_registry().names())}")
        raise typer.Exit(code=1)


def _source_url(recipe: Recipe) -> str:
    if isinstance(recipe.source, DscSource):
        return recipe.source.dsc_url
    return recipe.source.url


def list_recipes(options):
    """List registered recipes."""
    registry = get_registry()
    arch = get_environment().configured_arch

    if options is not None and options.output.value == "json":
        console.print_json(data=[r.model_dump(mode="json") for r in registry.all()])
        return

    table = Table(title="Recipes")
    table.add_column("Name", style="cyan")
    table.add_column("Version")
    table.add_column("Source")
    table.add_column("Main Target", style="green")
    table.add_column("Derived", justify="right")

    for recipe in registry.all():
        table.add_row(
            recipe.name,
            recipe.version,
            recipe.source.kind,
            recipe.main_artifact(arch),
            str(len(recipe.derived_targets)),
        )

    console.print(table)


def show(name: str, options):
    """Show a recipe."""
    recipe = _get_recipe(name)
    arch = get_environment().configured_arch

    if options is not None and options.output.value == "json":
        data = recipe.model_dump(mode="json")
        data["artifacts"] = recipe.artifacts(arch)
        console.print_json(data=data)
        return

    table = Table(title=f"Recipe {recipe.name}")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Description", recipe.description or "-")
    table.add_row("Version", recipe.version)
    table.add_row("Source", f"{recipe.source.kind} {_source_url(recipe)}")
    table.add_row("Checkout", recipe.checkout_dir)
    table.add_row("Directory", recipe.recipe_path)
    table.add_row("Artifacts", "\n".join(recipe.artifacts(arch)))
    console.print(table)

    if recipe.edits:
        edits = Table(title="Source Tree Edits")
        edits.add_column("#", justify="right")
        edits.add_column("Kind", style="cyan")
        edits.add_column("Details")
        edits.add_column("Condition", style="yellow")
        for i, edit in enumerate(recipe.edits, 1):
            details = edit.model_dump(exclude={"kind", "when"})
            condition = f"debian <= {edit.when.max_release}" if edit.when else ""
            edits.add_row(
                str(i),
                edit.kind,
                escape(", ".join(f"{k}={v}" for k, v in details.items())),
                condition,
            )
        console.print(edits)


async def plan(name: str, options):
    """Show what building a recipe would run."""
    recipe = _get_recipe(name)
    steps = await RecipeBuilder(recipe, get_environment()).plan()

    if options is not None and options.output.value == "json":
        console.print_json(data=[s.model_dump(mode="json") for s in steps])
        return

    for step in steps:
        console.print(f"[bold cyan]{step.kind.value}[/]: {escape(step.description)}")
        for command in step.commands:
            console.print(f"  [green]$[/] {escape(command)}", highlight=False)
