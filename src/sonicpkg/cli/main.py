"""Main CLI entry point for sonicpkg."""

import asyncio
import logging
from enum import Enum
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

# Create the main app
app = typer.Typer(
    name="sonicpkg",
    help="SONiC packaging recipes and DNS settings schema",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


# Global options stored in context
class GlobalOptions:
    def __init__(self):
        self.output: OutputFormat = OutputFormat.TABLE
        self.verbose: bool = False
        self.debug: bool = False


def configure_logging(verbose: bool, debug: bool) -> None:
    """Route library logging through rich on stderr."""
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=debug, markup=False)],
        force=True,
    )


# ============================================================================
# Build Commands
# ============================================================================


@app.command("build")
def build(
    ctx: typer.Context,
    targets: list[str] = typer.Argument(..., help="Artifact file names or recipe names"),
    force: bool = typer.Option(False, "--force", "-f", help="Rebuild even if up to date"),
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Print commands only"),
):
    """Build package artifacts into DEST."""
    from sonicpkg.cli.commands.build import build_targets

    asyncio.run(build_targets(targets, force, dry_run, ctx.obj))


@app.command("env")
def env(ctx: typer.Context):
    """Show the resolved build environment."""
    from sonicpkg.cli.commands.build import show_env

    show_env(ctx.obj)


# ============================================================================
# Recipe Commands
# ============================================================================

recipe_app = typer.Typer(help="Inspect packaging recipes")
app.add_typer(recipe_app, name="recipe")


@recipe_app.command("list")
def recipe_list(ctx: typer.Context):
    """List available recipes."""
    from sonicpkg.cli.commands.recipe import list_recipes

    list_recipes(ctx.obj)


@recipe_app.command("show")
def recipe_show(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Recipe name"),
):
    """Show recipe details and artifacts."""
    from sonicpkg.cli.commands.recipe import show

    show(name, ctx.obj)


@recipe_app.command("plan")
def recipe_plan(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Recipe name"),
):
    """Show the commands a build would run."""
    from sonicpkg.cli.commands.recipe import plan

    asyncio.run(plan(name, ctx.obj))


# ============================================================================
# DNS Commands
# ============================================================================

dns_app = typer.Typer(help="DNS settings schema")
app.add_typer(dns_app, name="dns")


@dns_app.command("validate")
def dns_validate(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="JSON configuration instance"),
):
    """Validate DNS settings against the schema."""
    from sonicpkg.cli.commands.dns import validate

    validate(file, ctx.obj)


@dns_app.command("resolv-conf")
def dns_resolv_conf(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="JSON configuration instance"),
):
    """Render resolv.conf for DNS settings."""
    from sonicpkg.cli.commands.dns import resolv_conf

    resolv_conf(file, ctx.obj)


@dns_app.command("schema")
def dns_schema(
    ctx: typer.Context,
    limits: bool = typer.Option(False, "--limits", help="Show constraints only"),
):
    """Show the sonic-dns YANG module."""
    from sonicpkg.cli.commands.dns import schema

    schema(limits, ctx.obj)


# ============================================================================
# Version Command
# ============================================================================


@app.command("version")
def version():
    """Show version information."""
    from sonicpkg import __version__

    console.print(f"sonicpkg version {__version__}")


# ============================================================================
# Main Callback (Global Options)
# ============================================================================


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug mode"),
    output: OutputFormat = typer.Option(
        OutputFormat.TABLE, "--output", "-o", help="Output format"
    ),
):
    """SONiC packaging recipes and DNS settings schema."""
    ctx.ensure_object(GlobalOptions)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    ctx.obj.output = output
    configure_logging(verbose, debug)


if __name__ == "__main__":
    app()
