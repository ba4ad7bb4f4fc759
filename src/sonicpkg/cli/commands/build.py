"""Build commands."""

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sonicpkg.core.config import get_environment
from sonicpkg.core.exceptions import BuildError, UnknownTargetError
from sonicpkg.core.models import BuildResult, BuildState
from sonicpkg.core.scheduler import BuildScheduler
from sonicpkg.core.shell import CommandRunner
from sonicpkg.recipes import get_registry

console = Console()


def _is_json(options) -> bool:
    return options is not None and options.output.value == "json"


def print_results(results: list[BuildResult], options) -> None:
    """Print build results as a table or JSON."""
    if _is_json(options):
        console.print_json(data=[r.model_dump(mode="json") for r in results])
        return

    table = Table(title="Build Results")
    table.add_column("Recipe", style="cyan")
    table.add_column("State")
    table.add_column("Mode")
    table.add_column("Artifacts", style="green")

    for result in results:
        state_color = {
            BuildState.COMPLETED: "[green]",
            BuildState.SKIPPED: "[dim]",
            BuildState.FAILED: "[red]",
        }.get(result.state, "[yellow]")
        mode = f"cross {result.arch}" if result.cross_build else f"native {result.arch}"
        table.add_row(
            result.recipe,
            f"{state_color}{result.state.value}[/]",
            mode,
            "\n".join(result.artifacts) or "-",
        )

    console.print(table)


async def build_targets(targets: list[str], force: bool, dry_run: bool, options):
    """Build the requested targets."""
    env = get_environment()
    runner = CommandRunner(dry_run=dry_run)
    scheduler = BuildScheduler(get_registry(), env, runner, force=force)

    try:
        results = await scheduler.build(targets)

    except UnknownTargetError as e:
        console.print(f"[red]{escape(str(e))}[/]")
        raise typer.Exit(code=1)

    except BuildError as e:
        print_results(scheduler.results, options)
        step = f" during {e.step}" if e.step else ""
        console.print(f"[red]✗ Build failed{step}: {escape(str(e))}[/]")
        raise typer.Exit(code=1)

    if dry_run and not _is_json(options):
        for record in runner.history:
            console.print(f"[dim]{record.cwd}$[/] {escape(str(record))}", highlight=False)

    print_results(results, options)


def show_env(options):
    """Show the build environment."""
    env = get_environment()

    if _is_json(options):
        console.print_json(data=env.model_dump(mode="json"))
        return

    table = Table(title="Build Environment")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("CROSS_BUILD_ENVIRON", env.cross_build_environ)
    table.add_row("CONFIGURED_ARCH", env.configured_arch)
    table.add_row("SONIC_DPKG_ADMINDIR", env.sonic_dpkg_admindir or "(unset)")
    table.add_row("SONIC_CONFIG_MAKE_JOBS", str(env.sonic_config_make_jobs))
    table.add_row("DEST", str(env.dest))
    table.add_row("SONICPKG_RECIPE_ROOT", str(env.recipe_root))
    table.add_row("Mode", "cross" if env.is_cross_build else "native")

    console.print(table)
