"""DNS settings commands."""

import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from sonicpkg.schema.dns import DNSConfig, render_resolv_conf, validate_dns_config
from sonicpkg.schema.yang import load_schema_text, schema_limits

console = Console()


def _load(file: Path) -> Any:
    try:
        return json.loads(file.read_text(encoding="utf-8"))
    except FileNotFoundError:
        console.print(f"[red]File not found: {file}[/]")
        raise typer.Exit(code=1)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Cannot read {file}: {escape(str(e))}[/]")
        raise typer.Exit(code=1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON in {file}: {escape(str(e))}[/]")
        raise typer.Exit(code=1)


def validate(file: Path, options):
    """Validate an instance file."""
    data = _load(file)
    result = validate_dns_config(data)

    if options is not None and options.output.value == "json":
        console.print_json(data=result.model_dump(mode="json"))
    elif result.valid:
        console.print("[green]✓ DNS configuration is valid[/]")
    else:
        console.print("[red]✗ DNS configuration has errors:[/]")
        for issue in result.errors:
            console.print(f"  [red]{escape(issue.path)}: {escape(issue.message)}[/]")

    if not result.valid:
        raise typer.Exit(code=1)


def resolv_conf(file: Path, options):
    """Print resolv.conf for an instance file."""
    data = _load(file)
    result = validate_dns_config(data)
    if not result.valid:
        for issue in result.errors:
            console.print(f"[red]{escape(issue.path)}: {escape(issue.message)}[/]")
        raise typer.Exit(code=1)

    typer.echo(render_resolv_conf(DNSConfig.from_instance(data)), nl=False)


def schema(limits: bool, options):
    """Show the YANG module or its constraints."""
    text = load_schema_text()

    if not limits:
        console.print(Syntax(text, "yang", theme="monokai", line_numbers=True))
        return

    parsed = schema_limits(text)

    if options is not None and options.output.value == "json":
        console.print_json(
            data={
                "max_elements": parsed.max_elements,
                "leaves": {k: vars(v) for k, v in parsed.leaves.items()},
            }
        )
        return

    table = Table(title="sonic-dns Constraints")
    table.add_column("Node", style="cyan")
    table.add_column("Range")
    table.add_column("Default", style="green")

    for name, count in parsed.max_elements.items():
        table.add_row(name, f"max-elements {count}", "-")
    for name, leaf in parsed.leaves.items():
        default = str(leaf.default) if leaf.default is not None else "-"
        table.add_row(name, f"{leaf.minimum}..{leaf.maximum}", default)

    console.print(table)
