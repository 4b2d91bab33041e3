from pathlib import Path

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from upcheck.config import ResponseConfig
from upcheck.core import Validator, make_validator
from upcheck.errors import ConfigurationError
from upcheck.probe import run_probe
from upcheck.utils import setup_logging

console = Console()
app = typer.Typer(rich_markup_mode="rich")


def _load_validator(config: str) -> Validator:
    config_path = Path(config)
    if not config_path.exists():
        console.print(f"[red]Config file not found: {config}[/red]")
        raise typer.Exit(2)

    try:
        return make_validator(ResponseConfig.from_yaml(config_path))
    except (ValidationError, ConfigurationError, yaml.YAMLError) as e:
        console.print(f"[red]Invalid config: {escape(str(e))}[/red]")
        raise typer.Exit(2)


@app.command()
def check(
    url: str = typer.Argument(..., help="URL to probe"),
    config: str = typer.Option(..., "-c", "--config", help="Response validation YAML file"),
    method: str = typer.Option("GET", "-m", "--method", help="HTTP method"),
    timeout: float = typer.Option(10.0, "-t", "--timeout", help="Request timeout in seconds"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable verbose logging"),
):
    """Probe URL once and report whether it is up."""
    setup_logging(verbose=verbose)

    validator = _load_validator(config)
    result = run_probe(url, validator, method=method, timeout=timeout)

    if result.up:
        console.print(f"[green]up[/green] {url} ({result.status_code}, {result.duration_ms:.0f}ms)")
        raise typer.Exit(0)

    console.print(f"[red]down[/red] {url}")
    console.print(f"[dim]{result.reason.type.value}:[/dim] {escape(result.reason.message)}")
    raise typer.Exit(1)


@app.command()
def lint(
    config: str = typer.Option(..., "-c", "--config", help="Response validation YAML file"),
):
    """Compile a config without probing anything."""
    validator = _load_validator(config)

    table = Table(title="Checks")
    table.add_column("Stage")
    table.add_column("Check")
    for response_check in validator.response_checks:
        table.add_row("response", type(response_check).__name__)
    for body_check in validator.body_checks:
        table.add_row("body", type(body_check).__name__)
    console.print(table)

    console.print(
        f"[green]OK[/green] {len(validator.response_checks)} response checks, "
        f"{len(validator.body_checks)} body checks"
    )


if __name__ == "__main__":
    app()
