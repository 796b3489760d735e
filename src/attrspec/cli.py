"""CLI interface for attrspec using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from attrspec import __description__, __version__
from attrspec.config import AttrspecConfig, load_config
from attrspec.diagnostics import check_declarations
from attrspec.errors import ConfigurationError
from attrspec.models import RuleSet
from attrspec.normalizer import Normalizer, filter_rules
from attrspec.sources import load_declarations, load_values
from attrspec.validation import ValidationEngine

app = typer.Typer(
    name="attrspec",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()
err_console = Console(stderr=True)

VALID_FORMATS = ["table", "json"]

# Settings shared by all commands, filled in by the main callback
_state: dict = {"config_path": None}


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"attrspec version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .attrspec.json)")
    ] = None,
) -> None:
    """attrspec - Declarative attribute rules and value validation."""
    _state["config_path"] = config


def _load_config() -> AttrspecConfig:
    config = load_config(_state["config_path"])
    _configure_logging(config)
    return config


def _configure_logging(config: AttrspecConfig) -> None:
    root = logging.getLogger()
    if not any(isinstance(handler, RichHandler) for handler in root.handlers):
        root.addHandler(RichHandler(console=err_console, show_path=False))
    root.setLevel(config.logging.level.to_logging_level())


def _split_names(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [name.strip() for name in value.split(",") if name.strip()]


def _check_format(format: str) -> None:
    if format not in VALID_FORMATS:
        console.print(f"[red]Error:[/red] Invalid format '{format}'. Must be one of: {', '.join(VALID_FORMATS)}")
        raise typer.Exit(1)


def _build_rule_set(
    config: AttrspecConfig,
    declarations: Path,
    defaults: Path | None,
    only: str | None,
    exclude: str | None,
) -> RuleSet:
    raw_decls = load_declarations(declarations)
    raw_defaults = load_declarations(defaults) if defaults else None
    rule_set = Normalizer(config).normalize(raw_decls, raw_defaults)
    if only is not None or exclude is not None:
        rule_set = filter_rules(rule_set, only=_split_names(only), exclude=_split_names(exclude))
    return rule_set


def _output_rules_table(rule_set: RuleSet) -> None:
    table = Table(title=f"Attribute rules ({len(rule_set)})")
    table.add_column("Name", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Required", justify="center")
    table.add_column("Pattern", style="dim")
    table.add_column("Length", justify="right")
    table.add_column("Valid values", style="white")
    table.add_column("Values", justify="right")

    for name, rule in rule_set.items():
        max_length = "∞" if rule.max_length is None else str(rule.max_length)
        valid_values = ""
        if rule.valid_values:
            valid_values = ", ".join(
                list(rule.valid_values.literals) + [p.source for p in rule.valid_values.patterns]
            )
        cardinality = rule.valid_num_values or ""
        if not cardinality and rule.declares_cardinality:
            cardinality = str(rule.cardinality())

        table.add_row(
            escape(name),
            escape(rule.description),
            "[green]yes[/green]" if rule.required else "[dim]no[/dim]",
            escape(rule.pattern.source) if rule.pattern else "",
            f"{rule.min_length}..{max_length}",
            escape(valid_values),
            cardinality,
        )

    console.print(table)


@app.command()
def normalize(
    declarations: Annotated[
        Path,
        typer.Argument(help="Declaration document (JSON or YAML)")
    ],
    defaults: Annotated[
        Optional[Path],
        typer.Option("--defaults", "-d", help="Document with default declaration values")
    ] = None,
    only: Annotated[
        Optional[str],
        typer.Option("--only", help="Comma-separated attributes to keep")
    ] = None,
    exclude: Annotated[
        Optional[str],
        typer.Option("--except", help="Comma-separated attributes to drop")
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json (default: table)")
    ] = "table",
) -> None:
    """Normalize a declaration document and show the resulting rules."""
    _check_format(format)

    try:
        config = _load_config()
        rule_set = _build_rule_set(config, declarations, defaults, only, exclude)
    except (ConfigurationError, ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if format == "json":
        data = {name: rule.to_dict() for name, rule in rule_set.items()}
        console.print(jsonlib.dumps(data, indent=2, default=str), markup=False, highlight=False, soft_wrap=True)
    else:
        _output_rules_table(rule_set)


@app.command()
def validate(
    declarations: Annotated[
        Path,
        typer.Argument(help="Declaration document (JSON or YAML)")
    ],
    values: Annotated[
        Path,
        typer.Argument(help="Document mapping programmatic names to values (JSON or YAML)")
    ],
    defaults: Annotated[
        Optional[Path],
        typer.Option("--defaults", "-d", help="Document with default declaration values")
    ] = None,
    only: Annotated[
        Optional[str],
        typer.Option("--only", help="Comma-separated attributes to validate")
    ] = None,
    exclude: Annotated[
        Optional[str],
        typer.Option("--except", help="Comma-separated attributes to skip")
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json (default: table)")
    ] = "table",
) -> None:
    """Validate a values document against a declaration document."""
    _check_format(format)

    try:
        config = _load_config()
        rule_set = _build_rule_set(config, declarations, defaults, only, exclude)
        candidate_values = load_values(values)
        report = ValidationEngine(config).validate(rule_set, candidate_values)
    except (ConfigurationError, ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if format == "json":
        console.print(jsonlib.dumps(report.to_dict(), indent=2), markup=False, highlight=False, soft_wrap=True)
    elif report.is_valid:
        console.print(f"[green]All {len(rule_set)} attributes are valid[/green]")
    else:
        console.print(f"[red]Validation failed:[/red] {report.error_count} errors in {len(report)} attributes")
        errors_table = Table()
        errors_table.add_column("Attribute", style="cyan")
        errors_table.add_column("Description", style="white")
        errors_table.add_column("Error", style="red")

        for name, messages in report.items():
            for message in messages:
                errors_table.add_row(escape(name), escape(rule_set[name].description), message)

        console.print(errors_table)

    raise typer.Exit(0 if report.is_valid else 1)


@app.command()
def lint(
    declarations: Annotated[
        Path,
        typer.Argument(help="Declaration document (JSON or YAML)")
    ],
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json (default: table)")
    ] = "table",
) -> None:
    """Report declared keys that look like misspelled attrspec keys."""
    _check_format(format)

    try:
        _load_config()
        warnings = check_declarations(load_declarations(declarations))
    except (ConfigurationError, ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if format == "json":
        console.print(jsonlib.dumps([warning.to_dict() for warning in warnings], indent=2), markup=False, highlight=False, soft_wrap=True)
    elif not warnings:
        console.print("[green]No issues found![/green]")
    else:
        table = Table()
        table.add_column("Attribute", style="cyan")
        table.add_column("Key", style="yellow")
        table.add_column("Did you mean", style="green")
        for warning in warnings:
            table.add_row(escape(warning.attribute), escape(warning.key), warning.suggestion)
        console.print(table)

    raise typer.Exit(1 if warnings else 0)


if __name__ == "__main__":
    app()
