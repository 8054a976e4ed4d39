"""CLI interface for Document Mapping Kit."""

import logging
import click
import yaml
from pathlib import Path
from bson import json_util
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from dmk.config import ConfigManager, settings
from dmk.mapping import DocumentMapper, UpdateDocumentMapper

console = Console()
stderr_console = Console(stderr=True)


def _configure_logging(verbose: int) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=stderr_console, show_path=False)],
        force=True,
    )


def _load_specification(spec_path: Path) -> dict:
    with open(spec_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Specification must be a mapping of operators: {spec_path}")
    return data


@click.group()
@click.version_option(version="0.1.0")
@click.option('--verbose', '-v', count=True, help='Increase log verbosity (-v info, -vv debug)')
def cli(verbose: int):
    """Document Mapping Kit - map Python object graphs to MongoDB documents"""
    _configure_logging(verbose)


@cli.command(name="map")
@click.option(
    '--config', '-c',
    'config_path',
    type=click.Path(exists=True, path_type=Path),
    help='Path to project config'
)
@click.option(
    '--entity', '-e',
    'entity_ref',
    help="Entity class the paths refer to ('pkg.module:Class')"
)
@click.option(
    '--update', '-u',
    'spec_path',
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help='Path to the update (or query) specification, YAML or JSON'
)
@click.option('--query', 'as_query', is_flag=True, help='Map as a query document')
def map_document(config_path: Path | None, entity_ref: str | None, spec_path: Path, as_query: bool) -> None:
    """Map a specification and print the resulting document as JSON."""
    try:
        config_manager = ConfigManager(config_path)
        context = config_manager.build_context()
        entity = config_manager.resolve_entity(entity_ref) if entity_ref else None
        specification = _load_specification(spec_path)
        if as_query:
            document = DocumentMapper(context).get_mapped_object(specification, entity)
        else:
            document = UpdateDocumentMapper(context).get_mapped_object(specification, entity)
    except Exception as e:
        stderr_console.print(f"[red]✗ Mapping failed: {e}[/red]")
        raise click.Abort()

    console.print_json(json_util.dumps(document))


@cli.command(name="describe")
@click.option(
    '--config', '-c',
    'config_path',
    type=click.Path(exists=True, path_type=Path),
    help='Path to project config'
)
@click.option(
    '--entity', '-e',
    'entity_ref',
    required=True,
    help="Entity class to describe ('pkg.module:Class')"
)
def describe(config_path: Path | None, entity_ref: str) -> None:
    """Show how the properties of an entity map to document keys."""
    try:
        config_manager = ConfigManager(config_path)
        context = config_manager.build_context()
        entity = config_manager.resolve_entity(entity_ref)
    except Exception as e:
        stderr_console.print(f"[red]✗ Describe failed: {e}[/red]")
        raise click.Abort()

    table = Table(title=entity.name)
    table.add_column("Property", style="cyan")
    table.add_column("Key", style="green")
    table.add_column("Declared type")
    table.add_column("Terminal", style="yellow")
    table.add_column("Entity", style="magenta")

    for prop in entity.properties.values():
        actual = prop.type.actual_type
        terminal = actual is not None and context.type_registry.is_terminal(actual)
        nested = context.metadata.get_entity(actual)
        table.add_row(
            prop.name,
            prop.key,
            str(prop.type),
            "yes" if terminal else "no",
            nested.name if nested else "-",
        )

    console.print(Panel(
        table,
        title=f"type key: {context.type_key_for(entity)}",
        border_style="green"
    ))


if __name__ == "__main__":
    cli()
