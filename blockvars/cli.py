"""
CLI for inspecting exported documents.

Provides commands to reconcile the variable types of a document exported
as JSON and to preview generated variable names.
"""

import json
from typing import Optional, Tuple

import click

from blockvars.config import config
from blockvars.document import StaticDocument, all_variable_names, all_variable_types
from blockvars.lattice import EquivalenceTable, TypeLatticeResolver
from blockvars.logging import initialize_from_config
from blockvars.variables import VariableNamespace, generate_unique_name


@click.group()
@click.option("--verbose", is_flag=True, help="Log every reconciliation step")
def cli(verbose: bool):
    """Variable namespace and type reconciliation tools."""
    log_config = config.logging
    if verbose:
        log_config = log_config.model_copy(update={"level": "DEBUG"})
    initialize_from_config(log_config)


@cli.command()
@click.argument("document_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--equivalences",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON file with type equivalences (overrides configuration)",
)
def reconcile(document_file: str, equivalences: Optional[str]):
    """
    Reconcile variable types across all sites of a document.

    Example:
        blockvars reconcile document.json --equivalences types.json
    """
    with open(document_file) as f:
        document = StaticDocument.from_dict(json.load(f))

    if equivalences:
        table = EquivalenceTable.load(equivalences)
    else:
        table = EquivalenceTable.from_config()
    resolver = TypeLatticeResolver(table)

    types = all_variable_types(document, resolver)
    click.echo(json.dumps(types, indent=2))

    untyped = [name for name in all_variable_names(document) if name not in types]
    if untyped:
        click.echo(f"\nNo type information: {', '.join(untyped)}", err=True)
    if resolver.stats.conflicts_detected:
        click.echo(f"Conflicts: {resolver.stats.conflicts_detected}", err=True)


@cli.command("unique-name")
@click.argument("names", nargs=-1)
def unique_name(names: Tuple[str, ...]):
    """
    Print the next generated name given the names already in use.

    Example:
        blockvars unique-name i j k
    """
    namespace = VariableNamespace()
    for name in names:
        namespace.create_variable(name)
    click.echo(generate_unique_name(namespace))


if __name__ == "__main__":
    cli()
