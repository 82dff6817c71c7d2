"""
Pages Command - List the pages of a collection.
"""

import sys

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..utils import load_session

console = Console()


@click.command()
@click.argument("collection_file", type=click.Path(exists=True, dir_okay=False))
def pages(collection_file: str):
    """
    List the pages of a JSONL collection.

    Pages are shown in load order with their chunk counts, after orphan
    chunks have been pruned.
    """
    session = load_session(collection_file)
    if session is None:
        sys.exit(1)

    table = Table(title=f"Pages ({len(session.pages)})")
    table.add_column("Unique ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Chunks", justify="right")

    for page in session.pages:
        table.add_row(Text(page.unique_id), Text(page.title), str(len(page.chunks)))

    console.print(table)
