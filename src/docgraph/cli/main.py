"""
docgraph CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging

import click

from .. import config
from .commands import explore, graph, inspect_node, pages


@click.group()
@click.version_option(package_name="docgraph")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """docgraph: Document Collection Visualizer.

    Explore a JSONL document collection as a graph of pages,
    chunks and the URLs they reference.

    \b
    Quick Start:
      docgraph pages collection.jsonl
      docgraph graph collection.jsonl --all -o collection.html
      docgraph explore collection.jsonl
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATE_FORMAT,
    )


# Register commands
main.add_command(pages.pages)
main.add_command(graph.graph)
main.add_command(inspect_node.inspect)
main.add_command(explore.explore)

if __name__ == "__main__":
    main()
