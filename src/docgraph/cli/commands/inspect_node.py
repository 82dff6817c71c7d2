"""
Inspect Command - Show the detail view of one graph node.
"""

import sys

import click
from rich.console import Console

from ...core.errors import UnknownNodeError
from ...graph.details import render_details
from ...graph.visualize import PresentationAdapter
from ..utils import apply_selection, echo_error, echo_info, load_session

console = Console()


class _NullRenderer:
    """Projects without drawing; inspection only needs the graph."""

    def render(self, graph, color, radius, on_click):
        return None


@click.command("inspect")
@click.argument("collection_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("node_id")
@click.option("-p", "--page", "page_ids", multiple=True, help="Page unique_id to include (repeatable)")
@click.option("--all", "select_all", is_flag=True, help="Include every page")
def inspect(collection_file: str, node_id: str, page_ids: tuple, select_all: bool):
    """
    Show the details of a node in the projected graph.

    \b
    Node ids:
      collection                 the whole collection
      page:<unique_id>           a page
      chunk:<unique_id>:<id>     a chunk of a page
      <url>                      a referenced URL
    """
    session = load_session(collection_file)
    if session is None:
        sys.exit(1)

    apply_selection(session, page_ids, select_all)
    adapter = PresentationAdapter(session, _NullRenderer())
    adapter.refresh()

    try:
        node = adapter.click_by_id(node_id)
    except UnknownNodeError as e:
        echo_error(str(e))
        echo_info(session.status_line())
        sys.exit(1)

    console.print(render_details(node))
