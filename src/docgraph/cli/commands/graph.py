"""
Graph Command - Generate interactive visualization.

Projects the selected pages and writes an HTML page driven by a D3 force
simulation, or outputs the raw node/link JSON for other tools.
"""

import json
import sys

import click

from ... import config
from ...graph.visualize import HtmlRenderer, PresentationAdapter
from ..utils import apply_selection, echo_info, echo_success, load_session


@click.command()
@click.argument("collection_file", type=click.Path(exists=True, dir_okay=False))
@click.option("-p", "--page", "page_ids", multiple=True, help="Page unique_id to include (repeatable)")
@click.option("--all", "select_all", is_flag=True, help="Include every page")
@click.option("-o", "--output", default=config.DEFAULT_HTML_OUTPUT, help="Output HTML file")
@click.option("--json", "json_mode", is_flag=True, help="Output graph data as JSON to stdout")
@click.option("--no-open", is_flag=True, help="Do not open the browser")
def graph(
    collection_file: str,
    page_ids: tuple,
    select_all: bool,
    output: str,
    json_mode: bool,
    no_open: bool,
):
    """
    Generate interactive visualization or raw data.

    Nothing is selected by default: pick pages with --page or use --all.
    """
    session = load_session(collection_file)
    if session is None:
        if json_mode:
            click.echo(json.dumps({
                "meta": {"status": "error"},
                "error": {"message": "Collection could not be loaded."},
            }))
        sys.exit(1)

    apply_selection(session, page_ids, select_all)

    if json_mode:
        graph_data = session.graph()
        click.echo(json.dumps({
            "meta": {"status": "success", "selection": session.status_line()},
            "data": graph_data.to_dict(),
        }))
        return

    renderer = HtmlRenderer(output, open_browser=not no_open, status=session.status_line)
    adapter = PresentationAdapter(session, renderer)
    output_path = adapter.refresh()

    stats = adapter.graph.stats()
    echo_success(f"Generated: {output_path}")
    echo_info(session.status_line())
    echo_info(f"{stats['total_nodes']} nodes, {stats['total_links']} links")
    echo_info(f"Open: file://{output_path.absolute()}")
