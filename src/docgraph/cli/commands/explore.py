"""
Explore Command - Interactive session over a collection.

A small read-eval loop standing in for the page selector and the detail
panel: every selection change re-projects the graph and rewrites the HTML
view, node inspection opens the detail table in the terminal.
"""

import asyncio
import shlex
import sys
import webbrowser
from typing import List

import click
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from ... import config
from ...core.errors import UnknownNodeError
from ...graph.details import render_details
from ...graph.visualize import HtmlRenderer, PresentationAdapter
from ...state.session import CollectionSession
from ..utils import echo_error, echo_success, echo_warning, load_session

console = Console()

HELP_TEXT = """\
Commands:
  show                 list pages and the current selection
  toggle <page_id>     add or remove a page from the graph
  all                  select every page (or clear, if all are selected)
  none                 clear the selection
  inspect <node_id>    open the detail view of a node
  details              show the currently inspected node
  close                close the detail view
  load <file>          replace the collection with another file
  open                 open the HTML view in the browser
  help                 show this help
  quit                 leave"""


def _show_pages(session: CollectionSession) -> None:
    table = Table(title=Text(session.status_line()), title_justify="left")
    table.add_column("", width=3)
    table.add_column("Unique ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    for page in session.pages:
        mark = "[x]" if session.selection.is_selected(page.unique_id) else "[ ]"
        table.add_row(Text(mark), Text(page.unique_id), Text(page.title))
    console.print(table)


def _show_inspected(adapter: PresentationAdapter) -> None:
    node = adapter.session.selection.inspected
    if node is None:
        console.print("No node inspected.")
        return
    console.print(render_details(node))
    if adapter.graph is not None and adapter.graph.get_node(node.id) is None:
        echo_warning("This node is not part of the current graph.")


def _load(adapter: PresentationAdapter, path: str) -> None:
    result = asyncio.run(adapter.session.load_file(path))
    if result.is_err():
        echo_error(result.error.message)
        return
    echo_success(f"Loaded {len(result.unwrap())} page(s) from {path}")
    adapter.refresh()


def _dispatch(adapter: PresentationAdapter, renderer: HtmlRenderer, argv: List[str]) -> bool:
    """Handle one command. Returns False when the loop should stop."""
    session = adapter.session
    command, args = argv[0].lower(), argv[1:]

    if command in ("quit", "exit", "q"):
        return False

    if command == "help":
        click.echo(HELP_TEXT)
    elif command in ("show", "ls"):
        _show_pages(session)
    elif command == "toggle" and args:
        for page_id in args:
            session.selection.toggle(page_id)
        adapter.refresh()
        click.echo(session.status_line())
    elif command == "all":
        session.selection.select_all()
        adapter.refresh()
        click.echo(session.status_line())
    elif command == "none":
        session.selection.none()
        adapter.refresh()
        click.echo(session.status_line())
    elif command == "inspect" and args:
        try:
            node = adapter.click_by_id(args[0])
        except UnknownNodeError as e:
            echo_error(str(e))
        else:
            console.print(render_details(node))
    elif command == "details":
        _show_inspected(adapter)
    elif command == "close":
        adapter.close_details()
    elif command == "load" and args:
        _load(adapter, args[0])
    elif command == "open":
        webbrowser.open(renderer.output_path.resolve().as_uri())
    else:
        echo_error(f"Unknown command: {' '.join(argv)}")
        click.echo("Type 'help' for a list of commands.")

    return True


@click.command()
@click.argument("collection_file", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", default=config.DEFAULT_HTML_OUTPUT, help="HTML file kept in sync with the selection")
def explore(collection_file: str, output: str):
    """
    Explore a collection interactively.

    Starts with nothing selected. Type 'help' at the prompt for commands.
    """
    session = load_session(collection_file)
    if session is None:
        sys.exit(1)

    renderer = HtmlRenderer(output, open_browser=False, status=session.status_line)
    adapter = PresentationAdapter(session, renderer)
    adapter.refresh()

    echo_success(f"Loaded {len(session.pages)} page(s). Graph view: {renderer.output_path}")
    click.echo("Type 'help' for a list of commands.")

    while True:
        try:
            line = Prompt.ask("[bold cyan]docgraph[/bold cyan]", console=console, default="", show_default=False)
        except (EOFError, KeyboardInterrupt):
            break

        try:
            argv = shlex.split(line)
        except ValueError as e:
            echo_error(f"Could not parse command: {e}")
            continue

        if argv and not _dispatch(adapter, renderer, argv):
            break
