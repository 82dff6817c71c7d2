"""
CLI Utilities - Shared helper functions for command line operations.

Formatted printing, collection loading, and page selection shared by the
docgraph commands.
"""

import asyncio
from pathlib import Path
from typing import Iterable, Optional

import click

from .. import config
from ..state.session import CollectionSession


def echo_success(message: str) -> None:
    """Print a success message with a green checkmark."""
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """Print an error message with a red cross, to stderr."""
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    """Print an informational message, dimmed."""
    click.echo(click.style(f"   {message}", dim=True))


def load_session(collection_file: str) -> Optional[CollectionSession]:
    """
    Load a JSONL collection into a fresh session.

    Prints the load error (with its line number where one is known) and
    returns None on failure.

    Args:
        collection_file (str): Path to the .jsonl collection.

    Returns:
        Optional[CollectionSession]: The session, or None if loading failed.
    """
    path = Path(collection_file)
    if path.suffix.lower() not in config.JSONL_SUFFIXES:
        echo_warning(f"{path.name} does not look like a JSONL file, trying anyway")

    session = CollectionSession()
    result = asyncio.run(session.load_file(path))

    if result.is_err():
        echo_error(result.error.message)
        return None

    return session


def apply_selection(
    session: CollectionSession, page_ids: Iterable[str], select_all: bool
) -> None:
    """Apply --page/--all options to a freshly loaded session."""
    if select_all:
        session.selection.select_all()
        return

    for page_id in page_ids:
        if not any(p.unique_id == page_id for p in session.pages):
            echo_warning(f"Page not in collection: {page_id}")
        session.selection.toggle(page_id)
