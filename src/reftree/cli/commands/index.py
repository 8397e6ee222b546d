"""
Index Commands - Rebuild and inspect the precomputed reference index.

Building the index is the job of an external tool; `rebuild` only runs the
configured command and reloads its output.
"""

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from ...core.exceptions import ReftreeError
from ...core.provider import AssetIndex
from ..utils import echo_error, echo_success, echo_warning, get_settings, load_index

logger = logging.getLogger(__name__)

console = Console()


@click.command()
@click.option("-i", "--index", "index_path", default=None,
              help="Path to the index JSON (default: .reftree/index.json)")
def rebuild(index_path: Optional[str]) -> None:
    """
    Regenerate the index with the configured rebuild command.

    Set `rebuild_command` in .reftree/config.yaml or REFTREE_REBUILD_COMMAND.
    """
    settings = get_settings()
    index_file = Path(index_path) if index_path else settings.index_path

    if not settings.rebuild_command:
        echo_warning("No rebuild command configured, reloading index only")

    index = AssetIndex(source_path=index_file, rebuild_command=settings.rebuild_command)
    try:
        index.rebuild()
    except ReftreeError as e:
        echo_error(str(e))
        return

    echo_success(f"Index ready: {index.node_count} nodes from {index_file}")


@click.command()
@click.option("-i", "--index", "index_path", default=None,
              help="Path to the index JSON (default: .reftree/index.json)")
def stats(index_path: Optional[str]) -> None:
    """Show node and reference counts for the index."""
    settings = get_settings()
    index_file = Path(index_path) if index_path else settings.index_path

    index = load_index(index_file, settings.rebuild_command)
    if index is None:
        return

    table = Table(title=f"Index: {index_file}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    for key, value in index.get_stats().items():
        table.add_row(key.replace("_", " "), str(value))
    console.print(table)
