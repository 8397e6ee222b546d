"""
Show Command - Print the "referenced by" tree of an asset.

Selecting a different root than the previous invocation resets the fold
state stored in the session file, like picking a new asset in an editor panel.
"""

import logging
from pathlib import Path
from typing import List, Optional

import click
from pydantic import BaseModel
from rich.console import Console

from ...config import MAX_MAX_DEPTH, MIN_MAX_DEPTH
from ...core.exceptions import NodeNotFoundError, ReftreeError
from ...core.types import RenderRecord
from ...render.backends import to_ascii_lines, to_rich_tree
from ..renderers import JsonRenderer
from ..utils import (
    echo_error, echo_info, echo_warning, get_settings, load_session,
    open_index, resolve_node_id, save_session,
)

logger = logging.getLogger(__name__)

console = Console()


# --- API Models ---
class ShowResponse(BaseModel):
    root: str
    max_depth: int
    records: List[RenderRecord]


@click.command()
@click.argument("root")
@click.option("-i", "--index", "index_path", default=None,
              help="Path to the index JSON (default: .reftree/index.json)")
@click.option("-d", "--max-depth", type=click.IntRange(MIN_MAX_DEPTH, MAX_MAX_DEPTH),
              default=None, help="Depth of the tree (default: session or config value)")
@click.option("--ascii", "as_ascii", is_flag=True, help="Plain text output")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--rebuild", is_flag=True, help="Rebuild the index if ROOT is missing")
def show(
    root: str,
    index_path: Optional[str],
    max_depth: Optional[int],
    as_ascii: bool,
    as_json: bool,
    rebuild: bool,
) -> None:
    """
    Show everything that references ROOT, as a foldable tree.

    \b
    Examples:
        reftree show Assets/Materials/Rock.mat
        reftree show 3f2a9c --max-depth 3 --json
    """
    settings = get_settings()
    index_file = Path(index_path) if index_path else settings.index_path

    if as_json:
        renderer = JsonRenderer("show")
        error_to_report = None
        response_data = None
        with renderer.capture():
            try:
                response_data = _build_tree(
                    root, index_file, settings, max_depth, rebuild
                )
            except ReftreeError as e:
                error_to_report = e

        if error_to_report:
            renderer.render_error(error_to_report)
        elif response_data:
            renderer.render_success(response_data)
        return

    try:
        response = _build_tree(root, index_file, settings, max_depth, rebuild)
    except NodeNotFoundError as e:
        echo_warning(f"Asset not found in index: {e.node_id}")
        click.echo("Run 'reftree rebuild' or pass --rebuild to refresh the index.")
        return
    except ReftreeError as e:
        echo_error(str(e))
        return

    if as_ascii:
        for line in to_ascii_lines(response.records):
            click.echo(line)
    else:
        console.print(to_rich_tree(response.records))

    echo_info(f"{len(response.records)} rows | max depth {response.max_depth}")


def _build_tree(root, index_file, settings, max_depth, rebuild) -> ShowResponse:
    """Load index and session, select ROOT, render and persist the session."""
    index = open_index(index_file, settings.rebuild_command)

    root_id = resolve_node_id(index, root)
    if root_id is None and rebuild:
        logger.info(f"{root} not in index, rebuilding")
        index.rebuild()
        root_id = resolve_node_id(index, root)
    if root_id is None:
        raise NodeNotFoundError(root)

    session = load_session(settings.session_path, index)
    if session.selected_id is None and max_depth is None:
        session.max_depth = settings.max_depth
    session.select(root_id)
    if max_depth is not None:
        session.max_depth = max_depth

    records = session.draw()
    save_session(session, settings.session_path)

    return ShowResponse(root=root_id, max_depth=session.max_depth, records=records)
