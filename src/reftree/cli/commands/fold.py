"""
Fold Commands - Edit the fold state stored in the session file.

Path keys are printed by `reftree show --json` in each record's `path_key`.
"""

from typing import Optional

import click

from ...core.exceptions import SessionError
from ...core.provider import AssetIndex
from ..utils import echo_error, echo_info, echo_success, get_settings, load_session, save_session


@click.command()
@click.argument("path_key")
@click.option("--expand/--collapse", "state", default=None,
              help="Set the row state instead of flipping it")
def toggle(path_key: str, state: Optional[bool]) -> None:
    """
    Expand or collapse one row of the last shown tree.

    \b
    Examples:
        reftree toggle "1:root-guid > child-guid"
        reftree toggle "0:root-guid" --collapse
    """
    settings = get_settings()
    session = load_session(settings.session_path, AssetIndex())

    if state is None:
        try:
            expanded = session.toggle(path_key)
        except ValueError as e:
            echo_error(str(e))
            return
    else:
        session.set_expanded(path_key, state)
        expanded = state

    try:
        save_session(session, settings.session_path)
    except SessionError as e:
        echo_error(str(e))
        return
    echo_success(f"{'Expanded' if expanded else 'Collapsed'} {path_key}")
    echo_info("Run 'reftree show' again to see the result.")


@click.command()
def reset() -> None:
    """Forget every expanded/collapsed row of the current session."""
    settings = get_settings()
    session = load_session(settings.session_path, AssetIndex())
    cleared = len(session.fold_state)
    session.renderer.reset_session()
    try:
        save_session(session, settings.session_path)
    except SessionError as e:
        echo_error(str(e))
        return
    echo_success(f"Cleared {cleared} fold entries")
