"""
CLI Utilities - Shared helper functions for command line operations.

This module provides formatted printing, index loading, node resolution and
session persistence used across the CLI commands.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import click

from ..config import Settings, load_settings
from ..core.exceptions import IndexNotFoundError, SessionError
from ..core.provider import AssetIndex, GraphProvider
from ..render.session import TreeSession

logger = logging.getLogger(__name__)


def echo_success(message: str) -> None:
    """Report a completed action in green on stdout."""
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Report a failure in red.

    Goes to stderr so `--ascii` output piped elsewhere stays clean.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    """Report a recoverable problem, such as a root missing from the index."""
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    """Print an informational message, dimmed."""
    click.echo(click.style(f"   {message}", dim=True))


def get_settings() -> Settings:
    """Settings for the current working directory."""
    return load_settings()


def open_index(index_path: Path, rebuild_command: Optional[str] = None) -> AssetIndex:
    """
    Load the index, raising IndexNotFoundError if it is missing or corrupt.
    """
    return AssetIndex.load(index_path, rebuild_command=rebuild_command)


def load_index(index_path: Path, rebuild_command: Optional[str] = None) -> Optional[AssetIndex]:
    """
    Load the index for text-mode commands.

    Prints guidance and returns None when the index cannot be read.
    """
    try:
        return open_index(index_path, rebuild_command)
    except IndexNotFoundError as e:
        echo_error(str(e))
        click.echo("Run 'reftree rebuild' to generate it.")
        return None


def resolve_node_id(index: AssetIndex, name: str) -> Optional[str]:
    """
    Resolve a user-supplied name to a node id.

    Exact ids win. Otherwise an exact name or path match, then the first
    substring match.
    """
    if index.has_node(name):
        return name

    matches = index.find_nodes(name)
    if not matches:
        return None

    for node_id in matches:
        node = index.lookup(node_id)
        if node is not None and name in (node.name, node.path):
            return node_id

    if len(matches) > 1:
        logger.info(f"Ambiguous root '{name}'. Using first match: {matches[0]}")
    return matches[0]


def load_session(session_path: Path, provider: GraphProvider) -> TreeSession:
    """Restore the persisted session, or start a fresh one."""
    if not session_path.exists():
        return TreeSession(provider)
    try:
        data = json.loads(session_path.read_text())
        return TreeSession.from_dict(provider, data)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        logger.warning(f"Discarding unreadable session {session_path}: {e}")
        return TreeSession(provider)


def save_session(session: TreeSession, session_path: Path) -> None:
    """Persist the session, raising SessionError if the file cannot be written."""
    try:
        session_path.parent.mkdir(parents=True, exist_ok=True)
        session_path.write_text(json.dumps(session.to_dict(), indent=2))
    except OSError as e:
        raise SessionError(str(session_path), e.strerror or str(e)) from e
