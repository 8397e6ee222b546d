"""
Render backends.

Turn the flat record list from TreeRenderer into something a terminal or a
JSON consumer can display. Records arrive in pre-order, so nesting is
recovered from depth alone.
"""

from typing import Any, Dict, List, Optional, Sequence

from rich.markup import escape
from rich.tree import Tree

from ..core.types import RenderRecord

INDENT = "  "
CONNECTOR = "└─ "


def _fold_marker(record: RenderRecord) -> str:
    if not record.expandable:
        return ""
    return "▼ " if record.expanded else "▶ "


def format_label(record: RenderRecord, markup: bool = True) -> str:
    """Single-line label: fold marker, inclusion marker, name, reference count."""
    included = "●" if record.is_included else "○"
    count = f" ({record.referencer_count})" if record.referencer_count else ""
    if not markup:
        return f"{_fold_marker(record)}{included} {record.label}{count}"

    color = "blue" if record.is_included else "dim"
    name = escape(record.label)
    return f"{_fold_marker(record)}[{color}]{included}[/{color}] [cyan]{name}[/cyan][dim]{count}[/dim]"


def to_rich_tree(records: Sequence[RenderRecord], title: Optional[str] = None) -> Tree:
    """
    Build a rich Tree from render records.

    With a title, every record hangs below a title node. Without one, the
    first record becomes the tree root.
    """
    if title is not None:
        tree = Tree(title)
        parents: List[Tree] = [tree]
        offset = 1
    else:
        if not records:
            return Tree("[dim]Nothing selected[/dim]")
        tree = Tree(format_label(records[0]))
        parents = [tree]
        records = records[1:]
        offset = 0

    for record in records:
        level = record.depth + offset
        # parents[i] is the branch that children at depth i hang from
        del parents[level:]
        branch = parents[-1].add(format_label(record))
        parents.append(branch)
    return tree


def to_ascii_lines(records: Sequence[RenderRecord]) -> List[str]:
    """Plain text rows, two spaces per depth level and a connector below the root."""
    lines = []
    for record in records:
        connector = CONNECTOR if record.depth > 0 else ""
        lines.append(f"{INDENT * record.depth}{connector}{format_label(record, markup=False)}")
    return lines


def to_payload(records: Sequence[RenderRecord]) -> List[Dict[str, Any]]:
    """JSON-ready list of record dictionaries."""
    return [record.model_dump() for record in records]
