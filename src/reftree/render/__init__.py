"""Foldable tree rendering for reference graphs."""

from .backends import format_label, to_ascii_lines, to_payload, to_rich_tree
from .renderer import FoldState, TreeRenderer, VisitGuard, make_path_key, path_key_depth
from .session import TreeSession

__all__ = [
    "TreeRenderer",
    "FoldState",
    "VisitGuard",
    "TreeSession",
    "make_path_key",
    "path_key_depth",
    "format_label",
    "to_rich_tree",
    "to_ascii_lines",
    "to_payload",
]
