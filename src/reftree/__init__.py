"""
reftree: foldable "referenced by" trees over asset reference graphs.
"""

from .core import AssetIndex, GraphProvider, Node, NodeNotFoundError, RenderRecord
from .render import FoldState, TreeRenderer, TreeSession

__version__ = "0.1.0"

__all__ = [
    "AssetIndex",
    "GraphProvider",
    "Node",
    "NodeNotFoundError",
    "RenderRecord",
    "FoldState",
    "TreeRenderer",
    "TreeSession",
]
