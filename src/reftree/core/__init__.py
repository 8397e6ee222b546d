"""
Core modules for reftree.

This package contains the fundamental building blocks:
- types: Data structures (Node, RenderRecord)
- provider: Graph provider protocol and the in-memory AssetIndex
- exceptions: Errors surfaced to hosts
"""

from .exceptions import (
    IndexNotFoundError, InvalidDepthError, NodeNotFoundError,
    RebuildError, ReftreeError, SessionError,
)
from .provider import AssetIndex, GraphProvider
from .types import Node, RenderRecord

__all__ = [
    # Types
    "Node", "RenderRecord",
    # Providers
    "AssetIndex", "GraphProvider",
    # Errors
    "ReftreeError", "NodeNotFoundError", "IndexNotFoundError",
    "InvalidDepthError", "RebuildError", "SessionError",
]
