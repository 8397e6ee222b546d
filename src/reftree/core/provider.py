"""
Graph providers.

The renderer only needs `lookup(node_id) -> Optional[Node]`. AssetIndex is
the in-memory provider used by the CLI: it loads a precomputed index from
JSON and knows how to ask an external command to rebuild that file.
"""

import json
import logging
import shlex
import subprocess
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Protocol, runtime_checkable

from pydantic import ValidationError

from .exceptions import IndexNotFoundError, RebuildError
from .types import Node

logger = logging.getLogger(__name__)


@runtime_checkable
class GraphProvider(Protocol):
    """Read-only access to reference-graph nodes."""

    def lookup(self, node_id: str) -> Optional[Node]:
        ...


class AssetIndex:
    """
    Dictionary-backed GraphProvider.

    Lookups are O(1). The index is never modified by rendering; it changes
    only through `load_from_dict`, `load` or `rebuild`.
    """

    def __init__(
        self,
        source_path: Optional[Path] = None,
        rebuild_command: Optional[str] = None,
    ):
        self.source_path = Path(source_path) if source_path else None
        self.rebuild_command = rebuild_command
        self._nodes: Dict[str, Node] = {}

    # =========================================================================
    # Node Management
    # =========================================================================

    def add_node(self, node: Node) -> None:
        """Add or replace a node."""
        self._nodes[node.id] = node

    def lookup(self, node_id: str) -> Optional[Node]:
        return self._nodes.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def find_nodes(self, pattern: str) -> list[str]:
        """
        Find node ids whose id, name or path contains `pattern`.

        Case-insensitive, used to resolve partial names typed on the CLI.
        """
        pattern_lower = pattern.lower()
        results = []
        for node in self._nodes.values():
            haystacks = (node.id, node.name, node.path or "")
            if any(pattern_lower in h.lower() for h in haystacks):
                results.append(node.id)
        return sorted(results)

    def iter_nodes(self) -> Iterator[Node]:
        return iter(self._nodes.values())

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    def clear(self) -> None:
        self._nodes.clear()

    # =========================================================================
    # Loading
    # =========================================================================

    def load_from_dict(self, data: Dict[str, Any]) -> None:
        """
        Replace the index contents from a dictionary.

        Expected format:
        {
            "nodes": [{"id": "...", "name": "...", "referencers": [...]}, ...]
        }
        """
        self.clear()
        skipped = 0
        for raw in data.get("nodes", []):
            if not isinstance(raw, dict) or not raw.get("id"):
                skipped += 1
                continue
            try:
                self.add_node(Node.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping malformed node {raw.get('id')}: {e}")
                skipped += 1
        if skipped:
            logger.warning(f"Skipped {skipped} index entries without a valid id")
        logger.debug(f"Loaded {self.node_count} nodes into index")

    def load_from_json(self, json_str: str) -> None:
        self.load_from_dict(json.loads(json_str))

    @classmethod
    def load(cls, path: Path, rebuild_command: Optional[str] = None) -> "AssetIndex":
        """Create an index from a JSON file on disk."""
        index = cls(source_path=path, rebuild_command=rebuild_command)
        index.reload()
        return index

    def reload(self) -> None:
        """Re-read the index from `source_path`."""
        if self.source_path is None:
            raise IndexNotFoundError("<memory>", "index has no source file")
        if not self.source_path.exists():
            raise IndexNotFoundError(str(self.source_path))
        try:
            self.load_from_json(self.source_path.read_text())
        except json.JSONDecodeError as e:
            raise IndexNotFoundError(str(self.source_path), f"invalid JSON: {e}") from e

    def rebuild(self) -> None:
        """
        Ask the external indexer to regenerate the index file, then reload it.

        Without a configured command this is a plain reload.
        """
        if self.rebuild_command:
            logger.info(f"Rebuilding index: {self.rebuild_command}")
            try:
                completed = subprocess.run(
                    shlex.split(self.rebuild_command),
                    capture_output=True,
                    text=True,
                    check=False,
                )
            except OSError as e:
                raise RebuildError(f"Could not run rebuild command '{self.rebuild_command}'", str(e)) from e
            if completed.returncode != 0:
                raise RebuildError(
                    f"Rebuild command exited with status {completed.returncode}",
                    completed.stderr.strip(),
                )
        self.reload()

    # =========================================================================
    # Statistics
    # =========================================================================

    def get_stats(self) -> Dict[str, Any]:
        """Counts of nodes, reference edges and edges pointing at unknown ids."""
        edges = 0
        dangling = 0
        for node in self._nodes.values():
            edges += node.referencer_count
            dangling += sum(1 for rid in node.referencers if rid not in self._nodes)
        return {
            "total_nodes": self.node_count,
            "total_references": edges,
            "dangling_references": dangling,
            "included_nodes": sum(1 for n in self._nodes.values() if n.is_included),
            "unreferenced_nodes": sum(1 for n in self._nodes.values() if not n.referencers),
        }
