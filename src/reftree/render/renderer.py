"""
Tree Renderer.

Walks the "referenced by" edges of a graph from a root node and produces a
flat, pre-order list of RenderRecords describing a foldable tree. No drawing
happens here; backends and hosts turn the records into rows.

Guarantees per render pass:
- no record deeper than max_depth
- each (node id, depth) pair emitted at most once
- a node is never emitted beneath itself, so cycles close immediately
- referencers the provider cannot resolve are skipped silently
- siblings ordered by label (case-sensitive, stable)
"""

import logging
from typing import Dict, Iterator, List, Optional, Set, Tuple

from ..config import AUTO_EXPAND_DEPTH
from ..core.exceptions import InvalidDepthError, NodeNotFoundError
from ..core.provider import GraphProvider
from ..core.types import Node, RenderRecord

logger = logging.getLogger(__name__)

LINEAGE_SEPARATOR = " > "


def _escape_id(node_id: str) -> str:
    # Only unescaped '>' characters act as separators
    return node_id.replace("\\", "\\\\").replace(">", "\\>")


def make_path_key(node_id: str, depth: int, lineage: Tuple[str, ...] = ()) -> str:
    """
    Build the fold-state key for a node reached through `lineage`.

    `lineage` lists ancestor ids from the root down to the parent. Ids are
    escaped so that an id containing the separator cannot make two different
    lineages share a key.
    """
    ids = lineage + (node_id,)
    return f"{depth}:" + LINEAGE_SEPARATOR.join(_escape_id(i) for i in ids)


def path_key_depth(path_key: str) -> int:
    """Extract the depth encoded in a path key."""
    head, sep, _ = path_key.partition(":")
    if not sep or not head.isdigit():
        raise ValueError(f"Malformed path key: {path_key!r}")
    return int(head)


class FoldState:
    """
    Expanded/collapsed flags keyed by path key.

    Entries are created lazily the first time a row is rendered, defaulting
    to expanded for rows shallower than `auto_expand_depth`.
    """

    def __init__(
        self,
        states: Optional[Dict[str, bool]] = None,
        auto_expand_depth: int = AUTO_EXPAND_DEPTH,
    ):
        self._states: Dict[str, bool] = dict(states or {})
        self.auto_expand_depth = auto_expand_depth

    def default_for(self, depth: int) -> bool:
        return depth < self.auto_expand_depth

    def is_expanded(self, path_key: str, depth: int) -> bool:
        """Return the flag for `path_key`, recording the default on first use."""
        return self._states.setdefault(path_key, self.default_for(depth))

    def get(self, path_key: str) -> Optional[bool]:
        return self._states.get(path_key)

    def set_expanded(self, path_key: str, expanded: bool) -> None:
        self._states[path_key] = bool(expanded)

    def toggle(self, path_key: str) -> bool:
        """Flip a flag and return its new value."""
        current = self._states.get(path_key)
        if current is None:
            current = self.default_for(path_key_depth(path_key))
        self._states[path_key] = not current
        return not current

    def clear(self) -> None:
        self._states.clear()

    def to_dict(self) -> Dict[str, bool]:
        return dict(self._states)

    @classmethod
    def from_dict(cls, data: Dict[str, bool]) -> "FoldState":
        """Restore persisted flags. Entries whose value is not a bool are dropped."""
        states = {}
        for key, value in data.items():
            if not isinstance(value, bool):
                logger.warning(f"Ignoring fold entry {key!r} with non-boolean value {value!r}")
                continue
            states[str(key)] = value
        return cls(states)

    def __contains__(self, path_key: str) -> bool:
        return path_key in self._states

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[str]:
        return iter(self._states)


class VisitGuard:
    """Set of (node id, depth) pairs already emitted in one render pass."""

    def __init__(self):
        self._seen: Set[Tuple[str, int]] = set()

    def enter(self, node_id: str, depth: int) -> bool:
        """Mark a visit. Returns False if the pair was already visited."""
        key = (node_id, depth)
        if key in self._seen:
            return False
        self._seen.add(key)
        return True

    def __contains__(self, key: Tuple[str, int]) -> bool:
        return key in self._seen

    def __len__(self) -> int:
        return len(self._seen)


class TreeRenderer:
    """
    Renders a reference graph as foldable tree rows.

    The renderer is a function of (graph, fold state, max depth): calling
    `render` twice without changing either gives the same records. Toggling
    rows only updates fold state; the host renders again on its own cadence.
    """

    def __init__(self, provider: GraphProvider, fold_state: Optional[FoldState] = None):
        self.provider = provider
        self.fold_state = fold_state if fold_state is not None else FoldState()

    def render(self, root: Node, max_depth: int) -> List[RenderRecord]:
        """Render the tree of nodes referencing `root`, down to `max_depth`."""
        if max_depth < 0:
            raise InvalidDepthError(max_depth)

        guard = VisitGuard()
        lookups: Dict[str, Optional[Node]] = {}
        records: List[RenderRecord] = []
        suppressed = 0
        dangling = 0

        # Explicit stack; children pushed in reverse so pops follow pre-order
        stack: List[Tuple[Node, int, Tuple[str, ...]]] = [(root, 0, ())]
        while stack:
            node, depth, lineage = stack.pop()
            if depth > max_depth:
                continue
            # A node never appears beneath itself
            if node.id in lineage or not guard.enter(node.id, depth):
                suppressed += 1
                continue

            path_key = make_path_key(node.id, depth, lineage)
            expandable = node.referencer_count > 0 and depth < max_depth
            expanded = expandable and self.fold_state.is_expanded(path_key, depth)

            records.append(RenderRecord(
                node_id=node.id,
                path_key=path_key,
                depth=depth,
                label=node.label,
                path=node.path,
                is_included=node.is_included,
                included_status=node.included_status,
                referencer_count=node.referencer_count,
                expandable=expandable,
                expanded=expanded,
            ))

            if not expanded:
                continue

            children, missing = self._resolve_referencers(node, lookups)
            dangling += missing
            child_lineage = lineage + (node.id,)
            for child in reversed(children):
                stack.append((child, depth + 1, child_lineage))

        logger.debug(
            f"Rendered {len(records)} rows for {root.id} "
            f"(max_depth={max_depth}, suppressed={suppressed}, dangling={dangling})"
        )
        return records

    def render_id(self, root_id: str, max_depth: int) -> List[RenderRecord]:
        """Resolve `root_id` through the provider and render it."""
        root = self.provider.lookup(root_id)
        if root is None:
            raise NodeNotFoundError(root_id)
        return self.render(root, max_depth)

    def set_expanded(self, path_key: str, expanded: bool) -> None:
        """Record a user fold/unfold. Takes effect on the next render."""
        self.fold_state.set_expanded(path_key, expanded)

    def toggle(self, path_key: str) -> bool:
        return self.fold_state.toggle(path_key)

    def reset_session(self) -> None:
        """Forget all fold state, e.g. when a new root is selected."""
        self.fold_state.clear()

    def _resolve_referencers(
        self, node: Node, lookups: Dict[str, Optional[Node]]
    ) -> Tuple[List[Node], int]:
        """Resolve, filter and sort a node's referencers. Returns (nodes, missing)."""
        resolved = []
        missing = 0
        for ref_id in node.referencers:
            if ref_id not in lookups:
                lookups[ref_id] = self.provider.lookup(ref_id)
            ref = lookups[ref_id]
            if ref is None:
                missing += 1
                continue
            resolved.append(ref)
        resolved.sort(key=lambda n: n.label)
        return resolved, missing
