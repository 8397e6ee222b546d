"""
Tree Session.

Holds what an interactive panel remembers between redraws: the selected
root, the chosen depth and the fold state. Selecting a different root wipes
the fold state; everything else survives.
"""

import logging
from typing import Any, Dict, List, Optional

from ..config import DEFAULT_MAX_DEPTH, clamp_depth
from ..core.provider import GraphProvider
from ..core.types import RenderRecord
from .renderer import FoldState, TreeRenderer

logger = logging.getLogger(__name__)


class TreeSession:
    """Selection-aware wrapper around a TreeRenderer."""

    def __init__(
        self,
        provider: GraphProvider,
        max_depth: int = DEFAULT_MAX_DEPTH,
        fold_state: Optional[FoldState] = None,
    ):
        self.renderer = TreeRenderer(provider, fold_state)
        self.selected_id: Optional[str] = None
        self._max_depth = clamp_depth(max_depth)

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @max_depth.setter
    def max_depth(self, value: int) -> None:
        self._max_depth = clamp_depth(value)

    @property
    def fold_state(self) -> FoldState:
        return self.renderer.fold_state

    def select(self, node_id: Optional[str]) -> None:
        """Change the root. Fold state is reset only if the root changes."""
        if node_id == self.selected_id:
            return
        logger.debug(f"Selection changed: {self.selected_id} -> {node_id}")
        self.selected_id = node_id
        self.renderer.reset_session()

    def navigate(self, node_id: str) -> None:
        """Make a rendered row the new root."""
        self.select(node_id)

    def set_expanded(self, path_key: str, expanded: bool) -> None:
        self.renderer.set_expanded(path_key, expanded)

    def toggle(self, path_key: str) -> bool:
        return self.renderer.toggle(path_key)

    def draw(self) -> List[RenderRecord]:
        """
        Render the current selection.

        Returns an empty list when nothing is selected. Raises
        NodeNotFoundError when the selection is missing from the provider.
        """
        if self.selected_id is None:
            return []
        return self.renderer.render_id(self.selected_id, self._max_depth)

    # =========================================================================
    # Persistence
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        return {
            "selected_id": self.selected_id,
            "max_depth": self._max_depth,
            "fold_state": self.fold_state.to_dict(),
        }

    @classmethod
    def from_dict(cls, provider: GraphProvider, data: Dict[str, Any]) -> "TreeSession":
        session = cls(
            provider,
            max_depth=int(data.get("max_depth", DEFAULT_MAX_DEPTH)),
            fold_state=FoldState.from_dict(data.get("fold_state") or {}),
        )
        session.selected_id = data.get("selected_id")
        return session
