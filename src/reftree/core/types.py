"""
Core type definitions for reftree.

Nodes are owned by the graph provider and treated as read-only by the
renderer. RenderRecords are the backend-agnostic rows the renderer emits.
"""

from pathlib import PurePosixPath
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Node(BaseModel):
    """
    A vertex of the reference graph, typically an asset.

    `referencers` holds the ids of nodes with an edge pointing at this one,
    i.e. everything that references (depends on) it.
    """
    id: str
    name: str = ""
    path: str | None = None
    is_included: bool = False
    included_status: str = ""
    referencers: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("referencers")
    @classmethod
    def _dedupe_referencers(cls, value: List[str]) -> List[str]:
        # Ordered set: keep first occurrence
        return list(dict.fromkeys(value))

    @model_validator(mode="after")
    def _default_name(self) -> "Node":
        if not self.name:
            fallback = PurePosixPath(self.path).name if self.path else ""
            object.__setattr__(self, "name", fallback or self.id)
        return self

    @property
    def label(self) -> str:
        """Display label used for sorting and rendering."""
        return self.name

    @property
    def referencer_count(self) -> int:
        return len(self.referencers)

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, Node):
            return self.id == other.id
        return False


class RenderRecord(BaseModel):
    """
    One row of the rendered tree.

    `path_key` identifies the row's fold state and is what a host hands back
    to `TreeRenderer.set_expanded` when the user toggles the row.
    """
    node_id: str
    path_key: str
    depth: int
    label: str
    path: str | None = None
    is_included: bool = False
    included_status: str = ""
    referencer_count: int = 0
    expandable: bool = False
    expanded: bool = False

    model_config = ConfigDict(frozen=True)
