# seedgraph/models/graph.py
from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

BASE_SCORE = 1000


class ReferenceEdge(BaseModel):
    path: str
    model_name: str


class GraphNode(BaseModel):
    model_name: str
    parent_refs: List[ReferenceEdge] = Field(default_factory=list)
    child_refs: List[ReferenceEdge] = Field(default_factory=list)
    self_parent_refs: List[str] = Field(default_factory=list)
    self_child_refs: List[str] = Field(default_factory=list)
    score: int = BASE_SCORE

    @property
    def reference_count(self) -> int:
        return (
            len(self.parent_refs)
            + len(self.child_refs)
            + len(self.self_parent_refs)
            + len(self.self_child_refs)
        )
