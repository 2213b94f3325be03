# seedgraph/core/schema_graph.py
"""
Reference graph over registered models.

Every field of every model is classified as one of:
  - parent ref       single ObjectId pointing at another model
  - child ref        array of ObjectIds pointing at another model
  - self parent ref  single ObjectId pointing at the same model
  - self child ref   array of ObjectIds pointing at the same model
or as a plain field. References to models that are not registered are dropped.

Each node is scored `1000 - <number of refs>` and the graph is returned sorted
by descending score, so models with fewer references are seeded first. This is
a priority heuristic, not a topological sort; nested data is resolved
recursively by the seed engine regardless of order.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Set, Union

from seedgraph.models.graph import BASE_SCORE, GraphNode, ReferenceEdge
from seedgraph.models.registry import OBJECT_ID, FieldDescriptor, ModelDescriptor, ModelRegistry


def _single_target(f: FieldDescriptor, model_names: Set[str]) -> str | None:
    # single refs require a non-array ObjectId instance
    if f.instance != OBJECT_ID:
        return None
    return f.ref if f.ref in model_names else None


def _array_target(f: FieldDescriptor, model_names: Set[str]) -> str | None:
    if f.item_instance != OBJECT_ID:
        return None
    ref = f.ref or f.item_ref
    return ref if ref in model_names else None


def parent_refs(model: ModelDescriptor, model_names: Set[str]) -> List[ReferenceEdge]:
    refs: List[ReferenceEdge] = []
    for f in model.fields:
        target = _single_target(f, model_names)
        if target and target != model.name:
            refs.append(ReferenceEdge(path=f.path, model_name=target))
    return refs


def child_refs(model: ModelDescriptor, model_names: Set[str]) -> List[ReferenceEdge]:
    refs: List[ReferenceEdge] = []
    for f in model.fields:
        target = _array_target(f, model_names)
        if target and target != model.name:
            refs.append(ReferenceEdge(path=f.path, model_name=target))
    return refs


def self_parent_refs(model: ModelDescriptor, model_names: Set[str]) -> List[str]:
    return [f.path for f in model.fields if _single_target(f, model_names) == model.name]


def self_child_refs(model: ModelDescriptor, model_names: Set[str]) -> List[str]:
    return [f.path for f in model.fields if _array_target(f, model_names) == model.name]


def score(node: GraphNode) -> int:
    return BASE_SCORE - node.reference_count


def build_graph(models: Union[ModelRegistry, Iterable[ModelDescriptor]]) -> List[GraphNode]:
    """
    Build one GraphNode per model, highest score first. Nothing is cached:
    call again whenever registrations change.
    """
    # ensure unique model names, last registration wins
    by_name: Dict[str, ModelDescriptor] = {m.name: m for m in models}
    model_names = set(by_name)

    graph: List[GraphNode] = []
    for name, model in by_name.items():
        node = GraphNode(
            model_name=name,
            parent_refs=parent_refs(model, model_names),
            child_refs=child_refs(model, model_names),
            self_parent_refs=self_parent_refs(model, model_names),
            self_child_refs=self_child_refs(model, model_names),
        )
        node.score = score(node)
        graph.append(node)

    return sorted(graph, key=lambda n: n.score, reverse=True)


def graph_index(graph: Iterable[GraphNode]) -> Dict[str, GraphNode]:
    return {node.model_name: node for node in graph}
