# seedgraph/core/seed_engine.py
"""
Recursive, de-duplicating seeder.

`single()` resolves one nested record:
  1. records that already carry an `_id` are registered in the cache and returned
  2. records whose content was seeded earlier in the run reuse that `_id`
  3. otherwise:
     - parent / self-parent refs are seeded first (concurrently) and replaced by their ids
     - the record itself is found-or-created, matching on its non-array fields
     - child / self-child arrays are seeded afterwards (concurrently) through `many()`
       and stored on the record as a de-duplicated id list
       (only for a record created by this call; an existing match is left untouched)

`many()` seeds a list strictly in order so duplicate siblings collapse onto the
first occurrence.

There is no rollback: if one branch fails, sibling branches still finish and
whatever they wrote stays written.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from seedgraph.core.cache import SeedCache
from seedgraph.core.schema_graph import build_graph, graph_index
from seedgraph.dal.seed_store import SeedStore
from seedgraph.models.graph import GraphNode
from seedgraph.models.registry import ModelRegistry

log = logging.getLogger("seedgraph.engine")

GraphOverride = Union[GraphNode, Mapping[str, Any]]
_ARRAY_TYPES = (list, tuple, set, frozenset)


async def _join(aws: Iterable[Awaitable[Any]]) -> List[Any]:
    """Run awaitables concurrently, wait for all of them, then raise the first failure."""
    results = await asyncio.gather(*aws, return_exceptions=True)
    for r in results:
        if isinstance(r, BaseException):
            raise r
    return list(results)


def normalize_many(data: Any) -> List[Any]:
    if data is None:
        return []
    if isinstance(data, (Mapping, str, bytes)):
        return [data]
    return [d for d in data if d is not None]


class SeedEngine:
    def __init__(
        self,
        registry: ModelRegistry,
        store: SeedStore,
        *,
        cache: Optional[SeedCache] = None,
        id_field: str = "_id",
    ) -> None:
        self.registry = registry
        self.store = store
        self.id_field = id_field
        self.seeded = cache if cache is not None else SeedCache(id_field=id_field)

    # ---------- graph ---------- #

    def graph_for(self, model_name: str, graph: Optional[GraphOverride] = None) -> GraphNode:
        self.registry.descriptor(model_name)  # raises UnknownModelError
        node = graph_index(build_graph(self.registry))[model_name]
        if not graph:
            return node
        if isinstance(graph, GraphNode):
            override = graph.model_dump(exclude_unset=True)
        else:
            override = dict(graph)
        merged = {**node.model_dump(), **override, "model_name": model_name}
        return GraphNode.model_validate(merged)

    # ---------- public API ---------- #

    async def single(
        self,
        model_name: str,
        data: Mapping[str, Any],
        graph: Optional[GraphOverride] = None,
    ) -> Dict[str, Any]:
        node = self.graph_for(model_name, graph)
        key = self.seeded.key(model_name, data)

        identifier = data.get(self.id_field)
        if identifier is not None:
            self.seeded.put(key, identifier)
            return dict(data)

        cached = self.seeded.get(key)
        if cached is not None:
            log.debug("reuse %s %s from cache", model_name, cached)
            return {**data, self.id_field: cached}

        pending = self.seeded.pending(key)
        if pending is not None:
            seeded = await asyncio.shield(pending)
            return {**data, self.id_field: seeded[self.id_field]}

        task = asyncio.ensure_future(self._seed(node, key, data))
        self.seeded.track(key, task)
        return await task

    async def many(
        self,
        model_name: str,
        data: Any,
        graph: Optional[GraphOverride] = None,
    ) -> List[Dict[str, Any]]:
        seeded: List[Dict[str, Any]] = []
        # sequential on purpose: each sibling must see the previous one's cache entry
        for item in normalize_many(data):
            if isinstance(item, Mapping):
                seeded.append(await self.single(model_name, item, graph))
            else:
                # already an identifier
                seeded.append({self.id_field: item})
        return seeded

    # ---------- internals ---------- #

    async def _seed(self, node: GraphNode, key: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        model_name = node.model_name
        record: Dict[str, Any] = dict(data)
        record.pop(self.id_field, None)  # present only as None here

        parents: List[Tuple[str, str]] = [(e.path, e.model_name) for e in node.parent_refs]
        parents += [(path, model_name) for path in node.self_parent_refs]
        parents = [(p, m) for p, m in parents if isinstance(record.get(p), Mapping)]

        if parents:
            resolved = await _join(self.single(m, record[p]) for p, m in parents)
            for (path, _), seeded in zip(parents, resolved):
                record[path] = seeded[self.id_field]

        children: List[Tuple[str, str]] = [(e.path, e.model_name) for e in node.child_refs]
        children += [(path, model_name) for path in node.self_child_refs]
        children = [(p, m) for p, m in children if data.get(p)]
        child_paths = {p for p, _ in children}

        payload = {k: v for k, v in record.items() if k not in child_paths}
        persisted, created = await self._find_or_create(model_name, payload)
        identifier = persisted[self.id_field]

        # an existing match is returned untouched, its child links included
        if children and created:
            seeded_lists = await _join(self.many(m, data[p]) for p, m in children)
            fields = {
                path: list(dict.fromkeys(s[self.id_field] for s in seeded))
                for (path, _), seeded in zip(children, seeded_lists)
            }
            updated = await self.store.update(model_name, identifier, fields)
            persisted = updated if updated is not None else {**persisted, **fields}

        self.seeded.put(key, identifier)
        return persisted

    async def _find_or_create(self, model_name: str, payload: Dict[str, Any]) -> Tuple[Dict[str, Any], bool]:
        # arrays are left out of the match to avoid comparing partially resolved lists
        criteria = {k: v for k, v in payload.items() if not isinstance(v, _ARRAY_TYPES)}
        found = await self.store.find_one(model_name, criteria)
        if found is not None:
            log.debug("found existing %s %s", model_name, found.get(self.id_field))
            return found, False
        created = await self.store.upsert(model_name, criteria, payload)
        log.debug("seeded %s %s", model_name, created.get(self.id_field))
        return created, True
