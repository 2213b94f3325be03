# seedgraph/core/cache.py
from __future__ import annotations

import asyncio
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional

from seedgraph.core.hashing import content_hash


class SeedCache:
    """
    Run-scoped map of `<model>:<content hash>` -> persisted identifier.

    A driver owns one instance per seeding run and discards it at the end.
    Resolutions that are still in flight are tracked next to it so identical
    content requested twice at once is written only once.
    """

    def __init__(self, *, id_field: str = "_id") -> None:
        self.id_field = id_field
        self._seeded: Dict[str, Any] = {}
        self._pending: Dict[str, "asyncio.Future[Dict[str, Any]]"] = {}

    def key(self, model_name: str, data: Mapping[str, Any]) -> str:
        return f"{model_name}:{content_hash(data, exclude=(self.id_field,))}"

    def get(self, key: str) -> Optional[Any]:
        return self._seeded.get(key)

    def put(self, key: str, identifier: Any) -> None:
        self._seeded[key] = identifier

    # ---------- in-flight resolutions ---------- #

    def pending(self, key: str) -> Optional["asyncio.Future[Dict[str, Any]]"]:
        return self._pending.get(key)

    def track(self, key: str, fut: "asyncio.Future[Dict[str, Any]]") -> None:
        self._pending[key] = fut
        fut.add_done_callback(lambda _: self._pending.pop(key, None))

    # ---------- lifecycle ---------- #

    def clear(self) -> None:
        self._seeded.clear()
        self._pending.clear()

    def keys(self) -> Iterable[str]:
        return self._seeded.keys()

    def __contains__(self, key: object) -> bool:
        return key in self._seeded

    def __getitem__(self, key: str) -> Any:
        return self._seeded[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._seeded)

    def __len__(self) -> int:
        return len(self._seeded)
