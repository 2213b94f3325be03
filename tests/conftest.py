from __future__ import annotations

from typing import Annotated, Any, Dict, List, Mapping, Optional, Tuple

import pytest
from bson import ObjectId
from pydantic import BaseModel, Field

from seedgraph.core.seed_engine import SeedEngine
from seedgraph.models import ModelRegistry, PyObjectId, Ref


class InMemorySeedStore:
    """SeedStore fake: documents per model in insertion order, plus a log of every call."""

    def __init__(self) -> None:
        self.docs: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[Tuple[str, str, Dict[str, Any]]] = []
        self.fail_on: Dict[str, Exception] = {}

    def _match(self, model_name: str, criteria: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        for doc in self.docs.get(model_name, []):
            if all(doc.get(k) == v for k, v in criteria.items()):
                return doc
        return None

    def writes(self, kind: Optional[str] = None, model_name: Optional[str] = None) -> List[Tuple[str, str, Dict[str, Any]]]:
        return [
            c for c in self.calls
            if c[0] != "find_one"
            and (kind is None or c[0] == kind)
            and (model_name is None or c[1] == model_name)
        ]

    async def find_one(self, model_name: str, criteria: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        self.calls.append(("find_one", model_name, dict(criteria)))
        found = self._match(model_name, criteria)
        return dict(found) if found else None

    async def upsert(self, model_name: str, criteria: Mapping[str, Any], data: Mapping[str, Any]) -> Dict[str, Any]:
        self.calls.append(("upsert", model_name, dict(data)))
        if model_name in self.fail_on:
            raise self.fail_on[model_name]
        found = self._match(model_name, criteria)
        if found is None:
            found = {**criteria, **data, "_id": ObjectId()}
            self.docs.setdefault(model_name, []).append(found)
        return dict(found)

    async def update(self, model_name: str, identifier: Any, fields: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        self.calls.append(("update", model_name, dict(fields)))
        for doc in self.docs.get(model_name, []):
            if doc["_id"] == identifier:
                doc.update(fields)
                return dict(doc)
        return None


# ─────────────────────────────────────────────────────────────
# Test models
# ─────────────────────────────────────────────────────────────

class Simple(BaseModel):
    first: Optional[str] = None


class SimpleRef(BaseModel):
    start: Annotated[Optional[PyObjectId], Ref("SimpleRef")] = None
    last: Annotated[Optional[PyObjectId], Ref("SimpleRef")] = None
    first: Optional[str] = None
    kids: List[Annotated[PyObjectId, Ref("SimpleRef")]] = Field(default_factory=list)


class OtherRef(BaseModel):
    start: Annotated[Optional[PyObjectId], Ref("Simple")] = None
    last: Annotated[Optional[PyObjectId], Ref("Simple")] = None
    first: Optional[str] = None
    kids: List[Annotated[PyObjectId, Ref("Simple")]] = Field(default_factory=list)


class User(BaseModel):
    id: Optional[PyObjectId] = Field(None, alias="_id")
    parent: Annotated[Optional[PyObjectId], Ref("User")] = None
    guardian: Annotated[Optional[PyObjectId], Ref("User")] = None
    username: Optional[str] = None
    email: Optional[str] = None
    children: Annotated[List[PyObjectId], Ref("User")] = Field(default_factory=list)
    kids: List[Annotated[PyObjectId, Ref("User")]] = Field(default_factory=list)


@pytest.fixture
def registry() -> ModelRegistry:
    reg = ModelRegistry()
    for model in (Simple, SimpleRef, OtherRef, User):
        reg.register(model)
    return reg


@pytest.fixture
def store() -> InMemorySeedStore:
    return InMemorySeedStore()


@pytest.fixture
def engine(registry: ModelRegistry, store: InMemorySeedStore) -> SeedEngine:
    return SeedEngine(registry, store)
