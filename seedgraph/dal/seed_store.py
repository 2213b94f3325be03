# seedgraph/dal/seed_store.py
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Protocol

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ReturnDocument

from seedgraph.models.registry import ModelRegistry

log = logging.getLogger("seedgraph.dal")


class SeedStore(Protocol):
    """What the seed engine needs from a document store."""

    async def find_one(self, model_name: str, criteria: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        ...

    async def upsert(self, model_name: str, criteria: Mapping[str, Any], data: Mapping[str, Any]) -> Dict[str, Any]:
        ...

    async def update(self, model_name: str, identifier: Any, fields: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        ...


class MotorSeedStore:
    """
    SeedStore over motor collections, one collection per registered model.
    pymongo errors (duplicate keys, connectivity) are not caught here.
    """

    def __init__(self, db: AsyncIOMotorDatabase, registry: ModelRegistry) -> None:
        self._db = db
        self._registry = registry

    def collection(self, model_name: str) -> AsyncIOMotorCollection:
        return self._db[self._registry.collection(model_name)]

    async def find_one(self, model_name: str, criteria: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        return await self.collection(model_name).find_one(dict(criteria))

    async def upsert(self, model_name: str, criteria: Mapping[str, Any], data: Mapping[str, Any]) -> Dict[str, Any]:
        doc = await self.collection(model_name).find_one_and_update(
            dict(criteria),
            {"$setOnInsert": dict(data)},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        log.debug("upserted %s _id=%s", model_name, doc.get("_id") if doc else None)
        return doc

    async def update(self, model_name: str, identifier: Any, fields: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        return await self.collection(model_name).find_one_and_update(
            {"_id": identifier},
            {"$set": dict(fields)},
            return_document=ReturnDocument.AFTER,
        )
