# seedgraph/db/mongodb.py
from __future__ import annotations

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from seedgraph.config import Settings, settings

_client: Optional[AsyncIOMotorClient] = None


def get_client(cfg: Optional[Settings] = None) -> AsyncIOMotorClient:
    """
    Singleton Motor client for seeding runs.
    """
    global _client
    if _client is None:
        _client = AsyncIOMotorClient((cfg or settings).mongo_uri)
    return _client


def get_db(cfg: Optional[Settings] = None) -> AsyncIOMotorDatabase:
    """
    Default database selected by settings.mongo_db.
    """
    cfg = cfg or settings
    return get_client(cfg)[cfg.mongo_db]


async def close_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None
