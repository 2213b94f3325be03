# seedgraph/seeds/bootstrap.py
from __future__ import annotations

import inspect
import logging
from typing import Any, Dict, List, Mapping, Optional

from seedgraph.config import Settings, settings as default_settings
from seedgraph.core.cache import SeedCache
from seedgraph.core.schema_graph import build_graph
from seedgraph.core.seed_engine import SeedEngine, normalize_many
from seedgraph.dal.seed_store import MotorSeedStore, SeedStore
from seedgraph.db.mongodb import get_db
from seedgraph.errors import SeedRunError
from seedgraph.models.registry import ModelRegistry
from seedgraph.seeds.loader import load_seeds

log = logging.getLogger("seedgraph.seeds")


async def fetch_seed_data(model_name: str, source: Any, logger: Optional[logging.Logger] = None) -> List[Any]:
    """
    Evaluate a seed source. A failing source is logged and treated as empty so
    the rest of the run can proceed.
    """
    try:
        data = source() if callable(source) else source
        if inspect.isawaitable(data):
            data = await data
    except Exception:
        (logger or log).exception("seed data for %s could not be produced; skipped", model_name)
        return []
    return normalize_many(data)


async def run_seeds(
    registry: ModelRegistry,
    store: SeedStore,
    seeds: Mapping[str, Any],
    *,
    cache: Optional[SeedCache] = None,
    logger: Optional[logging.Logger] = None,
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Seed every model that has data, highest graph score first.
    Stops at the first failure; records written before it stay written.
    """
    logger = logger or log
    graph = build_graph(registry)
    cache = cache if cache is not None else SeedCache()
    engine = SeedEngine(registry, store, cache=cache)

    for name in seeds:
        if name not in registry:
            logger.warning("seed data for unregistered model %s ignored", name)

    results: Dict[str, List[Dict[str, Any]]] = {}
    try:
        for node in graph:
            source = seeds.get(node.model_name)
            if source is None:
                continue
            data = await fetch_seed_data(node.model_name, source, logger)
            if not data:
                continue
            try:
                results[node.model_name] = await engine.many(node.model_name, data)
            except Exception as e:
                raise SeedRunError(node.model_name, e) from e
            logger.info("seeded %s: %d record(s)", node.model_name, len(results[node.model_name]))
    finally:
        # hashes from one run must never leak into the next
        cache.clear()
    return results


async def seed_database(
    registry: ModelRegistry,
    cfg: Optional[Settings] = None,
    *,
    store: Optional[SeedStore] = None,
    cwd: Optional[str] = None,
) -> Dict[str, List[Dict[str, Any]]]:
    cfg = cfg or default_settings
    if not cfg.seed_active:
        log.info("seeding disabled (SEED_ACTIVE=false)")
        return {}

    log.info("start seeding %s data", cfg.seed_env)
    seeds = load_seeds(cfg.seed_path, cfg.seed_env, suffix=cfg.seed_suffix, cwd=cwd)
    store = store or MotorSeedStore(get_db(cfg), registry)
    results = await run_seeds(registry, store, seeds)
    log.info(
        "finish seeding %s data: models=%d records=%d",
        cfg.seed_env, len(results), sum(len(v) for v in results.values()),
    )
    return results
