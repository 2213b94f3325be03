# seedgraph/seeds/loader.py
from __future__ import annotations

import importlib.util
import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

log = logging.getLogger("seedgraph.seeds")

_WORD = re.compile(r"[A-Za-z0-9]+")


def classify(name: str) -> str:
    """`simple_ref` / `simple-ref` / `simpleRef` -> `SimpleRef`."""
    words = _WORD.findall(name)
    return "".join(w[:1].upper() + w[1:] for w in words)


def model_name_for(path: Path, suffix: str) -> str:
    stem = path.stem
    if suffix and stem.endswith(suffix):
        stem = stem[: -len(suffix)]
    return classify(stem)


def _import_module(path: Path) -> Any:
    spec = importlib.util.spec_from_file_location(f"seedgraph_seed_{path.stem}", path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot import seed module {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def load_seeds(
    path: Union[str, Path],
    environment: str,
    *,
    suffix: str = "_seed",
    cwd: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """
    Import every `*<suffix>.py` module under `<cwd>/<path>/<environment>/` and
    map its model name to the module's `data` attribute. `data` may be a
    mapping, a list of mappings, or a zero-arg callable (sync or async)
    returning either; callables are evaluated later, by the runner.
    """
    seeds_dir = Path(cwd or Path.cwd()) / path / environment
    log.debug("seeding %s data from %s", environment, seeds_dir)
    if not seeds_dir.is_dir():
        log.info("no seeds directory at %s", seeds_dir)
        return {}

    seeds: Dict[str, Any] = {}
    for file in sorted(seeds_dir.glob(f"*{suffix}.py")):
        module = _import_module(file)
        if not hasattr(module, "data"):
            log.warning("seed module %s has no `data`; skipped", file.name)
            continue
        seeds[model_name_for(file, suffix)] = module.data
    return seeds
