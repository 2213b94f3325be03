# seedgraph/core/hashing.py
from __future__ import annotations

import hashlib
import math
from datetime import date, datetime, time
from typing import Any, Iterable, Mapping

import orjson

_OPTS = orjson.OPT_SORT_KEYS | orjson.OPT_NON_STR_KEYS | orjson.OPT_PASSTHROUGH_DATETIME


def _tagged(value: Any, v: Any) -> dict:
    return {"$t": type(value).__name__, "v": v}


def _canonical(value: Any) -> Any:
    # orjson writes NaN/inf as null and never hands floats to `default`
    if isinstance(value, float) and not math.isfinite(value):
        return _tagged(value, repr(value))
    if isinstance(value, Mapping):
        return {k: _canonical(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_canonical(v) for v in value]
    return value


def _default(value: Any) -> Any:
    # type-tagged so ObjectId(h) never hashes like the string h
    if isinstance(value, (set, frozenset)):
        return _tagged(value, sorted((_canonical(v) for v in value), key=repr))
    if isinstance(value, (datetime, date, time)):
        return _tagged(value, value.isoformat())
    # ObjectId, Decimal128, Decimal, ...
    return _tagged(value, str(value))


def canonical_bytes(data: Mapping[str, Any], *, exclude: Iterable[str] = ()) -> bytes:
    skip = set(exclude)
    payload = {k: _canonical(v) for k, v in data.items() if k not in skip}
    return orjson.dumps(payload, default=_default, option=_OPTS)


def content_hash(data: Mapping[str, Any], *, exclude: Iterable[str] = ()) -> str:
    """Deterministic sha1 over a record's fields and value types; key order never matters."""
    return hashlib.sha1(canonical_bytes(data, exclude=exclude)).hexdigest()
