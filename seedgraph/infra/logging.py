# seedgraph/infra/logging.py
from __future__ import annotations
import logging
from typing import Optional

from seedgraph.config import settings

_LEVELS: dict[str, int] = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def setup_logging(service_name: Optional[str] = None, level: Optional[str] = None) -> None:
    """
    Minimal, consistent structured-ish logging for seeding runs.
    Libraries never call this; drivers and scripts do.
    """
    svc = service_name or settings.service_name
    lvl = _LEVELS.get((level or settings.log_level).upper(), logging.INFO)
    logging.basicConfig(
        level=lvl,
        format=(
            "%(asctime)s | %(levelname)s | %(name)s | "
            f"svc={svc} | %(message)s"
        ),
    )
    # quiet noisy deps if needed
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("motor").setLevel(logging.WARNING)
    logging.getLogger("seedgraph").setLevel(lvl)
