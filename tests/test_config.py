import logging

from seedgraph.config import Settings, _as_bool
from seedgraph.infra.logging import setup_logging


class TestSettings:

    def test_as_bool(self):
        assert _as_bool("yes") is True
        assert _as_bool(" ON ") is True
        assert _as_bool("0") is False
        assert _as_bool(None, default=True) is True

    def test_explicit_values(self):
        cfg = Settings(mongo_db="seed_test", seed_env="test", seed_active=False)
        assert cfg.mongo_db == "seed_test"
        assert cfg.seed_env == "test"
        assert cfg.seed_active is False


class TestLogging:

    def test_setup_logging_levels(self):
        setup_logging("seed-tests", level="debug")
        assert logging.getLogger("seedgraph").level == logging.DEBUG
        assert logging.getLogger("pymongo").level == logging.WARNING
