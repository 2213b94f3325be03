from datetime import datetime
from decimal import Decimal

from bson import ObjectId

from seedgraph.core.cache import SeedCache
from seedgraph.core.hashing import content_hash


class TestContentHash:

    def test_key_order_does_not_matter(self):
        assert content_hash({"a": 1, "b": {"c": 2, "d": 3}}) == content_hash({"b": {"d": 3, "c": 2}, "a": 1})

    def test_different_content_differs(self):
        assert content_hash({"first": "Ana"}) != content_hash({"first": "Ann"})

    def test_excluded_fields_are_ignored(self):
        oid = ObjectId()
        assert content_hash({"_id": oid, "first": "Ana"}, exclude=("_id",)) == content_hash({"first": "Ana"})

    def test_bson_and_datetime_values(self):
        oid = ObjectId()
        when = datetime(2024, 1, 1)
        h = content_hash({"ref": oid, "at": when, "tags": {"b", "a"}})
        assert h == content_hash({"tags": {"a", "b"}, "at": when, "ref": ObjectId(str(oid))})


    def test_value_types_are_part_of_the_hash(self):
        oid = ObjectId()
        when = datetime(2020, 1, 1)
        assert content_hash({"ref": oid}) != content_hash({"ref": str(oid)})
        assert content_hash({"at": when}) != content_hash({"at": when.isoformat()})
        assert content_hash({"n": Decimal("1")}) != content_hash({"n": "1"})
        assert content_hash({"tags": {"a"}}) != content_hash({"tags": ["a"]})

    def test_nan_differs_from_none(self):
        assert content_hash({"x": float("nan")}) != content_hash({"x": None})
        assert content_hash({"x": [float("inf")]}) != content_hash({"x": [None]})
        assert content_hash({"x": float("nan")}) == content_hash({"x": float("nan")})


class TestSeedCache:

    def test_keys_are_model_qualified(self):
        cache = SeedCache()
        assert cache.key("Simple", {"first": "X"}) != cache.key("OtherRef", {"first": "X"})
        assert cache.key("Simple", {"first": "X"}).startswith("Simple:")

    def test_put_get_clear(self):
        cache = SeedCache()
        key = cache.key("Simple", {"first": "X"})
        cache.put(key, "id-1")
        assert key in cache
        assert cache[key] == "id-1"
        assert len(cache) == 1

        cache.clear()
        assert cache.get(key) is None
        assert len(cache) == 0
