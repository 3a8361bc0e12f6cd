from datetime import datetime, timezone

from audience_commons.model.filter_model import Predicate, PredicateOp
from audience_commons.repositories.customer_store import InMemoryCustomerStore
from audience_commons.utils.audience_filter_compiler import AudienceFilterCompiler

UTC = timezone.utc


def test_to_query_shapes():
    assert Predicate(op=PredicateOp.GT, value=5).to_query() == {"$gt": 5}
    assert Predicate(op=PredicateOp.NE, value="x").to_query() == {"$ne": "x"}
    assert Predicate(op=PredicateOp.EQ, value="x").to_query() == "x"
    assert Predicate(op=PredicateOp.RANGE, value=1, upper=2).to_query() == {"$gte": 1, "$lt": 2}

def test_missing_value_only_matches_not_equals():
    assert Predicate(op=PredicateOp.NE, value=5).matches(None) is True
    assert Predicate(op=PredicateOp.GT, value=5).matches(None) is False
    assert Predicate(op=PredicateOp.EQ, value=5).matches(None) is False

def test_mismatched_types_do_not_match():
    assert Predicate(op=PredicateOp.GT, value=5).matches("10") is False

def test_naive_stored_datetime_is_read_as_utc():
    predicate = Predicate(op=PredicateOp.GTE, value=datetime(2024, 3, 15, tzinfo=UTC))
    assert predicate.matches(datetime(2024, 3, 15, 1, 0)) is True

def test_in_memory_store_counts_per_collection():
    combined = AudienceFilterCompiler().compile([{"field": "visits", "operator": ">=", "value": "3", "condition": "AND"}])
    store = InMemoryCustomerStore()
    store.add("customers", {"visits": 3})
    store.add("customers", {"visits": 1})
    store.add("leads", {"visits": 9})

    assert store.count_matching("customers", combined) == 1
    assert store.count_matching("leads", combined) == 1
    assert store.count_matching("unknown", combined) == 0

def test_missing_value_equals_null():
    assert Predicate(op=PredicateOp.EQ, value=None).matches(None) is True
    assert Predicate(op=PredicateOp.NE, value=None).matches(None) is False
    assert Predicate(op=PredicateOp.NE, value=None).matches("x") is True
