from datetime import datetime, timezone
from decimal import Decimal

import pytest
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from audience_commons.repositories.customer_repository import CustomerRepository
from audience_commons.utils.audience_filter_compiler import AudienceFilterCompiler


class DummyTable:
    def __init__(self, name, pages=None, error=None):
        self.name = name
        self.pages = list(pages or [{"Count": 0}])
        self.error = error
        self.scans = []
        self.items = []

    def scan(self, **kwargs):
        self.scans.append(dict(kwargs))
        if self.error:
            raise self.error
        return self.pages.pop(0)

    def put_item(self, Item):
        self.items.append(Item)


class DummyResource:
    def __init__(self, **tables):
        self.tables = tables

    def Table(self, name):
        return self.tables.setdefault(name, DummyTable(name))


@pytest.fixture
def combined_filter():
    return AudienceFilterCompiler().compile([
        {"field": "visits", "operator": ">", "value": 5, "condition": "AND"},
        {"field": "total_spends", "operator": ">=", "value": 100, "condition": "AND"},
    ])


def test_table_name_from_env(monkeypatch):
    monkeypatch.setenv("DYNAMODB_TABLE_CUSTOMERS", "customers-test")
    repo = CustomerRepository(DummyResource())
    assert repo.table_name == "customers-test"
    assert repo.table.name == "customers-test"

def test_count_single_page(monkeypatch, combined_filter):
    monkeypatch.delenv("DYNAMODB_TABLE_CUSTOMERS", raising=False)
    table = DummyTable("customers", pages=[{"Count": 42, "ScannedCount": 100}])
    repo = CustomerRepository(DummyResource(customers=table))

    assert repo.count_matching("customers", combined_filter) == 42
    assert table.scans == [{
        "Select": "COUNT",
        "FilterExpression": Attr("visits").gt(5) & Attr("total_spends").gte(Decimal("100.0")),
    }]

def test_count_follows_pagination(monkeypatch, combined_filter):
    monkeypatch.delenv("DYNAMODB_TABLE_CUSTOMERS", raising=False)
    table = DummyTable("customers", pages=[
        {"Count": 10, "LastEvaluatedKey": {"customer_id": "c-10"}},
        {"Count": 7, "LastEvaluatedKey": {"customer_id": "c-20"}},
        {"Count": 3},
    ])
    repo = CustomerRepository(DummyResource(customers=table))

    assert repo.count_matching("customers", combined_filter) == 20
    assert len(table.scans) == 3
    assert "ExclusiveStartKey" not in table.scans[0]
    assert table.scans[1]["ExclusiveStartKey"] == {"customer_id": "c-10"}
    assert table.scans[2]["ExclusiveStartKey"] == {"customer_id": "c-20"}

def test_other_collection_uses_its_own_table(monkeypatch, combined_filter):
    monkeypatch.delenv("DYNAMODB_TABLE_CUSTOMERS", raising=False)
    leads = DummyTable("leads", pages=[{"Count": 4}])
    repo = CustomerRepository(DummyResource(leads=leads))
    assert repo.count_matching("leads", combined_filter) == 4
    assert len(leads.scans) == 1

def test_client_error_is_raised(monkeypatch, combined_filter):
    monkeypatch.delenv("DYNAMODB_TABLE_CUSTOMERS", raising=False)
    error = ClientError({"Error": {"Code": "ResourceNotFoundException", "Message": "no table"}}, "Scan")
    repo = CustomerRepository(DummyResource(customers=DummyTable("customers", error=error)))
    with pytest.raises(ClientError):
        repo.count_matching("customers", combined_filter)

def test_add_customer_converts_values(monkeypatch):
    monkeypatch.delenv("DYNAMODB_TABLE_CUSTOMERS", raising=False)
    repo = CustomerRepository(DummyResource())
    repo.add_customer({
        "customer_id": "c-1",
        "visits": 3,
        "total_spends": 19.99,
        "last_visit": datetime(2024, 3, 15, 10, tzinfo=timezone.utc),
    })
    assert repo.table.items == [{
        "customer_id": "c-1",
        "visits": 3,
        "total_spends": Decimal("19.99"),
        "last_visit": "2024-03-15T10:00:00.000Z",
    }]
