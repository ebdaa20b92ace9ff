import os, sys
import threading
from decimal import Decimal

import pytest

# Ensure project root in path
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "singalbucks.settings")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

import django

django.setup()

from django.apps import apps
from django.test.utils import setup_test_environment

setup_test_environment()

from aws_lib.dynamodb_client import ConditionFailed, StoreError
from cafe.session import CafeSession


def _operand(value, item):
    name = getattr(value, "name", None)
    if name is not None:
        return item.get(name)
    return value


def evaluate(condition, item):
    """Evaluate the subset of boto3 condition expressions the app uses."""
    expr = condition.get_expression()
    operator, values = expr["operator"], expr["values"]
    if operator == "AND":
        return all(evaluate(v, item) for v in values)
    if operator == "OR":
        return any(evaluate(v, item) for v in values)
    if operator == "attribute_not_exists":
        return values[0].name not in item
    if operator == "attribute_exists":
        return values[0].name in item
    if operator == "=":
        left = _operand(values[0], item)
        return left is not None and left == _operand(values[1], item)
    raise NotImplementedError(operator)


class FakeStore:
    """In-memory stand-in for DynamoDBClient with the same method surface."""

    def __init__(self):
        self.tables = {}
        self.online = True
        self.fail_on = set()
        self.calls = []
        self._lock = threading.Lock()

    def _table(self, name):
        return self.tables.setdefault(name, {})

    def _check(self, action, table):
        self.calls.append((action, table))
        if action in self.fail_on or not self.online:
            raise StoreError(f"{action} failed on {table}: simulated outage")

    @staticmethod
    def _key_of(key):
        return tuple(sorted(key.items()))

    def put(self, table, item, condition=None):
        with self._lock:
            self._check("put", table)
            key_name = "order_id" if "order_id" in item else "counter_name"
            key = self._key_of({key_name: item[key_name]})
            existing = self._table(table).get(key, {})
            if condition is not None and not evaluate(condition, existing):
                raise ConditionFailed(f"put rejected on {table}")
            self._table(table)[key] = dict(item)

    def get(self, table, key):
        with self._lock:
            self._check("get", table)
            return dict(self._table(table).get(self._key_of(key), {}))

    def scan(self, table):
        with self._lock:
            self._check("scan", table)
            return [dict(i) for i in self._table(table).values()]

    def delete(self, table, key):
        with self._lock:
            self._check("delete", table)
            self._table(table).pop(self._key_of(key), None)

    def increment(self, table, key, attribute="value", amount=1):
        with self._lock:
            self._check("increment", table)
            item = self._table(table).setdefault(self._key_of(key), dict(key))
            item[attribute] = item.get(attribute, 0) + amount
            return item[attribute]

    def set_attribute(self, table, key, attribute, value, condition=None):
        with self._lock:
            self._check("update", table)
            item = self._table(table).setdefault(self._key_of(key), dict(key))
            if condition is not None and not evaluate(condition, item):
                raise ConditionFailed(f"update rejected on {table}")
            item[attribute] = value
            return dict(item)

    def ping(self, table):
        return self.online


@pytest.fixture()
def store():
    return FakeStore()


@pytest.fixture()
def cafe_session(store):
    session = CafeSession(store, orders_table="Orders", counters_table="Counters", poll_interval=0.01)
    yield session
    session.close()


@pytest.fixture()
def installed_session(cafe_session, monkeypatch):
    """Swap the app's session for one backed by FakeStore."""
    monkeypatch.setattr(apps.get_app_config("cafe"), "session", cafe_session)
    return cafe_session


@pytest.fixture()
def client(installed_session):
    from django.test import Client

    return Client()


def order_item(number, items=None, made=False, served=False, timestamp=1700000000000):
    return {
        "order_id": str(number),
        "order_number": Decimal(number),
        "items": items or {"아아": Decimal(1)},
        "total_amount": Decimal(3000),
        "timestamp": Decimal(timestamp),
        "is_made": made,
        "is_served": served,
    }


@pytest.fixture()
def make_item():
    return order_item
