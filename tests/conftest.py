"""Shared pytest fixtures for shopbot tests."""

import json

import httpx
import pytest
from psycopg import OperationalError

from shopbot.api.client import ApiClient
from shopbot.models.models import Product
from shopbot.stores.storage import LocalStorage


class MemoryDatabase:
    """Stands in for the PostgreSQL key/value table."""

    def __init__(self):
        self.items = {}
        self.fail_reads = False
        self.fail_writes = False

    def get_item(self, user_id, key):
        if self.fail_reads:
            raise OperationalError("connection refused")
        return self.items.get((user_id, key))

    def set_item(self, user_id, key, value):
        if self.fail_writes:
            raise OperationalError("connection refused")
        self.items[(user_id, key)] = value

    def stored(self, user_id, key):
        return json.loads(self.items[(user_id, key)])


@pytest.fixture
def db():
    return MemoryDatabase()


@pytest.fixture
def storage(db):
    return LocalStorage(db, user_id=42)


@pytest.fixture
def make_product():
    def _make(id="p1", name="Mug", price=10.0, category="Home", rating=4.0, stock=5):
        return Product(id=id, name=name, price=price, category=category, rating=rating, stock=stock)
    return _make


class Backend:
    """Routes httpx requests to canned responses and records what was sent."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def on(self, method, path, status=200, json=None):
        self.routes[(method, path)] = (status, json)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path.replace('/api', '', 1))
        if key not in self.routes:
            return httpx.Response(404, json={'message': 'Not found'})
        status, body = self.routes[key]
        if isinstance(body, Exception):
            raise body
        return httpx.Response(status, json=body)

    def sent(self, method, path):
        return [r for r in self.requests if r.method == method and r.url.path.endswith(path)]


@pytest.fixture
def backend():
    return Backend()


@pytest.fixture
def api(backend):
    return ApiClient(base_url='http://backend.test/api', transport=httpx.MockTransport(backend.handler))
