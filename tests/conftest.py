import os

# Must be set before the service settings are imported
os.environ["SIMULATE_LATENCY"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient

from app.main import app, get_order_repository


class FakeOrderRepository:
    """Stands in for the Mongo-backed repository; keeps records in a list."""

    def __init__(self):
        self.records = []
        self.fail_with = None

    async def put(self, order):
        if self.fail_with:
            raise self.fail_with
        self.records.append(order.model_dump(by_alias=True))

    async def ping(self):
        if self.fail_with:
            raise self.fail_with
        return True


@pytest.fixture
def repository():
    return FakeOrderRepository()


@pytest.fixture
def client(repository):
    app.dependency_overrides[get_order_repository] = lambda: repository
    yield TestClient(app)
    app.dependency_overrides.clear()
