from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient
from pymongo.errors import ServerSelectionTimeoutError

from customer_manager.app.main import create_app
from customer_manager.app.services.customer_service import CustomerService


class ScriptedReader:
    """Console reader that answers prompts from a fixed list of lines."""

    def __init__(self, *lines):
        self.lines = list(lines)
        self.prompts = []

    async def read(self, prompt):
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


@pytest.fixture()
def collection():
    return AsyncMongoMockClient()["crm_test"]["customers"]


@pytest.fixture()
def service(collection):
    return CustomerService(collection)


@pytest.fixture()
def broken_service():
    """A service whose collection fails every call like an unreachable server."""
    error = ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")
    collection = MagicMock()
    collection.insert_one = AsyncMock(side_effect=error)
    collection.find.return_value.to_list = AsyncMock(side_effect=error)
    collection.find_one = AsyncMock(side_effect=error)
    collection.find_one_and_update = AsyncMock(side_effect=error)
    collection.find_one_and_delete = AsyncMock(side_effect=error)
    return CustomerService(collection)


@pytest.fixture()
def client(service):
    return TestClient(create_app(service))


@pytest.fixture()
def broken_client(broken_service):
    return TestClient(create_app(broken_service))
