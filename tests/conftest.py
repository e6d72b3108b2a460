"""Shared fixtures: an app wired to an in-memory Mongo per test."""
import asyncio

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from habitquest.db.mongo import Stores
from habitquest.main import create_app


def run(coro):
    """Drive a coroutine from a sync test."""
    return asyncio.run(coro)


@pytest.fixture
def stores() -> Stores:
    profiles = AsyncMongoMockClient()
    goals = AsyncMongoMockClient()
    return Stores(profiles, goals)


@pytest.fixture
def client(stores: Stores) -> TestClient:
    return TestClient(create_app(stores=stores))


@pytest.fixture
def registered_user(client: TestClient) -> dict:
    response = client.post(
        "/api/users",
        json={"telegramId": 12345, "firstName": "Ann", "username": "ann", "photoUrl": "https://t.me/a.jpg"},
    )
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def seeded_goals(client: TestClient) -> list:
    goals = [
        {"id": 1, "title": "Morning run", "points": 10, "status": "not_started", "description": "5 km"},
        {"id": 2, "title": "Read", "points": 5, "status": "not_started", "description": "20 pages"},
    ]
    response = client.post("/api/initialize-goals/12345", json={"goalsArray": goals})
    assert response.status_code == 200
    return goals
