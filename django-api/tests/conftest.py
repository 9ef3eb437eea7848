"""Pytest configuration and shared fixtures."""

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from event_engine.services.event_operations import EventOperationService
from event_engine.services.mission_service import MissionService
from tests.memory_store import InMemoryEventStore


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def operator_client(api_client: APIClient) -> APIClient:
    """Client for an operator already verified by the identity layer."""
    api_client.force_authenticate(user=get_user_model()(username="operator"))
    return api_client


@pytest.fixture
def store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def operations(store: InMemoryEventStore) -> EventOperationService:
    return EventOperationService(store, retry_backoff=0)


@pytest.fixture
def missions(store: InMemoryEventStore) -> MissionService:
    return MissionService(store, retry_backoff=0)
