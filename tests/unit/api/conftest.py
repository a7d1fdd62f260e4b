"""Shared fixtures for API route tests.

Every test gets a fresh in-memory store installed behind the bootstrap
singletons, and a client built from the real application factory.
"""

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.main import create_app
from src.bootstrap.case_store import reset_case_engine, set_case_store
from src.infrastructure.stubs.case_store_stub import InMemoryCaseStore


@pytest.fixture
def api_store() -> Iterator[InMemoryCaseStore]:
    store = InMemoryCaseStore()
    set_case_store(store)
    yield store
    reset_case_engine()


@pytest.fixture
def app(api_store: InMemoryCaseStore) -> FastAPI:
    return create_app()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
