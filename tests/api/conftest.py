"""Pytest fixtures for API testing."""

import httpx
import pytest
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI
from fastapi.testclient import TestClient

from agent_squad.api.v1 import turns, conversations, personas
from agent_squad.api import websocket
from agent_squad.llm import LLMGateway
from agent_squad.services import BackgroundTaskRunner, Coordinator


def build_test_app(store, coordinator) -> FastAPI:
    """Create a test app without lifespan, with dependencies injected."""
    turns.coordinator = coordinator
    conversations.store = store
    websocket.store = store

    test_app = FastAPI(title="Agent Squad Test")
    test_app.include_router(turns.router)
    test_app.include_router(conversations.router)
    test_app.include_router(personas.router)
    test_app.include_router(websocket.router)
    return test_app


@pytest.fixture
def app(store, coordinator):
    """Test app wired to the shared store and coordinator fixtures."""
    return build_test_app(store, coordinator)


@pytest.fixture
async def client(app):
    """Create async HTTP client for the test app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def ws_client(store, completions):
    """Synchronous test client for WebSocket tests, with its own coordinator."""
    gateway = LLMGateway(
        api_key="sk-test",
        client=httpx.AsyncClient(transport=httpx.MockTransport(completions.handler))
    )
    coordinator = Coordinator(store=store, gateway=gateway, runner=BackgroundTaskRunner(), build_turn_delay=0)
    with TestClient(build_test_app(store, coordinator)) as client:
        yield client
