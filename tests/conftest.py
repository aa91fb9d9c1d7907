"""Shared pytest fixtures."""

import json
from typing import Callable, Dict, List, Optional

import httpx
import pytest

from agent_squad.db import DatabaseConnection
from agent_squad.llm import LLMGateway
from agent_squad.services import BackgroundTaskRunner, ChangeFeed, ConversationStore, Coordinator


class FakeCompletions:
    """
    Stand-in for the chat completion endpoint, served through httpx.MockTransport.

    Replies are ``"<persona first word>: <user prompt>"`` unless a reply or a
    failure is registered for the persona whose instructions start with the
    given name.
    """

    def __init__(self):
        self.requests: List[Dict] = []
        self.replies: Dict[str, str] = {}
        self.failures: Dict[str, int] = {}

    def reply(self, persona: str, text: str) -> None:
        self.replies[persona] = text

    def fail(self, persona: str, status_code: int = 500) -> None:
        self.failures[persona] = status_code

    def _persona(self, system_prompt: str) -> str:
        # "You are Alex, a skilled ..." -> "Alex"
        return system_prompt.split(" ")[2].rstrip(",")

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        system_prompt = body["messages"][0]["content"]
        user_prompt = body["messages"][1]["content"]
        persona = self._persona(system_prompt)

        if persona in self.failures:
            return httpx.Response(self.failures[persona], json={"error": {"message": "upstream down"}})

        content = self.replies.get(persona, f"{persona}: {user_prompt}")
        return httpx.Response(200, json={
            "choices": [{"message": {"role": "assistant", "content": content}}]
        })

    def prompts_for(self, persona: str) -> List[str]:
        return [
            r["messages"][1]["content"]
            for r in self.requests
            if self._persona(r["messages"][0]["content"]) == persona
        ]


@pytest.fixture
def db_conn(tmp_path):
    """Provide a fresh database connection."""
    db = DatabaseConnection(str(tmp_path / "test.db"))
    yield db
    db.close()


@pytest.fixture
def store(db_conn):
    """Provide a ConversationStore over a fresh database."""
    return ConversationStore(db_conn, ChangeFeed())


@pytest.fixture
def completions():
    """Provide the fake chat completion endpoint."""
    return FakeCompletions()


@pytest.fixture
async def gateway(completions):
    """Provide an LLMGateway wired to the fake endpoint."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(completions.handler)) as client:
        yield LLMGateway(api_key="sk-test", client=client)


@pytest.fixture
async def runner():
    """Provide a background runner, cancelled after the test."""
    bg = BackgroundTaskRunner()
    yield bg
    await bg.shutdown()


@pytest.fixture
def coordinator(store, gateway, runner):
    """Provide a Coordinator with no delay before the build turn."""
    return Coordinator(store=store, gateway=gateway, runner=runner, build_turn_delay=0)
