import asyncio
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from career_coach.api.career_service import CareerService
from career_coach.api.main import create_app
from career_coach.api.session_manager import InterviewSessionManager


class FakeTextGenerator:
    """Scripted stand-in for a provider backend."""

    def __init__(self, responses: Optional[List[str]] = None):
        self.responses = list(responses or [])
        self.calls = []
        self.fail_with: Optional[Exception] = None
        self.gate: Optional[asyncio.Event] = None
        self.delay = 0.0
        self._counter = 0

    async def generate(self, prompt, max_tokens, system=None):
        self.calls.append({"prompt": prompt, "max_tokens": max_tokens, "system": system})
        if self.gate is not None:
            await self.gate.wait()
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with
        if self.responses:
            return self.responses.pop(0)
        self._counter += 1
        return f"Generated text {self._counter}"

    @property
    def last_prompt(self) -> str:
        return self.calls[-1]["prompt"]


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def generator():
    return FakeTextGenerator()


@pytest.fixture
def career_generator():
    return FakeTextGenerator()


@pytest.fixture
def manager(generator):
    return InterviewSessionManager(generator=generator, timeout=5, idle_ttl_seconds=0)


@pytest.fixture
def career_service(generator, career_generator):
    return CareerService(
        suggestion_generator=generator,
        career_generator=career_generator,
        timeout=5,
    )


@pytest.fixture
def client(manager, career_service):
    app = create_app(session_manager=manager, career_service=career_service)
    return TestClient(app)
