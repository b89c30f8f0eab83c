from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Callable
from typing import Any

import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment variables before importing app
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["RATE_LIMIT_AI"] = "1000/minute"
os.environ.pop("OPENAI_API_KEY", None)

from prompthub.database.database import create_engine_for
from prompthub.llm_services.llm_service import LlmService
from prompthub.main import create_app
from prompthub.services.prompt_ai_service import PromptAiService
from prompthub.storage.memory_storage import MemStorage
from prompthub.storage.seed_data import seed_categories, seed_prompts
from prompthub.storage.sql_storage import SqlStorage
from prompthub.storage.storage import Storage

TEST_SECRET = "test-secret-key"


class FakeLlmService(LlmService):
    """Returns a canned reply (or raises) and records what it was asked."""

    def __init__(self) -> None:
        self.reply: str = "{}"
        self.error: Exception | None = None
        self.calls: list[tuple[str, list[dict[str, Any]]]] = []

    async def generate_json(self, system_prompt: str, messages: list[dict[str, Any]]) -> str:
        self.calls.append((system_prompt, messages))
        if self.error is not None:
            raise self.error
        return self.reply


async def make_sql_storage() -> SqlStorage:
    storage = SqlStorage(create_engine_for("sqlite+aiosqlite:///:memory:"), retry_attempts=1)
    await storage.create_schema()
    await storage.load_seed(seed_categories(), seed_prompts())
    return storage


@pytest.fixture
def storage() -> MemStorage:
    return MemStorage()


@pytest_asyncio.fixture
async def sql_storage() -> AsyncGenerator[SqlStorage, None]:
    storage = await make_sql_storage()
    yield storage
    await storage.dispose()


@pytest_asyncio.fixture(params=["memory", "sql"])
async def any_storage(request: pytest.FixtureRequest) -> AsyncGenerator[Storage, None]:
    """Runs a test once per storage realization."""
    if request.param == "memory":
        yield MemStorage()
        return
    storage = await make_sql_storage()
    yield storage
    await storage.dispose()


@pytest.fixture
def fake_llm() -> FakeLlmService:
    return FakeLlmService()


@pytest_asyncio.fixture
async def async_client(storage: MemStorage, fake_llm: FakeLlmService) -> AsyncGenerator[AsyncClient, None]:
    app = create_app(storage=storage, ai_service=PromptAiService(fake_llm))
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def auth_headers() -> Callable[[str], dict[str, str]]:
    def _headers(user_id: str) -> dict[str, str]:
        token = jwt.encode({"sub": user_id}, TEST_SECRET, algorithm="HS256")
        return {"Authorization": f"Bearer {token}"}

    return _headers
