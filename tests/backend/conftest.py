import os
import random
import uuid
from typing import Any

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from chatrelay.core import db as db_module
from chatrelay.core.security import hash_password
from chatrelay.main import app
from chatrelay.api.v1.deps import get_relay
from chatrelay.models.user import User, UserRole
from chatrelay.services.generation_base import GenerationReply, GenerationService
from chatrelay.services.identity_store import IdentityStore
from chatrelay.services.message_log import MessageLog
from chatrelay.services.relay import ConversationRelay
from chatrelay.services.responder_selector import ResponderSelector


TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL
db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL


class StubGenerationService(GenerationService):
    """
    Generation backend that answers every prompt with a fixed reply and
    records what it was asked.
    """

    def __init__(self, reply: str | None = "pong", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[tuple[Any, str]] = []

    @property
    def name(self) -> str:
        return "stub"

    @property
    def missing_reply_text(self) -> str:
        return "AI Error"

    async def complete(self, agent_profile, input_text):
        self.calls.append((agent_profile, input_text))
        if self.error is not None:
            raise self.error
        return GenerationReply(text=self.reply)


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest_asyncio.fixture
async def db():
    """Fresh database without the HTTP layer."""
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def stub_generator():
    return StubGenerationService()


@pytest_asyncio.fixture
async def client(stub_generator):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB
    and the relay wired to the stub generation backend.
    """
    await _init_test_db()

    def _relay_override():
        return ConversationRelay(
            identity=IdentityStore(),
            messages=MessageLog(),
            selector=ResponderSelector(random.Random(1234)),
            generator=stub_generator,
        )

    app.dependency_overrides[get_relay] = _relay_override
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    app.dependency_overrides.pop(get_relay, None)
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def create_user():
    """
    Factory fixture to create users directly via ORM.
    """

    async def _create_user(
        role: UserRole = UserRole.HUMAN,
        password: str = "UserPass!23",
        profile: Any = None,
        session_token: str | None = None,
    ) -> tuple[User, str]:
        user = await User.create(
            username=f"{role.value}_{uuid.uuid4().hex[:6]}",
            password_hash=hash_password(password),
            role=role,
            agent_profile=profile,
            session_token=session_token,
        )
        return user, password

    return _create_user


@pytest_asyncio.fixture
async def auth_header_factory(client):
    """
    Helper fixture to obtain Authorization headers via the login endpoint.
    """

    async def _get_headers(username: str, password: str) -> dict[str, str]:
        resp = await client.post(
            "/api/v1/auth/login",
            json={"username": username, "password": password},
        )
        assert resp.status_code == 200, resp.text
        token = resp.json()["data"]["sessionToken"]
        return {"Authorization": f"Bearer {token}"}

    return _get_headers


@pytest_asyncio.fixture
async def make_generator():
    """Factory for stub generation backends with a chosen reply or error."""

    def _make(reply: str | None = "pong", error: Exception | None = None) -> StubGenerationService:
        return StubGenerationService(reply=reply, error=error)

    return _make
