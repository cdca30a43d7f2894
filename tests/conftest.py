"""
Pytest fixtures for gadget inventory tests.

Every test gets its own SQLite file so state never leaks between tests.
"""

import os

# Settings are cached on first use; pin test values before gadgetops is imported
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./gadgetops-test.db"

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from gadgetops.config import Settings
from gadgetops.database import Database
from gadgetops.kernel.identity.jwt import TokenService
from gadgetops.kernel.identity.password import hash_password
from gadgetops.kernel.models.gadget import Gadget, GadgetStatus
from gadgetops.kernel.models.user import User, UserRole
from gadgetops.main import create_app


TEST_SECRET = "test-secret-key-for-testing-only"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway database file."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'gadgets.db'}",
        secret_key=TEST_SECRET,
        bcrypt_rounds=4,
    )


@pytest_asyncio.fixture
async def database(test_settings: Settings) -> AsyncGenerator[Database, None]:
    """A Database with tables created."""
    db = Database(test_settings.database_url)
    await db.create_all()
    yield db
    await db.drop_all()
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """A session for direct service/repository tests."""
    async with database.session_maker() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(test_settings: Settings, database: Database) -> AsyncGenerator[AsyncClient, None]:
    """In-process HTTP client sharing the test database."""
    app = create_app(test_settings)
    app.state.database = database
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(secret_key=TEST_SECRET, algorithm="HS256", expire_minutes=60)


async def _make_user(session: AsyncSession, username: str, role: UserRole) -> User:
    user = User(username=username, password_hash=hash_password("Secret123"), role=role)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await _make_user(db_session, "bond", UserRole.ADMIN)


@pytest_asyncio.fixture
async def basic_user(db_session: AsyncSession) -> User:
    return await _make_user(db_session, "q-intern", UserRole.BASIC)


@pytest.fixture
def admin_headers(admin_user: User, token_service: TokenService) -> dict:
    return {"token": token_service.issue(admin_user.id)}


@pytest.fixture
def basic_headers(basic_user: User, token_service: TokenService) -> dict:
    return {"token": token_service.issue(basic_user.id)}


@pytest_asyncio.fixture
async def sample_gadgets(db_session: AsyncSession) -> list[Gadget]:
    """A small fixed inventory covering every status."""
    gadgets = [
        Gadget(name="Silent Falcon", success_probability=50, status=GadgetStatus.AVAILABLE),
        Gadget(name="Crimson Viper", success_probability=87, status=GadgetStatus.AVAILABLE),
        Gadget(name="Frozen Falcon", success_probability=12, status=GadgetStatus.DECOMMISSIONED),
        Gadget(name="Iron Lantern", success_probability=50, status=GadgetStatus.DESTROYED),
    ]
    db_session.add_all(gadgets)
    await db_session.commit()
    for gadget in gadgets:
        await db_session.refresh(gadget)
    return gadgets
