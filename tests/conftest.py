import os
import sys
import tempfile
from pathlib import Path
from typing import AsyncGenerator, Dict

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

_scratch = Path(tempfile.mkdtemp(prefix="reunion-tests-"))
os.environ.setdefault("TESTING", "true")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_scratch / 'app.db'}")
os.environ.setdefault("UPLOAD_DIR", str(_scratch / "uploads"))

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from reunion.main import app
from reunion.core.cache import page_cache
from reunion.core.logging import setup_test_logging
from reunion.core.security import create_session_token, get_password_hash
from reunion.core.storage import LocalObjectStorage, get_storage
from reunion.db.database import enable_sqlite_foreign_keys, get_db
from reunion.models import AlumniProfile, Hotel, User
from reunion.models.base import Base
from reunion.models.enums import UserRole

TEST_PASSWORD = "reunion-pass-123"

setup_test_logging()

@pytest.fixture
def user_password() -> str:
    return TEST_PASSWORD

@pytest_asyncio.fixture
async def engine(tmp_path):
    """Fresh SQLite file per test, with foreign keys enforced."""
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
        connect_args={"check_same_thread": False}
    )
    enable_sqlite_foreign_keys(test_engine)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()

@pytest_asyncio.fixture
async def session_maker(engine):
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )

@pytest_asyncio.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Get async database session for tests."""
    async with session_maker() as session:
        yield session

@pytest.fixture
def storage(tmp_path) -> LocalObjectStorage:
    return LocalObjectStorage(tmp_path / "objects", "http://test/files")

@pytest_asyncio.fixture
async def test_app(session_maker, storage) -> AsyncGenerator[FastAPI, None]:
    """Application wired to the per-test database and storage."""
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    page_cache.clear()
    yield app
    app.dependency_overrides.clear()
    page_cache.clear()

@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test"
    ) as ac:
        yield ac

async def _make_user(
    db: AsyncSession,
    email: str,
    role: UserRole,
    full_name: str | None = None
) -> User:
    user = User(email=email, password_hash=get_password_hash(TEST_PASSWORD), role=role)
    db.add(user)
    await db.flush()
    if full_name:
        db.add(AlumniProfile(user_id=user.id, full_name=full_name, email=email))
    await db.commit()
    await db.refresh(user)
    return user

def bearer(user: User) -> Dict[str, str]:
    token = create_session_token(user.id, user.email, user.role)
    return {"Authorization": f"Bearer {token}"}

@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await _make_user(db_session, "admin@gmail.com", UserRole.ADMIN)

@pytest_asyncio.fixture
async def alumni_user(db_session: AsyncSession) -> User:
    """Alumni account with a profile."""
    return await _make_user(db_session, "priya@gmail.com", UserRole.ALUMNI, full_name="Priya Sharma")

@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    """Second alumni account with a profile."""
    return await _make_user(db_session, "rahul@yahoo.com", UserRole.ALUMNI, full_name="Rahul Verma")

@pytest_asyncio.fixture
async def admin_headers(admin_user: User) -> Dict[str, str]:
    return bearer(admin_user)

@pytest_asyncio.fixture
async def alumni_headers(alumni_user: User) -> Dict[str, str]:
    return bearer(alumni_user)

@pytest_asyncio.fixture
async def other_headers(other_user: User) -> Dict[str, str]:
    return bearer(other_user)

@pytest_asyncio.fixture
async def hotel(db_session: AsyncSession) -> Hotel:
    db_hotel = Hotel(hotel_name="Grand Palace", website_url="https://grandpalace.example.com")
    db_session.add(db_hotel)
    await db_session.commit()
    await db_session.refresh(db_hotel)
    return db_hotel
