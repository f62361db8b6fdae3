import os
import uuid
from pathlib import Path
from typing import AsyncIterator, Callable

# Settings are read once at import time; point them at SQLite before any
# locket module is imported.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("STORAGE_BACKEND", "local")

import httpx
import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from locket.api.dependencies.database import get_db
from locket.api.dependencies.services import get_storage_adapter
from locket.api.main import create_application
from locket.config.settings import settings
from locket.shared.adapters.storage import LocalStorageAdapter
from locket.shared.models import Base, Media, User
from locket.shared.models.enums import Era, Locket
from locket.shared.services.auth_service import AuthService


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorageAdapter:
    return LocalStorageAdapter(str(tmp_path / "storage"))


@pytest.fixture
def app(session_factory, storage, tmp_path: Path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_TMP_DIR", str(tmp_path / "uploads"))
    application = create_application()

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as db:
            try:
                yield db
                await db.commit()
            except Exception:
                await db.rollback()
                raise

    async def override_get_storage() -> LocalStorageAdapter:
        return storage

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_storage_adapter] = override_get_storage
    return application


@pytest.fixture
async def client(app) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def make_user(session_factory) -> Callable:
    """Create a user row directly and return (user, auth headers)."""

    async def _make_user(email: str | None = None, name: str | None = None):
        async with session_factory() as db:
            user = User(
                email=email or f"{uuid.uuid4().hex[:12]}@example.com",
                name=name,
                password_hash="not-a-real-hash",
            )
            db.add(user)
            await db.commit()
        token, _ = AuthService.issue_token(user)
        return user, {"Authorization": f"Bearer {token}"}

    return _make_user


@pytest.fixture
def make_media(session_factory, storage) -> Callable:
    """Insert a media row with a stored payload."""

    async def _make_media(
        owner: User,
        era: Era = Era.PAST,
        content: bytes = b"payload",
        mimetype: str = "image/jpeg",
        locket: Locket = Locket.NONE,
    ) -> Media:
        location = f"{owner.id}/{uuid.uuid4()}.jpg"
        target = Path(storage.root) / location
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)

        async with session_factory() as db:
            media = Media(
                user_id=owner.id,
                path=location,
                mimetype=mimetype,
                era=era,
                locket=locket,
            )
            db.add(media)
            await db.commit()
        return media

    return _make_media
