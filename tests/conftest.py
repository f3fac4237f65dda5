"""Shared pytest fixtures for storefront test suites."""

from collections.abc import Generator
from collections.abc import Sequence
from pathlib import Path
import sys
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from storefront.core.config import Settings  # noqa: E402
from storefront.db.base import get_db_session  # noqa: E402
from storefront.db.models import Base  # noqa: E402
from storefront.media.storage import ImageNotFoundError  # noqa: E402
from storefront.main import create_app  # noqa: E402


class FakeImageStorage:
    """In-memory stand-in for the hosted image service."""

    def __init__(self) -> None:
        self.assets: dict[str, dict[str, Any]] = {}
        self.uploads: list[tuple[str, int]] = []
        self.fail_with: Exception | None = None
        self._counter = 0

    def _store(self, folder: str, size: int) -> dict[str, Any]:
        if self.fail_with is not None:
            raise self.fail_with
        self._counter += 1
        public_id = f"{folder}/img-{self._counter}"
        result = {
            "public_id": public_id,
            "secure_url": f"https://res.example.com/{public_id}.webp",
            "format": "webp",
            "width": 1200,
            "height": 800,
            "bytes": size,
        }
        self.assets[public_id] = result
        self.uploads.append((folder, size))
        return result

    async def upload(self, path: Any, folder: str = "products") -> dict[str, Any]:
        return self._store(folder, Path(path).stat().st_size)

    async def upload_buffer(self, buffer: bytes, folder: str = "products") -> dict[str, Any]:
        return self._store(folder, len(buffer))

    async def delete(self, public_id: str) -> dict[str, Any]:
        if self.fail_with is not None:
            raise self.fail_with
        if public_id not in self.assets:
            raise ImageNotFoundError(f"Image not found: {public_id}", data={"publicIds": [public_id]})
        del self.assets[public_id]
        return {"result": "ok"}

    async def delete_many(self, public_ids: Sequence[str]) -> dict[str, Any]:
        if self.fail_with is not None:
            raise self.fail_with
        missing = [public_id for public_id in public_ids if public_id not in self.assets]
        if missing:
            raise ImageNotFoundError(f"Images not found: {', '.join(missing)}", data={"publicIds": missing})
        for public_id in public_ids:
            del self.assets[public_id]
        return {"deleted": {public_id: "deleted" for public_id in public_ids}}


@pytest.fixture
def image_storage() -> FakeImageStorage:
    return FakeImageStorage()


@pytest.fixture
def session_factory() -> Generator[sessionmaker[Session], None, None]:
    """Fresh in-memory schema per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, class_=Session)
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def settings() -> Settings:
    return Settings(environment="development")


@pytest.fixture
def client(
    settings: Settings,
    image_storage: FakeImageStorage,
    session_factory: sessionmaker[Session],
) -> Generator[TestClient, None, None]:
    """Provide an API test client backed by SQLite and the fake image storage."""
    app = create_app(settings=settings, image_storage=image_storage)

    def _session() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db_session] = _session
    with TestClient(app) as test_client:
        yield test_client
