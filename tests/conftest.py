# /tests/conftest.py
"""Shared fixtures: a throwaway SQLite database per test and an HTTP client bound to it."""

import httpx
import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from school_admin.core.config import settings
from school_admin.core.database import build_engine, get_db
from school_admin.core.unit_of_work import UnitOfWork
from school_admin.main import create_app
from school_admin.models import Base
from school_admin.routers.students import get_roster_gateway
from school_admin.schemas.import_schemas import ImportRow


class FakeRosterGateway:
    """Stands in for ExternalRosterGateway; records every call."""

    def __init__(self, students=None):
        self.students = list(students or [])
        self.calls = []

    async def fetch_students(self, class_code, offset, limit):
        self.calls.append((class_code, offset, limit))
        return list(self.students)


@pytest.fixture
async def engine(tmp_path):
    """A file-backed SQLite database with every table created."""
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'school_admin_test.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession, autoflush=False)


@pytest.fixture
async def uow(session_factory):
    async with session_factory() as session:
        yield UnitOfWork(session)


@pytest.fixture
def count_rows(session_factory):
    """Count rows of a model from a fresh session, i.e. what other readers see."""
    async def _count(model, **filters):
        async with session_factory() as session:
            stmt = select(func.count()).select_from(model).filter_by(**filters)
            return (await session.execute(stmt)).scalar()
    return _count


@pytest.fixture
def make_row():
    """Build an ImportRow from defaults overridden by camelCase keyword arguments."""
    def _make_row(**overrides):
        record = {
            "teacherEmail": "teacher1@school.edu",
            "teacherName": "Teacher One",
            "studentEmail": "student1@school.edu",
            "studentName": "Student One",
            "classCode": "P1-1",
            "classname": "P1 Integrity",
            "subjectCode": "MATHS",
            "subjectName": "Mathematics",
            "toDelete": "0",
        }
        record.update(overrides)
        return ImportRow.model_validate(record)
    return _make_row


@pytest.fixture
def fake_gateway():
    return FakeRosterGateway()


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", str(path))
    return path


@pytest.fixture
async def client(session_factory, fake_gateway, upload_dir):
    """An httpx client talking to the app in-process, wired to the test database."""
    app = create_app(use_lifespan=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_roster_gateway] = lambda: fake_gateway

    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client
