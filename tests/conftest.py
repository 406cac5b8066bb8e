"""Shared test fixtures — async DB, API client, client-side auth, factories.

Uses SQLite + aiosqlite for fast isolated tests without PostgreSQL.
"""

from __future__ import annotations

import os

# Set client/server settings before any other import touches pydantic-settings
os.environ.setdefault("EMS_SESSION_SECRET", "test-secret-for-ci-do-not-use-in-production")
os.environ["RATE_LIMIT_ENABLED"] = "false"

from datetime import date
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from ems.client.api import ApiClient
from ems.client.auth import AuthContext, DemoCredentialVerifier, MemorySessionStore
from ems.database import Base, get_db
from ems.main import create_app

# Import ALL model modules so SQLAlchemy can resolve cross-module relationships
# (e.g. Employee → WorksOn, LeaveRecord, TimeEntry)
import ems.core_hr.models  # noqa: F401
import ems.projects.models  # noqa: F401
import ems.records.models  # noqa: F401

from ems.core_hr.models import Department, Employee
from ems.projects.models import Project, WorksOn
from ems.records.models import Benefit, Dependent, LeaveRecord, TimeEntry


# ── Test database (SQLite in-memory) ────────────────────────────────

TEST_DATABASE_URL = "sqlite+aiosqlite://"

engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionFactory = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False,
)


@pytest.fixture(autouse=True)
async def _setup_db():
    """Create all tables before each test, drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
    async with TestSessionFactory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── FastAPI test client ─────────────────────────────────────────────

@pytest.fixture
async def app():
    """Create a fresh app instance with DB dependency overridden."""
    application = create_app()
    application.dependency_overrides[get_db] = _override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the test app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def api(app) -> AsyncGenerator[ApiClient, None]:
    """The project's own ApiClient, talking to the test app in-process."""
    async with ApiClient(
        "http://test/api",
        transport=ASGITransport(app=app),
        timeout=5,
    ) as api_client:
        yield api_client


# ── Database session (for direct DB operations in tests) ────────────

@pytest.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    async with TestSessionFactory() as session:
        yield session
        await session.commit()


async def add_row(db: AsyncSession, obj):
    """Insert one ORM object and commit so API requests can see it."""
    db.add(obj)
    await db.commit()
    return obj


# ── Client-side auth ────────────────────────────────────────────────

@pytest.fixture(scope="session")
def verifier() -> DemoCredentialVerifier:
    return DemoCredentialVerifier()


@pytest.fixture
def auth(verifier) -> AuthContext:
    return AuthContext(verifier, MemorySessionStore())


# ── Model factories ─────────────────────────────────────────────────

def _make_department(
    *,
    name: str = "Engineering",
    location: str = "Building A",
    budget: float | None = 500000.0,
) -> dict:
    return dict(name=name, location=location, budget=budget, description=None)


def _make_employee(
    *,
    first_name: str = "Test",
    last_name: str = "User",
    email: str = "test.user@company.com",
    department_id: int | None = None,
    supervisor_id: int | None = None,
    salary: float = 60000.0,
    gender: str = "Male",
) -> dict:
    return dict(
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone_no="555-0100",
        gender=gender,
        date_of_birth=date(1990, 5, 17),
        hire_date=date(2020, 1, 6),
        salary=salary,
        department_id=department_id,
        supervisor_id=supervisor_id,
    )


def _make_project(
    *,
    name: str = "Customer Portal",
    status: str = "In Progress",
    start_date: date | None = date(2024, 1, 1),
    end_date: date | None = date(2024, 12, 31),
    budget: float | None = 100000.0,
) -> dict:
    return dict(
        name=name,
        status=status,
        start_date=start_date,
        end_date=end_date,
        budget=budget,
        description=None,
    )


@pytest.fixture
async def test_department(db) -> dict:
    """Insert a department and return its data dict (with id)."""
    dept = await add_row(db, Department(**_make_department()))
    return {**_make_department(), "id": dept.id}


@pytest.fixture
async def test_employee(db, test_department) -> dict:
    """Insert an employee in test_department."""
    data = _make_employee(department_id=test_department["id"])
    emp = await add_row(db, Employee(**data))
    return {**data, "id": emp.id}


@pytest.fixture
async def test_project(db) -> dict:
    data = _make_project()
    project = await add_row(db, Project(**data))
    return {**data, "id": project.id}


@pytest.fixture
async def employee_records(db, test_employee, test_project) -> dict:
    """Give test_employee one of every nested record type."""
    emp_id = test_employee["id"]
    other = await add_row(db, Project(**_make_project(name="Archive", status="Completed")))

    db.add_all([
        WorksOn(employee_id=emp_id, project_id=test_project["id"], role="Developer", hours_per_week=30),
        LeaveRecord(employee_id=emp_id, leave_type="Vacation", status="Approved",
                    start_date=date(2024, 1, 1), end_date=date(2024, 1, 5)),
        LeaveRecord(employee_id=emp_id, leave_type="Sick Leave", status="Pending",
                    start_date=date(2024, 3, 4), end_date=date(2024, 3, 4)),
        Benefit(employee_id=emp_id, benefit_type="Health Insurance",
                start_date=date(2020, 1, 6), coverage="Family", premium=450.0),
        Dependent(employee_id=emp_id, first_name="Emily", last_name="User",
                  relationship="Daughter", date_of_birth=date(2015, 9, 1)),
        TimeEntry(employee_id=emp_id, project_id=test_project["id"],
                  date=date(2024, 2, 1), hours_worked=6.5),
        TimeEntry(employee_id=emp_id, project_id=other.id,
                  date=date(2024, 2, 3), hours_worked=2.0),
    ])
    await db.commit()
    return {"employee_id": emp_id, "project_id": test_project["id"], "other_project_id": other.id}
