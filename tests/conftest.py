"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time; point them at a throwaway database first.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ADMIN_USERNAME", "admin")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from app.core.config import settings  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.db.session import Database  # noqa: E402
from app.models import Form, Website  # noqa: E402
from app.schemas.form import FormCreate  # noqa: E402
from app.schemas.website import WebsiteCreate  # noqa: E402
from app.services.form_service import FormService  # noqa: E402
from app.services.website_service import WebsiteService  # noqa: E402
from main import create_application  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Fresh in-memory database with all tables, one per test."""
    database = Database(TEST_DATABASE_URL)
    await database.create_all()
    yield database
    await database.dispose()


@pytest.fixture
async def db(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Session for seeding and inspecting data outside of requests.

    Fixtures that write through it must commit, so request sessions see
    the rows.
    """
    async with database.session() as session:
        yield session


@pytest.fixture
def app(database: Database):
    """Create test application instance bound to the test database."""
    return create_application(database=database)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def operator_headers() -> dict[str, str]:
    """Authorization headers with a valid operator JWT."""
    token = create_access_token(subject=settings.ADMIN_USERNAME)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def admin_client(
    app, operator_headers: dict[str, str]
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client carrying the operator token."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=operator_headers,
    ) as client:
        yield client


# ============================================================
# Website and Form Fixtures
# ============================================================


@pytest.fixture
async def website(db: AsyncSession) -> Website:
    """A registered website for acme.com."""
    website = await WebsiteService.create_website(
        db, WebsiteCreate(name="Acme", domain="acme.com")
    )
    await db.commit()
    return website


@pytest.fixture
async def other_website(db: AsyncSession) -> Website:
    website = await WebsiteService.create_website(
        db, WebsiteCreate(name="Globex", domain="globex.com")
    )
    await db.commit()
    return website


@pytest.fixture
async def form(db: AsyncSession, website: Website) -> Form:
    """A contact form owned by `website`."""
    form = await FormService.create_form(
        db,
        FormCreate(
            website_id=website.id,
            title="Contact",
            fields={"name": "string", "email": "string"},
        ),
    )
    await db.commit()
    return form


@pytest.fixture
def submit_headers(website: Website) -> dict[str, str]:
    """Headers a browser on acme.com would send with a valid secret key."""
    return {
        "Authorization": f"Bearer {website.secret_key}",
        "Origin": "https://acme.com",
    }
