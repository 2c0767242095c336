"""Shared test fixtures — single test DB for all test modules."""
from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession

from src.db.tables import Base
from src.db.engine import get_session

# Use a shared in-memory DB with check_same_thread=False and StaticPool
# This ensures all connections see the same in-memory database.
from sqlalchemy.pool import StaticPool

TEST_DB_URL = "sqlite+aiosqlite:///file:test?mode=memory&cache=shared&uri=true"

test_engine = create_async_engine(
    TEST_DB_URL,
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSession = async_sessionmaker(test_engine, expire_on_commit=False, class_=AsyncSession)

ADMIN_EMAIL = "admin@mascotas.test"
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64


async def override_get_session():
    async with TestSession() as session:
        yield session


# Import app and override BEFORE any test module imports app
from src.api.main import app  # noqa: E402
from src.services.blob_store import LocalBlobStore, get_blob_store  # noqa: E402

app.dependency_overrides[get_session] = override_get_session


from contextlib import asynccontextmanager

@asynccontextmanager
async def get_test_session():
    """Context manager for seeding data in tests."""
    async with TestSession() as session:
        yield session


@pytest_asyncio.fixture(autouse=True)
async def setup_db(monkeypatch):
    """Create tables before each test, drop after."""
    import src.db.user_tables  # noqa: F401
    import src.db.report_tables  # noqa: F401
    from config.settings import settings

    monkeypatch.setattr(settings, "ADMIN_EMAILS", [ADMIN_EMAIL])
    monkeypatch.setattr(settings, "STRICT_MODERATION", False)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    # Reset rate limiter and login throttle between tests
    from src.middleware.rate_limit import reset_store
    from src.services.login_throttle import login_throttle
    reset_store()
    login_throttle.reset()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def blob_store(tmp_path):
    """Filesystem Blob Store rooted in a per-test directory, wired into the app."""
    store = LocalBlobStore(tmp_path / "storage", "/storage")
    app.dependency_overrides[get_blob_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_blob_store, None)


@pytest_asyncio.fixture
async def client(blob_store):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _signup(client, email: str, password: str = "pass12345") -> dict:
    resp = await client.post("/api/v1/auth/signup", json={
        "email": email, "password": password, "display_name": email.split("@")[0],
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest_asyncio.fixture
async def auth(client):
    data = await _signup(client, "vecina@mascotas.test")
    return {"Authorization": f"Bearer {data['access_token']}"}


@pytest_asyncio.fixture
async def other_auth(client):
    data = await _signup(client, "otro@mascotas.test")
    return {"Authorization": f"Bearer {data['access_token']}"}


@pytest_asyncio.fixture
async def admin_auth(client):
    data = await _signup(client, ADMIN_EMAIL)
    assert data["user"]["role"] == "admin"
    return {"Authorization": f"Bearer {data['access_token']}"}


def image_file(name: str = "foto.jpg", data: bytes = JPEG_BYTES, content_type: str = "image/jpeg") -> dict:
    return {"image": (name, data, content_type)}


def lost_pet_form(**overrides) -> dict:
    form = {
        "pet_name": "Rex",
        "species": "dog",
        "breed": "Labrador",
        "gender": "male",
        "age": "3 años",
        "size": "large",
        "color": "Negro",
        "distinctive_features": "Collar rojo",
        "last_seen_date": "2024-05-01",
        "last_seen_location": "Plaza Central",
        "urgency": "true",
        "has_reward": "true",
        "reward_amount": "15000",
        "contact_name": "Ana",
        "contact_phone": "1122334455",
        "contact_email": "ana@example.com",
    }
    form.update(overrides)
    return form


def adoption_pet_form(**overrides) -> dict:
    form = {
        "pet_name": "Mishi",
        "species": "cat",
        "breed": "Mestizo",
        "gender": "female",
        "age": "1 año",
        "size": "small",
        "color": "Atigrado",
        "description": "Muy cariñosa",
        "location": "Villa Luzuriaga",
        "med_status": ["vacunado", "castrado"],
        "adoption_requirements": "Patio cerrado",
        "contact_name": "Luis",
        "contact_phone": "1199887766",
    }
    form.update(overrides)
    return form


def donation_campaign_form(**overrides) -> dict:
    form = {
        "title": "Operación de Toby",
        "description": "Toby necesita una cirugía de cadera",
        "goal": "120000",
        "urgency": "true",
        "type": "medical",
        "pet_name": "Toby",
        "cbu": "0000003100010000000001",
        "alias": "toby.cirugia",
        "account_holder": "Marta Gómez",
        "responsible_name": "Marta Gómez",
        "whatsapp_number": "+5491122223333",
        "contact_email": "marta@example.com",
        "deadline": "2024-12-31",
    }
    form.update(overrides)
    return form
