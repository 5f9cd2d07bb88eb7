import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from tests.fixtures.json_loader import TestDataLoader
from src.depends import get_unit_of_work
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork

PASSWORD = "SecurePass123!"


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session):
    from httpx import ASGITransport
    from src.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
def admin_headers():
    return {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}


@pytest_asyncio.fixture
def login_as(client: AsyncClient, admin_headers, test_data):
    """Create a role + user through the admin API and return bearer headers"""

    async def _login_as(email, permissions=None, portal_type="admin"):
        if permissions is None:
            permissions = test_data.get_copy("reviewer_permissions")

        role_response = await client.post(
            "/admin/roles",
            json={
                "name": f"Role for {email}",
                "portal_type": portal_type,
                "permissions": permissions,
            },
            headers=admin_headers,
        )
        assert role_response.status_code == 201, role_response.text

        user_response = await client.post(
            "/admin/users",
            json={
                "email": email,
                "password": PASSWORD,
                "portal_type": portal_type,
                "role_id": role_response.json()["id"],
            },
            headers=admin_headers,
        )
        assert user_response.status_code == 201, user_response.text

        login_response = await client.post(
            "/auth/login", json={"email": email, "password": PASSWORD}
        )
        assert login_response.status_code == 200, login_response.text
        token = login_response.json()["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _login_as


@pytest_asyncio.fixture
def onboard(client: AsyncClient, test_data):
    """Invite an organization and submit its onboarding form; returns the record"""

    async def _onboard(headers, organization_type="customer", email="jane@oceanfreight.com"):
        invite_response = await client.post(
            "/organizations/invitations",
            json={"email": email, "type": organization_type},
            headers=headers,
        )
        assert invite_response.status_code == 201, invite_response.text
        token = invite_response.json()["token"]

        payload = test_data.get_copy(f"{organization_type}_onboarding")
        payload["token"] = token
        submit_response = await client.post("/onboarding/submit", json=payload)
        assert submit_response.status_code == 201, submit_response.text
        return submit_response.json()

    return _onboard
