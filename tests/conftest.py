import os

# harus di-set sebelum delivery_api.config di-import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-0123456789abcdef0123456789"
os.environ["BCRYPT_ROUNDS"] = "4"

from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from delivery_api import create_app
from delivery_api.config import settings
from delivery_api.database import create_tables, get_db_session
from delivery_api.models import PricingRule, ServiceType, User, UserRole
from delivery_api.services import Actor, create_service_registry
from delivery_api.services.auth import hash_password

PASSWORD = "secret123"


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, autoflush=False, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def config():
    return settings.model_dump()


@pytest.fixture
def registry(db_session, config):
    return create_service_registry(db_session, config)


# ==================== FACTORIES ====================
# Factory memakai session sendiri; object yang dikembalikan detached sehingga
# rollback di session milik service tidak meng-expire-nya.

@pytest.fixture
def make_user(session_factory):
    async def _make_user(username, role=UserRole.STAFF, is_active=True, password=PASSWORD):
        user = User(
            username=username,
            email=f"{username}@example.com",
            password_hash=hash_password(password),
            full_name=username.capitalize(),
            role=role.value,
            is_active=is_active,
        )
        async with session_factory() as session:
            session.add(user)
            await session.commit()
        return user
    return _make_user


@pytest.fixture
def make_service_type(session_factory):
    async def _make_service_type(name="Standard", is_active=True, rules=()):
        service_type = ServiceType(name=name, description=f"{name} delivery", is_active=is_active)
        async with session_factory() as session:
            session.add(service_type)
            await session.flush()
            for weight_from, weight_to, price, fragile, valuable in rules:
                session.add(PricingRule(
                    service_type_id=service_type.id,
                    weight_from=Decimal(str(weight_from)),
                    weight_to=Decimal(str(weight_to)),
                    price=Decimal(str(price)),
                    fragile_surcharge=None if fragile is None else Decimal(str(fragile)),
                    valuable_surcharge=None if valuable is None else Decimal(str(valuable)),
                ))
            await session.commit()
        return service_type
    return _make_service_type


@pytest.fixture
async def admin_user(make_user):
    return await make_user("admin", UserRole.ADMIN)


@pytest.fixture
async def staff_user(make_user):
    return await make_user("staff", UserRole.STAFF)


@pytest.fixture
async def other_staff_user(make_user):
    return await make_user("otherstaff", UserRole.STAFF)


@pytest.fixture
async def shipper_user(make_user):
    return await make_user("shipper", UserRole.SHIPPER)


@pytest.fixture
def admin(admin_user):
    return Actor.from_user(admin_user)


@pytest.fixture
def staff(staff_user):
    return Actor.from_user(staff_user)


@pytest.fixture
def other_staff(other_staff_user):
    return Actor.from_user(other_staff_user)


@pytest.fixture
def shipper(shipper_user):
    return Actor.from_user(shipper_user)


@pytest.fixture
async def standard(make_service_type):
    """Standard: [0, 1] @ 15000/kg (+5000 fragile, +10000 valuable), [1.01, 10] @ 12000/kg"""
    return await make_service_type("Standard", rules=[
        (0, 1, 15000, 5000, 10000),
        (1.01, 10, 12000, 5000, 10000),
    ])


@pytest.fixture
def order_payload(standard):
    def _order_payload(**overrides):
        payload = {
            "sender_name": "Budi Santoso",
            "sender_phone": "+62 812-3456-7890",
            "sender_address": "Jl. Merdeka No. 10, Jakarta",
            "receiver_name": "Siti Aminah",
            "receiver_phone": "081298765432",
            "receiver_address": "Jl. Diponegoro No. 5, Bandung",
            "service_type_id": standard.id,
            "weight": "0.80",
            "is_fragile": True,
            "is_valuable": False,
        }
        payload.update(overrides)
        return payload
    return _order_payload


# ==================== HTTP ====================

@pytest.fixture
async def client(session_factory):
    app = create_app()

    async def override_get_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def auth_headers(client):
    async def _auth_headers(username, password=PASSWORD):
        response = await client.post("/api/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        token = response.json()["data"]["access_token"]
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers
