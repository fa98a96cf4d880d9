import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.core.config import settings
from storefront.db.base import Base
from storefront.db.models import User, UserRole, Vendor, Product, ProductVariant, Customer
from storefront.db.session import get_db
from storefront.main import app


DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine():
    engine = create_async_engine(DATABASE_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(engine):
    AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def client(engine):
    AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with AsyncSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_vendor(db_session):
    async def _make_vendor(
        business_name="Test Shop",
        slug=None,
        is_approved=True,
        owner_active=True,
        commission_rate=Decimal("10.00"),
    ):
        slug = slug or business_name.lower().replace(" ", "-")
        user = User(email=f"{slug}@example.com", role=UserRole.VENDOR, is_active=owner_active)
        db_session.add(user)
        await db_session.flush()

        vendor = Vendor(
            user_id=user.id,
            business_name=business_name,
            slug=slug,
            business_address="1 Market Street",
            commission_rate=commission_rate,
            is_approved=is_approved,
        )
        db_session.add(vendor)
        await db_session.commit()
        await db_session.refresh(vendor)
        return vendor

    return _make_vendor


@pytest.fixture
def make_product(db_session):
    async def _make_product(
        vendor,
        name="Test Product",
        price=Decimal("100.00"),
        stock=10,
        is_active=True,
        is_disabled_by_admin=False,
    ):
        product = Product(
            vendor_id=vendor.id,
            name=name,
            slug=f"{vendor.slug}-{name.lower().replace(' ', '-')}",
            price=price,
            stock=stock,
            is_active=is_active,
            is_disabled_by_admin=is_disabled_by_admin,
        )
        db_session.add(product)
        await db_session.commit()
        await db_session.refresh(product)
        return product

    return _make_product


@pytest.fixture
def make_variant(db_session):
    async def _make_variant(product, name="Size", value="XL", price_adjustment=Decimal("5.00"), stock=5):
        variant = ProductVariant(
            product_id=product.id,
            name=name,
            value=value,
            price_adjustment=price_adjustment,
            stock=stock,
        )
        db_session.add(variant)
        await db_session.commit()
        await db_session.refresh(variant)
        return variant

    return _make_variant


def make_token(user_id: str) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=15)
    return jwt.encode({"sub": user_id, "exp": expire}, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


@pytest.fixture
def make_customer(db_session):
    async def _make_customer(email="customer@example.com"):
        user = User(email=email, role=UserRole.CUSTOMER, is_active=True)
        db_session.add(user)
        await db_session.flush()

        customer = Customer(user_id=user.id)
        db_session.add(customer)
        await db_session.commit()
        await db_session.refresh(customer)
        return customer

    return _make_customer


@pytest.fixture
async def customer(make_customer):
    return await make_customer()


@pytest.fixture
def auth_headers(customer):
    return {"Authorization": f"Bearer {make_token(customer.user_id)}"}
