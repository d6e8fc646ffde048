"""
Test fixtures - in-memory SQLite database + HTTP client bound to the app
"""
import itertools
from decimal import Decimal

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.pool import StaticPool

from catalog_api.database import Base, Database, get_database, get_db
from catalog_api.main import app
from catalog_api.models.product import Product
from catalog_api.models.term import Term


@pytest_asyncio.fixture()
async def database():
    """Create a fresh in-memory SQLite database for each test"""
    db = Database("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    await db.create_all()

    yield db

    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await db.close()


@pytest_asyncio.fixture()
async def db_session(database):
    async with database.session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(database, db_session):
    """httpx AsyncClient bound to the FastAPI app"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_database] = lambda: database
    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def make_product(db_session):
    """Insert a product directly; keyword arguments override the defaults"""
    counter = itertools.count(1)

    async def _make(**overrides):
        n = next(counter)
        values = {
            "artical_no": f"ART-{n:04d}",
            "product_service": f"Product {n}",
            "price": Decimal("10.00"),
            "unit": "pcs",
        }
        values.update(overrides)
        product = Product(**values)
        db_session.add(product)
        await db_session.commit()
        await db_session.refresh(product)
        return product

    return _make


@pytest_asyncio.fixture()
async def make_term(db_session):
    counter = itertools.count(1)

    async def _make(**overrides):
        n = next(counter)
        values = {
            "language": "en",
            "section_key": "privacy",
            "title": f"Section {n}",
            "content": f"Body of section {n}",
        }
        values.update(overrides)
        term = Term(**values)
        db_session.add(term)
        await db_session.commit()
        await db_session.refresh(term)
        return term

    return _make
