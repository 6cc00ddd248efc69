import pytest
import sys
import os
import io
from decimal import Decimal
from typing import AsyncGenerator

# Add project root to sys.path so we can import from main.py and src
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi import UploadFile
from httpx import AsyncClient, ASGITransport
from main import app
from src.database.core import get_db, Base
from src.entities.category import Category
from src.entities.transaction import Transaction, TransactionType

# Setup In-Memory SQLite Database for testing (Async)
SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine = create_async_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = async_sessionmaker(
    autocommit=False, autoflush=False, bind=engine, expire_on_commit=False
)


@pytest.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Creates a fresh database session for a test.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestingSessionLocal() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(scope="function")
async def client(db_session):
    """
    Dependency override for database and AsyncClient creation.
    """

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    # ASGITransport does not run the lifespan, so main.py never touches the real engine.
    # Tables are managed by the db_session fixture.
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def sample_category(db_session):
    category = Category(title="Food")
    db_session.add(category)
    await db_session.commit()
    await db_session.refresh(category)
    return category


@pytest.fixture(scope="function")
async def salary_category(db_session):
    category = Category(title="Salary")
    db_session.add(category)
    await db_session.commit()
    await db_session.refresh(category)
    return category


@pytest.fixture(scope="function")
async def sample_income(db_session, salary_category):
    """
    Seeds a 1000.00 income so outcome transactions have balance to draw from.
    """
    transaction = Transaction(
        title="Monthly salary",
        value=Decimal("1000.00"),
        type=TransactionType.INCOME,
        category=salary_category,
    )
    db_session.add(transaction)
    await db_session.commit()
    await db_session.refresh(transaction)
    return transaction


@pytest.fixture
def make_upload():
    """
    Builds an in-memory UploadFile from CSV text.
    """

    def _make_upload(content: str, filename: str = "import.csv") -> UploadFile:
        return UploadFile(file=io.BytesIO(content.encode("utf-8")), filename=filename)

    return _make_upload
