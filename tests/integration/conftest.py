import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.json_loader import TestDataLoader
from src.depends import get_unit_of_work
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain.credentials import generate_hash, generate_salt
from src.domain.entities import Account, AccountCredential


@pytest.fixture
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
async def seed_account(db_session):
    """Create an account (and credential unless with_credential=False) from test_data.json"""

    async def _seed(username: str, with_credential: bool = True) -> Account:
        data = TestDataLoader.account(username)
        account = Account(
            username=data["username"], email=data["email"], phone=data["phone"]
        )
        db_session.add(account)
        await db_session.flush()
        await db_session.refresh(account)

        if with_credential:
            salt = generate_salt()
            db_session.add(
                AccountCredential(
                    account_id=account.account_id,
                    salt=salt,
                    salted_hash=generate_hash(data["password"], salt),
                )
            )
        await db_session.commit()
        return account

    return _seed


@pytest_asyncio.fixture
async def client(db_session):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
