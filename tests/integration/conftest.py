import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from organizations.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from organizations.app.services.callbacks import CallbackDispatcher
from organizations.app.services.clock import FrozenClock
from organizations.domain.entities import User
from tests.fixtures.factories import NOW


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def new_uow(engine):
    """Factory: a unit of work over a fresh session, like one request"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    sessions = []

    def factory():
        session = Session()
        sessions.append(session)
        return SqlAlchemyUnitOfWork(session)

    yield factory
    for session in sessions:
        await session.close()


@pytest.fixture
def clock():
    return FrozenClock(NOW)


@pytest.fixture
def dispatcher():
    return CallbackDispatcher()


@pytest.fixture
def events(dispatcher):
    recorded = []
    for event in (
        "organization_created",
        "member_invited",
        "member_joined",
        "member_removed",
        "role_changed",
        "ownership_transferred",
    ):
        dispatcher.register(event, recorded.append)
    return recorded


@pytest.fixture
def run(new_uow, clock, dispatcher):
    """Build a use case on its own unit of work with the test clock and dispatcher"""

    def build(use_case_class, **kwargs):
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("callbacks", dispatcher)
        return use_case_class(new_uow(), **kwargs)

    return build


@pytest.fixture
def create_user(new_uow):
    async def create(email, name=None):
        async with new_uow() as uow:
            user = await uow.users.create(User(email=email, name=name))
            await uow.commit()
            return user

    return create


@pytest.fixture
def fetch(new_uow):
    """Read helper: run ``query(uow)`` in its own unit of work"""

    async def read(query):
        async with new_uow() as uow:
            result = await query(uow)
            # Detach so the rollback on exit does not expire the results
            uow.session.expunge_all()
            return result

    return read
