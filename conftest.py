# conftest.py

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker

from database import create_tables, get_db, make_engine
from main import app
from models import Analytic, Category, Post


# Fresh file database per test so concurrent sessions get their own connections
@pytest_asyncio.fixture(scope="function")
async def test_engine(tmp_path):
    engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'test_posts.db'}", echo=False)
    await create_tables(bind=engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_factory(test_engine):
    return sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def session(session_factory) -> AsyncSession:
    async with session_factory() as session:
        yield session

# Categories: life, news, sports (no posts), tech
# Public posts: 1, 2, 4. Analytics exist for posts 1 and 6.
@pytest_asyncio.fixture(scope="function")
async def add_sample_data(session_factory):
    async with session_factory() as session:
        async with session.begin():
            session.add_all([
                Category(title="life"),
                Category(title="news"),
                Category(title="sports"),
                Category(title="tech"),
            ])
            await session.flush()
            session.add_all([
                Post(id=1, title="ORM", category="tech", is_public=True,
                     content="SQLAlchemy is great for Python ORM."),
                Post(id=2, title="Speed", category="news", is_public=True,
                     content="FastAPI provides amazing speed."),
                Post(id=3, title="Async", category="tech", is_public=False,
                     content="Async Python with asyncio is powerful."),
                Post(id=4, title="About", category="tech", is_public=True,
                     content="Another post about Python."),
                Post(id=5, title="Hacks", category="life", is_public=False,
                     content="Simple life hacks."),
                Post(id=6, title="Releases", category="news", is_public=False,
                     content="Python Python python news about Python releases."),
            ])
            await session.flush()
            session.add_all([
                Analytic(id=1, post_id=1, views=10, likes=2, comments=1, shares=0),
                Analytic(id=2, post_id=6, views=3, likes=0, comments=0, shares=0),
            ])


@pytest_asyncio.fixture(scope="function")
async def client(session_factory) -> AsyncClient:
    async def override_get_db() -> AsyncSession:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
