"""
Test infrastructure for the Post Board API.

Strategy
--------
- SQLite in-memory via aiosqlite, so the suite needs no running Postgres.
- StaticPool makes every async task share the same in-memory connection;
  SQLite in-memory databases are connection-scoped.
- The app's get_db dependency is overridden so every GraphQL request uses
  the test session factory.
- Tables are created before each test and dropped after it.
- Service fixtures are built exactly the way the GraphQL context builds
  them, on a session the test controls.
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from board.database import Base, get_db
from board.main import app
from board.repositories import PostCommentRepository, PostRepository
from board.security import hasher as default_hasher
from board.services.comment_service import PostCommentService
from board.services.post_service import PostService

# ---------------------------------------------------------------------------
# Test database engine: SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ---------------------------------------------------------------------------
# Dependency override: replace production get_db with the test session factory
# ---------------------------------------------------------------------------

async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            if session.is_active:
                await session.commit()
            else:
                await session.rollback()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def session_factory() -> async_sessionmaker[AsyncSession]:
    return async_session_test


@pytest.fixture
def db_engine():
    """The engine behind every test session, for tests that break the schema on purpose."""
    return engine_test


@pytest.fixture
def hasher():
    return default_hasher


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """
    Yield a live AsyncSession for tests that drive the services and
    repositories directly.
    """
    async with async_session_test() as session:
        yield session


@pytest.fixture
def post_service(db_session: AsyncSession, hasher) -> PostService:
    return PostService(PostRepository(db_session), hasher)


@pytest.fixture
def comment_service(db_session: AsyncSession, hasher) -> PostCommentService:
    return PostCommentService(
        PostCommentRepository(db_session), PostRepository(db_session), hasher
    )


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    """Yield an httpx.AsyncClient wired to the FastAPI app via ASGITransport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def gql(async_client: AsyncClient):
    """
    Return a helper that POSTs a GraphQL document and returns the decoded
    body after checking the HTTP status (always 200 for executed operations).
    """
    async def _execute(query: str, variables: dict | None = None) -> dict:
        resp = await async_client.post("/graphql", json={"query": query, "variables": variables or {}})
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _execute
