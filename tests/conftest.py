"""
Portfolio API - Test Configuration and Fixtures
"""
import os
import tempfile
from typing import AsyncGenerator, Callable, Dict

import pytest
import pytest_asyncio
from faker import Faker
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set testing environment before the app reads its settings
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///:memory:'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing-only-0123456789'
os.environ['LOG_FILE'] = ''
os.environ['LOG_LEVEL'] = 'WARNING'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['STORAGE_DIR'] = tempfile.mkdtemp(prefix='portfolio-test-storage-')

from portfolio.main import app
from portfolio.core.database import Base, get_db, _enable_sqlite_foreign_keys
from portfolio.core.security import create_access_token, get_password_hash
from portfolio.models.user import User, UserRole

fake = Faker()

TEST_DATABASE_URL = 'sqlite+aiosqlite:///:memory:'
TEST_PASSWORD = 'testpassword123'


@pytest_asyncio.fixture
async def db_engine():
    """Fresh in-memory database per test; StaticPool keeps every session on the same connection"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={'check_same_thread': False},
    )
    event.listen(engine.sync_engine, 'connect', _enable_sqlite_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging data directly in the database"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Test client whose requests each get their own session on the test database"""
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                if session.new or session.dirty or session.deleted:
                    await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable:
    """Factory creating committed users"""
    async def _make_user(role: UserRole = UserRole.USER, email: str = None, full_name: str = None) -> User:
        user = User(
            email=email or fake.unique.email(),
            hashed_password=get_password_hash(TEST_PASSWORD),
            full_name=full_name or fake.name(),
            role=role,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make_user


def auth_headers_for(user: User) -> Dict[str, str]:
    """Bearer header for a user"""
    token = create_access_token(user.user_id, user.email, UserRole(user.role).value)
    return {'Authorization': f'Bearer {token}'}


@pytest_asyncio.fixture
async def test_user(make_user) -> User:
    return await make_user()


@pytest_asyncio.fixture
async def other_user(make_user) -> User:
    return await make_user()


@pytest_asyncio.fixture
async def admin_user(make_user) -> User:
    return await make_user(role=UserRole.ADMIN)


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    """Generate authentication headers for test user"""
    return auth_headers_for(test_user)


@pytest.fixture
def other_auth_headers(other_user: User) -> dict:
    return auth_headers_for(other_user)


@pytest.fixture
def admin_auth_headers(admin_user: User) -> dict:
    """Generate authentication headers for admin user"""
    return auth_headers_for(admin_user)


def project_payload(**overrides) -> dict:
    """Valid project creation body"""
    data = {
        'title': 'E-commerce Platform',
        'slug': 'ecommerce-platform',
        'featured_image': 'https://picsum.photos/seed/ecommerce/1200/800',
        'category': 'Web Development',
        'excerpt': 'A fully featured e-commerce platform.',
        'content': 'This project involved creating a complete e-commerce solution with inventory '
                   'management, user authentication, and payment processing.',
        'client': 'Retail Store Inc.',
        'technologies': ['React', 'Node.js', 'PostgreSQL'],
        'project_url': 'https://ecommerce.example.com',
        'project_date': '2023-06-01',
    }
    data.update(overrides)
    return data
