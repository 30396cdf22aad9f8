import os

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_painel.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-painel")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from datetime import timedelta
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from painel.database import get_db
from painel.config import settings
from painel.core.security import TokenCodec, TokenConfig, hash_password
from painel.models import Base, Company, User, Category, Product
from painel.models.role import UserRole
from painel.models.tenant_context import Principal
from painel.repositories.user_repository import UserRepository
# Import FastAPI app AFTER model imports
from painel.main import app

# Test database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "s3cret-pass"
# Low bcrypt cost keeps the suite fast
TEST_BCRYPT_ROUNDS = 4

COMPANY_A_ID = 7
COMPANY_B_ID = 9


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """FastAPI test client with test database"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_codec() -> TokenCodec:
    return TokenCodec(TokenConfig.from_settings(settings))


def principal_for(user: User) -> Principal:
    return Principal(
        id=user.id,
        email=user.email,
        role=user.role,
        tenant_id=user.tenant_id,
        display_name=user.name,
    )


def create_test_token(
    user_id: int = 1,
    role: UserRole = UserRole.MANAGER,
    tenant_id: int | None = COMPANY_A_ID,
    expired: bool = False,
) -> str:
    """
    Generate a signed token for testing.

    Args:
        user_id: User ID to embed in 'sub' claim
        role: Role claim
        tenant_id: Company claim (None for admins)
        expired: If True, create expired token

    Returns:
        Encoded JWT token
    """
    principal = Principal(
        id=user_id, email=f"user{user_id}@example.com", role=role, tenant_id=tenant_id
    )
    ttl = timedelta(minutes=-5) if expired else timedelta(minutes=15)
    return make_codec().issue(principal, ttl=ttl)


def headers_for(user: User) -> dict:
    token = make_codec().issue(principal_for(user))
    return {"Authorization": f"Bearer {token}"}


def make_user(db, email: str, role: UserRole, tenant_id: int | None, active: bool = True) -> User:
    user = User(
        name=email.split("@")[0].title(),
        email=email,
        password_hash=hash_password(TEST_PASSWORD, rounds=TEST_BCRYPT_ROUNDS),
        role=role,
        tenant_id=tenant_id,
        active=active,
    )
    return UserRepository(db).create(user)


@pytest.fixture
def companies(db_session):
    """Two restaurants with fixed IDs 7 and 9"""
    company_a = Company(id=COMPANY_A_ID, name="Pizzaria Sete")
    company_b = Company(id=COMPANY_B_ID, name="Burger Nove")
    db_session.add_all([company_a, company_b])
    db_session.commit()
    return company_a, company_b


@pytest.fixture
def admin_user(db_session, companies):
    return make_user(db_session, "admin@example.com", UserRole.ADMIN, None)


@pytest.fixture
def manager_a(db_session, companies):
    return make_user(db_session, "manager.a@example.com", UserRole.MANAGER, COMPANY_A_ID)


@pytest.fixture
def manager_b(db_session, companies):
    return make_user(db_session, "manager.b@example.com", UserRole.MANAGER, COMPANY_B_ID)


@pytest.fixture
def admin_headers(admin_user):
    return headers_for(admin_user)


@pytest.fixture
def manager_a_headers(manager_a):
    return headers_for(manager_a)


@pytest.fixture
def manager_b_headers(manager_b):
    return headers_for(manager_b)


@pytest.fixture
def category_a(db_session, companies):
    category = Category(tenant_id=COMPANY_A_ID, name="Pizzas", position=1)
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def category_b(db_session, companies):
    category = Category(tenant_id=COMPANY_B_ID, name="Burgers", position=1)
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def product_a(db_session, category_a):
    product = Product(
        tenant_id=COMPANY_A_ID, category_id=category_a.id, name="Margherita", price=42.5
    )
    db_session.add(product)
    db_session.commit()
    db_session.refresh(product)
    return product


@pytest.fixture
def product_b(db_session, category_b):
    product = Product(
        tenant_id=COMPANY_B_ID, category_id=category_b.id, name="Cheeseburger", price=29.9
    )
    db_session.add(product)
    db_session.commit()
    db_session.refresh(product)
    return product
