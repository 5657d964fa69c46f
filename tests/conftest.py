"""
Shared fixtures: in-memory SQLite database, temporary object storage, and
helpers for creating users, resumes and bearer tokens.
"""
import os

# Must be set before the application modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["IDENTITY_WEBHOOK_SECRET"] = "identity-webhook-secret"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_dummy"
os.environ["STRIPE_WEBHOOK_SECRET"] = "whsec_test_secret"
os.environ["FRONTEND_URL"] = "http://frontend.test"

import itertools
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from chefdhundo.main import app
from chefdhundo.db.base import Base
from chefdhundo.db.models.user import User
from chefdhundo.db.models.resume import Resume
from chefdhundo.core.auth_dependency import get_db
from chefdhundo.core.rate_limit import rate_limit_store
from chefdhundo.core.security import create_access_token
from chefdhundo.services.storage_service import LocalStorage, get_storage


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


# Override the database dependency
app.dependency_overrides[get_db] = override_get_db

_ids = itertools.count(1)


@pytest.fixture(scope="function", autouse=True)
def setup_db():
    """Create and drop tables for each test."""
    Base.metadata.create_all(bind=test_engine)
    rate_limit_store.clear()
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(autouse=True)
def storage(tmp_path):
    """Object storage rooted in a temporary directory."""
    store = LocalStorage(str(tmp_path / "storage"), "http://testserver/storage")
    app.dependency_overrides[get_storage] = lambda: store
    yield store
    app.dependency_overrides.pop(get_storage, None)


@pytest.fixture
def db_session():
    """Provide a database session for tests."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


def auth_headers(user: User) -> dict:
    token = create_access_token({"sub": user.external_id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_user(db_session):
    """Factory creating users with unique identities."""
    def _make(name="Test User", email=None, role="basic", chef="no"):
        n = next(_ids)
        user = User(
            external_id=f"user_{n}",
            name=name,
            email=email or f"user{n}@example.com",
            role=role,
            chef=chef,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make


@pytest.fixture
def make_resume(db_session):
    """Factory creating resumes; marks the owner as a chef."""
    def _make(user, **fields):
        data = {
            "name": user.name,
            "email": user.email,
            "phone": "9876543210",
            "city": "Mumbai",
            "profession": "Line Cook",
            "experience_years": 4,
        }
        data.update(fields)
        resume = Resume(user_id=user.id, **data)
        db_session.add(resume)
        owner = db_session.query(User).filter(User.id == user.id).first()
        owner.chef = "yes"
        db_session.commit()
        db_session.refresh(resume)
        return resume
    return _make


@pytest.fixture
def basic_user(make_user):
    return make_user(name="Basic Viewer", email="basic@example.com")


@pytest.fixture
def pro_user(make_user):
    return make_user(name="Pro Viewer", email="pro@example.com", role="pro")


@pytest.fixture
def admin_user(make_user):
    return make_user(name="Admin", email="admin@example.com", role="admin")


@pytest.fixture
def pdf_bytes():
    """A small, valid one-page PDF."""
    import fitz

    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Head Chef - 8 years")
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def auth():
    """Build bearer-token headers for a user."""
    return auth_headers
