"""Shared fixtures: in-memory SQLite, a TestClient bound to it, user factories."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient

import backoffice.models  # noqa: F401
from backoffice.db.base import Base
from backoffice.db.session import engine, SessionLocal, get_db
from backoffice.core.security import hash_password, create_access_token
from backoffice.main import app
from backoffice.models.role import Role
from backoffice.models.user import User
from backoffice.services.permission_service import permission_service
from backoffice.services.role_service import role_service

TEST_PASSWORD = "secret123"
_HASHED_PASSWORD = hash_password(TEST_PASSWORD)


@pytest.fixture
def db():
    """Fresh schema per test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    """TestClient whose requests share the test session."""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def seeded(db):
    """Default permission catalog plus the six system roles."""
    permissions = permission_service.seed_permissions(db)
    roles = role_service.seed_roles(db)
    return {"permissions": permissions, "roles": {r.name: r for r in roles}}


@pytest.fixture
def make_role(db):
    """Create a custom role directly, bypassing permission validation."""
    def _make(name, permissions=(), is_system=False):
        role = Role(
            name=name,
            display_name=name.title(),
            description=f"{name} role",
            is_system=is_system,
        )
        role.permissions = list(permissions)
        db.add(role)
        db.commit()
        db.refresh(role)
        return role
    return _make


@pytest.fixture
def make_user(db):
    """Create a user on a role; passing ``custom_permissions`` enables the override."""
    counter = {"n": 0}

    def _make(role, custom_permissions=None, email=None, is_active=True):
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@shop.test",
            hashed_password=_HASHED_PASSWORD,
            full_name=f"User {counter['n']}",
            role_id=role.id,
            is_active=is_active,
            has_custom_permissions=custom_permissions is not None,
        )
        user.custom_permissions = custom_permissions or []
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def auth_headers():
    """Bearer header for a user."""
    def _headers(user):
        token = create_access_token({"sub": str(user.id), "email": user.email})
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def super_admin(seeded, make_user):
    return make_user(seeded["roles"]["SUPER_ADMIN"], email="root@shop.test")


@pytest.fixture
def admin(seeded, make_user):
    return make_user(seeded["roles"]["ADMIN"], email="admin@shop.test")


@pytest.fixture
def cashier(seeded, make_user):
    return make_user(seeded["roles"]["CASHIER"], email="cashier@shop.test")
