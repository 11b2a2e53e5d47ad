import os
import shutil
import tempfile

import pytest

# Point both services at throwaway sqlite files before any app module is imported
_TMP_DIR = tempfile.mkdtemp(prefix="inventory-tests-")
os.environ["AUTH_DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'auth.db')}"
os.environ["INVENTORY_DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'inventory.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP_DIR, "uploads")
os.environ["JWT_SECRET"] = "test-secret"

from fastapi.testclient import TestClient  # noqa: E402

from auth_service.app.main import app as auth_app  # noqa: E402
from inventory_service.app.main import app as inventory_app  # noqa: E402
from shared.core.auth import create_access_token  # noqa: E402
from shared.core.database import (  # noqa: E402
    AuthBase, AuthSessionLocal, Base, InventorySessionLocal, auth_engine, inventory_engine)
from shared.models.users import Users  # noqa: E402


@pytest.fixture(autouse=True)
def reset_databases():
    AuthBase.metadata.drop_all(bind=auth_engine)
    Base.metadata.drop_all(bind=inventory_engine)
    AuthBase.metadata.create_all(bind=auth_engine)
    Base.metadata.create_all(bind=inventory_engine)
    yield


def pytest_sessionfinish(session, exitstatus):
    auth_engine.dispose()
    inventory_engine.dispose()
    shutil.rmtree(_TMP_DIR, ignore_errors=True)


@pytest.fixture
def auth_client():
    return TestClient(auth_app)


@pytest.fixture
def client():
    return TestClient(inventory_app)


@pytest.fixture
def auth_db():
    db = AuthSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def inventory_db():
    db = InventorySessionLocal()
    try:
        yield db
    finally:
        db.close()


class Account:
    def __init__(self, user: Users):
        self.id = str(user.id)
        self.email = user.email
        self.role = user.role
        self.token = create_access_token(user.token_claims())

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture
def make_user():
    """Factory that stores a user and returns an Account with a fresh token."""
    counter = {"n": 0}

    def _make(role: str = "user", verified: bool = True, email: str = None) -> Account:
        counter["n"] += 1
        db = AuthSessionLocal()
        try:
            user = Users(
                email=email or f"{role}{counter['n']}@example.com",
                full_name=f"{role.capitalize()} {counter['n']}",
                role=role,
                is_verified=verified,
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            return Account(user)
        finally:
            db.close()

    return _make


@pytest.fixture
def admin(make_user):
    return make_user("admin")


@pytest.fixture
def staff(make_user):
    return make_user("staff")


@pytest.fixture
def member(make_user):
    return make_user("user")


@pytest.fixture
def category(client, admin):
    resp = client.post("/api/categories", json={"name": "Electronics"},
                       headers=admin.headers)
    assert resp.status_code == 201
    return resp.json()["data"]


@pytest.fixture
def create_item(client, member):
    def _create(headers=None, **fields):
        payload = {"name": "Widget", "price": 10.0, "quantity": 20}
        payload.update(fields)
        resp = client.post("/api/items", json=payload,
                           headers=headers or member.headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _create
