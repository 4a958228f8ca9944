import os
import shutil
import tempfile

# App import se pehle env set karo (config import time par padhta hai)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_ROOT"] = tempfile.mkdtemp(prefix="club-portal-uploads-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config import settings
from database import Base, get_db
from main import app
from models.users import AppRole
from routers.deps import get_storage
from services.auth import AuthContext, create_account
from services.data_client import DataClient, Storage

ADMIN_EMAIL = "mentor@club.local"
ADMIN_PASSWORD = "secret-pass"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def storage():
    # Wahi folder jo app serve karti hai, har test ke baad khali
    yield Storage(settings.upload_root, settings.public_url_prefix)
    shutil.rmtree(settings.upload_root, ignore_errors=True)
    os.makedirs(settings.upload_root, exist_ok=True)


@pytest.fixture
def data_client(db, storage):
    return DataClient(db, storage)


@pytest.fixture
def admin_auth():
    return AuthContext(
        user_id=1,
        profile={"name": "Test Mentor", "role": "club_mentor", "phone": None},
        is_admin=True,
    )


@pytest.fixture
def http(session_factory, storage):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_http(http, db):
    create_account(db, ADMIN_EMAIL, ADMIN_PASSWORD, "Test Mentor", role=AppRole.club_mentor)
    resp = http.post("/auth/login", data={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}, follow_redirects=False)
    assert resp.status_code == 303
    return http
