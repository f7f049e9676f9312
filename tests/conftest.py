import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEFAULT_USERS"] = "false"
os.environ["LOG_DIR"] = ""

import pytest
from sqlalchemy import event
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

import main
from app.core.catalog import Course, CourseCatalog
from app.core.database import Base, build_engine
from app.core.init_db import create_tables
from app.core.security import get_password_hash
from app.crud.user import user as crud_user
from app.services.auth import auth_service
from app.services.identity import to_current_user
from app.utils import deps as deps_utils


@pytest.fixture(scope="function")
def database_engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    create_tables(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

class StorageOutage:
    """Fails every statement once one starting with the armed prefix runs."""

    def __init__(self):
        self.prefix = None
        self.down = False

    def arm(self, prefix: str):
        self.prefix = prefix.upper()

    def restore(self):
        self.prefix = None
        self.down = False

    def before_cursor_execute(self, conn, cursor, statement, parameters, context, executemany):
        if self.prefix and statement.lstrip().upper().startswith(self.prefix):
            self.down = True
        if self.down:
            raise OperationalError(statement, parameters, Exception("connection lost"))

@pytest.fixture
def storage_outage(database_engine):
    outage = StorageOutage()
    listener = outage.before_cursor_execute
    event.listen(database_engine, "before_cursor_execute", listener)
    yield outage
    event.remove(database_engine, "before_cursor_execute", listener)

@pytest.fixture(scope="function")
def db_session(database_engine):
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=database_engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()

@pytest.fixture(scope="function")
def client(db_session):
    main.app.dependency_overrides[deps_utils.get_db] = lambda: db_session
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()


@pytest.fixture
def small_catalog():
    """One course laid out as 2 sections x 2 videos, plus a single-video course."""
    return CourseCatalog([
        Course.model_validate({
            "id": 1,
            "name": "Test Course",
            "icon": "T",
            "sections": [
                {"id": 1, "title": "Intro", "videos": [
                    {"id": 1, "title": "One", "url": "https://example.com/1.m3u8"},
                    {"id": 2, "title": "Two", "url": "https://example.com/2.m3u8"},
                ]},
                {"id": 2, "title": "Deep dive", "videos": [
                    {"id": 3, "title": "Three", "url": "https://example.com/3.m3u8"},
                    {"id": 4, "title": "Four", "url": "https://example.com/4.m3u8"},
                ]},
            ],
        }),
        Course.model_validate({
            "id": 2,
            "name": "Short Course",
            "sections": [
                {"id": 3, "title": "Only", "videos": [
                    {"id": 5, "title": "Five", "url": "https://example.com/5.m3u8"},
                ]},
            ],
        }),
    ])

@pytest.fixture
def catalog_client(client, small_catalog):
    main.app.dependency_overrides[deps_utils.get_catalog] = lambda: small_catalog
    return client


@pytest.fixture
def user_factory(db_session):
    def _user_factory(username, password="testpass123", name="Test User"):
        return crud_user.create(
            db_session,
            obj_in={
                "username": username,
                "password": get_password_hash(password),
                "name": name,
            },
        )
    return _user_factory

@pytest.fixture
def staff_user(user_factory):
    return user_factory("staff1", password="staff123", name="Staff Member 1")

@pytest.fixture
def staff_token(staff_user):
    return auth_service.issue_token(to_current_user(staff_user))

@pytest.fixture
def auth_headers(staff_token):
    return {"Authorization": f"Bearer {staff_token}"}
