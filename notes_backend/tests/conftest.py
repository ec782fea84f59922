import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from notes_backend.src.api.main import create_app
from notes_database.db import Database
from notes_database.repository import NoteRepository, UserRepository


@pytest.fixture
def sqlite_url():
    """Fixture to provide a SQLite in-memory database URL for testing."""
    return "sqlite://"

@pytest.fixture
def database(sqlite_url):
    """One in-memory store per test, shared across connections via StaticPool."""
    db = Database(sqlite_url, poolclass=StaticPool)
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()

@pytest.fixture
def db_session(database):
    """Provide a SQLAlchemy session for isolated test usage."""
    session = database.session()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

@pytest.fixture
def notes_repo(db_session):
    return NoteRepository(db_session)

@pytest.fixture
def users_repo(db_session):
    return UserRepository(db_session)

@pytest.fixture
def owner(users_repo):
    return users_repo.create("owner", "owner@example.com", "not-a-real-hash")

@pytest.fixture
def other_owner(users_repo):
    return users_repo.create("other", "other@example.com", "not-a-real-hash")

@pytest.fixture
def client(database):
    """Fixture for FastAPI TestClient bound to the in-memory database."""
    app = create_app(database=database)
    with TestClient(app) as c:
        yield c

@pytest.fixture
def user_data():
    """Returns default user data for registration."""
    return {
        "username": "alice",
        "email": "alice@example.com",
        "password": "alicepassword123"
    }

@pytest.fixture
def second_user_data():
    """Returns a second user's data."""
    return {
        "username": "bob",
        "email": "bob@example.com",
        "password": "bobpassword456"
    }

def register_and_auth(client, username, email, password):
    """Helper for registering then logging in to get JWT token."""
    r1 = client.post("/api/auth/register", json={
        "username": username, "email": email, "password": password
    })
    assert r1.status_code in (201, 409)

    r2 = client.post("/api/auth/login", json={
        "email": email, "password": password
    })
    assert r2.status_code == 200
    return r2.json()["token"]

@pytest.fixture
def auth_header(client, user_data):
    """Returns {'Authorization': 'Bearer <token>'} for default user."""
    token = register_and_auth(client, user_data["username"], user_data["email"], user_data["password"])
    return {"Authorization": f"Bearer {token}"}

@pytest.fixture
def second_auth_header(client, second_user_data):
    """Returns auth header for second user."""
    token = register_and_auth(client, second_user_data["username"], second_user_data["email"], second_user_data["password"])
    return {"Authorization": f"Bearer {token}"}
