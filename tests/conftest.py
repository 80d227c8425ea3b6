import os
import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker


# Ensure `import backend.app...` works regardless of where pytest is run from.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Must be set before importing backend.app so config/engine never see a developer .env.
os.environ["DISABLE_DOTENV"] = "1"
os.environ.setdefault("SECRET_KEY", "test_secret_key")
os.environ["JOBS_REQUIRE_AUTH"] = "1"


@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return tmp_path_factory.mktemp("db") / "test.sqlite3"


@pytest.fixture()
def app(test_db_path: Path) -> FastAPI:
    """
    Create the FastAPI app wired to a temporary SQLite DB.

    Tables are dropped and recreated for every test so each test starts empty.
    """
    os.environ["DATABASE_URL"] = f"sqlite+pysqlite:///{test_db_path}"

    from backend.app import database as db

    engine = create_engine(
        os.environ["DATABASE_URL"],
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):  # noqa: ANN001
        dbapi_connection.execute("PRAGMA foreign_keys=ON;")

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    # Patch the shared database module so router dependencies use the test DB.
    db.engine = engine
    db.SessionLocal = TestingSessionLocal

    # Import models so Base metadata is populated, then create tables.
    from backend.app.models import job, user  # noqa: F401

    db.Base.metadata.drop_all(bind=engine)
    db.Base.metadata.create_all(bind=engine)

    from backend.app.main import app as fastapi_app

    return fastapi_app


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def open_client(app: FastAPI, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    """Client for the variant where the jobs API does not require a token."""
    from backend.app import config

    monkeypatch.setattr(config, "JOBS_REQUIRE_AUTH", False)
    return TestClient(app)


@pytest.fixture()
def db_session(app: FastAPI):
    """
    Direct SQLAlchemy session bound to the same temporary SQLite DB used by the test app.
    """
    from backend.app.database import SessionLocal

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


USER_DATA = {
    "name": "Test User",
    "email": "valid@example.com",
    "password": "secret1",
    "phone_number": "09-123-47890",
    "gender": "Male",
    "date_of_birth": "1999-01-01",
    "membership_status": "Active",
}

SAMPLE_JOB = {
    "title": "Software Engineer",
    "type": "Full-Time",
    "description": "Build cool stuff",
    "location": "Helsinki",
    "salary": 5000,
    "company": {
        "name": "Tech Corp",
        "contactEmail": "hr@techcorp.com",
        "contactPhone": "123-456-7890",
    },
}


@pytest.fixture()
def user_data() -> dict:
    return dict(USER_DATA)


@pytest.fixture()
def sample_job() -> dict:
    return {**SAMPLE_JOB, "company": dict(SAMPLE_JOB["company"])}


@pytest.fixture()
def token(client: TestClient, user_data: dict) -> str:
    r = client.post("/api/users/signup", json=user_data)
    assert r.status_code == 201, r.text
    return r.json()["token"]
