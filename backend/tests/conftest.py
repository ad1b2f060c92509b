import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from alumnos import database
from alumnos.config import settings
from alumnos.main import app


@pytest.fixture()
def client(tmp_path, monkeypatch):
    """Serve the app against a fresh SQLite file; the lifespan seeds it."""
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite:///{tmp_path / 'api.db'}")
    monkeypatch.setattr(settings, "SEED_ON_STARTUP", True)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def session(tmp_path):
    """A session on an empty database with the tables created."""
    database.init_engine(f"sqlite:///{tmp_path / 'unit.db'}")
    try:
        database.create_db_and_tables()
        with Session(database.get_engine()) as s:
            yield s
    finally:
        database.dispose_engine()
