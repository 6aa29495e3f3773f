"""
Pytest configuration and shared fixtures.

Adds the project root to sys.path so tests can import the flat modules
(app, wordle_service, db, ...) without installing the project.
"""
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

_root_path = str(Path(__file__).resolve().parent.parent)
if _root_path not in sys.path:
    sys.path.insert(0, _root_path)

from auth import hash_password  # noqa: E402
from db.database import SessionLocal, configure_database, init_database  # noqa: E402
from db.models import User  # noqa: E402
from puzzle_source import PuzzleData  # noqa: E402

PUZZLE_DATE = "2024-01-15"


def make_puzzle_data(solution="LIGHT", puzzle_id=940, days_since_launch=940, print_date=PUZZLE_DATE):
    return PuzzleData(solution=solution, id=puzzle_id, print_date=print_date, days_since_launch=days_since_launch)


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def db_session(database_url):
    configure_database(database_url)
    init_database()
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def user(db_session):
    u = User(username="player1", password_hash=hash_password("secret123"))
    db_session.add(u)
    db_session.commit()
    return u


@pytest.fixture
def fake_fetch():
    """Puzzle source stand-in returning LIGHT for any date."""
    return MagicMock(return_value=make_puzzle_data())


@pytest.fixture
def app(database_url, fake_fetch):
    from app import create_app

    return create_app({
        "TESTING": True,
        "DATABASE_URL": database_url,
        "SESSION_TYPE": "",
        "SECRET_KEY": "test-secret",
        "PUZZLE_FETCHER": fake_fetch,
        "ALLOW_PAST_PUZZLES": True,
    })


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def logged_in_client(client):
    client.post("/register", json={"username": "player1", "password": "secret123"})
    resp = client.post("/login", json={"username": "player1", "password": "secret123"})
    assert resp.status_code == 200
    return client
