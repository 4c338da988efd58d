from pathlib import Path
import sys
import os

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Safety default for any module-level app creation during test imports.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from app import create_app
from app.extensions import db
from app.models import Poll


@pytest.fixture()
def app(tmp_path: Path):
    db_file = tmp_path / "test.sqlite3"
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_file}",
            "SQLALCHEMY_ENGINE_OPTIONS": {},
        }
    )

    with app.app_context():
        driver = db.engine.url.drivername
        if driver != "sqlite":
            raise RuntimeError(
                f"Test database must be SQLite, got '{driver}'. Refusing to run destructive test setup."
            )
        db.drop_all()
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def db_session(app):
    with app.app_context():
        yield db.session


@pytest.fixture()
def color_poll(db_session):
    poll = Poll(
        question="Color?",
        poll_type="text",
        options=["Red", "Blue"],
        allow_multiple_selections=False,
    )
    db_session.add(poll)
    db_session.commit()
    return poll


@pytest.fixture()
def multi_poll(db_session):
    poll = Poll(
        question="Which toppings?",
        poll_type="text",
        options=["Cheese", "Ham", "Olives"],
        allow_multiple_selections=True,
        max_selections=2,
    )
    db_session.add(poll)
    db_session.commit()
    return poll
