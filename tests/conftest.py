import sys
import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

# --- path to backend ---
BASE_DIR = os.path.dirname(os.path.dirname(__file__))
BACKEND_DIR = os.path.join(BASE_DIR, "backend")
sys.path.insert(0, BACKEND_DIR)

from main import app
from models import Base
from database import Store, get_store

# ------------------ engine ------------------
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
Base.metadata.create_all(bind=engine)

test_store = Store(engine)


# ------------------ fixtures ------------------
@pytest.fixture(autouse=True)
def override_store():
    app.dependency_overrides[get_store] = lambda: test_store
    yield
    app.dependency_overrides.clear()
    # clean tables after every test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture
def store():
    return test_store


@pytest.fixture
def broken_store():
    """A store whose database has no tables, so every query fails in the driver."""
    empty = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    broken = Store(empty)
    app.dependency_overrides[get_store] = lambda: broken
    yield broken
    empty.dispose()


@pytest.fixture
def client():
    return TestClient(app)
