"""Shared pytest fixtures for the archive service tests."""

import os
import random

# Must be set before anything under app/ reads the configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_DATABASE"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.core.errors import get_rng
from app.db.base import Base
from app.db.guard import ConnectionGuard
from app.db.models.archive import Archive
from app.db.session import get_guard
from main import app


@pytest.fixture
def engine():
    """Fresh in-memory database with the archive table."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def guard(engine):
    guard = ConnectionGuard(engine)
    yield guard
    guard.close()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def client(guard, rng):
    """TestClient wired to the test guard and a seeded marker source."""
    app.dependency_overrides[get_guard] = lambda: guard
    app.dependency_overrides[get_rng] = lambda: rng
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def add_post(guard):
    """Insert a post directly and return its id."""

    def _add(tag="meme", comment=None, attachment=None, alias=None):
        def insert(db):
            post = Archive(tag=tag, comment=comment, attachment=attachment, alias=alias)
            db.add(post)
            db.flush()
            return post.id

        return guard.with_connection(insert)

    return _add


@pytest.fixture
def count_posts(guard):
    def _count():
        return guard.with_connection(lambda db: db.query(Archive).count())

    return _count
