import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Saved worlds go to a throwaway in-memory database during tests
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from byow import create_app, db  # noqa: E402
from byow.routes import world_api  # noqa: E402
from byow.world import generate  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update({"TESTING": True})
    return app


@pytest.fixture(autouse=True)
def _push_app_context(test_app):
    ctx = test_app.app_context()
    ctx.push()
    try:
        yield
    finally:
        ctx.pop()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _reset_current_world():
    """Ensure the process-wide current world doesn't leak between tests."""
    world_api.set_current_world(None)
    yield
    world_api.set_current_world(None)


@pytest.fixture()
def clean_db(test_app):
    with test_app.app_context():
        db.drop_all()
        db.create_all()
    yield


@pytest.fixture()
def world_42():
    return generate(42, 40, 30)
