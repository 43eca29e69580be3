import logging

import pytest

from db import init_db, get_session, dispose_db
from services.sql_record_store import SqlRecordStore
from tests import factories

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def db_session():
    """Fresh in-memory database per test."""
    init_db("sqlite://")
    session = get_session()
    for factory in factories.ALL:
        factory._meta.sqlalchemy_session = session
    yield session
    session.close()
    dispose_db()


@pytest.fixture
def uploads_dir(tmp_path):
    """Uploads directory holding one image, hero.png."""
    d = tmp_path / "uploads"
    d.mkdir()
    (d / "hero.png").write_bytes(PNG_BYTES)
    return d


@pytest.fixture
def assets_dir(tmp_path):
    return tmp_path / "assets"


@pytest.fixture
def store(db_session, assets_dir):
    return SqlRecordStore(db_session, assets_dir=assets_dir)


@pytest.fixture
def app(tmp_path, uploads_dir, assets_dir):
    from main import create_app

    app = create_app("sqlite://", uploads_dir=uploads_dir, assets_dir=assets_dir)
    app.config["TESTING"] = True
    yield app
    dispose_db()


@pytest.fixture
def client(app):
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture
def restore_logging():
    """cli.setup_logging rewires the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
