# File: tests/conftest.py

import pytest
import os
import sys
import tempfile
from concurrent.futures import Future

import requests
import sqlalchemy
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy_utils import database_exists, create_database

# 1. Add project root to path
sys.path.append(os.getcwd())

# 2. Point the app at a throwaway SQLite DB and scratch dir BEFORE settings load
_TEST_ROOT = tempfile.mkdtemp(prefix="vidcast_test_")
os.environ.setdefault("USE_SQLITE", "true")
os.environ.setdefault("SQLITE_URL", f"sqlite:///{_TEST_ROOT}/test_vidcast.db")
os.environ.setdefault("VIDCAST_DATA_DIR", _TEST_ROOT)

from vidcast.core.config.settings import settings

# 3. Create Test Engine
TEST_ENGINE = create_engine(settings.DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=TEST_ENGINE)


@pytest.fixture(scope="session", autouse=True)
def global_setup():
    """
    Runs once per test session.
    Ensures DB exists and all feature tables are registered.
    """
    if not database_exists(TEST_ENGINE.url):
        create_database(TEST_ENGINE.url)

    from vidcast.core.database.base import Base
    import vidcast.features.videos.data.sql_models
    import vidcast.features.ingest.data.sql_models
    import vidcast.features.analyzers.data.sql_models

    Base.metadata.create_all(bind=TEST_ENGINE)
    settings.ensure_dirs()

    yield


@pytest.fixture(scope="function", autouse=True)
def clean_db(global_setup):
    """
    Runs before EVERY test.
    Detects DB type and cleans tables appropriately.
    """
    from vidcast.core.database.base import Base

    Base.metadata.create_all(bind=TEST_ENGINE)

    with TEST_ENGINE.connect() as conn:
        trans = conn.begin()

        is_sqlite = "sqlite" in str(TEST_ENGINE.url)

        inspector = sqlalchemy.inspect(TEST_ENGINE)
        table_names = inspector.get_table_names()

        if table_names:
            if is_sqlite:
                conn.execute(text("PRAGMA foreign_keys = OFF;"))
                for table in table_names:
                    conn.execute(text(f'DELETE FROM "{table}";'))
                conn.execute(text("PRAGMA foreign_keys = ON;"))
            else:
                conn.execute(text("SET session_replication_role = 'replica';"))
                for table in table_names:
                    conn.execute(text(f'TRUNCATE TABLE "{table}" CASCADE;'))
                conn.execute(text("SET session_replication_role = 'origin';"))

        trans.commit()

    yield


@pytest.fixture(scope="function")
def db_session():
    """
    Provides a session for the test to use.
    """
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


class InlineRunner:
    """TaskRunner stand-in that runs work immediately on the calling thread."""

    def __init__(self):
        self.spawned = []

    def spawn(self, name, fn, *args, **kwargs):
        self.spawned.append(name)
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future


@pytest.fixture
def inline_runner():
    return InlineRunner()


@pytest.fixture
def http_response():
    """
    Factory for real requests.Response objects, so adapters parse exactly
    what they would get off the wire.
    """
    def _make(status_code=200, json_body=None, body=b"", reason=None, headers=None):
        import json as _json

        resp = requests.Response()
        resp.status_code = status_code
        resp.reason = reason or ("OK" if status_code < 400 else "Error")
        if json_body is not None:
            resp._content = _json.dumps(json_body).encode("utf-8")
            resp.headers["Content-Type"] = "application/json"
        else:
            resp._content = body
        for key, value in (headers or {}).items():
            resp.headers[key] = value
        resp.encoding = "utf-8"
        resp._content_consumed = True
        return resp

    return _make
