import warnings

import psycopg2
import pytest
from psycopg2 import errors, extras
from psycopg2.extensions import parse_dsn

from config import DatabaseConfig
from db.connection import Database, dict_cursor, store_error
from db.init_db import create_tables
from errors import DuplicateEmailError, ResourceReleaseWarning, StoreError, StoreNotInitializedError
from tests.fakes import FakeConnection, FakePoolFactory, FakeStore


class TestDatabaseLifecycle:

    def test_open_builds_pool_from_config(self, db_config, pool_factory):
        db = Database(db_config, min_conn=2, max_conn=4, pool_factory=pool_factory)
        assert not db.is_open

        db.open()

        assert db.is_open
        assert pool_factory.pool.minconn == 2
        assert pool_factory.pool.maxconn == 4
        assert pool_factory.pool.dsn == db_config.dsn
        assert parse_dsn(pool_factory.pool.dsn)["host"] == "db.test"

    def test_open_twice_is_noop(self, database, pool_factory):
        first = pool_factory.pool
        database.open()
        assert pool_factory.pool is first

    def test_open_failure_raises_store_error(self, db_config, store):
        cause = psycopg2.OperationalError("could not connect to server")
        db = Database(db_config, pool_factory=FakePoolFactory(store, fail_with=cause))

        with pytest.raises(StoreError) as exc_info:
            db.open()

        assert exc_info.value.cause is cause
        assert exc_info.value.__cause__ is cause
        assert not db.is_open

    def test_get_connection_before_open(self, db_config, pool_factory):
        db = Database(db_config, pool_factory=pool_factory)
        with pytest.raises(StoreNotInitializedError):
            db.get_connection()

    def test_get_connection_after_close(self, database):
        database.close()
        with pytest.raises(StoreNotInitializedError):
            database.get_connection()

    def test_close_closes_pool(self, database, pool_factory):
        pool = pool_factory.pool
        database.close()
        assert pool.closed
        assert not database.is_open

    def test_exhausted_pool_raises_store_error(self, database, fake_pool):
        fake_pool.fail_getconn = True
        with pytest.raises(StoreError, match="acquire"):
            with database.connection():
                pass

    def test_default_pool_factory_is_simple_connection_pool(self):
        from psycopg2 import pool
        db = Database(DatabaseConfig())
        assert db._pool_factory is pool.SimpleConnectionPool


class TestScopedConnection:
    """`Database.connection()` must release on every exit path."""

    def test_released_after_success(self, database, fake_pool):
        with database.connection() as conn:
            assert conn in fake_pool.in_use
        assert fake_pool.in_use == []

    def test_released_and_rolled_back_on_error(self, database, fake_pool):
        with pytest.raises(RuntimeError, match="boom"):
            with database.connection() as conn:
                raise RuntimeError("boom")
        assert conn.rollbacks == 1
        assert fake_pool.in_use == []

    def test_release_failure_does_not_replace_result(self, database, fake_pool):
        fake_pool.fail_putconn = True
        with pytest.warns(ResourceReleaseWarning):
            with database.connection() as conn:
                value = "done"
        assert value == "done"
        assert conn.commits == 0

    def test_release_failure_does_not_shadow_error(self, database, fake_pool):
        fake_pool.fail_putconn = True
        with pytest.warns(ResourceReleaseWarning):
            with pytest.raises(ValueError, match="primary"):
                with database.connection():
                    raise ValueError("primary")

    def test_rollback_failure_does_not_shadow_error(self, database, fake_pool, monkeypatch):
        original_getconn = fake_pool.getconn

        def getconn():
            conn = original_getconn()
            conn.fail_rollback = True
            return conn

        monkeypatch.setattr(fake_pool, "getconn", getconn)
        with pytest.warns(ResourceReleaseWarning):
            with pytest.raises(KeyError):
                with database.connection():
                    raise KeyError("primary")
        assert fake_pool.in_use == []

    def test_release_failure_with_warnings_as_errors(self, database, fake_pool):
        fake_pool.fail_putconn = True
        with warnings.catch_warnings():
            warnings.simplefilter("error", ResourceReleaseWarning)
            with database.connection():
                value = "done"
            with pytest.raises(ValueError, match="primary"):
                with database.connection():
                    raise ValueError("primary")
        assert value == "done"

    def test_cursor_close_failure_with_warnings_as_errors(self):
        store = FakeStore()
        store.fail_cursor_close = True
        with warnings.catch_warnings():
            warnings.simplefilter("error", ResourceReleaseWarning)
            with dict_cursor(FakeConnection(store)) as cur:
                cur.execute("SELECT id, name, email, age FROM users;")
                rows = cur.fetchall()
        assert rows == []


class TestDictCursor:

    def test_uses_real_dict_cursor_and_closes(self):
        conn = FakeConnection(FakeStore())
        with dict_cursor(conn) as cur:
            assert cur.cursor_factory is extras.RealDictCursor
        assert cur.closed

    def test_close_failure_is_reported_not_raised(self):
        store = FakeStore()
        store.fail_cursor_close = True
        store.seed("Juan", "juan@test.com", 25)
        conn = FakeConnection(store)
        with pytest.warns(ResourceReleaseWarning):
            with dict_cursor(conn) as cur:
                cur.execute("SELECT id, name, email, age FROM users;")
                rows = cur.fetchall()
        assert rows == [{"id": 1, "name": "Juan", "email": "juan@test.com", "age": 25}]


class TestStoreError:

    def test_unique_violation_maps_to_duplicate_email(self):
        exc = errors.UniqueViolation("duplicate key")
        err = store_error("create user", exc)
        assert isinstance(err, DuplicateEmailError)
        assert isinstance(err, StoreError)
        assert err.cause is exc

    def test_other_errors_map_to_store_error(self):
        exc = psycopg2.OperationalError("gone")
        err = store_error("list users", exc)
        assert type(err) is StoreError
        assert str(err) == "Failed to list users: gone"


class TestCreateTables:

    def test_creates_schema_and_commits(self, database, store, fake_pool):
        create_tables(database)
        assert store.schema_created
        assert fake_pool.handed_out[-1].commits == 1
        assert fake_pool.in_use == []

    def test_failure_raises_store_error(self, database, store, fake_pool):
        store.fail_on = "CREATE TABLE"
        with pytest.raises(StoreError):
            create_tables(database)
        assert fake_pool.handed_out[-1].rollbacks == 1
        assert fake_pool.in_use == []
