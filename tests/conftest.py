"""
Core pytest configuration for the test suite.

No live PostgreSQL is needed: `Database` is built with a pool factory that
hands out in-memory fake connections (see tests/fakes.py), so the real
connection scoping, cursor handling, SQL and row mapping are exercised.
"""

import logging

import pytest

from config import DatabaseConfig
from db.connection import Database
from repositories.user_repo import UserRepository
from services.user_service import UserService
from tests.fakes import FakePoolFactory, FakeStore

for _name in ("httpx", "telegram"):
    logging.getLogger(_name).setLevel(logging.WARNING)


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def pool_factory(store: FakeStore) -> FakePoolFactory:
    return FakePoolFactory(store)


@pytest.fixture
def db_config() -> DatabaseConfig:
    return DatabaseConfig(host="db.test", port=5433, name="userdesk_test", user="tester", password="secret")


@pytest.fixture
def database(db_config: DatabaseConfig, pool_factory: FakePoolFactory):
    """An opened Database backed by the fake pool; closed on teardown."""
    db = Database(db_config, min_conn=1, max_conn=3, pool_factory=pool_factory)
    db.open()
    yield db
    db.close()


@pytest.fixture
def fake_pool(database: Database, pool_factory: FakePoolFactory):
    return pool_factory.pool


@pytest.fixture
def user_repository(database: Database) -> UserRepository:
    return UserRepository(database)


@pytest.fixture
def user_service(user_repository: UserRepository) -> UserService:
    return UserService(user_repository)


@pytest.fixture
def sample_user_data() -> dict:
    return {"name": "Ana", "email": "ana@x.com", "age": 30}
